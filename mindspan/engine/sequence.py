# mindspan/engine/sequence.py
import random
import string
from typing import List, Optional, Sequence

DIGITS = "123456789"
LETTERS = string.ascii_uppercase


def generate(length: int, alphabet: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
    """
    Random stimulus sequence with no two equal neighbours.
    A draw equal to the previous symbol is thrown away and redrawn.
    """
    if len(set(alphabet)) < 2:
        raise ValueError("alphabet needs at least two distinct symbols")

    rng = rng or random
    out: List[str] = []
    while len(out) < length:
        s = rng.choice(alphabet)
        if out and s == out[-1]:
            continue
        out.append(s)
    return out
