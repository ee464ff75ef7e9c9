# mindspan/engine/scoring.py
import math
from typing import Iterable

import numpy as np


def round_half_up(x: float) -> int:
    # halves go up (50.5 -> 51), not to even
    return int(math.floor(float(x) + 0.5))


def clamp_score(x: int) -> int:
    return int(max(0, min(100, int(x))))


def percent(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return clamp_score(round_half_up(100.0 * correct / total))


def mean_percent(values: Iterable[int]) -> int:
    arr = np.fromiter((float(v) for v in values), dtype=np.float64)
    if arr.size == 0:
        return 0
    return clamp_score(round_half_up(float(np.mean(arr))))
