import sys

if sys.platform == "darwin":
    FONT_STACK = 'Helvetica Neue","Arial'
elif sys.platform.startswith("win"):
    FONT_STACK = 'Segoe UI","Arial'
else:
    FONT_STACK = 'DejaVu Sans","Arial'

APP_QSS = f"""
QMainWindow, QWidget {{
    background: #0f1420;
    color: #e6ecf5;
    font-family: "{FONT_STACK}";
    font-size: 14px;
}}

QLabel#muted {{
    color: rgba(230,236,245,0.68);
}}

QLabel#stimulus {{
    font-size: 64px;
    font-weight: 800;
    font-family: "Menlo","Consolas","DejaVu Sans Mono";
}}

QPushButton {{
    background: #1e2a3d;
    border: 1px solid rgba(255,255,255,0.10);
    padding: 10px 16px;
    border-radius: 12px;
    font-weight: 650;
}}
QPushButton:hover {{ background: #27364f; }}
QPushButton:pressed {{ background: #1a2434; }}
QPushButton:disabled {{ color: rgba(230,236,245,0.35); }}

QLineEdit {{
    background: rgba(255,255,255,0.06);
    border: 1px solid rgba(255,255,255,0.14);
    border-radius: 10px;
    padding: 10px;
    font-size: 20px;
}}

QProgressBar {{
    border: 1px solid rgba(255,255,255,0.10);
    border-radius: 6px;
    background: rgba(255,255,255,0.06);
    height: 10px;
    text-align: center;
}}
QProgressBar::chunk {{
    background: #3b82f6;
    border-radius: 6px;
}}
"""


def card_qss(radius: int = 16) -> str:
    return f"""
        QFrame {{
            background: rgba(255,255,255,0.05);
            border: 1px solid rgba(255,255,255,0.08);
            border-radius: {radius}px;
        }}
    """
