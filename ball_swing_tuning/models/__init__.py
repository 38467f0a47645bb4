"""
Models module - 傾斜台とボールの物理モデル
"""

from .ball import GRAVITY, Ball
from .swing import Swing

__all__ = [
    "GRAVITY",
    "Ball",
    "Swing",
]
