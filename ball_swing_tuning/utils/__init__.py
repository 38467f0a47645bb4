"""
ユーティリティモジュール
"""

from .plot_utils import plot_trace

__all__ = [
    "plot_trace",
]
