"""
Detectores de gestos sobre el overlay (toque largo, doble toque).
"""

from .long_press import LongPressGesture
from .double_tap import DoubleTapGesture

__all__ = [
    'LongPressGesture',
    'DoubleTapGesture',
]
