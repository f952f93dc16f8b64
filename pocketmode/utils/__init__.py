"""
Constants and geometry helpers
"""

from .constants import *
from .geometry import dist, inclination, normalise

__all__ = [
    'dist',
    'inclination',
    'normalise',
    'PROXIMITY_THRESHOLD',
    'LIGHT_THRESHOLD',
    'GRAVITY_THRESHOLD',
    'MIN_INCLINATION',
    'MAX_INCLINATION',
    'DISPLAY_OFF_DELAY_MS',
]
