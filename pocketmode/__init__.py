"""
pocketmode — pocket detection and blackout overlay coordination.
"""

__version__ = "0.1.0"
