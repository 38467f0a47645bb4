"""
Ball-on-Swing PID Tuning

Simulates a ball on a tiltable swing and searches for the PID gains that
bring it to rest at the swing's center in the fewest ticks.
"""

__version__ = "0.1.0"
