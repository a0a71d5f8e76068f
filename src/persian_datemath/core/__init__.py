"""
Core domain models, calendar conversion and date math.

This package is independent of any UI layer: callers pass plain timestamps
and receive timestamps, booleans or integers back.
"""
