"""
Mini Splendor - Two-player chip and card game engine

Players take colored chips or spend them on cards worth points,
alternating turns. The package provides:
- State management
- Rule checks for taking chips and buying cards
- Turn flow
- Save files
- A terminal front end
"""

__version__ = "0.1.0"
