"""Personal task tracker with categories, due dates and keyword search."""

__version__ = "1.0.0"
