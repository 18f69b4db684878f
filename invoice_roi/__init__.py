"""Invoice automation ROI simulator."""

__version__ = "0.1.0"
