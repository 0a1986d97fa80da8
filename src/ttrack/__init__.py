"""tt: personal start/stop time tracking."""

__version__ = "0.4.0"
