"""Remote wait conditions for automated UI test drivers."""

__version__ = "0.1.0"
