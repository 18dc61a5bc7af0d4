"""Texas Hold'em table engine for a play-money casino."""

__version__ = "0.1.0"
