"""NIFTY 50 swing-trade screener."""

__version__ = "0.1.0"
