"""marketline - terminal dashboard for market indicators and a ticker watchlist."""

__version__ = "0.1.0"
