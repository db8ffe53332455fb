"""DAM Butler - natural-language routing for brand asset requests."""

__version__ = "1.0.0"
