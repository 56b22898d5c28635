"""reviewdash: review analytics dashboard service."""

__version__ = "1.0.0"
