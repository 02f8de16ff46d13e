class FeedError(Exception):
    """Base exception for transit feed failures."""


class FeedLoadError(FeedError):
    """Raised by feed sources when raw tables cannot be read."""
