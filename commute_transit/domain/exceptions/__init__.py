from .feed import FeedError, FeedLoadError

__all__ = ["FeedError", "FeedLoadError"]
