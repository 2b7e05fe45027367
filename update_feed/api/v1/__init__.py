from update_feed.api.v1 import updates

__all__ = [
    "updates",
]
