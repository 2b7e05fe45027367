# Services package

from update_feed.services.updates import UpdatesService

__all__ = [
    "UpdatesService",
]
