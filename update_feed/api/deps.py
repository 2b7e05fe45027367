from update_feed.config import settings
from update_feed.services.updates import UpdatesService

# One service per process so every request shares the commit cache
_updates_service: UpdatesService | None = None


def get_updates_service() -> UpdatesService:
    """Get or create the process-wide UpdatesService."""
    global _updates_service
    if _updates_service is None:
        _updates_service = UpdatesService.from_settings(settings)
    return _updates_service
