"""Root conftest - test infrastructure for all update feed tests.

Provides:
- anyio backend selection (asyncio only; the cache uses asyncio locks)
- An UpdatesService backed by a mocked fetcher and a real cache
- API client with dependency overrides
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from update_feed.services.github.types import CommitRecord
from update_feed.services.updates.cache import CommitCacheStore
from update_feed.services.updates.classifier import clear_classification_cache
from update_feed.services.updates.fetcher import MultiSourceFetcher
from update_feed.services.updates.service import UpdatesService


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ─────────────────────────────────────────────────────────────────────────────
# Service
# ─────────────────────────────────────────────────────────────────────────────


def make_commits(count: int, source_tag: str = "frontend") -> list[CommitRecord]:
    """Newest-first commits with distinct hashes and one-minute spacing."""
    return [
        CommitRecord(
            short_hash=f"{i:07x}",
            timestamp=1_750_000_000 - i * 60,
            author_handle="octocat" if i % 2 else "hubot",
            raw_message="feat: add search filters" if i % 3 else "fix(auth): handle expired token",
            source_tag=source_tag,
        )
        for i in range(count)
    ]


@pytest.fixture
def mock_fetcher() -> AsyncMock:
    """Fetcher returning 40 commits; tests may override fetch_all's behavior."""
    fetcher = AsyncMock(spec=MultiSourceFetcher)
    fetcher.fetch_all.return_value = make_commits(40)
    return fetcher


@pytest.fixture
def updates_service(mock_fetcher: AsyncMock) -> UpdatesService:
    clear_classification_cache()
    return UpdatesService(mock_fetcher, CommitCacheStore())


# ─────────────────────────────────────────────────────────────────────────────
# API Client
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
async def api_client(updates_service: UpdatesService):
    """HTTP client whose routes use the test UpdatesService.

    Overrides: get_updates_service
    """
    from update_feed.api.deps import get_updates_service
    from update_feed.main import app

    app.dependency_overrides[get_updates_service] = lambda: updates_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
