"""Tests for application startup/shutdown: cache snapshot restore and save."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from update_feed.config import settings
from update_feed.services.updates.cache import CacheKey


@pytest.fixture
def lifespan_service(updates_service, monkeypatch):
    import update_feed.main as main

    monkeypatch.setattr(main, "get_updates_service", lambda: updates_service)
    return updates_service


class TestLifespan:
    @pytest.mark.anyio
    async def test_saves_snapshot_on_shutdown(self, lifespan_service, monkeypatch, tmp_path):
        from update_feed.main import app, lifespan

        path = tmp_path / "commits.json"
        monkeypatch.setattr(settings, "cache_snapshot_path", str(path))

        async with lifespan(app):
            await lifespan_service.get_all_updates()

        assert path.exists()

    @pytest.mark.anyio
    async def test_restores_snapshot_on_startup(
        self, lifespan_service, mock_fetcher, monkeypatch, tmp_path
    ):
        from update_feed.main import app, lifespan

        path = tmp_path / "commits.json"
        monkeypatch.setattr(settings, "cache_snapshot_path", str(path))

        async with lifespan(app):
            await lifespan_service.get_all_updates()

        lifespan_service.cache.clear()

        async with lifespan(app):
            assert lifespan_service.cache.peek(CacheKey.all_history()) is not None
            await lifespan_service.get_all_updates()

        assert mock_fetcher.fetch_all.await_count == 1

    @pytest.mark.anyio
    async def test_no_snapshot_when_disabled(self, lifespan_service, monkeypatch, tmp_path):
        from update_feed.main import app, lifespan

        monkeypatch.setattr(settings, "cache_snapshot_path", "")
        monkeypatch.chdir(tmp_path)

        async with lifespan(app):
            await lifespan_service.get_all_updates()

        assert list(tmp_path.iterdir()) == []

    @pytest.mark.anyio
    async def test_corrupt_snapshot_starts_cold(
        self, lifespan_service, mock_fetcher, monkeypatch, tmp_path
    ):
        from update_feed.main import app, lifespan

        path = tmp_path / "commits.json"
        path.write_text("{not json")
        monkeypatch.setattr(settings, "cache_snapshot_path", str(path))

        async with lifespan(app):
            assert lifespan_service.cache.peek(CacheKey.all_history()) is None
            await lifespan_service.get_all_updates()

        assert mock_fetcher.fetch_all.await_count == 1

    @pytest.mark.anyio
    async def test_failed_save_still_closes_client(self, lifespan_service, monkeypatch, tmp_path):
        import update_feed.main as main

        close = AsyncMock()
        monkeypatch.setattr(main, "close_github_client", close)
        monkeypatch.setattr(
            settings, "cache_snapshot_path", str(tmp_path / "missing" / "commits.json")
        )

        async with main.lifespan(main.app):
            await lifespan_service.get_all_updates()

        close.assert_awaited_once()

    @pytest.mark.anyio
    async def test_error_during_serving_still_closes_client(
        self, lifespan_service, monkeypatch, tmp_path
    ):
        import update_feed.main as main

        close = AsyncMock()
        monkeypatch.setattr(main, "close_github_client", close)
        monkeypatch.setattr(settings, "cache_snapshot_path", str(tmp_path / "commits.json"))

        with pytest.raises(RuntimeError, match="boom"):
            async with main.lifespan(main.app):
                raise RuntimeError("boom")

        close.assert_awaited_once()
        assert (tmp_path / "commits.json").exists()
