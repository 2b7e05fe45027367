"""Updates API endpoints (serves the platform Updates page)."""

import logging
import time
from dataclasses import asdict
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from update_feed.api.deps import get_updates_service
from update_feed.config import settings
from update_feed.services.github import GitHubAPIError, GitHubRateLimitError
from update_feed.services.updates import UpdatesService, UpdateType, paginate
from update_feed.services.updates.types import Update

router = APIRouter(prefix="/updates", tags=["updates"])
logger = logging.getLogger(__name__)


def _serialize_update(update: Update) -> dict[str, Any]:
    return {"id": update.id, **asdict(update)}


def _github_error_to_http(e: GitHubAPIError) -> HTTPException:
    """Translate a fetch failure into a retryable HTTP error.

    The feed is all-or-nothing: any failing source fails the request so the
    client shows a retry affordance instead of a partial timeline.
    """
    if isinstance(e, GitHubRateLimitError):
        headers: dict[str, str] = {}
        detail = e.message
        if e.retry_after is not None:
            headers["Retry-After"] = str(e.retry_after)
        elif e.rate_limit_reset:
            reset_in = max(0, e.rate_limit_reset - int(time.time()))
            headers["Retry-After"] = str(reset_in)
            detail = f"{e.message}. Rate limit resets in {reset_in // 60} minutes."
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=detail,
            headers=headers or None,
        )

    logger.warning(f"Update feed fetch failed: {e.message}")
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Could not load updates: {e.message}",
    )


@router.get("")
async def list_updates(
    fetch_all: bool = Query(True, description="Full history (true) or recent window (false)"),
    recent_count: int | None = Query(None, ge=1, le=5000, description="Commits per source in the recent window"),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    page_size: int = Query(settings.feed_page_size, ge=1, le=100),
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get one page of the classified update feed."""
    try:
        updates = await service.get_all_updates(fetch_all, recent_count)
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    page_items = paginate(updates, page, page_size)
    return {
        "updates": [_serialize_update(u) for u in page_items],
        "total": len(updates),
        "page": page,
        "page_size": page_size,
        "has_more": (page + 1) * page_size < len(updates),
    }


@router.get("/recent")
async def list_recent_updates(
    count: int = Query(5, ge=1, le=100),
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get the newest updates across all sources."""
    try:
        updates = await service.get_recent_updates(count)
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    return {"updates": [_serialize_update(u) for u in updates]}


@router.get("/types/{update_type}")
async def list_updates_by_type(
    update_type: UpdateType,
    search_all: bool = Query(False),
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get updates of one change type."""
    try:
        updates = await service.get_updates_by_type(update_type, search_all)
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    return {"updates": [_serialize_update(u) for u in updates], "total": len(updates)}


@router.get("/categories/{category}")
async def list_updates_by_category(
    category: str,
    search_all: bool = Query(False),
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get updates in one category (exact, case-sensitive name)."""
    try:
        updates = await service.get_updates_by_category(category, search_all)
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    return {"updates": [_serialize_update(u) for u in updates], "total": len(updates)}


@router.get("/contributors")
async def list_contributors(
    search_all: bool = Query(True),
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get contributors ranked by commit count."""
    try:
        contributors = await service.get_unique_contributors(search_all)
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    return {
        "contributors": [asdict(c) for c in contributors],
        "total": len(contributors),
    }


@router.get("/sources")
async def list_sources(
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Describe the repositories the feed is built from."""
    try:
        stats = await service.get_source_stats()
    except GitHubAPIError as e:
        raise _github_error_to_http(e) from None

    return {"sources": [asdict(s) for s in stats]}


@router.get("/cache")
async def get_cache_stats(
    service: UpdatesService = Depends(get_updates_service),
) -> dict[str, Any]:
    """Get commit cache contents for monitoring."""
    return {"entries": service.cache.stats(), "ttl_ms": service.cache.ttl_millis}


@router.delete("/cache", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cache(
    service: UpdatesService = Depends(get_updates_service),
) -> None:
    """Drop cached commits so the next request refetches."""
    service.cache.clear()
