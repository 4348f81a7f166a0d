"""YouTube Data API search, mapped to the flat video shape the frontend consumes."""

import logging
from typing import Any, Optional

import httpx

from app.config import get_settings
from app.core.exceptions import SearchProviderError, ValidationError
from app.schemas.video import VideoItem

logger = logging.getLogger(__name__)

WATCH_URL = "https://www.youtube.com/watch?v="


def _pick_thumbnail(thumbnails: dict[str, Any]) -> Optional[str]:
    for size in ("high", "medium", "default"):
        url = (thumbnails.get(size) or {}).get("url")
        if url:
            return url
    return None


def _to_video_item(item: dict[str, Any]) -> Optional[VideoItem]:
    video_id = (item.get("id") or {}).get("videoId")
    if not video_id:
        return None
    snippet = item.get("snippet") or {}
    return VideoItem(
        id=video_id,
        title=snippet.get("title") or "",
        thumbnail=_pick_thumbnail(snippet.get("thumbnails") or {}),
        description=snippet.get("description") or "",
        link=f"{WATCH_URL}{video_id}",
    )


def search_videos(query: Optional[str]) -> list[VideoItem]:
    if not query or not query.strip():
        raise ValidationError("Query parameter 'q' is required")
    settings = get_settings()
    if not settings.youtube_api_key:
        logger.error("YOUTUBE_API_KEY is not set; video search is disabled")
        raise SearchProviderError()
    try:
        resp = httpx.get(
            settings.youtube_search_url,
            params={
                "part": "snippet",
                "type": "video",
                "q": query.strip(),
                "maxResults": settings.youtube_max_results,
                "key": settings.youtube_api_key,
            },
            timeout=settings.youtube_timeout_seconds,
        )
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        # request URL carries the API key; log the failure kind only
        logger.error("YouTube search failed: %s", e.__class__.__name__)
        raise SearchProviderError() from e
    items = (_to_video_item(item) for item in data.get("items") or [])
    return [item for item in items if item is not None]
