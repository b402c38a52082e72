"""Short how-to video lookup for recipes (YouTube Data API search).

Video enrichment is optional: every failure is logged and reported as "no
video" so a missing key or a quota error never affects the recipes themselves.
"""

import asyncio
from typing import Any, Dict, Optional

import aiohttp

from strugglemeal.models.models import VideoResult
from strugglemeal.utils.config import Config
from strugglemeal.utils.logger import logger


YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"


def build_video_query(keywords: str) -> str:
    return f"{keywords.strip()} recipe under 5 minutes"


def build_search_params(keywords: str, api_key: str) -> Dict[str, Any]:
    return {
        "part": "snippet",
        "maxResults": 1,
        "q": build_video_query(keywords),
        "type": "video",
        "videoDuration": "short",
        "key": api_key,
    }


def parse_video_response(payload: Any) -> Optional[VideoResult]:
    """Return the first search hit, or None when the response has no items.

    Raises:
        KeyError, IndexError, TypeError: If an item is missing required fields.
    """
    if not isinstance(payload, dict):
        return None
    items = payload.get("items") or []
    if not items:
        return None

    video = items[0]
    thumbnails = video["snippet"].get("thumbnails") or {}
    thumbnail = (thumbnails.get("medium") or thumbnails.get("default") or {}).get("url")
    return VideoResult(id=video["id"]["videoId"], title=video["snippet"]["title"], thumbnail=thumbnail)


async def fetch_video(
    keywords: str,
    config: Config,
    session: Optional[aiohttp.ClientSession] = None,
) -> Optional[VideoResult]:
    """Find one short video for a recipe's search keywords.

    Args:
        keywords: Recipe search keywords.
        config: Configuration providing YOUTUBE_API_KEY and VIDEO_TIMEOUT_SECONDS.
        session: Optional shared HTTP session; one is opened when omitted.

    Returns:
        VideoResult for the first hit, or None if no key is configured, nothing
        matched, or the lookup failed for any reason (logged as warning).
    """
    if not config.YOUTUBE_API_KEY:
        logger.warning("YouTube API key not provided, skipping video lookup")
        return None
    if not keywords or not keywords.strip():
        return None

    params = build_search_params(keywords, config.YOUTUBE_API_KEY)
    timeout = aiohttp.ClientTimeout(total=config.VIDEO_TIMEOUT_SECONDS)

    async def _search(active_session: aiohttp.ClientSession) -> Optional[VideoResult]:
        async with active_session.get(YOUTUBE_SEARCH_URL, params=params, timeout=timeout) as response:
            response.raise_for_status()
            return parse_video_response(await response.json(content_type=None))

    try:
        if session is not None:
            return await _search(session)
        async with aiohttp.ClientSession() as own_session:
            return await _search(own_session)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError, KeyError, IndexError, TypeError) as e:
        logger.warning(f"Video lookup failed for '{keywords}': {e}")
        return None
