"""
YouTube video metadata lookup.

Title and thumbnail come from the public oEmbed endpoint, which needs no API
key. The description is scraped from the watch page's meta tags.
"""

import html
import re
from typing import Any, Dict, Optional

import requests
from retry import retry

from app.config import config
from app.models.schemas import VideoMetadata
from app.utils.caching import cached
from app.utils.error_handling import MetadataFetchError
from app.utils.logger import logging

DESCRIPTION_PATTERN = re.compile(r'<meta name="description" content="([^"]+)"')

REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
    "Accept-Language": "en-US,en;q=0.9",
}


class VideoMetadataFetcher:
    """Class to fetch metadata for YouTube videos."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: int = config.HTTP_TIMEOUT):
        """
        Initialize the fetcher.

        Args:
            session: Optional requests session (a new one is created if omitted)
            timeout: Per-request timeout in seconds
        """
        self.session = session or requests.Session()
        self.timeout = timeout

    @staticmethod
    def watch_url(video_id: str) -> str:
        return f"{config.YOUTUBE_WATCH_URL}?v={video_id}"

    @retry(exceptions=requests.RequestException,
           tries=config.METADATA_RETRIES,
           delay=config.METADATA_RETRY_DELAY,
           backoff=2,
           logger=logging)
    def fetch_oembed(self, video_id: str) -> Dict[str, Any]:
        """Fetch the oEmbed document for a video, raising on HTTP errors."""
        response = self.session.get(
            config.YOUTUBE_OEMBED_URL,
            params={"url": self.watch_url(video_id), "format": "json"},
            headers=REQUEST_HEADERS,
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response.json()

    def fetch_description(self, video_id: str) -> str:
        """
        Scrape the description meta tag from the watch page.

        Returns:
            The unescaped description or an empty string if the tag is absent
        """
        response = self.session.get(
            self.watch_url(video_id),
            headers=REQUEST_HEADERS,
            timeout=self.timeout,
        )
        match = DESCRIPTION_PATTERN.search(response.text)
        return html.unescape(match.group(1)) if match else ""

    @cached(expires=config.METADATA_CACHE_SECONDS, prefix="metadata")
    def _lookup(self, video_id: str) -> Dict[str, Any]:
        try:
            data = self.fetch_oembed(video_id)
        except (requests.RequestException, ValueError) as e:
            logging.error(f"oEmbed fetch failed for {video_id}: {e}")
            raise MetadataFetchError("oEmbed fetch failed") from e

        title = data.get("title", "")
        try:
            description = self.fetch_description(video_id)
            if not description:
                description = (
                    f'A video titled "{title}". This YouTube video explores various '
                    f"aspects of the topic mentioned in the title."
                )
            logging.info(f"Metadata fetched with description for {video_id}")
        except requests.RequestException as e:
            logging.warning(f"Description scraping failed for {video_id}, using basic info: {e}")
            description = (
                f'A YouTube video titled "{title}". This video discusses topics related '
                f"to the title and provides insights into the subject matter."
            )

        return {
            "video_id": video_id,
            "title": title,
            "thumbnail": data.get("thumbnail_url") or config.YOUTUBE_THUMBNAIL_URL.format(video_id=video_id),
            "description": description,
        }

    def get_metadata(self, video_id: str) -> VideoMetadata:
        """
        Get metadata for a video.

        Raises:
            MetadataFetchError: If the oEmbed lookup fails
        """
        logging.info(f"Fetching metadata for: {video_id}")
        return VideoMetadata(**self._lookup(video_id))

    def get_metadata_with_fallback(self, video_id: str) -> VideoMetadata:
        """Get metadata for a video, returning placeholder details if YouTube is unreachable."""
        try:
            return self.get_metadata(video_id)
        except MetadataFetchError:
            return VideoMetadata(
                video_id=video_id,
                title=f"YouTube Video {video_id}",
                thumbnail=config.YOUTUBE_THUMBNAIL_URL.format(video_id=video_id),
                description="Unable to fetch video details. The summary will be based on the title only.",
            )
