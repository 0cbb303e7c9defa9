"""
Module for fetching YouTube transcripts.
"""

from typing import Iterable, Optional

import requests
from youtube_transcript_api import YouTubeTranscriptApi, CouldNotRetrieveTranscript

from app.config import config
from app.models.schemas import TranscriptSegment, VideoTranscript
from app.utils.caching import cached
from app.utils.helpers import format_timestamp
from app.utils.logger import logging


def format_transcript(segments: Iterable[TranscriptSegment]) -> str:
    """
    Render transcript segments as ``[M:SS] text`` lines.

    Args:
        segments: Transcript segments in playback order

    Returns:
        Newline-joined transcript text
    """
    lines = []
    for segment in segments:
        text = segment.text.replace("\n", " ").strip()
        lines.append(f"[{format_timestamp(segment.start)}] {text}")
    return "\n".join(lines)


class TranscriptFetcher:
    """Class to handle transcript retrieval operations."""

    def __init__(self, api: Optional[YouTubeTranscriptApi] = None):
        """
        Initialize the fetcher.

        Args:
            api: Optional YouTubeTranscriptApi instance (for proxies or tests)
        """
        self.api = api or YouTubeTranscriptApi()

    def _build(self, video_id: str, fetched) -> Optional[VideoTranscript]:
        segments = [
            TranscriptSegment(text=snippet.text, start=snippet.start, duration=snippet.duration)
            for snippet in fetched
        ]
        if not segments:
            return None

        return VideoTranscript(
            video_id=video_id,
            segments=segments,
            text=format_transcript(segments),
            language=getattr(fetched, "language_code", None),
            is_generated=getattr(fetched, "is_generated", None),
        )

    def _fetch_any_language(self, video_id: str):
        transcript_list = self.api.list(video_id)
        for transcript in transcript_list:
            return transcript.fetch()
        return []

    def fetch(self, video_id: str) -> Optional[VideoTranscript]:
        """
        Fetch the transcript for a video.

        English is tried first; if that fails, the first transcript the video
        offers in any language is used.

        Args:
            video_id: YouTube video ID

        Returns:
            VideoTranscript, or None if the video has no usable transcript
        """
        logging.info(f"Fetching transcript for video: {video_id}")

        try:
            transcript = self._build(video_id, self.api.fetch(video_id))
        except (CouldNotRetrieveTranscript, requests.RequestException) as e:
            logging.warning(f"Transcript extraction failed for {video_id}: {e}")
            logging.info("Trying alternative extraction method...")
            try:
                transcript = self._build(video_id, self._fetch_any_language(video_id))
            except (CouldNotRetrieveTranscript, requests.RequestException) as fallback_error:
                logging.error(f"Fallback transcript extraction failed for {video_id}: {fallback_error}")
                return None

        if transcript is None:
            logging.warning(f"No transcript available for video {video_id}")
            return None

        logging.info(
            f"Transcript extracted for {video_id}: {len(transcript.segments)} segments, "
            f"{len(transcript.text)} characters"
        )
        logging.debug(f"Sample: {transcript.text[:200]}...")
        return transcript

    @cached(expires=config.METADATA_CACHE_SECONDS, prefix="transcript")
    def get_transcript_text(self, video_id: str) -> Optional[str]:
        """Get the formatted transcript text for a video, or None when unavailable."""
        transcript = self.fetch(video_id)
        return transcript.text if transcript else None
