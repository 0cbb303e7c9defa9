"""
Module for generating educational video summaries with an LLM.
"""

import os
from typing import Optional

from app.core import prompts
from app.core.llm import run_prompt
from app.core.transcriber import TranscriptFetcher
from app.models.schemas import SummaryConfig, SummaryResult
from app.utils.error_handling import SummaryGenerationError
from app.utils.logger import logging


class VideoSummarizer:
    """Class to handle summary generation."""

    def __init__(self, api_key: Optional[str] = None, transcript_fetcher: Optional[TranscriptFetcher] = None):
        """
        Initialize the summarizer with API key.

        Args:
            api_key: Anthropic API key (if None, will try to get from environment)
            transcript_fetcher: Fetcher used by generate_summary
        """
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY") or os.getenv("VITE_ANTHROPIC_API_KEY")
        if not self.api_key:
            logging.warning("ANTHROPIC_API_KEY is not set; generation will use the offline fallbacks")

        self.transcript_fetcher = transcript_fetcher or TranscriptFetcher()

    @staticmethod
    def build_prompt(title: str, description: str, transcript: Optional[str], config: SummaryConfig):
        """
        Choose the prompt template and its variables.

        Returns:
            (template, variables) tuple
        """
        if not transcript:
            return prompts.summary_without_transcript_template, {
                "title": title,
                "description": description,
            }

        if len(transcript) > config.transcript_char_limit:
            transcript = transcript[:config.transcript_char_limit] + prompts.TRANSCRIPT_CONTINUES_MARKER

        return prompts.summary_with_transcript_template, {
            "title": title,
            "description": description,
            "transcript": transcript,
        }

    def summarize(
        self,
        title: str,
        description: str = "",
        transcript: Optional[str] = None,
        config: Optional[SummaryConfig] = None,
    ) -> str:
        """
        Summarize a video from its title, description and (optional) transcript.

        Args:
            title: Video title
            description: Video description
            transcript: Timestamped transcript text, if one was found
            config: Configuration for summarization

        Returns:
            Summary text

        Raises:
            SummaryGenerationError: If no API key is configured, or the model call fails or returns nothing
        """
        if not self.api_key:
            raise SummaryGenerationError("Anthropic API key is not configured")

        config = config or SummaryConfig()
        template, variables = self.build_prompt(title, description, transcript, config)

        logging.info(f"Generating summary for: {title} (transcript: {'yes' if transcript else 'no'})")
        try:
            summary = run_prompt(
                template,
                variables,
                api_key=self.api_key,
                model=config.model,
                model_provider=config.model_provider,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
            )
        except Exception as e:
            logging.error(f"Anthropic API error while summarizing '{title}': {e}")
            raise SummaryGenerationError(f"Anthropic API error: {e}") from e

        if not summary:
            raise SummaryGenerationError("Anthropic API returned an empty summary")

        logging.info("Summary generated successfully")
        return summary

    def generate_summary(
        self,
        title: str,
        description: str = "",
        video_id: Optional[str] = None,
        config: Optional[SummaryConfig] = None,
    ) -> SummaryResult:
        """
        Fetch the transcript (when a video ID is given) and summarize.

        Args:
            title: Video title
            description: Video description
            video_id: YouTube video ID
            config: Configuration for summarization

        Returns:
            SummaryResult
        """
        transcript = self.transcript_fetcher.get_transcript_text(video_id) if video_id else None
        summary = self.summarize(title, description, transcript, config)
        return SummaryResult(summary=summary, transcript_available=bool(transcript))

    @staticmethod
    def fallback_summary(title: str) -> str:
        """Offline summary used when the model cannot be reached."""
        return prompts.fallback_summary_template.format(title=title)

    def summarize_with_fallback(
        self,
        title: str,
        description: str = "",
        video_id: Optional[str] = None,
        config: Optional[SummaryConfig] = None,
    ) -> SummaryResult:
        """Like generate_summary, but never raises on model failures."""
        try:
            return self.generate_summary(title, description, video_id, config)
        except SummaryGenerationError as e:
            logging.warning(f"Using fallback summary for '{title}': {e}")
            return SummaryResult(summary=self.fallback_summary(title), transcript_available=False)
