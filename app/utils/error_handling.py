"""
Centralized error handling for the application.
"""

import json
from typing import Dict, Any

from app.config import config
from app.utils.logger import logging


class AbsorbeyError(Exception):
    """Base class for application errors."""


class InvalidYouTubeURLError(AbsorbeyError, ValueError):
    """Raised when no video ID can be extracted from a URL."""

    def __init__(self, url: str):
        self.url = url
        super().__init__("Invalid YouTube URL")


class MetadataFetchError(AbsorbeyError):
    """Raised when YouTube oEmbed metadata cannot be fetched."""


class GenerationError(AbsorbeyError):
    """Raised when the language model call fails."""


class SummaryGenerationError(GenerationError):
    """Raised when a summary cannot be generated."""


class QuizGenerationError(GenerationError):
    """Raised when a quiz cannot be generated."""


def log_diagnostic_info(context: Dict[str, Any]):
    """
    Log diagnostic information for debugging.

    Args:
        context: Dictionary of diagnostic information
    """
    if not config.DEBUG:
        return

    try:
        logging.info(f"Diagnostic info: {json.dumps(context, default=str)}")
    except (TypeError, ValueError) as e:
        logging.error(f"Error logging diagnostic info: {str(e)}")
