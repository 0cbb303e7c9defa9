"""
Absorbey learning application.

Paste a YouTube link, and the application fetches the video's metadata and
transcript, then generates an educational summary and a quiz with an LLM.
"""

from app.config import config

__version__ = config.APP_VERSION
