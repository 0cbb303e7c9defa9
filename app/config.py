"""
Configuration settings for the Absorbey application.
"""

import os
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()
load_dotenv(".env.local")


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "Absorbey"
    APP_VERSION = "0.2.0"

    # Data directories
    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    DATA_DIR = Path(os.getenv("DATA_DIR", BASE_DIR / "data"))
    SUMMARIES_DIR = DATA_DIR / "summaries"

    # API keys
    ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY") or os.getenv("VITE_ANTHROPIC_API_KEY")
    YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY")

    # Default models
    DEFAULT_MODEL_PROVIDER = "anthropic"
    DEFAULT_SUMMARY_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
    SUMMARY_MAX_TOKENS = 8000
    QUIZ_MAX_TOKENS = 4000

    # Prompt limits (characters)
    TRANSCRIPT_CHAR_LIMIT = 25000
    QUIZ_SUMMARY_CHAR_LIMIT = 5000

    # YouTube
    YOUTUBE_OEMBED_URL = "https://www.youtube.com/oembed"
    YOUTUBE_WATCH_URL = "https://www.youtube.com/watch"
    YOUTUBE_THUMBNAIL_URL = "https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
    HTTP_TIMEOUT = int(os.getenv("HTTP_TIMEOUT", "15"))
    METADATA_RETRIES = 2
    METADATA_RETRY_DELAY = 0.5
    METADATA_CACHE_SECONDS = 24 * 3600

    # Firebase
    FIREBASE_SERVICE_ACCOUNT_PATH = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", "").strip()
    FIREBASE_SERVICE_ACCOUNT_JSON = os.getenv("FIREBASE_SERVICE_ACCOUNT_JSON", "").strip()
    FIREBASE_WEB_API_KEY = os.getenv("FIREBASE_WEB_API_KEY") or os.getenv("VITE_FIREBASE_API_KEY")
    ANONYMOUS_USER_ID = "anonymous"

    REDIS_URL = os.getenv("REDIS_URL")
    PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:3001")

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.DATA_DIR.mkdir(parents=True, exist_ok=True)
        cls.SUMMARIES_DIR.mkdir(parents=True, exist_ok=True)

        # Validate required environment variables
        if not cls.ANTHROPIC_API_KEY:
            print("WARNING: ANTHROPIC_API_KEY environment variable not set.")
            print("Please set it in the .env file or environment variables.")

    @classmethod
    def firebase_enabled(cls) -> bool:
        """Whether Firebase Admin credentials are configured."""
        return bool(cls.FIREBASE_SERVICE_ACCOUNT_PATH or cls.FIREBASE_SERVICE_ACCOUNT_JSON)


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = "INFO"


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
