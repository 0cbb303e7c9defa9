"""
Start the Absorbey API server.

Usage:
    python run_api.py --port 3001 --reload
"""

import os
import argparse

import uvicorn
from dotenv import load_dotenv

from app.config import config


def parse_args():
    parser = argparse.ArgumentParser(description="Absorbey API server")
    parser.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"), help="Interface to listen on")
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3001")), help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes (development)")
    return parser.parse_args()


def main():
    load_dotenv()
    args = parse_args()
    config.initialize()

    print(f"{config.APP_NAME} API v{config.APP_VERSION} on http://{args.host}:{args.port}")
    print(f"  Anthropic API key: {'set' if config.ANTHROPIC_API_KEY else 'missing'}")
    print(f"  Firebase auth:     {'enabled' if config.firebase_enabled() else 'disabled (anonymous user)'}")
    print(f"  Cache:             {'redis' if config.REDIS_URL else 'in-memory'}")

    uvicorn.run(
        "app.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
