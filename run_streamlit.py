"""
Start the Absorbey Streamlit app against a running API server.

Usage:
    python run_streamlit.py --api-url http://localhost:3001
"""

import os
import sys
import argparse
import subprocess
from pathlib import Path

import requests
from dotenv import load_dotenv

from app.config import config

ROOT_DIR = Path(__file__).parent.absolute()
APP_PATH = ROOT_DIR / "app" / "frontend" / "streamlit_app.py"


def api_is_up(api_url: str) -> bool:
    try:
        return requests.get(f"{api_url.rstrip('/')}/health", timeout=3).ok
    except requests.RequestException:
        return False


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(description="Absorbey Streamlit app")
    parser.add_argument("--port", type=int, default=8501, help="Port for the Streamlit server")
    parser.add_argument("--api-url", default=os.getenv("API_URL", config.PUBLIC_URL), help="Absorbey API base URL")
    args = parser.parse_args()

    if not api_is_up(args.api_url):
        print(f"Warning: no API server answering at {args.api_url}; start it with `python run_api.py`")

    env = dict(os.environ, API_URL=args.api_url)
    # streamlit runs the script directly, so the repo root must be importable
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT_DIR), env.get("PYTHONPATH")]))

    print(f"Absorbey UI on http://localhost:{args.port} (API: {args.api_url})")
    cmd = [
        sys.executable, "-m", "streamlit", "run", str(APP_PATH),
        "--server.port", str(args.port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ]
    try:
        subprocess.run(cmd, env=env, check=True)
    except KeyboardInterrupt:
        print("Streamlit app stopped")
    except subprocess.CalledProcessError as e:
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
