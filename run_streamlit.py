"""
Start the Streamlit front end, pointed at a running transcript cleaner API.
"""

import os
import sys
import argparse
import subprocess
from pathlib import Path

import requests
from dotenv import load_dotenv

load_dotenv()

ROOT = Path(__file__).parent.absolute()
APP_SCRIPT = ROOT / "app" / "frontend" / "streamlit_app.py"


def api_is_up(api_url: str) -> bool:
    try:
        return requests.get(f"{api_url.rstrip('/')}/api/v1/health", timeout=3).status_code == 200
    except requests.RequestException:
        return False


def main():
    parser = argparse.ArgumentParser(description="Transcript cleaner web UI")
    parser.add_argument("--port", type=int, default=8501, help="Port for the Streamlit server")
    parser.add_argument("--api-url", default=os.getenv("API_URL", "http://localhost:8000"),
                        help="Base URL of the transcript cleaner API")
    args = parser.parse_args()

    if not api_is_up(args.api_url):
        print(f"warning: no API answered at {args.api_url}; start it with `python run_api.py`")

    env = dict(os.environ, API_URL=args.api_url)
    # streamlit executes the script as a file, so the package root has to be importable
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT), env.get("PYTHONPATH")]))

    cmd = [
        "streamlit", "run", str(APP_SCRIPT),
        "--server.port", str(args.port),
        "--server.headless", "true",
        "--browser.gatherUsageStats", "false",
    ]
    try:
        subprocess.run(cmd, env=env, check=True)
    except KeyboardInterrupt:
        print("Stopped")
    except (OSError, subprocess.CalledProcessError) as e:
        print(f"Could not run streamlit: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
