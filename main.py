#!/usr/bin/env python3
"""Lost Pet Finder: Single entry point.

Loads (or seeds) the local store and launches the FastAPI web UI / JSON API.

Usage:
    python main.py
    python main.py --port 8000
    python main.py --data-dir /tmp/lostpet
    python main.py --reset              # restore the example records first
    python main.py --no-browser
"""

from __future__ import annotations

import argparse
import logging
import os
import threading
import time
import webbrowser

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger("lost-pet-finder")


def _open_browser(url: str, delay: float = 2.0) -> None:
    """Open browser after a delay to give the server time to start.

    Args:
        url: URL to open in the browser.
        delay: Seconds to wait before opening.
    """
    def _delayed_open():
        time.sleep(delay)
        logger.info("Opening browser at %s", url)
        webbrowser.open(url)

    thread = threading.Thread(target=_delayed_open, daemon=True)
    thread.start()


def main() -> None:
    """Prepare the data store and serve the app."""
    parser = argparse.ArgumentParser(description="Lost Pet Finder")
    parser.add_argument("--port", type=int, default=None, help="Server port")
    parser.add_argument("--host", type=str, default=None, help="Server host")
    parser.add_argument(
        "--data-dir", type=str, default=None, help="Directory holding the JSON store"
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Replace stored lost pets and sightings with the examples",
    )
    parser.add_argument(
        "--no-browser", action="store_true", help="Do not open a browser window"
    )
    args = parser.parse_args()

    if args.data_dir:
        os.environ["DATA_DIR"] = args.data_dir

    from lostpet.config import get_config

    config = get_config()
    host = args.host or config.host
    port = args.port or config.port

    logger.info("Using store at %s", config.store_path)

    if args.reset:
        from lostpet.data.store import LocalStore
        from lostpet.tracker import LostPetTracker

        LostPetTracker(LocalStore(config.store_path), config).reset_to_seed()

    logger.info("Launching web UI on %s:%d", host, port)
    import uvicorn

    from lostpet.api.app import create_app

    app = create_app()

    if not args.no_browser:
        _open_browser(f"http://localhost:{port}")

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
