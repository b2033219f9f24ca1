"""Main entry point - loads config and serves the metadata page."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from .config import load_config
from .web.app import run_web_server

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    """Run the YouTube metadata web page."""
    parser = argparse.ArgumentParser(prog="ytmetadata", description="Browse YouTube Data API metadata.")
    parser.add_argument("--host", help="Interface to bind (default: YTMETA_WEB_HOST or 0.0.0.0)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: YTMETA_WEB_PORT or 8080)")
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    if not config.api_key:
        logger.warning("YOUTUBE_API_KEY is not set; every lookup will fail until it is.")

    host = args.host or config.web_host
    port = args.port or config.web_port
    logger.info("Web interface at http://%s:%d", host, port)
    run_web_server(host=host, port=port, config=config)
    return 0


if __name__ == "__main__":
    sys.exit(main())
