"""Memo app entry point."""

import logging

from aiohttp import web

from src.config import settings
from src.memos.service import MemoService
from src.web.server import create_app

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=getattr(logging, settings.log_level),
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Open the memo store and serve the app until interrupted."""
    service = MemoService.from_settings(settings)
    service.open()

    app = create_app(service, settings)
    logger.info("Starting memo app on http://%s:%d", settings.host, settings.port)
    web.run_app(app, host=settings.host, port=settings.port, print=None)
    logger.info("Memo app stopped")


if __name__ == "__main__":
    main()
