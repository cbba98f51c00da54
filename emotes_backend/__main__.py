"""
Run the emotes backend with uvicorn: ``python -m emotes_backend``.
"""

from __future__ import annotations

import logging

import uvicorn

from emotes_backend.config import get_settings

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_ACCESS_KEY = "123"


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Ruby Emotes Server running on http://localhost:%d", settings.port)
    if settings.admin_access_key == DEFAULT_ADMIN_ACCESS_KEY:
        logger.warning("ADMIN_ACCESS_KEY is the default value; set it before exposing the server")
    uvicorn.run(
        "emotes_backend.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
