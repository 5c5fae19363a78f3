"""Run the announcement bridge with uvicorn.

Usage:
    python -m announcement_bridge
"""

import logging

import uvicorn

from announcement_bridge.config import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Start the server with host, port and keep-alive taken from settings."""
    settings = get_settings()
    logger.info(
        "Starting announcement bridge in %s mode on %s:%d",
        settings.environment,
        settings.host,
        settings.port,
    )
    # uvicorn has no header-receive timeout; the 2s header budget must be
    # enforced by the reverse proxy in front of this service.
    uvicorn.run(
        "announcement_bridge.app:app",
        host=settings.host,
        port=settings.port,
        timeout_keep_alive=max(1, round(settings.keep_alive_timeout)),
        log_level=settings.log_level.lower(),
        access_log=not settings.is_production,
    )


if __name__ == "__main__":
    main()
