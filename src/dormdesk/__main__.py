"""Start the DormDesk server with uvicorn: ``python -m dormdesk``."""

import sys

import uvicorn

from .config import get_config
from .utils.logging_config import get_logger, initialize_logging


def main() -> int:
    config = get_config()
    initialize_logging(debug=config.server.debug)
    logger = get_logger("main")

    logger.info(f"Starting DormDesk on http://{config.server.host}:{config.server.port}")
    logger.info(f"API docs: http://{config.server.host}:{config.server.port}/docs")

    try:
        uvicorn.run(
            "dormdesk.main:app",
            host=config.server.host,
            port=config.server.port,
            reload=config.server.auto_reload,
            log_level="debug" if config.server.debug else "info",
        )
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
