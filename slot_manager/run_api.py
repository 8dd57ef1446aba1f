# slot_manager/run_api.py
"""Serve the slot manager API."""

import logging

import uvicorn

from slot_manager.config import settings

# Setup logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def main():
    """Main entry point."""
    logger.info("=" * 80)
    logger.info("LLAMA.CPP SLOT MANAGER")
    logger.info("=" * 80)
    logger.info(f"Default slots: {settings.default_slots}")
    logger.info(f"Settings store: {settings.database_url}")
    logger.info(f"llama.cpp server: {settings.llama_server_url}")
    logger.info("=" * 80)

    uvicorn.run(
        "slot_manager.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
