#!/usr/bin/env python3
"""
Server entry point for the BigO Lens backend.
"""
import uvicorn

from bigolens.config import settings, logger


def main():
    """Run the server."""
    logger.info("Starting BigO Lens on %s:%d", settings.HOST, settings.PORT)

    uvicorn.run(
        "bigolens.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
