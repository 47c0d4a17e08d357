"""Logging setup for the server process."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
    )
    # uvicorn's access log duplicates RequestLoggerMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
