"""Logging configuration helpers for ReviewPack."""

import logging


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Configure basic logging and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    return logging.getLogger("reviewpack")
