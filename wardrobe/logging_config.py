"""Logging configuration module."""

import logging

from wardrobe.config import config


def configure_logging() -> None:
    """Configure root logger according to project conventions."""
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
