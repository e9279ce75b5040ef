"""
Utility modules for the content crawler.

Contains logging, path handling utilities, and constants.
"""

from .log import setup_logger, get_logger
from .paths import get_url_extension, image_filename, ensure_dir
from .constants import (
    DEFAULT_USER_AGENT,
    DEFAULT_TIMEOUT,
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_ROOT,
)

__all__ = [
    "setup_logger",
    "get_logger",
    "get_url_extension",
    "image_filename",
    "ensure_dir",
    "DEFAULT_USER_AGENT",
    "DEFAULT_TIMEOUT",
    "DEFAULT_CONCURRENCY",
    "DEFAULT_OUTPUT_ROOT",
]
