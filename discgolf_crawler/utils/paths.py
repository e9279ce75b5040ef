"""
Path and URL utilities for the content crawler.

Provides image file naming, output directory creation, and directory management.
"""

import os
import posixpath
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse, unquote

from .constants import DEFAULT_IMAGE_EXTENSION, UPLOADS_URL_PREFIX


def get_url_extension(url: str, default: str = DEFAULT_IMAGE_EXTENSION) -> str:
    """
    Get the lowercased file extension of a URL's path, without the dot.

    Query strings and fragments are ignored, so ``photo.JPG?w=200``
    yields ``jpg``.

    Args:
        url: URL (absolute or relative) to inspect
        default: Extension returned when the path has none

    Returns:
        Extension string
    """
    path = unquote(urlparse(url.strip()).path)
    _, ext = posixpath.splitext(posixpath.basename(path))
    ext = ext.lstrip('.').lower()
    return ext or default


def image_filename(index: int, url: str) -> str:
    """
    Build the local filename for the index-th image of a document.

    Args:
        index: 1-based position of the image in document order
        url: Original image URL

    Returns:
        Filename such as ``image-3.png``
    """
    return f"image-{index}.{get_url_extension(url)}"


def upload_url(filename: str) -> str:
    """Public URL under which an uploaded image is served."""
    return f"{UPLOADS_URL_PREFIX}{filename}"


def resolve_path(path: str, base_dir: Optional[str] = None) -> Path:
    """
    Resolve a possibly relative path against a base directory.

    Args:
        path: Path to resolve
        base_dir: Directory for relative paths (default: working directory)

    Returns:
        Absolute Path
    """
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return Path(base_dir or os.getcwd()) / candidate


def timestamp_dirname(now: Optional[datetime] = None) -> str:
    """
    Format a UTC timestamp as an output directory name.

    Args:
        now: Moment to format (default: current UTC time)

    Returns:
        Name such as ``2024-05-01_12-30-45Z``
    """
    now = now or datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%d_%H-%M-%S") + "Z"


def ensure_dir(path: str) -> None:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists
    """
    os.makedirs(path, exist_ok=True)


def ensure_parent_dir(file_path: str) -> None:
    """
    Ensure the parent directory of a file exists.

    Args:
        file_path: File path whose parent directory should exist
    """
    parent = os.path.dirname(file_path)
    if parent:
        ensure_dir(parent)
