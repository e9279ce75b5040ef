"""
Input source detection and retrieval.

Resolves a source descriptor (HTML file, URL, or list file of sources)
into input sources and reads raw HTML for each using aiohttp.
"""

import asyncio
from pathlib import Path
from typing import List, Optional

import aiohttp
from aiohttp import ClientError, ClientTimeout

from .errors import FetchError, SourceError
from .models import InputSource, SourceType
from ..utils.constants import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..utils.log import get_logger
from ..utils.paths import resolve_path


logger = get_logger("sources")


def detect_source_type(value: str) -> SourceType:
    """
    Detect the type of an input source.

    Args:
        value: File path or URL

    Returns:
        URL for http(s) URLs, LIST_FILE for .txt files, HTML_FILE otherwise
    """
    if value.startswith(('http://', 'https://')):
        return SourceType.URL

    if value.endswith('.txt'):
        return SourceType.LIST_FILE

    return SourceType.HTML_FILE


def read_list_file(file_path: str) -> List[str]:
    """
    Read a list file of sources.

    Blank lines and lines starting with ``#`` are skipped.

    Args:
        file_path: Path to the list file

    Returns:
        Source descriptors in file order

    Raises:
        SourceError: If the file is missing or lists no sources
    """
    path = resolve_path(file_path)

    if not path.is_file():
        raise SourceError(f"List file not found: {file_path}")

    lines = [
        line.strip()
        for line in path.read_text(encoding='utf-8').splitlines()
    ]
    entries = [line for line in lines if line and not line.startswith('#')]

    if not entries:
        raise SourceError(
            f"List file is empty or contains no valid entries: {file_path}"
        )

    return entries


def get_sources_to_process(value: str) -> List[InputSource]:
    """
    Expand a source descriptor into the sources to process.

    List files are expanded one level; their entries are never treated
    as further list files to read.

    Args:
        value: HTML file path, URL, or list file path

    Returns:
        Input sources in processing order
    """
    source_type = detect_source_type(value)

    if source_type == SourceType.LIST_FILE:
        return [
            InputSource(type=detect_source_type(entry), value=entry)
            for entry in read_list_file(value)
        ]

    return [InputSource(type=source_type, value=value)]


async def fetch_url_content(
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: str = DEFAULT_USER_AGENT
) -> str:
    """
    Fetch HTML content from a URL, following redirects.

    Args:
        url: URL to fetch
        session: Session to reuse; a temporary one is created if omitted
        timeout: Request timeout in seconds
        user_agent: User agent for a temporary session

    Returns:
        Response body as text

    Raises:
        FetchError: On a non-200 final status or a network error
    """
    if session is None:
        async with aiohttp.ClientSession(
            timeout=ClientTimeout(total=timeout),
            headers={"User-Agent": user_agent}
        ) as own_session:
            return await fetch_url_content(url, own_session)

    try:
        async with session.get(url, allow_redirects=True) as response:
            if response.status != 200:
                raise FetchError(url, f"HTTP {response.status}")

            return await response.text(encoding=response.charset or 'utf-8')

    except ClientError as e:
        raise FetchError(url, str(e) or type(e).__name__) from e
    except asyncio.TimeoutError as e:
        raise FetchError(url, "timed out") from e


def read_html_file(file_path: str) -> str:
    """
    Read an HTML file as UTF-8.

    Raises:
        SourceError: If the file does not exist
    """
    path: Path = resolve_path(file_path)
    if not path.is_file():
        raise SourceError(f"File not found: {file_path}")
    return path.read_text(encoding='utf-8')


async def fetch_content(
    source: InputSource,
    session: Optional[aiohttp.ClientSession] = None
) -> str:
    """
    Read raw HTML for a single input source.

    Args:
        source: HTML file or URL source
        session: Session to reuse for URL sources

    Returns:
        Raw HTML string

    Raises:
        SourceError: For list file sources or missing files
        FetchError: If a URL cannot be fetched
    """
    if source.type == SourceType.HTML_FILE:
        return read_html_file(source.value)

    if source.type == SourceType.URL:
        logger.debug(f"Fetching {source.value}")
        return await fetch_url_content(source.value, session)

    raise SourceError(f"Unsupported source type: {source.type.value}")
