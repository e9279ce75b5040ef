"""
Crawler module for legacy exercise content.

Contains components for resolving sources, extracting and rewriting content,
converting it to Markdown, and downloading images.
"""

from .crawler import ContentCrawler
from .downloader import ImageDownloader
from .errors import (
    CrawlerError,
    ExtractionError,
    MissingTitleRegion,
    EmptyTitle,
    MissingContentRegion,
    SourceError,
    FetchError,
)
from .extractor import (
    ContentExtractor,
    extract_title,
    extract_and_convert_content,
    parse_html_file,
)
from .models import ImageRef, ParsedContent, InputSource, SourceType, CrawlResult
from .rewrite import ContentRewriter

__all__ = [
    "ContentCrawler",
    "ImageDownloader",
    "ContentExtractor",
    "ContentRewriter",
    "extract_title",
    "extract_and_convert_content",
    "parse_html_file",
    "ImageRef",
    "ParsedContent",
    "InputSource",
    "SourceType",
    "CrawlResult",
    "CrawlerError",
    "ExtractionError",
    "MissingTitleRegion",
    "EmptyTitle",
    "MissingContentRegion",
    "SourceError",
    "FetchError",
]
