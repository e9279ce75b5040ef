"""
Shared constants for the content crawler.

Contains common configuration values used across multiple modules.
"""

# Default user agent string for all HTTP requests
# Used by both the page fetcher and image downloader
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/120.0.0.0 Safari/537.36"
)

# Default request timeout in seconds
DEFAULT_TIMEOUT = 30

# Default concurrent image downloads
DEFAULT_CONCURRENCY = 10

# Root directory for timestamped crawl output
DEFAULT_OUTPUT_ROOT = "docs/junnufriba-crawler/parsed-data"

# Public URL prefix under which downloaded images are served
UPLOADS_URL_PREFIX = "/public/uploads/"

# Extension used when an image URL has none
DEFAULT_IMAGE_EXTENSION = "jpg"

# Glyph that marks a hand-written bullet line in legacy content
BULLET_GLYPH = "•"

# CSS selectors for the legacy WordPress page structure
TITLE_SELECTOR = ".entry-header h1.entry-title"
CONTENT_SELECTOR = ".entry-content"
