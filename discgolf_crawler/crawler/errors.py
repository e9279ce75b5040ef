"""
Exception hierarchy for the content crawler.

Extraction errors are fatal for a single document; the batch driver
records them and moves on to the next source.
"""


class CrawlerError(Exception):
    """Base class for all crawler errors."""


class ExtractionError(CrawlerError):
    """A document lacks the structure needed to extract content."""


class MissingTitleRegion(ExtractionError):
    """The entry header or its title heading is absent."""

    def __init__(self, selector: str):
        super().__init__(f"Could not find page title in HTML ({selector})")
        self.selector = selector


class EmptyTitle(ExtractionError):
    """The title heading exists but contains no text."""

    def __init__(self, selector: str):
        super().__init__(f"Page title is empty ({selector})")
        self.selector = selector


class MissingContentRegion(ExtractionError):
    """The entry content region is absent."""

    def __init__(self, selector: str):
        super().__init__(f"Could not find {selector} in HTML")
        self.selector = selector


class SourceError(CrawlerError):
    """An input source descriptor cannot be resolved."""


class FetchError(CrawlerError):
    """A URL could not be fetched."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.reason = reason
