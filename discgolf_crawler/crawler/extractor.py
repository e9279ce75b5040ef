"""
Content extractor for legacy exercise pages.

Uses BeautifulSoup to locate the title and content regions of a WordPress
page and converts the content to Markdown with locally named images.
"""

from pathlib import Path
from typing import Union

from bs4 import BeautifulSoup, FeatureNotFound
from rich.markup import escape

from .errors import EmptyTitle, MissingContentRegion, MissingTitleRegion
from .markdown import convert_to_markdown
from .models import ParsedContent
from .rewrite import ContentRewriter
from ..utils.constants import CONTENT_SELECTOR, TITLE_SELECTOR
from ..utils.log import get_logger


def parse_html(html: str) -> BeautifulSoup:
    """
    Parse an HTML document, preferring lxml.

    Args:
        html: HTML content to parse

    Returns:
        Parsed document
    """
    try:
        return BeautifulSoup(html, 'lxml')
    except FeatureNotFound:
        # Fallback to html.parser if lxml is not installed
        return BeautifulSoup(html, 'html.parser')


class ContentExtractor:
    """
    Extracts the title and Markdown body from a legacy HTML page.

    Extraction is a pure transformation: the same HTML always yields the
    same ParsedContent and no state is kept between documents.
    """

    def __init__(
        self,
        title_selector: str = TITLE_SELECTOR,
        content_selector: str = CONTENT_SELECTOR
    ):
        """
        Initialize the content extractor.

        Args:
            title_selector: CSS selector of the title heading
            content_selector: CSS selector of the content region
        """
        self.title_selector = title_selector
        self.content_selector = content_selector
        self.logger = get_logger("extractor")

    def extract_title(self, html: str) -> str:
        """
        Extract the page title from the entry header.

        Args:
            html: HTML content to parse

        Returns:
            Title text with surrounding whitespace removed

        Raises:
            MissingTitleRegion: If the header or title heading is absent
            EmptyTitle: If the title heading has no text
        """
        soup = parse_html(html)
        heading = soup.select_one(self.title_selector)

        if heading is None:
            raise MissingTitleRegion(self.title_selector)

        title = heading.get_text().strip()
        if not title:
            raise EmptyTitle(self.title_selector)

        return title

    def extract(self, html: str) -> ParsedContent:
        """
        Extract content and convert it to Markdown.

        Args:
            html: HTML content to parse

        Returns:
            ParsedContent with header, Markdown body and image references

        Raises:
            MissingContentRegion: If the content region is absent
            MissingTitleRegion: If the header or title heading is absent
            EmptyTitle: If the title heading has no text
        """
        soup = parse_html(html)
        content = soup.select_one(self.content_selector)

        if content is None:
            raise MissingContentRegion(self.content_selector)

        result = ContentRewriter().rewrite(content)
        body = convert_to_markdown(result.region)
        header = self.extract_title(html)

        self.logger.debug(
            f"Extracted '{escape(header)}': {len(body)} characters, "
            f"{len(result.images)} images"
        )

        return ParsedContent(header=header, body=body, images=tuple(result.images))


def extract_title(html: str) -> str:
    """Extract the page title using the default selectors."""
    return ContentExtractor().extract_title(html)


def extract_and_convert_content(html: str) -> ParsedContent:
    """Extract and convert page content using the default selectors."""
    return ContentExtractor().extract(html)


def parse_html_file(file_path: Union[str, Path]) -> ParsedContent:
    """
    Read an HTML file and extract its content.

    Args:
        file_path: Path to a UTF-8 HTML file

    Returns:
        ParsedContent for the file

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {file_path}")

    return extract_and_convert_content(path.read_text(encoding='utf-8'))
