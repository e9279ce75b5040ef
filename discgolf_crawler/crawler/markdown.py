"""
HTML to Markdown conversion for rewritten content regions.

Built on markdownify with rules for YouTube placeholders and local images.
"""

import re

from bs4 import Tag
from markdownify import ATX, MarkdownConverter

# Name of the placeholder element carrying a YouTube video ID
YOUTUBE_TAG = "youtube"
VIDEO_ID_ATTR = "data-video-id"

_BLANK_LINE_PATTERN = re.compile(r"^[ \t]+$", re.MULTILINE)
_EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")

# Characters that would end or nest an image label
_LABEL_SPECIAL_PATTERN = re.compile(r"([\\\[\]])")


def youtube_embed(video_id: str) -> str:
    """Markdown embed syntax for a YouTube video."""
    return f"@[youtube](https://youtu.be/{video_id})"


class ContentMarkdownConverter(MarkdownConverter):
    """
    Markdown converter for legacy exercise content.

    Uses ATX headings and ``*`` bullets. ``<youtube>`` placeholders become
    embed lines, and images keep their already rewritten ``src``.
    """

    def __init__(self, **options):
        options.setdefault("heading_style", ATX)
        options.setdefault("bullets", "*")
        super().__init__(**options)

    def convert_youtube(self, el, text, *args, **kwargs):
        video_id = el.get(VIDEO_ID_ATTR, "")
        if not video_id:
            return ""
        return youtube_embed(video_id)

    def convert_img(self, el, text, *args, **kwargs):
        src = el.get("src", "")
        if not src:
            return ""
        alt = _LABEL_SPECIAL_PATTERN.sub(r"\\\1", el.get("alt", "") or "")
        return f"![{alt}]({src})"


def clean_whitespace(markdown: str) -> str:
    """
    Normalize whitespace in converted Markdown.

    Empties whitespace-only lines, collapses runs of three or more
    newlines to a single blank line, and trims the result. Applying it
    twice gives the same output as applying it once.
    """
    markdown = _BLANK_LINE_PATTERN.sub("", markdown)
    markdown = _EXCESS_NEWLINES_PATTERN.sub("\n\n", markdown)
    return markdown.strip()


def convert_to_markdown(region: Tag) -> str:
    """
    Convert the children of a rewritten content region to Markdown.

    Args:
        region: Content region tag after all rewrites

    Returns:
        Whitespace-normalized Markdown text
    """
    converter = ContentMarkdownConverter()
    return clean_whitespace(converter.convert_soup(region))
