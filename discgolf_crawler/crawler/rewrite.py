"""
Content rewriter for normalizing legacy markup before Markdown conversion.

Rewrites YouTube embeds, images, hand-written bullet lists and heading
levels on a copy of the page's content region.
"""

import copy
import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .markdown import VIDEO_ID_ATTR, YOUTUBE_TAG
from .models import ImageRef
from ..utils.constants import BULLET_GLYPH
from ..utils.log import get_logger
from ..utils.paths import image_filename, upload_url


# Embed URL pattern; the video ID is the path segment after /embed/
YOUTUBE_EMBED_PATTERN = re.compile(
    r'youtube(?:-nocookie)?\.com/embed/([^?#/\s]+)',
    re.IGNORECASE
)

# Line break elements as serialized inside a paragraph
LINE_BREAK_PATTERN = re.compile(r'<br\b[^>]*/?>', re.IGNORECASE)

TEXT_RUN = "text"
LIST_RUN = "list"


def extract_youtube_id(src: str) -> Optional[str]:
    """
    Extract the video ID from a YouTube embed URL.

    Args:
        src: iframe src attribute

    Returns:
        Video ID, or None if src is not a YouTube embed URL
    """
    match = YOUTUBE_EMBED_PATTERN.search(src or '')
    return match.group(1) if match else None


@dataclass
class BulletRun:
    """Consecutive lines of one kind within a paragraph."""

    kind: str
    items: List[str] = field(default_factory=list)


def split_bullet_runs(lines: List[str]) -> List[BulletRun]:
    """
    Group paragraph lines into alternating text and bullet runs.

    Lines starting with the bullet glyph are list items, with the glyph
    removed; all other lines are text. Empty lines and empty list items
    are dropped, and runs left without items are not returned.

    Args:
        lines: Paragraph lines split on line breaks

    Returns:
        Runs in their original order
    """
    runs: List[BulletRun] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(BULLET_GLYPH):
            kind = LIST_RUN
            line = line[len(BULLET_GLYPH):].strip()
        else:
            kind = TEXT_RUN

        if not runs or runs[-1].kind != kind:
            runs.append(BulletRun(kind))
        if line:
            runs[-1].items.append(line)

    return [run for run in runs if run.items]


def render_bullet_runs(runs: List[BulletRun]) -> str:
    """
    Render bullet runs as HTML.

    Text runs become one paragraph with lines joined by a space; list
    runs become an unordered list with one item per line.
    """
    parts = []
    for run in runs:
        if run.kind == TEXT_RUN:
            parts.append('<p>' + ' '.join(run.items) + '</p>')
        else:
            parts.append(
                '<ul>' + ''.join(f'<li>{item}</li>' for item in run.items) + '</ul>'
            )
    return ''.join(parts)


@dataclass
class RewriteResult:
    """A rewritten content region and the images found in it."""

    region: Tag
    images: List[ImageRef] = field(default_factory=list)


class ContentRewriter:
    """
    Rewrites a content region into markup ready for Markdown conversion.

    The input tag is never modified; all rewrites are applied to a copy.
    """

    def __init__(self):
        self.logger = get_logger("rewriter")
        # Owner document for newly created tags
        self._factory = BeautifulSoup('', 'html.parser')

    def rewrite(self, content: Tag) -> RewriteResult:
        """
        Apply all rewrites to a copy of a content region.

        Order matters: embeds and images are replaced before bullet runs
        are rebuilt, so paragraphs are re-parsed with their final markup.

        Args:
            content: Content region of the parsed page

        Returns:
            RewriteResult with the rewritten copy and image references
        """
        region = copy.copy(content)

        embeds = self._rewrite_youtube_embeds(region)
        images = self._rewrite_images(region)
        paragraphs = self._rewrite_bullet_runs(region)
        self._normalize_headings(region)

        self.logger.debug(
            f"Rewrote {embeds} embeds, {len(images)} images, "
            f"{paragraphs} bulleted paragraphs"
        )

        return RewriteResult(region=region, images=images)

    def _youtube_block(self, video_id: str, inline: bool) -> Tag:
        """Create a placeholder for a video, wrapped in a paragraph unless inline."""
        placeholder = self._factory.new_tag(YOUTUBE_TAG, attrs={VIDEO_ID_ATTR: video_id})
        if inline:
            return placeholder
        paragraph = self._factory.new_tag('p')
        paragraph.append(placeholder)
        return paragraph

    def _rewrite_youtube_embeds(self, region: Tag) -> int:
        """
        Replace YouTube iframes with video placeholders.

        An enclosing figure is replaced as a whole, with one placeholder
        per YouTube iframe it contains. Other iframes are left alone.

        Returns:
            Number of embeds replaced
        """
        count = 0
        for iframe in region.find_all('iframe'):
            video_id = extract_youtube_id(iframe.get('src', ''))
            if not video_id:
                continue

            figure = iframe.find_parent('figure')
            if figure is None:
                inline = iframe.parent is not None and iframe.parent.name == 'p'
                iframe.replace_with(self._youtube_block(video_id, inline))
                count += 1
                continue

            # Figure already replaced via an earlier iframe
            if figure.parent is None:
                continue

            video_ids = [
                vid for vid in (
                    extract_youtube_id(frame.get('src', ''))
                    for frame in figure.find_all('iframe')
                ) if vid
            ]
            figure.replace_with(*[self._youtube_block(vid, False) for vid in video_ids])
            count += len(video_ids)

        return count

    def _rewrite_images(self, region: Tag) -> List[ImageRef]:
        """
        Point images at their local upload paths.

        Each image with a src gets the next index in document order and is
        replaced by a clean img tag carrying only alt and the upload URL.
        Images without a src are removed.

        Returns:
            Image references in document order
        """
        images: List[ImageRef] = []
        for img in region.find_all('img'):
            src = (img.get('src') or '').strip()
            if not src:
                img.decompose()
                continue

            filename = image_filename(len(images) + 1, src)
            images.append(ImageRef(original_url=src, local_path=filename))

            replacement = self._factory.new_tag(
                'img',
                attrs={'alt': img.get('alt') or '', 'src': upload_url(filename)}
            )
            img.replace_with(replacement)

        return images

    def _rewrite_bullet_runs(self, region: Tag) -> int:
        """
        Rebuild paragraphs that use bullet glyphs and line breaks as lists.

        Returns:
            Number of paragraphs rewritten
        """
        count = 0
        for paragraph in region.find_all('p'):
            if paragraph.parent is None:
                continue

            inner = paragraph.decode_contents()
            if BULLET_GLYPH not in inner:
                continue

            lines = [line.strip() for line in LINE_BREAK_PATTERN.split(inner)]
            runs = split_bullet_runs(lines)
            if not runs:
                continue

            fragment = BeautifulSoup(render_bullet_runs(runs), 'html.parser')
            paragraph.replace_with(*list(fragment.contents))
            count += 1

        return count

    def _normalize_headings(self, region: Tag) -> None:
        """Demote level-3 headings to level 2."""
        for heading in region.find_all('h3'):
            heading.name = 'h2'
