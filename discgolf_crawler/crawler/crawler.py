"""
Main content crawler module.

Orchestrates the crawling process including source resolution, content
extraction, image downloading, and writing import files.
"""

import json
import os
import time
from typing import List, Optional

import aiohttp
from aiohttp import ClientTimeout
from rich.markup import escape

from .downloader import ImageDownloader
from .errors import CrawlerError
from .extractor import ContentExtractor
from .models import CrawlResult, ExerciseData, InputSource, ParsedContent, SourceType
from .sources import fetch_content, get_sources_to_process
from ..utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
)
from ..utils.log import get_logger, print_info, print_success
from ..utils.paths import ensure_dir, resolve_path, timestamp_dirname


JSON_FILENAME = "content.json"


def create_output_directory(output_root: str = DEFAULT_OUTPUT_ROOT) -> str:
    """
    Create a timestamped output directory.

    Args:
        output_root: Directory under which the timestamped one is created

    Returns:
        Absolute path of the new directory
    """
    output_dir = str(resolve_path(output_root) / timestamp_dirname())
    ensure_dir(output_dir)
    return output_dir


def save_json_data(exercises: List[ExerciseData], output_dir: str) -> str:
    """
    Save exercise records as a JSON array.

    Args:
        exercises: Exercise records in processing order
        output_dir: Output directory

    Returns:
        Path of the written JSON file
    """
    json_path = os.path.join(output_dir, JSON_FILENAME)
    with open(json_path, 'w', encoding='utf-8') as f:
        json.dump(
            [exercise.to_dict() for exercise in exercises],
            f,
            indent=2,
            ensure_ascii=False
        )
    return json_path


def render_markdown_preview(exercise: ExerciseData) -> str:
    """Render an exercise as a standalone Markdown document."""
    return f"# {exercise.header}\n\n{exercise.body}"


def save_markdown_previews(exercises: List[ExerciseData], output_dir: str) -> List[str]:
    """
    Save one Markdown preview file per exercise.

    A single exercise is written to content.md; several are written to
    content-1.md through content-N.md.

    Args:
        exercises: Exercise records in processing order
        output_dir: Output directory

    Returns:
        Paths of the written preview files
    """
    paths = []
    for index, exercise in enumerate(exercises, start=1):
        filename = f"content-{index}.md" if len(exercises) > 1 else "content.md"
        path = os.path.join(output_dir, filename)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(render_markdown_preview(exercise))
        paths.append(path)
    return paths


class ContentCrawler:
    """
    Main content crawler class.

    Processes every source of a descriptor in order. A source that cannot
    be read or extracted is logged and skipped; the rest of the batch is
    still written.
    """

    def __init__(
        self,
        output_root: str = DEFAULT_OUTPUT_ROOT,
        exercise_type_id: str = "",
        timeout: int = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        download_images: bool = True,
        user_agent: str = DEFAULT_USER_AGENT,
        extractor: Optional[ContentExtractor] = None
    ):
        """
        Initialize the content crawler.

        Args:
            output_root: Directory under which timestamped output is created
            exercise_type_id: Exercise type ID written into every record
            timeout: Request timeout in seconds
            concurrency: Maximum concurrent image downloads
            download_images: Whether to download referenced images
            user_agent: User agent string for requests
            extractor: Content extractor to use (default selectors if omitted)
        """
        self.output_root = output_root
        self.exercise_type_id = exercise_type_id
        self.timeout = timeout
        self.concurrency = concurrency
        self.download_images = download_images
        self.user_agent = user_agent
        self.extractor = extractor or ContentExtractor()
        self.logger = get_logger("crawler")

    async def crawl(self, source_value: str) -> CrawlResult:
        """
        Crawl all sources described by a file path, URL, or list file.

        Args:
            source_value: Source descriptor

        Returns:
            CrawlResult with exercises, errors and download statistics

        Raises:
            SourceError: If the descriptor itself cannot be resolved
        """
        start_time = time.time()

        sources = get_sources_to_process(source_value)
        print_info(f"Found {len(sources)} source(s) to process")

        output_dir = create_output_directory(self.output_root)
        print_info(f"Output directory: {output_dir}")

        result = CrawlResult(output_dir=output_dir)
        downloader = ImageDownloader(
            output_dir=output_dir,
            timeout=self.timeout,
            concurrency=self.concurrency,
            user_agent=self.user_agent
        )

        async with aiohttp.ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            headers={"User-Agent": self.user_agent}
        ) as session:
            for source in sources:
                parsed = await self._process_source(source, session, result)
                if parsed is None:
                    continue

                result.exercises.append(ExerciseData(
                    header=parsed.header,
                    body=parsed.body,
                    exercise_type_id=self.exercise_type_id
                ))

                if self.download_images and parsed.images:
                    base_url = source.value if source.type == SourceType.URL else None
                    saved = await downloader.download_images(parsed.images, base_url)
                    # Counted per document; the same URL may appear in several
                    result.images_downloaded += len(saved)
                    result.images_failed += len(parsed.images) - len(saved)

        if result.exercises:
            json_path = save_json_data(result.exercises, output_dir)
            print_success(f"Saved JSON data to: {json_path}")
            previews = save_markdown_previews(result.exercises, output_dir)
            print_success(f"Saved {len(previews)} markdown preview(s)")

        result.duration_seconds = time.time() - start_time
        return result

    async def _process_source(
        self,
        source: InputSource,
        session: aiohttp.ClientSession,
        result: CrawlResult
    ) -> Optional[ParsedContent]:
        """
        Read and extract a single source.

        Failures are recorded in the result and reported as None.
        """
        self.logger.info(f"Processing: {escape(source.value)} ({source.type.value})")

        try:
            html = await fetch_content(source, session)
            parsed = self.extractor.extract(html)
        except (CrawlerError, OSError, UnicodeDecodeError) as e:
            self.logger.error(f"Failed to process {escape(source.value)}: {escape(str(e))}")
            result.errors.append({"source": source.value, "error": str(e)})
            return None

        self.logger.info(f"  Title: \"{escape(parsed.header)}\"")
        self.logger.info(f"  Content: {len(parsed.body)} characters")
        self.logger.info(f"  Images: {len(parsed.images)}")
        return parsed
