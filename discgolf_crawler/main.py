#!/usr/bin/env python3
"""
Disc Golf Content Crawler - converts legacy exercise pages to importable content.

Parses legacy WordPress pages into Markdown, downloads their images, and
writes a JSON file ready for the database import script.

Usage:
    python -m discgolf_crawler.main docs/page.html
    python -m discgolf_crawler.main https://example.com/page --exercise-type-id abc-123
    python -m discgolf_crawler.main sources.txt --output ./parsed-data

Features:
    - Accepts an HTML file, a URL, or a .txt list of files and URLs
    - Converts hand-written bullet lists and YouTube embeds to Markdown
    - Downloads images and rewrites them to local upload paths
    - Writes content.json and Markdown previews per run
"""

import argparse
import asyncio
import logging
import sys

from discgolf_crawler.crawler import ContentCrawler, SourceError
from discgolf_crawler.crawler.models import CrawlResult
from discgolf_crawler.utils.constants import (
    DEFAULT_CONCURRENCY,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_TIMEOUT,
)
from discgolf_crawler.utils.log import (
    setup_logger,
    print_status,
    print_success,
    print_error,
    print_warning
)


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Argument list (default: sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog='discgolf-crawler',
        description='Convert legacy exercise pages to importable JSON and Markdown',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    %(prog)s docs/file.html
    %(prog)s https://example.com/page --exercise-type-id abc-123
    %(prog)s sources.txt -o ./parsed-data --no-images

Example list file format (sources.txt):
    # comments and blank lines are ignored
    docs/file1.html
    https://example.com/page
        """
    )

    parser.add_argument(
        'source',
        type=str,
        help='HTML file path, URL, or .txt file listing paths and URLs'
    )

    parser.add_argument(
        '--exercise-type-id', '-t',
        type=str,
        default='',
        help='Exercise type ID written into every record (default: empty)'
    )

    parser.add_argument(
        '--output', '-o',
        type=str,
        default=DEFAULT_OUTPUT_ROOT,
        help=f'Root directory for timestamped output (default: {DEFAULT_OUTPUT_ROOT})'
    )

    parser.add_argument(
        '--no-images',
        action='store_true',
        help='Skip downloading images'
    )

    parser.add_argument(
        '--timeout',
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f'Request timeout in seconds (default: {DEFAULT_TIMEOUT})'
    )

    parser.add_argument(
        '--concurrency', '-c',
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f'Maximum concurrent image downloads (default: {DEFAULT_CONCURRENCY})'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write logs to this file'
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose logging'
    )
    verbosity.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress output except errors'
    )

    return parser.parse_args(argv)


def print_banner() -> None:
    """Print the application banner."""
    print_status("=" * 60, "bold cyan")
    print_status("Junnufriba HTML Crawler", "bold cyan")
    print_status("=" * 60, "bold cyan")


def print_summary(result: CrawlResult) -> None:
    """
    Print the crawl summary.

    Args:
        result: CrawlResult object
    """
    print("\n" + "=" * 60)
    print_success("CRAWL SUMMARY")
    print("=" * 60)
    print(f"  Exercises processed: {len(result.exercises)}")
    print(f"  Errors:              {len(result.errors)}")
    print(f"  Images downloaded:   {result.images_downloaded}")
    if result.images_failed:
        print(f"  Images failed:       {result.images_failed}")
    print(f"  Duration:            {result.duration_seconds:.1f} seconds")

    if result.errors:
        print("")
        print("  Failed sources:")
        for error in result.errors:
            print(f"    {error['source']}: {error['error']}")

    print("=" * 60 + "\n")


async def main(argv=None) -> int:
    """
    Main entry point for the content crawler.

    Returns:
        Exit code (0 if any source was processed, 1 otherwise)
    """
    args = parse_arguments(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else (logging.WARNING if args.quiet else logging.INFO)
    setup_logger(level=log_level, log_file=args.log_file)

    if not args.quiet:
        print_banner()

    crawler = ContentCrawler(
        output_root=args.output,
        exercise_type_id=args.exercise_type_id,
        timeout=args.timeout,
        concurrency=args.concurrency,
        download_images=not args.no_images
    )

    try:
        result = await crawler.crawl(args.source)
    except KeyboardInterrupt:
        print_error("\nCrawl interrupted by user")
        return 1
    except SourceError as e:
        print_error(f"Invalid input: {e}")
        return 1

    if not args.quiet:
        print_summary(result)

    if not result.exercises:
        print_error("No sources could be processed")
        return 1

    if result.errors:
        print_warning(f"{len(result.errors)} source(s) failed")

    print_success(f"Output written to: {result.output_dir}")
    return 0


def run() -> None:
    """Entry point wrapper for running as module."""
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
