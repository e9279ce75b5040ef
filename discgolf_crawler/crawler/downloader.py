"""
Image downloader for fetching images referenced by extracted content.

Uses aiohttp for parallel asynchronous downloads.
"""

import asyncio
import os
from typing import Dict, Iterable, Optional, Set
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientTimeout, ClientError
from rich.markup import escape

from .models import ImageRef
from ..utils.constants import DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from ..utils.log import get_logger
from ..utils.paths import ensure_parent_dir


class ImageDownloader:
    """
    Downloads extracted images into an output directory asynchronously.

    Handles parallel downloads with a concurrency limit. A failed image is
    logged and recorded but never aborts the remaining downloads.
    """

    def __init__(
        self,
        output_dir: str,
        timeout: int = DEFAULT_TIMEOUT,
        concurrency: int = DEFAULT_CONCURRENCY,
        user_agent: str = DEFAULT_USER_AGENT
    ):
        """
        Initialize the image downloader.

        Args:
            output_dir: Directory where images are written
            timeout: Request timeout in seconds
            concurrency: Maximum concurrent downloads
            user_agent: User agent string for requests
        """
        self.output_dir = output_dir
        self.timeout = ClientTimeout(total=timeout)
        self.concurrency = concurrency
        self.user_agent = user_agent
        self.logger = get_logger("downloader")

        # Track downloaded images
        self._downloaded: Dict[str, str] = {}  # URL -> written file
        self._failed: Set[str] = set()  # original URLs

        # Semaphore for concurrency control
        self._semaphore = asyncio.Semaphore(concurrency)

    @property
    def downloaded_images(self) -> Dict[str, str]:
        """Get mapping of image URL to written file path."""
        return self._downloaded.copy()

    @property
    def failed_images(self) -> Set[str]:
        """Get set of image URLs that failed to download."""
        return self._failed.copy()

    async def download_images(
        self,
        images: Iterable[ImageRef],
        base_url: Optional[str] = None
    ) -> Dict[str, str]:
        """
        Download images in parallel.

        Args:
            images: Image references from extracted content
            base_url: URL of the page, for resolving relative image URLs

        Returns:
            Dictionary mapping local filenames to written file paths
            for the images of this call that were saved
        """
        images = list(images)
        if not images:
            return {}

        self.logger.info(f"Downloading {len(images)} images...")

        async with aiohttp.ClientSession(
            timeout=self.timeout,
            headers={"User-Agent": self.user_agent}
        ) as session:
            tasks = [
                self._download_image(session, image, base_url)
                for image in images
            ]
            results = await asyncio.gather(*tasks)

        saved = {
            image.local_path: path
            for image, path in zip(images, results)
            if path is not None
        }

        for index, image in enumerate(images, start=1):
            status = "✓" if image.local_path in saved else "✗"
            self.logger.info(
                f"  [{index}/{len(images)}] {status} {image.local_path}"
            )

        return saved

    async def _download_image(
        self,
        session: aiohttp.ClientSession,
        image: ImageRef,
        base_url: Optional[str] = None
    ) -> Optional[str]:
        """
        Download a single image.

        Args:
            session: aiohttp session
            image: Image reference to download
            base_url: URL for resolving a relative image URL

        Returns:
            Written file path if successful, None otherwise
        """
        local_path = os.path.join(self.output_dir, image.local_path)
        url = image.original_url
        if base_url:
            url = urljoin(base_url, url)

        async with self._semaphore:
            try:
                async with session.get(url, allow_redirects=True) as response:
                    if response.status != 200:
                        self.logger.warning(f"HTTP {response.status} for image: {escape(url)}")
                        self._failed.add(url)
                        return None

                    content = await response.read()

            except ClientError as e:
                self.logger.warning(f"Client error downloading {escape(url)}: {e}")
                self._failed.add(url)
                return None
            except asyncio.TimeoutError:
                self.logger.warning(f"Timeout downloading {escape(url)}")
                self._failed.add(url)
                return None

        try:
            ensure_parent_dir(local_path)
            with open(local_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            self.logger.warning(f"OS error saving {escape(url)}: {e}")
            self._failed.add(url)
            if os.path.exists(local_path):
                os.remove(local_path)
            return None

        self._downloaded[url] = local_path
        self.logger.debug(f"Downloaded: {escape(url)} -> {local_path}")
        return local_path

    def reset(self) -> None:
        """Reset the downloader state."""
        self._downloaded.clear()
        self._failed.clear()
