"""Tests for ``discgolf_crawler.crawler.downloader``."""

import asyncio
import os

from aiohttp import web
from aiohttp.test_utils import TestServer

from discgolf_crawler.crawler.downloader import ImageDownloader
from discgolf_crawler.crawler.models import ImageRef


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-data"
JPG_BYTES = b"\xff\xd8\xff\xe0fake-jpeg"


def make_app() -> web.Application:
    async def png(request):
        return web.Response(body=PNG_BYTES, content_type="image/png")

    async def jpg(request):
        return web.Response(body=JPG_BYTES, content_type="image/jpeg")

    async def missing(request):
        return web.Response(status=404)

    async def redirected(request):
        raise web.HTTPFound("/media/b.jpg")

    app = web.Application()
    app.router.add_get("/media/a.png", png)
    app.router.add_get("/media/b.jpg", jpg)
    app.router.add_get("/media/gone.jpg", missing)
    app.router.add_get("/media/old.jpg", redirected)
    return app


def run_with_server(scenario):
    async def runner():
        server = TestServer(make_app())
        await server.start_server()
        try:
            return await scenario(server)
        finally:
            await server.close()

    return asyncio.run(runner())


def test_downloads_images_to_local_names(tmp_path):
    async def scenario(server):
        downloader = ImageDownloader(str(tmp_path), timeout=5, concurrency=2)
        saved = await downloader.download_images([
            ImageRef(str(server.make_url("/media/a.png")), "image-1.png"),
            ImageRef(str(server.make_url("/media/b.jpg")), "image-2.jpg"),
        ])
        return downloader, saved

    downloader, saved = run_with_server(scenario)

    assert set(saved) == {"image-1.png", "image-2.jpg"}
    assert (tmp_path / "image-1.png").read_bytes() == PNG_BYTES
    assert (tmp_path / "image-2.jpg").read_bytes() == JPG_BYTES
    assert len(downloader.downloaded_images) == 2
    assert downloader.failed_images == set()


def test_failed_image_does_not_stop_others(tmp_path):
    async def scenario(server):
        downloader = ImageDownloader(str(tmp_path), timeout=5)
        gone = str(server.make_url("/media/gone.jpg"))
        saved = await downloader.download_images([
            ImageRef(gone, "image-1.jpg"),
            ImageRef(str(server.make_url("/media/a.png")), "image-2.png"),
        ])
        return downloader, saved, gone

    downloader, saved, gone = run_with_server(scenario)

    assert list(saved) == ["image-2.png"]
    assert not (tmp_path / "image-1.jpg").exists()
    assert (tmp_path / "image-2.png").exists()
    assert downloader.failed_images == {gone}


def test_follows_redirects(tmp_path):
    async def scenario(server):
        downloader = ImageDownloader(str(tmp_path), timeout=5)
        return await downloader.download_images([
            ImageRef(str(server.make_url("/media/old.jpg")), "image-1.jpg"),
        ])

    saved = run_with_server(scenario)

    assert "image-1.jpg" in saved
    assert (tmp_path / "image-1.jpg").read_bytes() == JPG_BYTES


def test_relative_url_resolved_against_page(tmp_path):
    async def scenario(server):
        downloader = ImageDownloader(str(tmp_path), timeout=5)
        page_url = str(server.make_url("/exercises/putting/"))
        return await downloader.download_images(
            [ImageRef("/media/a.png", "image-1.png")],
            base_url=page_url,
        )

    saved = run_with_server(scenario)

    assert os.path.basename(saved["image-1.png"]) == "image-1.png"
    assert (tmp_path / "image-1.png").read_bytes() == PNG_BYTES


def test_unreachable_host_is_recorded(tmp_path):
    async def scenario(server):
        url = str(server.make_url("/media/a.png"))
        await server.close()
        downloader = ImageDownloader(str(tmp_path), timeout=5)
        saved = await downloader.download_images([ImageRef(url, "image-1.png")])
        return downloader, saved, url

    downloader, saved, url = run_with_server(scenario)

    assert saved == {}
    assert downloader.failed_images == {url}


def test_no_images_is_a_no_op(tmp_path):
    async def scenario():
        downloader = ImageDownloader(str(tmp_path))
        return await downloader.download_images([])

    assert asyncio.run(scenario()) == {}
    assert list(tmp_path.iterdir()) == []


def test_reset_clears_tracking(tmp_path):
    async def scenario(server):
        downloader = ImageDownloader(str(tmp_path), timeout=5)
        await downloader.download_images([
            ImageRef(str(server.make_url("/media/a.png")), "image-1.png"),
            ImageRef(str(server.make_url("/media/gone.jpg")), "image-2.jpg"),
        ])
        return downloader

    downloader = run_with_server(scenario)
    downloader.reset()

    assert downloader.downloaded_images == {}
    assert downloader.failed_images == set()
