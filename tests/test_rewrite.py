"""Tests for ``discgolf_crawler.crawler.rewrite``."""

from bs4 import BeautifulSoup

from discgolf_crawler.crawler.markdown import VIDEO_ID_ATTR, YOUTUBE_TAG
from discgolf_crawler.crawler.rewrite import (
    LIST_RUN,
    TEXT_RUN,
    BulletRun,
    ContentRewriter,
    extract_youtube_id,
    render_bullet_runs,
    split_bullet_runs,
)


def region_of(markup: str):
    soup = BeautifulSoup(f'<div class="entry-content">{markup}</div>', 'lxml')
    return soup.select_one('.entry-content')


# ----------------------------------------------------------------------
# YouTube IDs
# ----------------------------------------------------------------------
def test_extract_youtube_id_stops_at_query():
    assert extract_youtube_id(
        "https://www.youtube.com/embed/V9vp_5fyZsI?feature=oembed"
    ) == "V9vp_5fyZsI"


def test_extract_youtube_id_nocookie_host():
    assert extract_youtube_id("https://www.youtube-nocookie.com/embed/abc-123") == "abc-123"


def test_extract_youtube_id_rejects_other_urls():
    assert extract_youtube_id("https://www.youtube.com/watch?v=abc") is None
    assert extract_youtube_id("https://player.vimeo.com/video/1") is None
    assert extract_youtube_id("") is None


# ----------------------------------------------------------------------
# Bullet runs
# ----------------------------------------------------------------------
def test_split_bullet_runs_alternates():
    runs = split_bullet_runs(["Intro:", "• A", "• B", "More", "Text"])

    assert runs == [
        BulletRun(TEXT_RUN, ["Intro:"]),
        BulletRun(LIST_RUN, ["A", "B"]),
        BulletRun(TEXT_RUN, ["More", "Text"]),
    ]


def test_split_bullet_runs_drops_empty_lines_and_items():
    runs = split_bullet_runs(["", "•", "  • A  ", "   ", "•   ", "• B"])
    assert runs == [BulletRun(LIST_RUN, ["A", "B"])]


def test_split_bullet_runs_empty_bullet_separates_text():
    runs = split_bullet_runs(["First", "•", "Second"])
    assert runs == [BulletRun(TEXT_RUN, ["First"]), BulletRun(TEXT_RUN, ["Second"])]


def test_render_bullet_runs():
    html = render_bullet_runs([
        BulletRun(TEXT_RUN, ["One", "two"]),
        BulletRun(LIST_RUN, ["A", "B"]),
    ])
    assert html == "<p>One two</p><ul><li>A</li><li>B</li></ul>"


# ----------------------------------------------------------------------
# ContentRewriter
# ----------------------------------------------------------------------
def test_rewrite_leaves_input_untouched():
    region = region_of(
        '<p>Intro<br>• A</p><img src="a.png"><h3>H</h3>'
        '<iframe src="https://www.youtube.com/embed/x"></iframe>'
    )
    before = str(region)

    ContentRewriter().rewrite(region)

    assert str(region) == before


def test_rewrite_replaces_figure_wrapper():
    region = region_of(
        '<figure class="wp-block-embed"><div>'
        '<iframe src="https://www.youtube.com/embed/abc"></iframe>'
        '</div><figcaption>Caption</figcaption></figure>'
    )
    rewritten = ContentRewriter().rewrite(region).region

    assert rewritten.find('figure') is None
    assert rewritten.find('iframe') is None
    placeholders = rewritten.find_all(YOUTUBE_TAG)
    assert [p[VIDEO_ID_ATTR] for p in placeholders] == ["abc"]
    assert placeholders[0].parent.name == 'p'


def test_rewrite_figure_with_two_videos():
    region = region_of(
        '<figure>'
        '<iframe src="https://www.youtube.com/embed/one"></iframe>'
        '<iframe src="https://www.youtube.com/embed/two"></iframe>'
        '</figure>'
    )
    rewritten = ContentRewriter().rewrite(region).region

    ids = [p[VIDEO_ID_ATTR] for p in rewritten.find_all(YOUTUBE_TAG)]
    assert ids == ["one", "two"]


def test_rewrite_keeps_non_youtube_iframe():
    region = region_of('<iframe src="https://maps.example.com/embed"></iframe>')
    rewritten = ContentRewriter().rewrite(region).region

    assert rewritten.find('iframe')['src'] == "https://maps.example.com/embed"
    assert rewritten.find(YOUTUBE_TAG) is None


def test_rewrite_images_strips_extra_attributes():
    region = region_of(
        '<img src="https://example.com/a.jpg" alt="A" title="T" class="wp-image" srcset="x 2x">'
    )
    result = ContentRewriter().rewrite(region)

    img = result.region.find('img')
    assert img.attrs == {'alt': 'A', 'src': '/public/uploads/image-1.jpg'}
    assert result.images[0].original_url == "https://example.com/a.jpg"


def test_rewrite_image_indices_are_contiguous():
    region = region_of(
        '<img src="a.png"><img><img src=""><p><span><img src="b.webp"></span></p>'
    )
    result = ContentRewriter().rewrite(region)

    assert [image.local_path for image in result.images] == ["image-1.png", "image-2.webp"]
    assert len(result.region.find_all('img')) == 2


def test_rewrite_bullet_paragraph_structure():
    region = region_of('<p>Intro:<br>• A<br>• B<br>More</p>')
    rewritten = ContentRewriter().rewrite(region).region

    names = [child.name for child in rewritten.children if child.name]
    assert names == ['p', 'ul', 'p']
    assert [li.get_text() for li in rewritten.find_all('li')] == ["A", "B"]


def test_rewrite_bullets_split_on_line_breaks_with_attributes():
    region = region_of('<p>x<br class="a">• A<br data-x="1" />• B</p>')
    rewritten = ContentRewriter().rewrite(region).region

    assert [li.get_text() for li in rewritten.find_all('li')] == ["A", "B"]
    assert rewritten.find('p').get_text() == "x"
    assert rewritten.find('br') is None


def test_rewrite_paragraph_without_bullets_untouched():
    region = region_of('<p>Line one<br>Line two</p>')
    rewritten = ContentRewriter().rewrite(region).region

    assert rewritten.find('br') is not None
    assert rewritten.find('ul') is None


def test_rewrite_existing_list_not_touched():
    region = region_of('<ul><li>• Already a list</li></ul>')
    rewritten = ContentRewriter().rewrite(region).region

    assert len(rewritten.find_all('ul')) == 1
    assert rewritten.find('li').get_text() == "• Already a list"


def test_rewrite_demotes_h3():
    region = region_of('<h2>A</h2><h3>B</h3>')
    rewritten = ContentRewriter().rewrite(region).region

    assert [h.get_text() for h in rewritten.find_all('h2')] == ["A", "B"]
    assert rewritten.find('h3') is None
