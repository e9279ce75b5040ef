"""Shared fixtures for the crawler tests."""

import pytest


PAGE_TEMPLATE = """
<html>
  <body>
    <header class="entry-header">
      <h1 class="entry-title">{title}</h1>
    </header>
    <div class="entry-content">
      {content}
    </div>
  </body>
</html>
"""


def build_page(content: str, title: str = "Test") -> str:
    """Wrap content markup in the legacy WordPress page structure."""
    return PAGE_TEMPLATE.format(title=title, content=content)


@pytest.fixture
def page():
    return build_page


@pytest.fixture
def html_file(tmp_path):
    """Write a page to disk and return its path."""

    def _write(name: str, content: str, title: str = "Test"):
        path = tmp_path / name
        path.write_text(build_page(content, title), encoding="utf-8")
        return path

    return _write
