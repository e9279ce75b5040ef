"""
Disc Golf Content Crawler - converts legacy exercise pages to importable content.

This package parses legacy WordPress pages, normalizes their markup into
Markdown, downloads referenced images, and writes JSON ready for import.
"""

__version__ = "1.0.0"
__author__ = "Disc Golf Training Team"
