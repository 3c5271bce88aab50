"""Integration tests for the parse -> wrap -> serialize pipeline"""

import asyncio
import io
import json

import pytest

from mdpage.config import PageOptions
from mdpage.core.page import HtmlPage
from mdpage.core.pipeline import build_file, build_page, page
from mdpage.errors import IncludeNotFoundError


PAGE_MD = "# Heading\n\nParagraph.\n"


def test_page_without_io_returns_transform():
    """page() with no source/output returns an unconnected transform."""
    assert isinstance(page(), HtmlPage)
    assert isinstance(page(PageOptions(**{"async": True})), HtmlPage)


def test_page_writes_html_file(tmp_path):
    """page() reads a markdown file and writes the full HTML page."""
    src = tmp_path / "page.md"
    src.write_text(PAGE_MD)
    out = tmp_path / "page.html"

    assert page(PageOptions(title="Hello"), src, out) == out
    assert out.read_text() == (
        "<!doctype html>\n"
        '<html lang="en-us">\n'
        "<head>\n"
        '<meta charset="utf-8" />\n'
        "<title>Hello</title>\n"
        "</head>\n"
        "<body>\n"
        "<h1>Heading</h1>\n"
        "<p>Paragraph.</p>\n"
        "</body>\n"
        "</html>\n"
    )


def test_page_with_streams_and_includes(tmp_path):
    """page() accepts text streams and renders markdown includes as HTML."""
    header = tmp_path / "header.md"
    header.write_text("Site *header*\n")
    output = io.StringIO()
    opts = PageOptions(header=str(header), markdown=True, element="main", app=["app.js"])

    page(opts, io.StringIO(PAGE_MD), output)
    html = output.getvalue()

    assert "<body>\n<p>Site <em>header</em></p>\n<main>\n<h1>Heading</h1>" in html
    assert html.endswith(
        '</main>\n<script type="text/javascript" src="app.js"></script>\n</body>\n</html>\n')


def test_page_missing_include_writes_nothing(tmp_path):
    """A failed build leaves no output file behind."""
    src = tmp_path / "page.md"
    src.write_text(PAGE_MD)
    out = tmp_path / "page.html"
    with pytest.raises(IncludeNotFoundError):
        page(PageOptions(footer=str(tmp_path / "missing.md")), src, out)
    assert not out.exists()


def test_build_page_json_lines():
    """The json format yields one event per line, wrapped in one outer document."""
    lines = asyncio.run(build_page(PAGE_MD, fmt="json")).splitlines()
    events = [json.loads(line) for line in lines]
    assert events[0] == {"type": "document"}
    assert events[-1] == {"type": "eof"}
    assert [e["type"] for e in events].count("document") == 2
    assert len(events) == 14


def test_build_page_unknown_format():
    """An unknown format is rejected."""
    with pytest.raises(ValueError, match="Unknown output format"):
        asyncio.run(build_page(PAGE_MD, fmt="xml"))


def test_build_file_parses_path(tmp_path):
    """build_file reads and parses the markdown file itself."""
    src = tmp_path / "page.md"
    src.write_text(PAGE_MD)
    html = asyncio.run(build_file(src, PageOptions(title="T")))
    assert "<title>T</title>" in html
    assert "<h1>Heading</h1>\n<p>Paragraph.</p>\n" in html


def test_build_file_missing_source(tmp_path):
    """A missing source document surfaces as FileNotFoundError."""
    with pytest.raises(FileNotFoundError):
        asyncio.run(build_file(tmp_path / "missing.md"))
