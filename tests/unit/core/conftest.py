"""Shared fixtures for core unit tests"""

import asyncio

import pytest

from mdpage.config import PageOptions
from mdpage.core.parse import parse_events
from mdpage.core.pipeline import wrap_events


PAGE_MD = """\
# Heading

Paragraph.
"""


@pytest.fixture(name="page_events")
def page_events_fixture():
    """DOCUMENT, HEADING, PARAGRAPH, EOF."""
    return parse_events(PAGE_MD)


@pytest.fixture(name="fixtures")
def fixtures_fixture(tmp_path):
    """Include files used by the page tests, keyed by short name."""
    files = {
        "header.md": "# Header\n",
        "footer.md": "# Footer\n",
        "style.css": "body{background:blue;}\n",
        "script.js": "module.exports = {};\n",
        "script-leading-newline.js": "\nmodule.exports = {};\n",
        "script-no-trailing-newline.js": "module.exports = {};",
    }
    paths = {}
    for name, content in files.items():
        p = tmp_path / name
        p.write_text(content)
        paths[name] = str(p)
    return paths


@pytest.fixture(name="wrap")
def wrap_fixture():
    """Run events through a fresh page transform built from keyword options."""
    def _wrap(events, **opts):
        return asyncio.run(wrap_events(events, PageOptions(**opts)))
    return _wrap
