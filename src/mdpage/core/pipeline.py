"""Pipeline glue: parse -> wrap -> serialize"""

import asyncio
import logging
from pathlib import Path
from typing import IO, Optional, Union

from mdpage.config import PageOptions
from mdpage.core.models import Node
from mdpage.core.page import EventSource, HtmlPage
from mdpage.core.parse import make_parser, parse_events, parse_file
from mdpage.core.render import render_html, to_json_lines


logger = logging.getLogger(__name__)

FORMATS = ("html", "json")

Source = Union[str, Path, IO[str]]
Output = Union[str, Path, IO[str]]


async def wrap_events(events: EventSource, options: Optional[PageOptions] = None, parser=None) -> list[Node]:
    """Run events through a fresh HtmlPage and collect the wrapped stream."""
    transform = HtmlPage(options, parser=parser)
    return [node async for node in transform.wrap(events)]


def _check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        raise ValueError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")


async def _serialize_page(events: list[Node], options: Optional[PageOptions], fmt: str, md) -> str:
    wrapped = await wrap_events(events, options, parser=md)
    return render_html(wrapped, md) if fmt == "html" else to_json_lines(wrapped)


async def build_page(markdown: str, options: Optional[PageOptions] = None, fmt: str = "html") -> str:
    """Wrap a markdown document and serialize it as HTML or JSON lines."""
    _check_format(fmt)
    md = make_parser()
    return await _serialize_page(parse_events(markdown, md), options, fmt, md)


async def build_file(path: Union[str, Path], options: Optional[PageOptions] = None, fmt: str = "html") -> str:
    """Like build_page, reading the markdown document from path."""
    _check_format(fmt)
    md = make_parser()
    return await _serialize_page(parse_file(Path(path), md), options, fmt, md)


def page(
    options: Optional[PageOptions] = None,
    source: Optional[Source] = None,
    output: Optional[Output] = None,
    fmt: str = "html",
    ) -> Union[HtmlPage, Output]:
    """Build a page from source into output; without both, return an unconnected HtmlPage.

    The output is written only after the whole page was built, so a failed
    include load never leaves a partial file behind. Returns output.
    """
    if source is None or output is None:
        return HtmlPage(options)

    if hasattr(source, "read"):
        result = asyncio.run(build_page(source.read(), options, fmt))
    else:
        result = asyncio.run(build_file(source, options, fmt))
    if hasattr(output, "write"):
        output.write(result)
    else:
        Path(output).write_text(result, encoding="utf-8")
        logger.debug("wrote %s (%d chars)", output, len(result))
    return output
