"""Streaming transform that wraps a document event stream in a complete HTML page.

The transform has three phases. The first input event triggers the head:
document boundary, doctype, ``<html>``, the ``<head>`` contents, ``<body>``,
header includes and the optional container element, followed by the event
itself. Later events pass through unchanged. When input ends the foot closes
the container, adds footer includes and app scripts, closes ``<body>`` and
``<html>`` and ends the document.

Include files are read one at a time through ``run_series`` so output order
never depends on I/O completion order. A failed load raises out of the phase,
leaves the transform in ``PageState.FAILED`` and no closing boundary is ever
produced for that build.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import partial
from typing import AsyncIterable, AsyncIterator, Iterable, Optional, Union

from markdown_it import MarkdownIt

from mdpage.config import PageOptions
from mdpage.core.markup import escape, mime_for_favicon, render_tag, text_element, void_tag
from mdpage.core.models import HTML_BLOCK_DECLARATION, Node
from mdpage.core.parse import parse_events
from mdpage.core.sequence import run_series
from mdpage.errors import PageStateError
from mdpage.util.fs import read_text


logger = logging.getLogger(__name__)

EventSource = Union[Iterable[Node], AsyncIterable[Node]]


class PageState(str, Enum):
    INIT = "init"
    HEAD_PENDING = "head_pending"
    BODY = "body"
    FOOT_PENDING = "foot_pending"
    DONE = "done"
    FAILED = "failed"


def _newline_wrap(text: str) -> str:
    """Ensure text starts and ends with exactly the newline it needs, never a second one."""
    if not text.startswith('\n'):
        text = '\n' + text
    if not text.endswith('\n'):
        text += '\n'
    return text


async def _iterate(source: EventSource) -> AsyncIterator[Node]:
    if hasattr(source, '__aiter__'):
        async for node in source:
            yield node
    else:
        for node in source:
            yield node


class HtmlPage:
    """Page wrap transform; one instance wraps one logical document.

    Construction only normalizes options and never performs I/O. Drive it
    either with ``wrap(source)`` or with ``transform(node)`` per input event
    followed by a single ``flush()``.
    """

    def __init__(
        self,
        options: Optional[PageOptions] = None,
        parser: Optional[MarkdownIt] = None,
        **kwargs,
        ):
        if options is not None and kwargs:
            raise TypeError(f"Pass either options or keyword options, not both (got {', '.join(kwargs)})")
        self.options = options if options is not None else PageOptions(**kwargs)
        self._parser = parser
        self._state = PageState.INIT

    @property
    def state(self) -> PageState:
        return self._state

    def _enter(self, state: PageState) -> None:
        logger.debug("page state %s -> %s", self._state.value, state.value)
        self._state = state

    # --- public driving API ---

    async def wrap(self, source: EventSource) -> AsyncIterator[Node]:
        """Yield the wrapped page for every event of source, then the closing structure."""
        async for node in _iterate(source):
            async for out in self._feed(node):
                yield out
        async for out in self._end():
            yield out

    async def transform(self, node: Node) -> list[Node]:
        """Consume one input event and return the events it releases."""
        return [out async for out in self._feed(node)]

    async def flush(self) -> list[Node]:
        """Signal end of input and return the closing events."""
        return [out async for out in self._end()]

    # --- phase dispatch ---

    async def _feed(self, node: Node) -> AsyncIterator[Node]:
        if self._state == PageState.BODY:
            yield node
        elif self._state == PageState.INIT:
            async for out in self._guarded(self._head(node)):
                yield out
        else:
            raise PageStateError(f"Cannot accept input in state {self._state.value}")

    async def _end(self) -> AsyncIterator[Node]:
        if self._state == PageState.INIT:
            # empty input: the opening structure is still produced
            async for out in self._guarded(self._head(None)):
                yield out
        if self._state != PageState.BODY:
            raise PageStateError(f"Cannot finish page in state {self._state.value}")
        async for out in self._guarded(self._foot()):
            yield out

    async def _guarded(self, phase: AsyncIterator[Node]) -> AsyncIterator[Node]:
        try:
            async for out in phase:
                yield out
        except Exception:
            self._enter(PageState.FAILED)
            raise

    # --- phases ---

    async def _head(self, trigger: Optional[Node]) -> AsyncIterator[Node]:
        self._enter(PageState.HEAD_PENDING)
        opts = self.options

        yield Node.document()
        yield Node.html(opts.doctype, HTML_BLOCK_DECLARATION)
        for literal in self._head_markup():
            yield Node.html(literal)

        inline = []
        if opts.css:
            inline.append(partial(self._load_inline, 'style', opts.css))
        if opts.javascript:
            inline.append(partial(self._load_inline, 'script', opts.javascript))
        for node in await run_series(inline):
            yield node

        yield Node.html(render_tag('head', closing=True))
        yield Node.html(render_tag('body', opts.body))

        for nodes in await run_series(self._include_tasks(opts.header)):
            for node in nodes:
                yield node

        if opts.element:
            yield Node.html(render_tag(opts.element, opts.attr))

        if trigger is not None:
            yield trigger
        self._enter(PageState.BODY)

    async def _foot(self) -> AsyncIterator[Node]:
        self._enter(PageState.FOOT_PENDING)
        opts = self.options

        if opts.element:
            yield Node.html(render_tag(opts.element, closing=True))

        for nodes in await run_series(self._include_tasks(opts.footer)):
            for node in nodes:
                yield node

        for src in opts.app:
            yield Node.html(self._script_tag(src))

        yield Node.html(render_tag('body', closing=True))
        yield Node.html(render_tag('html', closing=True))
        yield Node.eof()
        self._enter(PageState.DONE)

    # --- markup ---

    def _script_tag(self, src: str) -> str:
        attrs = {'type': 'text/javascript', 'src': src, 'async': True if self.options.async_ else None}
        return render_tag('script', attrs) + render_tag('script', closing=True)

    def _head_markup(self) -> list[str]:
        """Literal blocks from <html> through the linked scripts, in fixed order."""
        opts = self.options
        out = [
            render_tag('html', opts.html_attrs),
            render_tag('head'),
            void_tag('meta', {'charset': opts.charset}),
        ]
        if opts.title:
            out.append(text_element('title', opts.title))
        out.extend(void_tag('meta', {'name': k, 'content': v}) for k, v in opts.meta.items())
        out.extend(void_tag('meta', {'http-equiv': k, 'content': v}) for k, v in opts.equiv.items())
        if opts.favicon:
            out.append(void_tag('link', {
                'rel': 'shortcut icon',
                'type': mime_for_favicon(opts.favicon),
                'href': opts.favicon,
            }))
        out.extend(
            void_tag('link', {'rel': 'stylesheet', 'type': 'text/css', 'href': href, 'media': opts.media})
            for href in opts.style
        )
        out.extend(self._script_tag(src) for src in opts.script)
        return out

    # --- include loading ---

    async def _load_inline(self, tag: str, path: str) -> Node:
        """Read a css/javascript file into a <style>/<script> block."""
        text = await read_text(path)
        logger.debug("inlined %s into <%s>", path, tag)
        return Node.html(f'<{tag}>{escape(_newline_wrap(text))}</{tag}>')

    async def _load_include(self, path: str) -> list[Node]:
        """Read a header/footer file as parsed markdown events or one literal block."""
        text = await read_text(path)
        logger.debug("included %s (markdown=%s)", path, self.options.markdown)
        if self.options.markdown:
            return parse_events(text, self._parser)
        return [Node.html(text)]

    def _include_tasks(self, paths: list[str]) -> list:
        return [partial(self._load_include, p) for p in paths]
