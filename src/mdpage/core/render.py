"""Serialize document events to HTML text or JSON lines"""

import json
from typing import Iterable

from markdown_it import MarkdownIt

from mdpage.core.models import Node, NodeKind
from mdpage.core.parse import make_parser


def render_node(node: Node, md: MarkdownIt) -> str:
    """Render one event: HTML blocks verbatim, boundaries as nothing, blocks via markdown-it."""
    if node.kind in (NodeKind.DOCUMENT, NodeKind.EOF):
        return ''
    if node.kind == NodeKind.HTML_BLOCK and not node.tokens:
        literal = node.literal or ''
        return literal if literal.endswith('\n') else literal + '\n'
    return md.renderer.render(node.tokens, md.options, {})


def render_html(events: Iterable[Node], parser: MarkdownIt | None = None) -> str:
    """Concatenate the HTML of every event in order."""
    md = parser or make_parser()
    return ''.join(render_node(n, md) for n in events)


def to_json_lines(events: Iterable[Node]) -> str:
    """One JSON object per event, newline-terminated."""
    return ''.join(json.dumps(n.to_dict(), ensure_ascii=False) + '\n' for n in events)
