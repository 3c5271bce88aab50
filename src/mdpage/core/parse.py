"""Markdown-it tokenization into a flat stream of document events"""

import re
from pathlib import Path

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from mdpage.core.models import HTML_BLOCK_DECLARATION, HTML_BLOCK_ELEMENT, Node, NodeKind


DEFAULT_PRESET = 'gfm-like'
DECLARATION_RE = re.compile(r'^\s*<![A-Za-z]')
_KINDS = {k.value: k for k in NodeKind}


def make_parser(preset: str = DEFAULT_PRESET) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _heading_level(tag: str) -> int | None:
    """Extract heading level (1-6) from a tag like 'h2', else None."""
    if tag and tag[0] == 'h' and tag[1:].isdigit():
        return int(tag[1:])
    return None


def _to_node(tree: SyntaxTreeNode) -> Node:
    """Convert a syntax tree node; inline containers are flattened into their parent."""
    children: list[Node] = []
    for child in tree.children:
        if child.type == 'inline':
            children.extend(_to_node(c) for c in child.children)
        else:
            children.append(_to_node(child))

    node = Node(
        kind=_KINDS.get(tree.type, tree.type),
        literal=tree.content or None,
        level=_heading_level(tree.tag) if tree.type == 'heading' else None,
        info=tree.info or None,
        children=children,
    )
    if tree.type == 'html_block':
        node.html_block_type = (
            HTML_BLOCK_DECLARATION if DECLARATION_RE.match(tree.content) else HTML_BLOCK_ELEMENT)
    return node


def parse_events(text: str, parser: MarkdownIt | None = None) -> list[Node]:
    """Parse markdown text into DOCUMENT, one node per top-level block, EOF."""
    md = parser or make_parser()
    root = SyntaxTreeNode(md.parse(text))
    events = [Node.document()]
    for block in root.children:
        node = _to_node(block)
        node.tokens = block.to_tokens()
        events.append(node)
    events.append(Node.eof())
    return events


def parse_file(path: Path, parser: MarkdownIt | None = None) -> list[Node]:
    """Parse a single markdown file into document events."""
    return parse_events(path.read_text(encoding='utf-8'), parser)
