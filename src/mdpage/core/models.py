"""Document-tree event model shared by the parser, page transform and serializer"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class NodeKind(str, Enum):
    """Node kinds; block kinds mirror markdown-it token types."""
    DOCUMENT = "document"
    EOF = "eof"
    HTML_BLOCK = "html_block"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BLOCKQUOTE = "blockquote"
    BULLET_LIST = "bullet_list"
    ORDERED_LIST = "ordered_list"
    LIST_ITEM = "list_item"
    FENCE = "fence"
    CODE_BLOCK = "code_block"
    HR = "hr"
    TABLE = "table"
    TEXT = "text"


# CommonMark HTML block kinds: 4 is a declaration (<!doctype ...>), 6 a block-level tag
HTML_BLOCK_DECLARATION = 4
HTML_BLOCK_ELEMENT = 6


@dataclass
class Node:
    """One event of a document stream: a boundary marker or a top-level block.

    Children are opaque to the page transform. ``tokens`` holds the markdown-it
    tokens a parsed block came from so the serializer can render it; it is not
    part of the JSON form.
    """
    kind: str
    literal: Optional[str] = None
    html_block_type: Optional[int] = None
    level: Optional[int] = None       # heading level (1-6)
    info: Optional[str] = None        # fence info string
    children: list["Node"] = field(default_factory=list)
    tokens: list = field(default_factory=list, repr=False, compare=False)

    @property
    def first_child(self) -> Optional["Node"]:
        return self.children[0] if self.children else None

    @classmethod
    def document(cls) -> "Node":
        return cls(kind=NodeKind.DOCUMENT)

    @classmethod
    def eof(cls) -> "Node":
        return cls(kind=NodeKind.EOF)

    @classmethod
    def html(cls, literal: str, block_type: int = HTML_BLOCK_ELEMENT) -> "Node":
        """Create a literal HTML block; the literal is emitted verbatim by serializers."""
        return cls(kind=NodeKind.HTML_BLOCK, literal=literal, html_block_type=block_type)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": getattr(self.kind, "value", self.kind)}
        if self.literal is not None:
            data["literal"] = self.literal
        if self.html_block_type is not None:
            data["html_block_type"] = self.html_block_type
        if self.level is not None:
            data["level"] = self.level
        if self.info:
            data["info"] = self.info
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data

