"""Tag rendering, escaping and favicon MIME lookup for generated page markup"""

from pathlib import PurePosixPath
from typing import Any, Mapping, Optional


FAVICON_TYPES: dict[str, str] = {
    'png': 'image/png',
    'ico': 'image/x-icon',
}


def escape(text: str, attribute: bool = False) -> str:
    """Escape &, < and > (and " for attribute values); & goes first to avoid double-escaping."""
    s = text.replace('&', '&amp;')
    s = s.replace('<', '&lt;')
    s = s.replace('>', '&gt;')
    if attribute:
        s = s.replace('"', '&quot;')
    return s


def render_tag(
    name: str,
    attrs: Optional[Mapping[str, Any]] = None,
    closing: bool = False,
    self_closing: bool = False,
    ) -> str:
    """Render <name k="v">, </name> or <name k="v" />.

    Attributes keep mapping order. A value of True renders a bare attribute
    (e.g. ``async``), None omits the attribute, anything else is stringified
    and attribute-escaped.
    """
    if closing:
        return f'</{name}>'

    parts = [f'<{name}']
    for key, value in (attrs or {}).items():
        if value is None:
            continue
        if value is True:
            parts.append(f' {key}')
        else:
            parts.append(f' {key}="{escape(str(value), attribute=True)}"')
    if self_closing:
        parts.append(' /')
    parts.append('>')
    return ''.join(parts)


def void_tag(name: str, attrs: Optional[Mapping[str, Any]] = None) -> str:
    return render_tag(name, attrs, self_closing=True)


def text_element(name: str, text: str, attrs: Optional[Mapping[str, Any]] = None) -> str:
    """Render an element with escaped text content, e.g. <title>..</title>."""
    return f'{render_tag(name, attrs)}{escape(text)}{render_tag(name, closing=True)}'


def mime_for_favicon(path: str) -> Optional[str]:
    """Return the MIME type for a .png or .ico favicon, else None."""
    suffix = PurePosixPath(path).suffix
    return FAVICON_TYPES.get(suffix[1:].lower()) if suffix else None
