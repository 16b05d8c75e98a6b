"""HTML rendering for fragment nodes.

Only what the nonce pass needs to show its output: start tag with attributes,
raw inline content, children, end tag. Void elements get no end tag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .node import MarkupNode

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "basefont",
        "bgsound",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "keygen",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


def _escape_text(text: str | None) -> str:
    if not text:
        return ""
    return str(text).replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def _choose_attr_quote(value: str) -> str:
    if '"' in value and "'" not in value:
        return "'"
    return '"'


def _escape_attr_value(value: str, quote_char: str) -> str:
    value = value.replace("&", "&amp;")
    if quote_char == '"':
        return value.replace('"', "&quot;")
    return value.replace("'", "&#39;")


def serialize_start_tag(name: str, attrs: Mapping[str, str | None] | None) -> str:
    parts: list[str] = ["<", name]
    for key, value in (attrs or {}).items():
        if value is None:
            parts.extend([" ", key])
            continue
        value_str = str(value)
        quote = _choose_attr_quote(value_str)
        parts.extend([" ", key, "=", quote, _escape_attr_value(value_str, quote), quote])
    parts.append(">")
    return "".join(parts)


def serialize_end_tag(name: str) -> str:
    return f"</{name}>"


def to_html(node: Any) -> str:
    """Render a node. Strings are escaped as text; inline content is emitted raw."""
    if isinstance(node, str):
        return _escape_text(node)
    if not isinstance(node, MarkupNode):
        msg = f"Cannot serialize {type(node).__name__}"
        raise TypeError(msg)

    if node.tag_name in VOID_ELEMENTS:
        return serialize_start_tag(node.tag_name, node.attrs)

    # Inline content is trusted host output (JSON-LD, critical CSS, ...).
    parts = [serialize_start_tag(node.tag_name, node.attrs), node.inline_content or ""]
    parts.extend(to_html(child) for child in node.children)
    parts.append(serialize_end_tag(node.tag_name))
    return "".join(parts)


def fragments_to_html(nodes: Iterable[Any], separator: str = "") -> str:
    return separator.join(to_html(node) for node in nodes)
