"""Minimal element tree for building XML/HTML output.

Documents are assembled as ``Element`` nodes and serialized once. Plain
strings, whether text or attribute values, are escaped with ``escape_html``
during serialization. ``Markup`` values are written verbatim, which is how
trusted markup and URLs pass through.
"""

from dataclasses import dataclass, field
from typing import Union

from markupsafe import Markup

from .text import escape_html

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'


@dataclass
class Element:
    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Union["Element", str]] = field(default_factory=list)

    def add(self, tag: str, text: str | None = None, **attrs: str) -> "Element":
        """Append a child element and return it.

        Attribute names that are not valid Python identifiers (``xmlns:media``)
        can be passed by unpacking a dict.
        """
        child = Element(tag, dict(attrs))
        if text is not None:
            child.children.append(text)
        self.children.append(child)
        return child

    def append(self, child: Union["Element", str]) -> None:
        self.children.append(child)


def _escape(value: str) -> str:
    if isinstance(value, Markup):
        return str(value)
    return str(escape_html(value))


def _format_attrs(attrs: dict[str, str]) -> str:
    return "".join(
        f' {name}="{_escape(value)}"'
        for name, value in attrs.items()
        if value is not None
    )


def serialize(element: Element, pretty: bool = True, level: int = 0) -> str:
    """Serialize ``element`` and its subtree.

    With ``pretty`` set, elements holding only child elements put each child
    on its own line, indented two spaces per level. Elements holding any text
    are always written on one line so their content is not altered.
    """
    pad = "  " * level if pretty else ""
    attrs = _format_attrs(element.attrs)

    if not element.children:
        return f"{pad}<{element.tag}{attrs}/>"

    if pretty and all(isinstance(c, Element) for c in element.children):
        inner = "\n".join(
            serialize(child, pretty=True, level=level + 1)
            for child in element.children
        )
        return f"{pad}<{element.tag}{attrs}>\n{inner}\n{pad}</{element.tag}>"

    inner = "".join(
        serialize(child, pretty=False) if isinstance(child, Element) else _escape(child)
        for child in element.children
    )
    return f"{pad}<{element.tag}{attrs}>{inner}</{element.tag}>"


def serialize_fragment(elements: list[Element]) -> Markup:
    """Serialize sibling elements into a compact HTML fragment."""
    return Markup("".join(serialize(e, pretty=False) for e in elements))


def render_document(root: Element) -> str:
    return f"{XML_DECLARATION}\n{serialize(root)}\n"
