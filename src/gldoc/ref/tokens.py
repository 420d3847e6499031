"""XML token stream for reference pages.

Reference pages are read as a flat sequence of start, character-data and end
tokens.  Namespaces are dropped from element and attribute names so that
DocBook 4 (``id``) and DocBook 5 (``xml:id``) pages look the same to the
parser.
"""

from __future__ import annotations

import html.entities
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union
from xml.parsers.expat import errors as expat_errors

from gldoc.ref.errors import MalformedDocumentError

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

# Named character entities accepted without a DTD (``&times;``, ``&Prime;``).
# Reference pages declare them in an external ``math.ent`` that is never read.
_ENTITIES: dict[str, str] = {
    name.rstrip(";"): value for name, value in html.entities.html5.items()
}

# Expat only looks entities up in ``parser.entity`` once a document declares
# an external subset, so pages without a DOCTYPE get this one.
_ENTITY_DOCTYPE = '<!DOCTYPE refentry [ <!ENTITY % mathent SYSTEM "math.ent"> %mathent; ]>'
_XML_DECL = re.compile(r"\A\ufeff?\s*<\?xml[^>]*\?>")
_XML_DECL_BYTES = re.compile(rb"\A(?:\xef\xbb\xbf)?\s*<\?xml[^>]*\?>")

# Expat errors raised when input ends early.
_TRUNCATION_CODES = frozenset(
    expat_errors.codes[message]
    for message in (
        expat_errors.XML_ERROR_NO_ELEMENTS,
        expat_errors.XML_ERROR_UNCLOSED_TOKEN,
        expat_errors.XML_ERROR_PARTIAL_CHAR,
        expat_errors.XML_ERROR_UNCLOSED_CDATA_SECTION,
    )
)


def local_name(name: str) -> str:
    """Strip an ElementTree ``{namespace}`` prefix from *name*."""
    if name.startswith("{"):
        return name.rsplit("}", 1)[1]
    return name


def with_entity_doctype(source: str | bytes) -> str | bytes:
    """Insert the entity DOCTYPE after the XML declaration of *source*.

    Sources that already declare a DOCTYPE, or that are not in an
    ASCII-compatible encoding, are returned unchanged.
    """
    if isinstance(source, bytes):
        if b"<!DOCTYPE" in source or not source.lstrip(b"\xef\xbb\xbf \t\r\n").startswith(b"<"):
            return source
        match = _XML_DECL_BYTES.match(source)
        end = match.end() if match else 0
        return source[:end] + _ENTITY_DOCTYPE.encode("ascii") + source[end:]
    if "<!DOCTYPE" in source:
        return source
    match = _XML_DECL.match(source)
    end = match.end() if match else 0
    return source[:end] + _ENTITY_DOCTYPE + source[end:]


@dataclass(frozen=True)
class StartElement:
    name: str
    attrs: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class CharData:
    text: str


Token = Union[StartElement, EndElement, CharData]


class _TokenCollector:
    """ElementTree parser target that records tokens instead of a tree."""

    def __init__(self) -> None:
        self.tokens: list[Token] = []

    def start(self, tag: str, attrib: dict[str, str]) -> None:
        attrs = {local_name(key): value for key, value in attrib.items()}
        self.tokens.append(StartElement(local_name(tag), attrs))

    def end(self, tag: str) -> None:
        self.tokens.append(EndElement(local_name(tag)))

    def data(self, text: str) -> None:
        self.tokens.append(CharData(text))

    def close(self) -> None:
        return None


def tokenize(source: str | bytes, *, path: Path | None = None) -> Iterator[Token]:
    """Yield the tokens of *source*.

    Well-formedness errors raise :class:`MalformedDocumentError`.  A source
    that simply stops (truncated file) is not an error: the tokens read so far
    are yielded and the stream ends.
    """
    target = _TokenCollector()
    parser = ET.XMLParser(target=target)
    parser.entity.update(_ENTITIES)
    try:
        parser.feed(with_entity_doctype(source))
        parser.close()
    except ET.ParseError as exc:
        if exc.code not in _TRUNCATION_CODES:
            raise MalformedDocumentError(str(exc), path=path) from exc
    yield from target.tokens


def build_element(start: StartElement, tokens: Iterator[Token]) -> ET.Element:
    """Consume *tokens* up to the end of *start* and return it as a subtree.

    If the stream runs out first, the partial subtree is returned.
    """
    root = ET.Element(start.name, start.attrs)
    stack = [root]
    last: ET.Element | None = None
    for token in tokens:
        if isinstance(token, StartElement):
            child = ET.SubElement(stack[-1], token.name, token.attrs)
            stack.append(child)
            last = None
        elif isinstance(token, EndElement):
            last = stack.pop()
            if not stack:
                break
        elif last is not None:
            last.tail = (last.tail or "") + token.text
        else:
            stack[-1].text = (stack[-1].text or "") + token.text
    return root
