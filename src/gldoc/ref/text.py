"""Plain-text flattening of nested reference page markup."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xml.etree.ElementTree import Element


def sanitize(text: str) -> str:
    """Join the lines of *text* into a single line.

    Each line is stripped and lines are joined with one space, so interior
    blank lines survive as extra spaces (``"a\\n\\nb"`` becomes ``"a  b"``)
    instead of being dropped.  Blank lines at either end leave nothing
    behind.  The result holds no newlines and no outer whitespace, so
    ``sanitize(sanitize(x)) == sanitize(x)``.
    """
    return " ".join(line.strip() for line in text.split("\n")).strip()


def flatten_text(element: Element | None) -> str:
    """Return the sanitized character data of *element* and all descendants.

    Markup is discarded; text is taken in document order.  ``None`` flattens
    to an empty string so optional child lookups can be passed straight in.
    """
    if element is None:
        return ""
    return sanitize("".join(element.itertext()))
