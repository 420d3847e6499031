"""Reference page parser: DocBook refentry XML to :class:`Entry` records."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from gldoc.ref.errors import MalformedDocumentError, UnresolvedNameError
from gldoc.ref.function import Function
from gldoc.ref.text import flatten_text
from gldoc.ref.tokens import EndElement, StartElement, Token, build_element, tokenize

if TYPE_CHECKING:
    from collections.abc import Iterable
    from xml.etree.ElementTree import Element

logger = logging.getLogger(__name__)

# Error constants kept from ``errors`` sections; anything else is dropped.
KNOWN_ERRORS = frozenset(
    {
        "GL_OUT_OF_MEMORY",
        "GL_INVALID_ENUM",
        "GL_INVALID_VALUE",
        "GL_INVALID_OPERATION",
        "GL_STACK_OVERFLOW",
        "GL_STACK_UNDERFLOW",
        "GL_INVALID_FRAMEBUFFER_OPERATION",
        "GL_CONTEXT_LOST",
        "GL_TABLE_TOO_LARGE",
    }
)


@dataclass
class Entry:
    """A simplified reference page, used for brief inline documentation.

    ``name`` is the shorthand name of the page without any suffix, e.g. the
    ``glUniform`` entry covers ``glUniform2d``, ``glUniform3fv`` and
    ``glUniformMatrix4fv``.  ``desc`` is the one-line purpose shared by all
    of them, often without a subject or ending punctuation.  ``params`` maps
    argument names to flattened descriptions.
    """

    name: str = ""
    desc: str = ""
    funcs: list[Function] = field(default_factory=list)
    params: dict[str, str] = field(default_factory=dict)
    see_also: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def func(self, name: str) -> Function | None:
        """Return the function called *name*, or None."""
        for fn in self.funcs:
            if fn.name == name:
                return fn
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON shape served by ``/entry/{name}``."""
        return {
            "name": self.name,
            "desc": self.desc,
            "functions": [fn.to_dict() for fn in self.funcs],
            "params": dict(self.params),
            "seealso": list(self.see_also),
            "errors": list(self.errors),
        }


# ---------------------------------------------------------------------------
# Section extractors
# ---------------------------------------------------------------------------


def _text(element: Element | None) -> str:
    if element is None or element.text is None:
        return ""
    return element.text


def parse_description(element: Element) -> tuple[str, str]:
    """Extract ``(refname, purpose)`` from a ``refnamediv`` section.

    The first ``refname`` is the name candidate; the purpose is flattened.
    """
    name = _text(element.find("refname")).strip()
    desc = flatten_text(element.find("refpurpose"))
    return name, desc


def parse_functions(element: Element) -> list[Function]:
    """Extract every ``funcprototype`` of a ``refsynopsisdiv`` in order."""
    funcs: list[Function] = []
    for proto in element.iterfind("funcsynopsis/funcprototype"):
        name = _text(proto.find("funcdef/function")).strip()
        args = [_text(p).strip() for p in proto.iterfind("paramdef/parameter")]
        funcs.append(Function(name=name, args=args))
    return funcs


def parse_parameters(element: Element) -> dict[str, str]:
    """Extract parameter descriptions from a ``variablelist``.

    Every parameter named in one ``varlistentry`` term receives the same
    description, e.g. ``x, y`` sharing "Specify the window coordinates".
    """
    params: dict[str, str] = {}
    for item in element.iterfind("variablelist/varlistentry"):
        text = flatten_text(item.find("listitem")).strip()
        for param in item.iterfind("term/parameter"):
            params[_text(param)] = text
    return params


def parse_see_also(element: Element) -> list[str]:
    """Extract referenced page titles verbatim, in document order."""
    return [_text(title) for title in element.iterfind("para/citerefentry/refentrytitle")]


def parse_errors(element: Element, existing: Iterable[str] = ()) -> list[str]:
    """Extract known error constants not already present in *existing*."""
    seen = set(existing)
    errors: list[str] = []
    for const in element.iterfind("para/constant"):
        value = _text(const)
        if value in KNOWN_ERRORS and value not in seen:
            seen.add(value)
            errors.append(value)
    return errors


# ---------------------------------------------------------------------------
# Document parser
# ---------------------------------------------------------------------------


@dataclass
class _ParseState:
    entry: Entry = field(default_factory=Entry)
    ref_id: str = ""
    ref_name: str = ""


def _merge_description(state: _ParseState, element: Element) -> None:
    name, desc = parse_description(element)
    if name and not state.ref_name:
        state.ref_name = name
    state.entry.desc = desc


def _merge_functions(state: _ParseState, element: Element) -> None:
    state.entry.funcs.extend(parse_functions(element))


def _merge_parameters(state: _ParseState, element: Element) -> None:
    state.entry.params.update(parse_parameters(element))


def _merge_see_also(state: _ParseState, element: Element) -> None:
    state.entry.see_also.extend(parse_see_also(element))


def _merge_errors(state: _ParseState, element: Element) -> None:
    state.entry.errors.extend(parse_errors(element, state.entry.errors))


SectionHandler = Callable[[_ParseState, "Element"], None]

# Recognized sections: (element name, id attribute or None for any id).
_SECTIONS: dict[tuple[str, str | None], SectionHandler] = {
    ("refnamediv", None): _merge_description,
    ("refsynopsisdiv", None): _merge_functions,
    ("refsect1", "parameters"): _merge_parameters,
    ("refsect1", "parameters2"): _merge_parameters,
    ("refsect1", "parameters3"): _merge_parameters,
    ("refsect1", "seealso"): _merge_see_also,
    ("refsect1", "errors"): _merge_errors,
}


def _lookup_section(token: StartElement) -> SectionHandler | None:
    handler = _SECTIONS.get((token.name, token.attrs.get("id")))
    if handler is None:
        handler = _SECTIONS.get((token.name, None))
    return handler


def parse_entry(tokens: Iterable[Token]) -> Entry:
    """Assemble an :class:`Entry` from a reference page token stream.

    Recognized sections are handed to their extractor; any other element is
    stepped over and its children are still scanned.  Parsing stops at the
    end of the outermost element, or quietly when the stream runs out.  The
    name is the outermost ``id`` attribute, else the first ``refname``; it is
    left empty when neither exists.
    """
    stream = iter(tokens)
    root = next((t for t in stream if isinstance(t, StartElement)), None)
    if root is None:
        msg = "no root element"
        raise MalformedDocumentError(msg)

    state = _ParseState(ref_id=root.attrs.get("id", ""))
    depth = 0
    for token in stream:
        if isinstance(token, StartElement):
            handler = _lookup_section(token)
            if handler is None:
                depth += 1
                continue
            handler(state, build_element(token, stream))
        elif isinstance(token, EndElement):
            if depth == 0:
                break
            depth -= 1

    entry = state.entry
    entry.name = state.ref_id or state.ref_name
    return entry


def load_entry(path: Path) -> Entry:
    """Load the reference page at *path*.

    Falls back to the file name without extension when the page names
    itself nowhere.  ``OSError`` from reading and
    :class:`MalformedDocumentError` from parsing are propagated.
    """
    path = Path(path)
    source = path.read_bytes()
    try:
        entry = parse_entry(tokenize(source, path=path))
    except MalformedDocumentError as exc:
        if exc.path is None:
            raise MalformedDocumentError(str(exc), path=path) from exc
        raise

    if not entry.name:
        entry.name = path.stem
    if not entry.name:
        msg = f"{path}: could not resolve an entry name"
        raise UnresolvedNameError(msg)
    logger.debug("Loaded %s (%d functions) from %s", entry.name, len(entry.funcs), path)
    return entry
