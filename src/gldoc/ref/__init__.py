"""Reference pages: text flattening, page parser, spec indexer."""

from gldoc.ref.entry import (
    KNOWN_ERRORS,
    Entry,
    load_entry,
    parse_description,
    parse_entry,
    parse_errors,
    parse_functions,
    parse_parameters,
    parse_see_also,
)
from gldoc.ref.errors import (
    GldocError,
    MalformedDocumentError,
    NameNotFoundError,
    RepoFetchError,
    UnknownApiError,
    UnresolvedNameError,
)
from gldoc.ref.function import Function
from gldoc.ref.spec import PAGE_GLOB, Spec, load_spec
from gldoc.ref.text import flatten_text, sanitize
from gldoc.ref.tokens import tokenize

__all__ = [
    "KNOWN_ERRORS",
    "PAGE_GLOB",
    "Entry",
    "Function",
    "GldocError",
    "MalformedDocumentError",
    "NameNotFoundError",
    "RepoFetchError",
    "Spec",
    "UnknownApiError",
    "UnresolvedNameError",
    "flatten_text",
    "load_entry",
    "load_spec",
    "parse_description",
    "parse_entry",
    "parse_errors",
    "parse_functions",
    "parse_parameters",
    "parse_see_also",
    "sanitize",
    "tokenize",
]
