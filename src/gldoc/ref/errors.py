"""Exception hierarchy shared by the parser, indexer and outer services."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class GldocError(Exception):
    """Base class for all gldoc errors."""


class MalformedDocumentError(GldocError, ValueError):
    """A reference page could not be tokenized as XML."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class UnresolvedNameError(GldocError, ValueError):
    """An entry finished loading without a canonical name."""


class UnknownApiError(GldocError, ValueError):
    """Subset selection was asked for an API other than ``gl``/``gles``."""


class RepoFetchError(GldocError, RuntimeError):
    """The reference page corpus could not be cloned."""


class NameNotFoundError(GldocError, LookupError):
    """A looked-up name is not an entry or function of any loaded spec."""
