"""Map an API name and version to the corpus subset directories to load."""

from __future__ import annotations

from gldoc.ref.errors import UnknownApiError

API_NAMES = ("gl", "gles")

# (exclusive lower bound on version, directory), newest first.
_GLES_LEVELS: list[tuple[float, str]] = [
    (3.1, "es3"),
    (3.0, "es3.1"),
    (2.0, "es3.0"),
    (1.0, "es2.0"),
]


def dir_names(api: str, version: float = 0.0) -> list[str]:
    """Return subset directory names for *api* at *version*, newest first.

    A version of ``0`` selects the latest; each selected level also pulls in
    every older one.

    >>> dir_names("gl", 3.3)
    ['gl4', 'gl2.1']
    >>> dir_names("gles", 2.0)
    ['es2.0', 'es1.1']
    """
    if api == "gl":
        names = []
        if version == 0 or version > 2.1:
            names.append("gl4")
        names.append("gl2.1")
        return names

    if api == "gles":
        names = []
        for bound, name in _GLES_LEVELS:
            if names or version == 0 or version > bound:
                names.append(name)
        names.append("es1.1")
        return names

    msg = f"unknown API {api!r} (expected one of: {', '.join(API_NAMES)})"
    raise UnknownApiError(msg)
