"""Local cache of the Khronos OpenGL reference page repository."""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import TYPE_CHECKING

from gldoc.ref.errors import RepoFetchError

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)

REFPAGES_URL = "https://github.com/KhronosGroup/OpenGL-Refpages.git"


def repo_path(env: Mapping[str, str] | None = None) -> Path:
    """Return the cache directory for the corpus.

    ``$XDG_CACHE_HOME/gldoc`` when the variable is set and non-empty,
    otherwise ``~/.cache/gldoc``.
    """
    if env is None:
        env = os.environ
    xdg = env.get("XDG_CACHE_HOME", "")
    if xdg:
        return Path(xdg) / "gldoc"
    return Path.home() / ".cache" / "gldoc"


def clone_repo(path: Path, url: str = REFPAGES_URL) -> bool:
    """Clone *url* into *path* unless *path* already exists.

    Returns True when a clone was made.  An existing checkout is used as is
    and never updated.
    """
    if path.exists():
        logger.debug("Using cached reference pages at %s", path)
        return False

    logger.info("Cloning %s into %s", url, path)
    try:
        subprocess.run(
            ["git", "clone", url, str(path)],  # noqa: S607
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        msg = "git executable not found"
        raise RepoFetchError(msg) from exc
    except subprocess.CalledProcessError as exc:
        msg = f"git clone failed ({exc.returncode}): {exc.stderr.strip()}"
        raise RepoFetchError(msg) from exc
    return True
