"""Configuration: ``config.yml`` loading with defaults."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from gldoc.infrastructure.repo import REFPAGES_URL, repo_path

if TYPE_CHECKING:
    from collections.abc import Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GldocConfig:
    """Server and corpus settings.

    Every field has a default so a missing or partial ``config.yml`` still
    yields a usable configuration.
    """

    host: str = "localhost"
    port: int = 8888
    api: str = "gl"
    version: float = 0.0
    cache_dir: Path = field(default_factory=repo_path)
    repo_url: str = REFPAGES_URL

    def merged(self, **overrides: Any) -> GldocConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    """``$XDG_CONFIG_HOME/gldoc/config.yml`` or ``~/.config/gldoc/config.yml``."""
    if env is None:
        env = os.environ
    xdg = env.get("XDG_CONFIG_HOME", "")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "gldoc" / "config.yml"


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw YAML value for field *name*, or return None if unusable."""
    if name in ("host", "api", "repo_url"):
        return value if isinstance(value, str) and value else None
    if name == "port":
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value
    if name == "version":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)
    if name == "cache_dir":
        return Path(value).expanduser() if isinstance(value, str) and value else None
    return None


def load_config(path: Path | None = None) -> GldocConfig:
    """Load configuration from *path* (default: :func:`default_config_path`).

    A missing file gives the defaults.  An unreadable file or invalid YAML
    logs a warning and gives the defaults; keys with the wrong type are
    ignored individually.
    """
    config_path = path or default_config_path()
    if not config_path.is_file():
        return GldocConfig()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError):
        logger.warning("Failed to read %s, using default settings", config_path)
        return GldocConfig()

    if not isinstance(data, dict):
        return GldocConfig()

    kwargs: dict[str, Any] = {}
    for f in fields(GldocConfig):
        if f.name not in data:
            continue
        value = _coerce(f.name, data[f.name])
        if value is None:
            logger.warning("Ignoring invalid %r in %s", f.name, config_path)
            continue
        kwargs[f.name] = value
    return GldocConfig(**kwargs)
