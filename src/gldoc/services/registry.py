"""Registry of loaded specs, searched newest subset first."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gldoc.infrastructure.subsets import dir_names
from gldoc.ref.spec import Spec, load_spec

if TYPE_CHECKING:
    from pathlib import Path

    from gldoc.ref.entry import Entry

logger = logging.getLogger(__name__)


@dataclass
class Registry:
    """Loaded specs in priority order; the first match wins on lookup."""

    specs: list[Spec] = field(default_factory=list)

    def find(self, name: str) -> Entry | None:
        for spec in self.specs:
            entry = spec.get(name)
            if entry is not None:
                return entry
        return None

    def entries(self) -> list[tuple[str, Entry]]:
        """Return ``(spec name, entry)`` for every entry still reachable by name.

        Entries whose aliases were all taken over by a later page are skipped.
        """
        return [(spec.name, entry) for spec in self.specs for entry in spec.reachable()]


def load_sources(base: Path, api: str, version: float = 0.0) -> Registry:
    """Load every subset of *api* at *version* from the corpus at *base*.

    Any failing subset aborts the whole load.
    """
    registry = Registry()
    for name in dir_names(api, version):
        registry.specs.append(load_spec(base, name))
    logger.info(
        "Loaded %d specs for %s %s",
        len(registry.specs),
        api,
        version or "latest",
    )
    return registry


def function_summary(entry: Entry, name: str) -> dict[str, Any] | None:
    """Describe function *name* of *entry* with its per-argument docs.

    Returns None when *entry* has no function called *name*.  Arguments
    without a documented parameter map to an empty string.
    """
    fn = entry.func(name)
    if fn is None:
        return None
    return {
        "name": name,
        "desc": entry.desc,
        "args": {arg: entry.params.get(arg, "") for arg in fn.args},
        "seealso": list(entry.see_also),
        "errors": list(entry.errors),
    }
