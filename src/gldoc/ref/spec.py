"""Spec indexer: one corpus subset loaded into a multi-alias lookup table."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from gldoc.ref.entry import Entry, load_entry

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

# Reference pages inside a subset directory.
PAGE_GLOB = "gl*.xml"


@dataclass
class Spec:
    """The reference pages of one API version (``gl4``, ``es3.0``, ...).

    Entries are owned by the ``entries`` list; ``aliases`` maps a canonical
    name or function name to an index into it, so every alias of a page
    resolves to the same :class:`Entry` instance.
    """

    name: str
    entries: list[Entry] = field(default_factory=list)
    aliases: dict[str, int] = field(default_factory=dict)

    def add(self, entry: Entry) -> None:
        """Register *entry* under its name and each of its function names.

        A colliding alias is re-pointed at *entry* (last write wins).
        """
        index = len(self.entries)
        self.entries.append(entry)
        for alias in (entry.name, *(fn.name for fn in entry.funcs)):
            previous = self.aliases.get(alias)
            if previous is not None and previous != index:
                logger.debug(
                    "%s: alias %s moved from %s to %s",
                    self.name,
                    alias,
                    self.entries[previous].name,
                    entry.name,
                )
            self.aliases[alias] = index

    def reachable(self) -> list[Entry]:
        """Entries at least one alias still points at, in load order."""
        owned = set(self.aliases.values())
        return [entry for index, entry in enumerate(self.entries) if index in owned]

    def get(self, alias: str) -> Entry | None:
        index = self.aliases.get(alias)
        if index is None:
            return None
        return self.entries[index]

    def __getitem__(self, alias: str) -> Entry:
        return self.entries[self.aliases[alias]]

    def __contains__(self, alias: object) -> bool:
        return alias in self.aliases

    def __len__(self) -> int:
        return len(self.aliases)

    def __iter__(self) -> Iterator[str]:
        return iter(self.aliases)


def load_spec(base: Path, name: str) -> Spec:
    """Load every ``gl*.xml`` page under ``base / name``.

    Files are loaded in sorted order so alias collisions resolve the same
    way on every file system.  The first failing file aborts the load and
    its exception propagates; no partial :class:`Spec` is returned.  A
    missing directory gives an empty spec.
    """
    directory = Path(base) / name
    spec = Spec(name=name)
    if not directory.is_dir():
        logger.warning("Subset directory %s not found, spec %s is empty", directory, name)
        return spec

    for path in sorted(directory.glob(PAGE_GLOB)):
        spec.add(load_entry(path))

    logger.info("Loaded spec %s: %d entries, %d aliases", name, len(spec.entries), len(spec))
    return spec
