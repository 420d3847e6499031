"""Function prototypes covered by a reference page."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Function:
    """One OpenGL function: its full name and ordered argument names."""

    name: str
    args: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"Name: {self.name} Args: [{', '.join(self.args)}]"

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "args": list(self.args)}
