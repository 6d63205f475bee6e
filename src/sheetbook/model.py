from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class Worksheet:
    sheet_id: int
    name: str
    path: str
    state: str | None = None

    @property
    def visible(self) -> bool:
        return self.state in (None, "visible")


@dataclass(slots=True)
class Relationship:
    id: str
    type: str
    target: str
    target_mode: str | None = None

    @property
    def is_external(self) -> bool:
        return self.target_mode == "External"
