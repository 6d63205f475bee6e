from __future__ import annotations

import re
from typing import Iterator

from .errors import FormatError
from .model import Relationship
from .parser.namespaces import PACKAGE_REL_NS, XML_DECLARATION
from .parser.utils import empty_tag, get_attribute, parse_xml

_RID_RE = re.compile(r"^rId(\d+)$")


def rels_path_for(part: str) -> str:
    """Name of the companion relationships member of ``part``."""
    if "/" not in part:
        return f"_rels/{part}.rels"
    parent, file_name = part.rsplit("/", 1)
    return f"{parent}/_rels/{file_name}.rels"


class Relationships:
    def __init__(self, relationships: list[Relationship] | None = None) -> None:
        self._items: list[Relationship] = list(relationships or [])

    @classmethod
    def from_xml(cls, data: str | bytes, *, part: str = "relationships") -> Relationships:
        root = parse_xml(data, part=part)
        items: list[Relationship] = []
        seen: set[str] = set()
        for rel in root.findall(f"{{{PACKAGE_REL_NS}}}Relationship"):
            rel_id = get_attribute(rel, "Id")
            if rel_id in seen:
                raise FormatError(f"Duplicate relationship id '{rel_id}' in {part}")
            seen.add(rel_id)
            items.append(
                Relationship(
                    id=rel_id,
                    type=get_attribute(rel, "Type"),
                    target=get_attribute(rel, "Target"),
                    target_mode=get_attribute(rel, "TargetMode", optional=True),
                )
            )
        return cls(items)

    def __iter__(self) -> Iterator[Relationship]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def find_by_id(self, rel_id: str) -> Relationship | None:
        for rel in self._items:
            if rel.id == rel_id:
                return rel
        return None

    def find_by_type(self, rel_type: str) -> list[Relationship]:
        return [rel for rel in self._items if rel.type == rel_type]

    def add(self, rel_type: str, target: str, target_mode: str | None = None) -> Relationship:
        rel = Relationship(id=self._next_id(), type=rel_type, target=target, target_mode=target_mode)
        self._items.append(rel)
        return rel

    def _next_id(self) -> str:
        highest = 0
        for rel in self._items:
            match = _RID_RE.match(rel.id)
            if match:
                highest = max(highest, int(match.group(1)))
        return f"rId{highest + 1}"

    def to_xml(self) -> str:
        lines = [f'<Relationships xmlns="{PACKAGE_REL_NS}">']
        for rel in self._items:
            attributes = [("Id", rel.id), ("Type", rel.type), ("Target", rel.target)]
            if rel.target_mode:
                attributes.append(("TargetMode", rel.target_mode))
            lines.append(empty_tag("Relationship", attributes))
        lines.append("</Relationships>")
        return XML_DECLARATION + "".join(lines)
