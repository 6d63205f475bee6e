from __future__ import annotations

from typing import Iterator
from xml.etree import ElementTree as ET

from .parser.namespaces import SPREADSHEET_NS
from .parser.utils import element_to_xml, parse_xml

_XML_SPACE = "{http://www.w3.org/XML/1998/namespace}space"


class SharedStrings:
    """Indexed table of the strings cells refer to by position."""

    def __init__(self, values: list[str] | None = None) -> None:
        self._values: list[str] = []
        self._index: dict[str, int] = {}
        for value in values or []:
            self._append(value)
        self.modified = False

    @classmethod
    def empty(cls) -> SharedStrings:
        return cls()

    @classmethod
    def from_xml(cls, data: str | bytes, *, part: str = "xl/sharedStrings.xml") -> SharedStrings:
        root = parse_xml(data, part=part)
        values: list[str] = []
        for si in root.findall(f"{{{SPREADSHEET_NS}}}si"):
            direct = si.find(f"{{{SPREADSHEET_NS}}}t")
            if direct is not None:
                values.append(direct.text or "")
                continue
            # Rich text: concatenate the runs, skipping phonetic hints.
            texts: list[str] = []
            for run in si.findall(f"{{{SPREADSHEET_NS}}}r"):
                for txt in run.findall(f"{{{SPREADSHEET_NS}}}t"):
                    texts.append(txt.text or "")
            values.append("".join(texts))
        return cls(values)

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, index: int) -> str:
        return self._values[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def index_of(self, value: str) -> int | None:
        return self._index.get(value)

    def add(self, value: str) -> int:
        existing = self._index.get(value)
        if existing is not None:
            return existing
        self.modified = True
        return self._append(value)

    def _append(self, value: str) -> int:
        position = len(self._values)
        self._values.append(value)
        # Duplicates already in a parsed table keep their own slot; lookups hit the first.
        self._index.setdefault(value, position)
        return position

    def to_xml(self) -> str:
        root = ET.Element(
            f"{{{SPREADSHEET_NS}}}sst",
            {"count": str(len(self._values)), "uniqueCount": str(len(self._index))},
        )
        for value in self._values:
            si = ET.SubElement(root, f"{{{SPREADSHEET_NS}}}si")
            t = ET.SubElement(si, f"{{{SPREADSHEET_NS}}}t")
            t.text = value
            if value != value.strip():
                t.set(_XML_SPACE, "preserve")
        return element_to_xml(root)
