from __future__ import annotations

import logging
import posixpath
import re
from typing import TYPE_CHECKING, Iterator
from xml.etree import ElementTree as ET

from .errors import FormatError, WorkbookIntegrityError
from .model import Worksheet
from .parser.namespaces import (
    CT_WORKSHEET,
    DEFAULT_WORKBOOK_PART,
    DOCUMENT_REL_NS,
    REL_SHARED_STRINGS,
    REL_WORKSHEET,
    SPREADSHEET_NS,
    WORKSHEETS_DIR,
)
from .parser.utils import element_to_xml, get_attribute, local_name, parse_xml_document, resolve_target
from .relationships import Relationships
from .shared_strings import SharedStrings

if TYPE_CHECKING:
    from .package import Package

logger = logging.getLogger(__name__)

SHEETS_TAG = f"{{{SPREADSHEET_NS}}}sheets"
SHEET_TAG = f"{{{SPREADSHEET_NS}}}sheet"
R_ID = f"{{{DOCUMENT_REL_NS}}}id"

MAX_SHEET_NAME_LENGTH = 31
_INVALID_NAME_RE = re.compile(r"[\[\]:*?/\\]")


class Workbook:
    """The ``workbook`` part: ordered worksheets tied to their relationships.

    A workbook either comes from :meth:`parse`, in which case the parsed XML
    tree is kept so that everything this class does not model survives a
    round trip, or is created fresh, in which case the tree is synthesized on
    the first :meth:`serialize`. The ``sheets`` listing is rebuilt from the
    worksheet collection on every serialization.
    """

    def __init__(
        self,
        root: Package,
        relationships: Relationships | None = None,
        shared_strings: SharedStrings | None = None,
        *,
        part: str = DEFAULT_WORKBOOK_PART,
    ) -> None:
        self.root = root
        self.relationships = relationships if relationships is not None else Relationships()
        self.shared_strings = shared_strings if shared_strings is not None else SharedStrings.empty()
        self.part = part
        self._worksheets: list[Worksheet] = []
        self._tree: ET.Element | None = None
        self._namespaces: dict[str, str] = {"": SPREADSHEET_NS, "r": DOCUMENT_REL_NS}

    @classmethod
    def parse(
        cls,
        text: str | bytes,
        root: Package,
        relationships: Relationships,
        *,
        part: str = DEFAULT_WORKBOOK_PART,
    ) -> Workbook:
        tree, namespaces = parse_xml_document(text, part=part)
        if local_name(tree.tag) != "workbook":
            raise FormatError(f"Expected <workbook> root element in {part}, found <{local_name(tree.tag)}>")

        sheets = tree.find(SHEETS_TAG)
        if sheets is None:
            raise FormatError(f"Missing <sheets> element in {part}")

        worksheets: list[Worksheet] = []
        seen_ids: set[int] = set()
        for node in sheets.findall(SHEET_TAG):
            raw_id = get_attribute(node, "sheetId")
            name = get_attribute(node, "name")
            rid = get_attribute(node, R_ID)
            state = get_attribute(node, "state", optional=True)

            try:
                sheet_id = int(raw_id)
            except ValueError as exc:
                raise FormatError(f"Invalid sheetId '{raw_id}' on <sheet> '{name}'") from exc
            if sheet_id in seen_ids:
                raise FormatError(f"Duplicate sheetId {sheet_id} in {part}")
            seen_ids.add(sheet_id)

            rel = relationships.find_by_id(rid)
            if rel is None:
                raise FormatError(f"Unresolved relationship id '{rid}' for sheet '{name}'")
            worksheets.append(Worksheet(sheet_id=sheet_id, name=name, path=rel.target, state=state))

        shared_strings = cls._load_shared_strings(root, relationships, part)

        workbook = cls(root, relationships, shared_strings, part=part)
        workbook._worksheets = worksheets
        workbook._tree = tree
        workbook._namespaces = namespaces
        logger.debug("Parsed %s: %d worksheets, %d shared strings", part, len(worksheets), len(shared_strings))
        return workbook

    @staticmethod
    def _load_shared_strings(root: Package, relationships: Relationships, part: str) -> SharedStrings:
        matches = relationships.find_by_type(REL_SHARED_STRINGS)
        if not matches:
            return SharedStrings.empty()
        if len(matches) > 1:
            logger.warning("%d shared string relationships in %s, using %s", len(matches), part, matches[0].id)

        target = matches[0].target
        member = resolve_target(part, target)
        data = root.get_file(member)
        if data is None:
            raise FormatError(f"Missing shared strings part: {target}")
        return SharedStrings.from_xml(data, part=member)

    @property
    def has_source_tree(self) -> bool:
        return self._tree is not None

    @property
    def worksheets(self) -> list[Worksheet]:
        return list(self._worksheets)

    def __iter__(self) -> Iterator[Worksheet]:
        return iter(self._worksheets)

    def __len__(self) -> int:
        return len(self._worksheets)

    def __getitem__(self, index: int) -> Worksheet:
        return self._worksheets[index]

    def get_worksheet(self, sheet_id: int) -> Worksheet | None:
        for worksheet in self._worksheets:
            if worksheet.sheet_id == sheet_id:
                return worksheet
        return None

    def get_worksheet_by_name(self, name: str) -> Worksheet | None:
        folded = name.casefold()
        for worksheet in self._worksheets:
            if worksheet.name.casefold() == folded:
                return worksheet
        return None

    def worksheet_part(self, worksheet: Worksheet) -> str:
        """Archive member holding ``worksheet``."""
        return resolve_target(self.part, worksheet.path)

    def create_worksheet(self, name: str | None = None) -> Worksheet:
        if name is not None:
            self._check_sheet_name(name)

        sheet_id = max((ws.sheet_id for ws in self._worksheets), default=0) + 1
        path = self._worksheet_target(sheet_id)
        while self._path_taken(path):
            sheet_id += 1
            path = self._worksheet_target(sheet_id)

        worksheet = Worksheet(sheet_id=sheet_id, name=name or self._default_sheet_name(sheet_id), path=path)
        self._worksheets.append(worksheet)
        rel = self.relationships.add(REL_WORKSHEET, path)
        self.root.content_types.add_override(self.worksheet_part(worksheet), CT_WORKSHEET)
        logger.debug("Created worksheet %r id=%d at %s (%s)", worksheet.name, sheet_id, path, rel.id)
        return worksheet

    def _worksheet_target(self, sheet_id: int) -> str:
        return posixpath.join(WORKSHEETS_DIR, f"sheet{sheet_id}.xml")

    def _path_taken(self, path: str) -> bool:
        member = resolve_target(self.part, path)
        if self.root.has_file(member):
            return True
        return any(self.worksheet_part(ws) == member for ws in self._worksheets)

    def _default_sheet_name(self, sheet_id: int) -> str:
        number = sheet_id
        while self.get_worksheet_by_name(f"Sheet{number}") is not None:
            number += 1
        return f"Sheet{number}"

    def _check_sheet_name(self, name: str) -> None:
        if not name or len(name) > MAX_SHEET_NAME_LENGTH:
            raise ValueError(f"Sheet name must be 1-{MAX_SHEET_NAME_LENGTH} characters: {name!r}")
        if _INVALID_NAME_RE.search(name) or name.startswith("'") or name.endswith("'"):
            raise ValueError(f"Sheet name contains invalid characters: {name!r}")
        if self.get_worksheet_by_name(name) is not None:
            raise ValueError(f"Duplicate sheet name: {name!r}")

    def serialize(self) -> str:
        # Resolve every id before touching the tree so a failure leaves it intact.
        listing = [(worksheet, self._relationship_id_for(worksheet)) for worksheet in self._worksheets]

        if self._tree is None:
            self._tree = self._synthesize_tree()
        sheets = self._tree.find(SHEETS_TAG)
        if sheets is None:
            raise WorkbookIntegrityError(f"Backing tree of {self.part} lost its <sheets> element")

        for child in list(sheets):
            sheets.remove(child)
        for worksheet, rid in listing:
            node = ET.SubElement(sheets, SHEET_TAG)
            node.set("name", worksheet.name)
            node.set("sheetId", str(worksheet.sheet_id))
            if worksheet.state is not None:
                node.set("state", worksheet.state)
            node.set(R_ID, rid)

        return element_to_xml(self._tree, self._namespaces)

    def _synthesize_tree(self) -> ET.Element:
        tree = ET.Element(f"{{{SPREADSHEET_NS}}}workbook")
        ET.SubElement(tree, SHEETS_TAG)
        logger.debug("Synthesized workbook tree for %s", self.part)
        return tree

    def _relationship_id_for(self, worksheet: Worksheet) -> str:
        for rel in self.relationships.find_by_type(REL_WORKSHEET):
            if rel.target == worksheet.path:
                return rel.id
        raise WorkbookIntegrityError(
            f"Worksheet '{worksheet.name}' (id {worksheet.sheet_id}) has no worksheet relationship to {worksheet.path}"
        )
