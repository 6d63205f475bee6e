from __future__ import annotations

import logging
from pathlib import Path

from .errors import FormatError
from .package import Package
from .parser.namespaces import (
    CT_SHARED_STRINGS,
    CT_WORKBOOK,
    DEFAULT_WORKBOOK_PART,
    REL_OFFICE_DOCUMENT,
    REL_SHARED_STRINGS,
    ROOT_RELS_PART,
    SPREADSHEET_NS,
    XML_DECLARATION,
)
from .parser.utils import resolve_target
from .relationships import Relationships, rels_path_for
from .workbook import Workbook

logger = logging.getLogger(__name__)

EMPTY_WORKSHEET_XML = XML_DECLARATION + f'<worksheet xmlns="{SPREADSHEET_NS}"><sheetData/></worksheet>'
SHARED_STRINGS_TARGET = "sharedStrings.xml"


class SpreadsheetDocument:
    """A whole ``.xlsx`` package together with its parsed workbook."""

    def __init__(self, package: Package, workbook: Workbook) -> None:
        self.package = package
        self.workbook = workbook
        self._loaded_strings = workbook.shared_strings

    @classmethod
    def open(cls, path: str | Path) -> SpreadsheetDocument:
        package = Package.open(path)
        part = package.workbook_part()
        text = package.get_file(part)
        if text is None:
            raise FormatError(f"Missing workbook part: {part}")

        rels_path = rels_path_for(part)
        raw_rels = package.get_file(rels_path)
        relationships = Relationships.from_xml(raw_rels, part=rels_path) if raw_rels is not None else Relationships()
        workbook = Workbook.parse(text, package, relationships, part=part)
        logger.debug("Opened %s (%d worksheets)", path, len(workbook))
        return cls(package, workbook)

    @classmethod
    def new(cls) -> SpreadsheetDocument:
        package = Package()
        root_rels = Relationships()
        root_rels.add(REL_OFFICE_DOCUMENT, DEFAULT_WORKBOOK_PART)
        package.set_file(ROOT_RELS_PART, root_rels.to_xml())
        package.content_types.add_override(DEFAULT_WORKBOOK_PART, CT_WORKBOOK)
        return cls(package, Workbook(package))

    def save(self, path: str | Path) -> None:
        workbook = self.workbook
        package = self.package

        self._sync_shared_strings()
        for worksheet in workbook:
            member = workbook.worksheet_part(worksheet)
            if not package.has_file(member):
                package.set_file(member, EMPTY_WORKSHEET_XML)

        package.set_file(workbook.part, workbook.serialize())
        package.set_file(rels_path_for(workbook.part), workbook.relationships.to_xml())
        package.save(path)

    def _sync_shared_strings(self) -> None:
        workbook = self.workbook
        matches = workbook.relationships.find_by_type(REL_SHARED_STRINGS)
        strings = workbook.shared_strings
        # An untouched table parsed from the package is left byte-for-byte as it was.
        if matches and strings is self._loaded_strings and not strings.modified:
            return
        if not matches:
            if not len(strings):
                return
            matches = [workbook.relationships.add(REL_SHARED_STRINGS, SHARED_STRINGS_TARGET)]
        member = resolve_target(workbook.part, matches[0].target)
        self.package.set_file(member, strings.to_xml())
        self.package.content_types.add_override(member, CT_SHARED_STRINGS)
