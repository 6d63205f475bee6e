from __future__ import annotations

import logging
from pathlib import Path
from zipfile import ZIP_DEFLATED, BadZipFile, ZipFile

from .content_types import ContentTypes
from .errors import FormatError
from .parser.namespaces import (
    CONTENT_TYPES_PART,
    DEFAULT_WORKBOOK_PART,
    REL_OFFICE_DOCUMENT,
    ROOT_RELS_PART,
)
from .parser.utils import resolve_target
from .relationships import Relationships

logger = logging.getLogger(__name__)


class Package:
    """In-memory view of the zip container: named members plus the content-type registry."""

    def __init__(self, files: dict[str, bytes] | None = None, content_types: ContentTypes | None = None) -> None:
        self._files: dict[str, bytes] = dict(files or {})
        self.content_types = content_types or ContentTypes.default()

    @classmethod
    def open(cls, path: str | Path) -> Package:
        source = Path(path)
        try:
            with ZipFile(source) as zip_file:
                files = {info.filename: zip_file.read(info) for info in zip_file.infolist() if not info.is_dir()}
        except BadZipFile as exc:
            raise FormatError(f"Not a zip package: {source}") from exc

        raw_types = files.pop(CONTENT_TYPES_PART, None)
        if raw_types is None:
            raise FormatError(f"Missing part: {CONTENT_TYPES_PART}")
        logger.debug("Read %d parts from %s", len(files), source)
        return cls(files, ContentTypes.from_xml(raw_types))

    def names(self) -> list[str]:
        return list(self._files)

    def has_file(self, path: str) -> bool:
        return path.lstrip("/") in self._files

    def get_file(self, path: str) -> bytes | None:
        return self._files.get(path.lstrip("/"))

    def set_file(self, path: str, data: str | bytes) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._files[path.lstrip("/")] = data

    def remove_file(self, path: str) -> None:
        self._files.pop(path.lstrip("/"), None)
        self.content_types.remove_override(path)

    def workbook_part(self) -> str:
        raw = self.get_file(ROOT_RELS_PART)
        if raw is None:
            return DEFAULT_WORKBOOK_PART
        rels = Relationships.from_xml(raw, part=ROOT_RELS_PART)
        matches = rels.find_by_type(REL_OFFICE_DOCUMENT)
        if not matches:
            return DEFAULT_WORKBOOK_PART
        return resolve_target("/", matches[0].target)

    def save(self, path: str | Path) -> None:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with ZipFile(target, "w", ZIP_DEFLATED) as archive:
            archive.writestr(CONTENT_TYPES_PART, self.content_types.to_xml())
            for name, data in self._files.items():
                archive.writestr(name, data)
        logger.debug("Wrote %d parts to %s", len(self._files) + 1, target)
