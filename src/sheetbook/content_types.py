from __future__ import annotations

import posixpath

from .parser.namespaces import CONTENT_TYPES_NS, CT_RELATIONSHIPS, CT_XML, XML_DECLARATION
from .parser.utils import empty_tag, get_attribute, local_name, parse_xml


def part_name(path: str) -> str:
    """Archive member name as a content-type part name (leading slash)."""
    return path if path.startswith("/") else "/" + path


class ContentTypes:
    def __init__(self) -> None:
        self.defaults: dict[str, str] = {}
        self.overrides: dict[str, str] = {}

    @classmethod
    def default(cls) -> ContentTypes:
        types = cls()
        types.add_default("rels", CT_RELATIONSHIPS)
        types.add_default("xml", CT_XML)
        return types

    @classmethod
    def from_xml(cls, data: str | bytes) -> ContentTypes:
        root = parse_xml(data, part="[Content_Types].xml")
        types = cls()
        for child in list(root):
            tag = local_name(child.tag)
            if tag == "Default":
                types.add_default(get_attribute(child, "Extension"), get_attribute(child, "ContentType"))
            elif tag == "Override":
                types.add_override(get_attribute(child, "PartName"), get_attribute(child, "ContentType"))
        return types

    def add_default(self, extension: str, content_type: str) -> None:
        self.defaults[extension.lower().lstrip(".")] = content_type

    def add_override(self, name: str, content_type: str) -> None:
        self.overrides[part_name(name)] = content_type

    def remove_override(self, name: str) -> None:
        self.overrides.pop(part_name(name), None)

    def get(self, name: str) -> str | None:
        override = self.overrides.get(part_name(name))
        if override is not None:
            return override
        ext = posixpath.splitext(name)[1].lower().lstrip(".")
        return self.defaults.get(ext)

    def to_xml(self) -> str:
        lines = [f'<Types xmlns="{CONTENT_TYPES_NS}">']
        for ext, ctype in self.defaults.items():
            lines.append(empty_tag("Default", [("Extension", ext), ("ContentType", ctype)]))
        for name, ctype in self.overrides.items():
            lines.append(empty_tag("Override", [("PartName", name), ("ContentType", ctype)]))
        lines.append("</Types>")
        return XML_DECLARATION + "".join(lines)
