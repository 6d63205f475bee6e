from __future__ import annotations

import posixpath
from xml.etree import ElementTree as ET
from xml.sax.saxutils import quoteattr

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as SafeET

from ..errors import FormatError
from .namespaces import OUTPUT_PREFIXES, XML_DECLARATION

_PREFIX_BY_URI = {uri: prefix for prefix, uri in OUTPUT_PREFIXES.items() if prefix}


def local_name(tag: str) -> str:
    if "}" in tag:
        return tag.rsplit("}", 1)[1]
    return tag


def display_name(name: str) -> str:
    """Render a Clark-notation name the way it appears in documents, e.g. ``r:id``."""
    if name.startswith("{") and "}" in name:
        uri, tag = name[1:].split("}", 1)
        prefix = _PREFIX_BY_URI.get(uri)
        if prefix:
            return f"{prefix}:{tag}"
        return tag
    return name


def resolve_target(base_path: str, target: str) -> str:
    joined = posixpath.normpath(posixpath.join(posixpath.dirname(base_path), target))
    if joined.startswith("/"):
        joined = joined[1:]
    return joined


class _DocumentBuilder:
    """Tree builder target that also records the namespace declarations seen in a document."""

    def __init__(self) -> None:
        self._builder = ET.TreeBuilder(insert_comments=True, insert_pis=True)
        self.namespaces: dict[str, str] = {}

    def start_ns(self, prefix: str, uri: str) -> None:
        self.namespaces.setdefault(prefix, uri)

    def start(self, tag, attrs):
        return self._builder.start(tag, attrs)

    def end(self, tag):
        return self._builder.end(tag)

    def data(self, text):
        self._builder.data(text)

    def comment(self, text):
        return self._builder.comment(text)

    def pi(self, target, text=None):
        return self._builder.pi(target, text)

    def close(self) -> ET.Element:
        return self._builder.close()


def parse_xml_document(data: str | bytes, *, part: str) -> tuple[ET.Element, dict[str, str]]:
    """Parse ``data`` keeping comments and processing instructions.

    Also returns every namespace declaration as ``{prefix: uri}`` (``""`` for
    the default namespace) so that they can be written back even when no
    element uses them, as ``mc:Ignorable`` requires.
    """
    builder = _DocumentBuilder()
    try:
        parser = SafeET.XMLParser(target=builder)
        parser.feed(data)
        return parser.close(), builder.namespaces
    except SafeET.ParseError as exc:
        raise FormatError(f"Malformed XML in {part}: {exc}") from exc
    except DefusedXmlException as exc:
        raise FormatError(f"Forbidden XML construct in {part}: {exc}") from exc


def parse_xml(data: str | bytes, *, part: str) -> ET.Element:
    try:
        return SafeET.fromstring(data)
    except SafeET.ParseError as exc:
        raise FormatError(f"Malformed XML in {part}: {exc}") from exc
    except DefusedXmlException as exc:
        raise FormatError(f"Forbidden XML construct in {part}: {exc}") from exc


def get_attribute(element: ET.Element, name: str, *, optional: bool = False) -> str | None:
    """Read ``name`` off ``element``.

    Returns ``None`` for an absent optional attribute; an absent required one
    raises :class:`FormatError` naming the attribute and the owning element.
    """
    value = element.attrib.get(name)
    if value is not None:
        return value
    if optional:
        return None
    raise FormatError(f"Missing attribute '{display_name(name)}' on <{local_name(element.tag)}>")


def element_to_xml(element: ET.Element, namespaces: dict[str, str] | None = None) -> str:
    text = ET.tostring(element, encoding="unicode")
    if namespaces:
        text = _declare_namespaces(text, namespaces)
    return XML_DECLARATION + text


def _declare_namespaces(text: str, namespaces: dict[str, str]) -> str:
    # ElementTree escapes ">" in attribute values, so the first one closes the root start tag.
    end = text.index(">")
    if text[end - 1] == "/":
        end -= 1
    start_tag = text[:end]
    missing = []
    for prefix, uri in namespaces.items():
        name = f"xmlns:{prefix}" if prefix else "xmlns"
        if f" {name}=" not in start_tag:
            missing.append(f" {name}={quoteattr(uri)}")
    return start_tag + "".join(missing) + text[end:]


def empty_tag(tag: str, attributes: list[tuple[str, str]]) -> str:
    attrs = "".join(f" {key}={quoteattr(value)}" for key, value in attributes)
    return f"<{tag}{attrs}/>"
