from xml.etree import ElementTree as ET

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NS = "http://schemas.openxmlformats.org/package/2006/content-types"
MARKUP_COMPAT_NS = "http://schemas.openxmlformats.org/markup-compatibility/2006"

NS = {
    "a": SPREADSHEET_NS,
    "r": DOCUMENT_REL_NS,
}

# Prefixes emitted on serialization. The main namespace is the default one.
OUTPUT_PREFIXES = {
    "": SPREADSHEET_NS,
    "r": DOCUMENT_REL_NS,
    "mc": MARKUP_COMPAT_NS,
    "x14ac": "http://schemas.microsoft.com/office/spreadsheetml/2009/9/ac",
    "x15": "http://schemas.microsoft.com/office/spreadsheetml/2010/11/main",
    "x15ac": "http://schemas.microsoft.com/office/spreadsheetml/2010/11/ac",
    "xr": "http://schemas.microsoft.com/office/spreadsheetml/2014/revision",
    "xr6": "http://schemas.microsoft.com/office/spreadsheetml/2016/revision6",
    "xr10": "http://schemas.microsoft.com/office/spreadsheetml/2016/revision10",
    "xr2": "http://schemas.microsoft.com/office/spreadsheetml/2015/revision2",
}

REL_TYPE_BASE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
REL_OFFICE_DOCUMENT = f"{REL_TYPE_BASE}/officeDocument"
REL_WORKSHEET = f"{REL_TYPE_BASE}/worksheet"
REL_SHARED_STRINGS = f"{REL_TYPE_BASE}/sharedStrings"

CT_BASE = "application/vnd.openxmlformats-officedocument.spreadsheetml"
CT_WORKBOOK = f"{CT_BASE}.sheet.main+xml"
CT_WORKSHEET = f"{CT_BASE}.worksheet+xml"
CT_SHARED_STRINGS = f"{CT_BASE}.sharedStrings+xml"
CT_RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
CT_XML = "application/xml"

CONTENT_TYPES_PART = "[Content_Types].xml"
ROOT_RELS_PART = "_rels/.rels"
DEFAULT_WORKBOOK_PART = "xl/workbook.xml"
WORKSHEETS_DIR = "worksheets"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'

for _prefix, _uri in OUTPUT_PREFIXES.items():
    ET.register_namespace(_prefix, _uri)
