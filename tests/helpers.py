from __future__ import annotations

from xml.etree import ElementTree as ET
from zipfile import ZipFile

SPREADSHEET_NS = "http://schemas.openxmlformats.org/spreadsheetml/2006/main"
DOCUMENT_REL_NS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
PACKAGE_REL_NS = "http://schemas.openxmlformats.org/package/2006/relationships"
WORKSHEET_REL = f"{DOCUMENT_REL_NS}/worksheet"
SHARED_STRINGS_REL = f"{DOCUMENT_REL_NS}/sharedStrings"

CONTENT_TYPES_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Types xmlns="http://schemas.openxmlformats.org/package/2006/content-types">
  <Default Extension="rels" ContentType="application/vnd.openxmlformats-package.relationships+xml"/>
  <Default Extension="xml" ContentType="application/xml"/>
  <Override PartName="/xl/workbook.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet.main+xml"/>
  <Override PartName="/xl/worksheets/sheet1.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>
  <Override PartName="/xl/worksheets/sheet2.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.worksheet+xml"/>
  <Override PartName="/xl/sharedStrings.xml" ContentType="application/vnd.openxmlformats-officedocument.spreadsheetml.sharedStrings+xml"/>
</Types>
"""

ROOT_RELS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<Relationships xmlns="http://schemas.openxmlformats.org/package/2006/relationships">
  <Relationship Id="rId1" Type="http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument" Target="xl/workbook.xml"/>
</Relationships>
"""

SHARED_STRINGS_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<sst xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main" count="2" uniqueCount="2">
  <si><t>alpha</t></si>
  <si><r><t>be</t></r><r><t>ta</t></r></si>
</sst>
"""

WORKSHEET_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<worksheet xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main"><sheetData><row r="1"><c r="A1" t="s"><v>0</v></c></row></sheetData></worksheet>
"""


def sheet_xml(name: str | None, sheet_id: str | None, rid: str | None, state: str | None = None) -> str:
    attrs = []
    if name is not None:
        attrs.append(f'name="{name}"')
    if sheet_id is not None:
        attrs.append(f'sheetId="{sheet_id}"')
    if state is not None:
        attrs.append(f'state="{state}"')
    if rid is not None:
        attrs.append(f'r:id="{rid}"')
    return f"<sheet {' '.join(attrs)}/>"


def workbook_xml(*sheets: str, before: str = "", after: str = "", with_sheets: bool = True) -> str:
    listing = f"<sheets>{''.join(sheets)}</sheets>" if with_sheets else ""
    return (
        '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'
        f'<workbook xmlns="{SPREADSHEET_NS}" xmlns:r="{DOCUMENT_REL_NS}">'
        f"{before}{listing}{after}</workbook>"
    )


def rels_xml(*relationships: tuple[str, str, str]) -> str:
    body = "".join(
        f'<Relationship Id="{rel_id}" Type="{rel_type}" Target="{target}"/>'
        for rel_id, rel_type, target in relationships
    )
    return f'<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n<Relationships xmlns="{PACKAGE_REL_NS}">{body}</Relationships>'


def write_xlsx(path, members: dict[str, str | bytes]) -> None:
    with ZipFile(path, "w") as zf:
        for name, data in members.items():
            zf.writestr(name, data)


def sample_members() -> dict[str, str]:
    return {
        "[Content_Types].xml": CONTENT_TYPES_XML,
        "_rels/.rels": ROOT_RELS_XML,
        "xl/workbook.xml": workbook_xml(
            sheet_xml("Summary", "1", "rId1"),
            sheet_xml("Data", "2", "rId2", state="hidden"),
            before='<bookViews><workbookView activeTab="0"/></bookViews>',
            after='<definedNames><definedName name="Total">Summary!$A$1</definedName></definedNames><calcPr calcId="191029"/>',
        ),
        "xl/_rels/workbook.xml.rels": rels_xml(
            ("rId1", WORKSHEET_REL, "worksheets/sheet1.xml"),
            ("rId2", WORKSHEET_REL, "worksheets/sheet2.xml"),
            ("rId3", SHARED_STRINGS_REL, "sharedStrings.xml"),
        ),
        "xl/worksheets/sheet1.xml": WORKSHEET_XML,
        "xl/worksheets/sheet2.xml": WORKSHEET_XML,
        "xl/sharedStrings.xml": SHARED_STRINGS_XML,
    }


def sheet_listing(text: str) -> list[dict[str, str]]:
    root = ET.fromstring(text.encode("utf-8"))
    return [dict(node.attrib) for node in root.findall(f"{{{SPREADSHEET_NS}}}sheets/{{{SPREADSHEET_NS}}}sheet")]


def child_tags(text: str) -> list[str]:
    root = ET.fromstring(text.encode("utf-8"))
    return [_local_name(child.tag) for child in root]


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


EXCEL_WORKBOOK_XML = """<?xml version="1.0" encoding="UTF-8" standalone="yes"?>
<workbook xmlns="http://schemas.openxmlformats.org/spreadsheetml/2006/main" xmlns:r="http://schemas.openxmlformats.org/officeDocument/2006/relationships" xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006" mc:Ignorable="x15 xr xr6 xr10 xr2" xmlns:x15="http://schemas.microsoft.com/office/spreadsheetml/2010/11/main" xmlns:xr="http://schemas.microsoft.com/office/spreadsheetml/2014/revision" xmlns:xr6="http://schemas.microsoft.com/office/spreadsheetml/2016/revision6" xmlns:xr10="http://schemas.microsoft.com/office/spreadsheetml/2016/revision10" xmlns:xr2="http://schemas.microsoft.com/office/spreadsheetml/2015/revision2" xmlns:x7="urn:example:custom">
<fileVersion appName="xl" lastEdited="7" lowestEdited="7" rupBuild="27425"/>
<workbookPr defaultThemeVersion="202300"/>
<mc:AlternateContent xmlns:mc="http://schemas.openxmlformats.org/markup-compatibility/2006"><mc:Choice Requires="x15"><x15ac:absPath xmlns:x15ac="http://schemas.microsoft.com/office/spreadsheetml/2010/11/ac" url="C:\\Users\\me\\"/></mc:Choice></mc:AlternateContent>
<xr:revisionPtr revIDLastSave="0" documentId="8_{00000000-0000-0000-0000-000000000000}" xr6:coauthVersionLast="47" xr10:uidLastSave="{00000000-0000-0000-0000-000000000000}"/>
<!-- kept by round trip -->
<bookViews><workbookView xWindow="-120" yWindow="-120" windowWidth="29040" windowHeight="15720"/></bookViews>
<sheets><sheet name="Sheet1" sheetId="1" r:id="rId1"/></sheets>
<calcPr calcId="191029"/>
<?custom-pi keep me?>
<extLst><ext uri="{140A7094-0E35-4892-8432-C4D2E57EDEB5}" xmlns:x15="http://schemas.microsoft.com/office/spreadsheetml/2010/11/main"><x15:workbookPr chartTrackingRefBase="1"/></ext></extLst>
</workbook>
"""
