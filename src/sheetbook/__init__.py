from .api import add_sheet, list_sheets, load_workbook, new_workbook
from .document import SpreadsheetDocument
from .errors import FormatError, WorkbookIntegrityError
from .model import Relationship, Worksheet
from .package import Package
from .relationships import Relationships
from .shared_strings import SharedStrings
from .workbook import Workbook

__all__ = [
    "FormatError",
    "Package",
    "Relationship",
    "Relationships",
    "SharedStrings",
    "SpreadsheetDocument",
    "Workbook",
    "WorkbookIntegrityError",
    "Worksheet",
    "add_sheet",
    "list_sheets",
    "load_workbook",
    "new_workbook",
]
