from __future__ import annotations

from pathlib import Path

from .document import SpreadsheetDocument
from .model import Worksheet


def load_workbook(path: str | Path) -> SpreadsheetDocument:
    return SpreadsheetDocument.open(path)


def new_workbook() -> SpreadsheetDocument:
    return SpreadsheetDocument.new()


def list_sheets(path: str | Path) -> list[Worksheet]:
    return load_workbook(path).workbook.worksheets


def add_sheet(path: str | Path, output: str | Path, *, name: str | None = None) -> Worksheet:
    document = load_workbook(path)
    worksheet = document.workbook.create_worksheet(name)
    document.save(output)
    return worksheet
