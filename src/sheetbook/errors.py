from __future__ import annotations


class FormatError(ValueError):
    """The package or one of its parts is malformed or missing required structure."""


class WorkbookIntegrityError(RuntimeError):
    """The in-memory workbook violates an invariant it should always hold."""
