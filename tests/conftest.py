from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers import sample_members, write_xlsx


@pytest.fixture
def sample_xlsx(tmp_path: Path) -> Path:
    path = tmp_path / "sample.xlsx"
    write_xlsx(path, sample_members())
    return path
