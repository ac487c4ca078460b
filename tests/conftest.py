from pathlib import Path

import pytest


@pytest.fixture()
def uploads(tmp_path: Path) -> Path:
    root = tmp_path / "uploads"
    root.mkdir()
    return root
