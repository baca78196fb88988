from pathlib import Path
from typing import Callable, Dict

import pytest


@pytest.fixture
def write_docs(tmp_path: Path) -> Callable[[Dict[str, str]], Path]:
    """Write a {relative_path: text} corpus under tmp_path/docs and return the root."""

    def _write(files: Dict[str, str]) -> Path:
        root = tmp_path / "docs"
        root.mkdir(exist_ok=True)
        for relative, text in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        return root

    return _write
