from __future__ import annotations
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parent
DATA_DIR = ROOT / "test-files"

@pytest.fixture(scope="session")
def data_dir() -> Path:
    assert DATA_DIR.exists(), f"Missing test data dir: {DATA_DIR}"
    return DATA_DIR

@pytest.fixture
def tmp_out(tmp_path: Path) -> Path:
    d = tmp_path / "out"
    d.mkdir(parents=True, exist_ok=True)
    return d

@pytest.fixture
def write_fwf(tmp_path: Path):
    """Write raw text to a file under tmp_path and return its path as str."""
    def _write(content: str, name: str = "input.txt", encoding: str = "utf-8") -> str:
        p = tmp_path / name
        p.write_bytes(content.encode(encoding))
        return str(p)
    return _write
