# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pytest

from field_service_report.logging.init import reset_logging
from helpers import make_excel, make_row


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("FSR_CONFIG", raising=False)
        yield p

@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
file_pattern: "*.xlsx"
max_workers: 2
error_log_dir: ./logs
"""

@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg

@pytest.fixture()
def two_month_files(temp_workdir: Path) -> list[Path]:
    """A.xlsx (sheet January) and B.xlsx (sheet Sheet1), both with Alice."""
    data_dir = temp_workdir / "data"
    a = make_excel(
        data_dir, "A.xlsx",
        {
            "Notes": [["ignore me"]],
            "January": [make_row(E="Alice", B=1, D=1, J=5)],
        },
    )
    b = make_excel(
        data_dir, "B.xlsx",
        {"Sheet1": [make_row(E="Alice", C="TRUE", M=3)]},
    )
    return [a, b]

@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
