# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from sheet_locales.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("SHEET_LOCALES_CONFIG", raising=False)
        monkeypatch.delenv("SHEET_LOCALES_OUTPUT_DIR", raising=False)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    # 1行目は説明行 (skip_rows=1 で捨てる)
    return (
        "Instructions: one row per key, do not edit column A\n"
        "greeting,Hello,Bonjour\n"
        ",Orphan,Orphelin\n"
        "farewell,Goodbye,\n"
        '"comma,key","Hello, world","Bonjour, le monde"\n'
        "greeting,Hi,\n"
    )


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_file: ./data/main-translation.csv
output_directory: ./public/locales
skip_rows: 1
key_column: 0
column_mapping:
  1: en
  2: fr
  3: de
"""


@pytest.fixture()
def write_csv(temp_workdir: Path, sample_csv: str) -> Path:
    src = temp_workdir / "data" / "main-translation.csv"
    src.write_text(sample_csv, encoding="utf-8")
    return src


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "locales.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg
