from __future__ import annotations
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from sheet_locales.models.locale_document import LocaleDocument
from sheet_locales.models.run_result import WriteStatus
from sheet_locales.services.persistence import (
    PersistenceError,
    persist_documents,
    serialize_document,
    write_locale_document,
)


def test_serialize_document_format():
    doc = LocaleDocument(locale="fr", entries={"greeting": "Bonjour", "café": "Café"})
    text = serialize_document(doc)
    assert text == '{\n  "greeting": "Bonjour",\n  "café": "Café",\n  "localeCode": "fr"\n}'


def test_write_creates_locale_directory(tmp_path: Path):
    doc = LocaleDocument(locale="pt-BR", entries={"k": "v"})
    path = write_locale_document(doc, tmp_path / "public" / "locales")
    assert path == tmp_path / "public" / "locales" / "pt-BR" / "translation.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"k": "v", "localeCode": "pt-BR"}


def test_write_overwrites_previous_artifact(tmp_path: Path):
    target = tmp_path / "en" / "translation.json"
    target.parent.mkdir(parents=True)
    target.write_text('{"stale": "value", "other": "x"}', encoding="utf-8")
    write_locale_document(LocaleDocument(locale="en", entries={"k": "v"}), tmp_path)
    assert json.loads(target.read_text(encoding="utf-8")) == {"k": "v", "localeCode": "en"}


def test_write_custom_file_name_and_locale_field(tmp_path: Path):
    path = write_locale_document(
        LocaleDocument(locale="de", entries={}), tmp_path, file_name="common.json", locale_field="lng"
    )
    assert path.name == "common.json"
    assert json.loads(path.read_text(encoding="utf-8")) == {"lng": "de"}


def test_write_failure_raises_persistence_error(tmp_path: Path):
    # ロケールディレクトリと同名のファイルを置いて mkdir を失敗させる
    (tmp_path / "en").write_text("not a directory", encoding="utf-8")
    with pytest.raises(PersistenceError) as e:
        write_locale_document(LocaleDocument(locale="en", entries={"k": "v"}), tmp_path)
    assert e.value.locale == "en"
    assert isinstance(e.value.cause, OSError)


def test_persist_documents_writes_all_in_document_order(tmp_path: Path):
    docs = [LocaleDocument(locale=loc, entries={"k": loc.upper()}) for loc in ["en", "fr", "de", "ja"]]
    results = persist_documents(docs, tmp_path, max_workers=4)
    assert [r.locale for r in results] == ["en", "fr", "de", "ja"]
    assert all(r.status is WriteStatus.WRITTEN for r in results)
    for r in results:
        assert r.path is not None and r.path.exists()
        assert r.entries == 1


def test_persist_documents_one_failure_does_not_block_others(tmp_path: Path):
    (tmp_path / "fr").write_text("blocker", encoding="utf-8")
    docs = [LocaleDocument(locale=loc, entries={"k": "v"}) for loc in ["en", "fr", "de"]]
    results = persist_documents(docs, tmp_path)
    by_locale = {r.locale: r for r in results}
    assert by_locale["fr"].status is WriteStatus.FAILED
    assert by_locale["fr"].error
    assert by_locale["en"].ok and by_locale["de"].ok
    assert (tmp_path / "en" / "translation.json").exists()
    assert (tmp_path / "de" / "translation.json").exists()


def test_persist_documents_reports_write_errors(tmp_path: Path):
    docs = [LocaleDocument(locale="en", entries={"k": "v"})]
    with patch("pathlib.Path.write_text", side_effect=PermissionError("read-only")):
        results = persist_documents(docs, tmp_path)
    assert results[0].status is WriteStatus.FAILED
    assert "read-only" in (results[0].error or "")


def test_persist_documents_empty_list(tmp_path: Path):
    assert persist_documents([], tmp_path) == []


def test_persist_documents_isolates_invalid_path_error(tmp_path: Path):
    # NUL を含むロケールは pathlib が ValueError を送出する
    docs = [LocaleDocument(locale=loc, entries={"k": "v"}) for loc in ["en", "bad\x00", "fr"]]
    results = persist_documents(docs, tmp_path)
    assert [r.ok for r in results] == [True, False, True]
    assert "null byte" in (results[1].error or "")
    assert (tmp_path / "fr" / "translation.json").exists()


def test_write_invalid_path_raises_persistence_error(tmp_path: Path):
    with pytest.raises(PersistenceError) as e:
        write_locale_document(LocaleDocument(locale="bad\x00", entries={}), tmp_path)
    assert isinstance(e.value.cause, ValueError)
