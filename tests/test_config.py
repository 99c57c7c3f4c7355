from __future__ import annotations

import logging
from pathlib import Path

import pytest

from housing_equity.config import get_settings


def test_get_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in (
        "HOUSING_DATA_DIR",
        "HOUSING_OUTPUT_DIR",
        "HOUSING_REFERENCE_GROUP",
        "HOUSING_EXPORT_FORMAT",
        "HOUSING_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.data_dir == Path("data/raw")
    assert s.output_dir == Path("src/data")
    assert s.reference_group == "White"
    assert s.export_format == "csv"
    assert s.log_level == logging.INFO


def test_get_settings_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOUSING_OUTPUT_DIR", "out")
    monkeypatch.setenv("HOUSING_EXPORT_FORMAT", "JSON")
    monkeypatch.setenv("HOUSING_LOG_LEVEL", "debug")
    s = get_settings()
    assert s.output_dir == Path("out")
    assert s.export_format == "json"
    assert s.log_level == logging.DEBUG


def test_get_settings_rejects_unknown_format(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("HOUSING_EXPORT_FORMAT", "xlsx")
    with pytest.raises(RuntimeError):
        get_settings()


def test_get_settings_rejects_unknown_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HOUSING_EXPORT_FORMAT", raising=False)
    monkeypatch.setenv("HOUSING_LOG_LEVEL", "LOUD")
    with pytest.raises(RuntimeError):
        get_settings()
