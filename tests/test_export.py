from __future__ import annotations

import json
from pathlib import Path

import pandas as pd
import pytest
import dask.dataframe as dd
from pydantic import ValidationError

from housing_equity.aggregate.export_gold import export_gold
from housing_equity.models import DenialRateRow


def test_export_gold_writes_csv(tmp_path: Path) -> None:
    pdf = pd.DataFrame([{"race_ethnicity": "Asian", "applications": 3}])
    path = export_gold(dd.from_pandas(pdf, npartitions=1), tmp_path, "applications_by_race")
    assert path == tmp_path / "applications_by_race.csv"
    assert pd.read_csv(path).to_dict("records") == [{"race_ethnicity": "Asian", "applications": 3}]


def test_export_gold_json_replaces_nan_with_null(tmp_path: Path) -> None:
    pdf = pd.DataFrame(
        [{"race_ethnicity": None, "total": 2, "denied": 0.0, "denial_rate": float("nan")}]
    )
    path = export_gold(pdf, tmp_path, "rates", fmt="json", model=DenialRateRow)
    assert path is not None
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == [{"race_ethnicity": None, "total": 2, "denied": 0.0, "denial_rate": None}]


def test_export_gold_skips_empty_tables(tmp_path: Path) -> None:
    assert export_gold(pd.DataFrame(), tmp_path, "empty") is None
    assert not (tmp_path / "empty.csv").exists()


def test_export_gold_rejects_unknown_format(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        export_gold(pd.DataFrame([{"a": 1}]), tmp_path, "t", fmt="parquet")


def test_export_gold_validates_rows(tmp_path: Path) -> None:
    pdf = pd.DataFrame([{"race_ethnicity": "A", "total": -1, "denied": 0.0, "denial_rate": 0.0}])
    with pytest.raises(ValidationError):
        export_gold(pdf, tmp_path, "bad", model=DenialRateRow)
