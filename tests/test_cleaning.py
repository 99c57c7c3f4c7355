from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
import dask.dataframe as dd

from housing_equity.clean.load_clean import write_clean_csv
from housing_equity.clean.transform import clean_applications_ddf
from housing_equity.clean.validate import validate_partition

RAW = [
    {
        "activity_year": "2023",
        "county_code": "37183",
        "derived_race": "White",
        "derived_ethnicity": "Not Hispanic or Latino",
        "action_taken": "3",
        "income": "48",
    },
    {
        "activity_year": "2023",
        "county_code": "37063",
        "derived_race": "Black or African American",
        "derived_ethnicity": "Not Hispanic or Latino",
        "action_taken": "1",
        "income": "NA",
    },
    {
        "activity_year": "2023",
        "county_code": "37183",
        "derived_race": "White",
        "derived_ethnicity": "Hispanic or Latino",
        "action_taken": "1",
        "income": "150",
    },
    {
        "activity_year": "2023",
        "county_code": "37183",
        "derived_race": "  Asian ",
        "derived_ethnicity": "Not Hispanic or Latino",
        "action_taken": "Exempt",
        "income": "70",
    },
]


def _raw_ddf() -> dd.DataFrame:
    return dd.from_pandas(pd.DataFrame(RAW), npartitions=1)


def test_cleaning_derives_contract_columns_from_hmda_fields() -> None:
    out = clean_applications_ddf(_raw_ddf()).compute().reset_index(drop=True)
    assert list(out["race_ethnicity"]) == ["White", "Black or African American", "Hispanic or Latino"]
    assert list(out["denied"]) == [1, 0, 0]
    assert out.loc[0, "income_bracket"] == "<$50K"
    assert pd.isna(out.loc[1, "income_1000s"])
    assert pd.isna(out.loc[1, "income_bracket"])
    assert out.loc[2, "income_bracket"] == "$150K+"


def test_cleaning_drops_rows_without_denial_flag() -> None:
    out = clean_applications_ddf(_raw_ddf()).compute()
    assert "Asian" not in set(out["race_ethnicity"])


def test_cleaning_accepts_processed_input() -> None:
    pdf = pd.DataFrame(
        [
            {"race_ethnicity": " Asian", "denied": "true", "income_1000s": "99"},
            {"race_ethnicity": "White", "denied": "0", "income_1000s": "100"},
        ]
    )
    out = clean_applications_ddf(dd.from_pandas(pdf, npartitions=1)).compute().reset_index(drop=True)
    assert list(out["race_ethnicity"]) == ["Asian", "White"]
    assert list(out["denied"]) == [1, 0]
    assert list(out["income_bracket"]) == ["$75-100K", "$100-150K"]


def test_cleaning_requires_race_and_denial_sources() -> None:
    pdf = pd.DataFrame([{"derived_race": "White"}])
    with pytest.raises(ValueError):
        clean_applications_ddf(dd.from_pandas(pdf, npartitions=1))


def test_validate_partition_counts_bad_rows() -> None:
    pdf = pd.DataFrame(
        [
            {"race_ethnicity": "White", "denied": 1, "income_1000s": float("nan"), "income_bracket": None},
            {"race_ethnicity": "White", "denied": 2, "income_1000s": 10.0, "income_bracket": "<$50K"},
        ]
    )
    good, bad = validate_partition(pdf)
    assert bad == 1
    assert good[0]["income_1000s"] is None
    assert good[0]["denied"] == 1


def test_write_clean_csv(tmp_path: Path) -> None:
    path = tmp_path / "clean" / "applications.csv"
    good, bad = write_clean_csv(clean_applications_ddf(_raw_ddf()), path)
    assert (good, bad) == (3, 0)
    written = pd.read_csv(path)
    assert list(written.columns) == [
        "race_ethnicity",
        "denied",
        "income_1000s",
        "income_bracket",
        "activity_year",
        "county_code",
    ]
    assert written["county_code"].astype(str).tolist() == ["37183", "37063", "37183"]
