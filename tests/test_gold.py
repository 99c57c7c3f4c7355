from __future__ import annotations

import pandas as pd
import dask.dataframe as dd

from housing_equity.aggregate.build_gold import (
    frame_rollup_count,
    gold_applications_by_race_income,
    gold_denial_rates_by_race,
    gold_denial_rates_by_race_income,
    gold_risk_ratios,
)
from housing_equity.aggregate.metrics import add_income_brackets, denial_rates_by_race

ROWS = [
    {"race_ethnicity": "White", "denied": 0, "income_1000s": 80.0},
    {"race_ethnicity": "White", "denied": 1, "income_1000s": 40.0},
    {"race_ethnicity": "White", "denied": 0, "income_1000s": 160.0},
    {"race_ethnicity": "White", "denied": 0, "income_1000s": 90.0},
    {"race_ethnicity": "Black or African American", "denied": 1, "income_1000s": 45.0},
    {"race_ethnicity": "Black or African American", "denied": 0, "income_1000s": 85.0},
]


def _ddf() -> dd.DataFrame:
    pdf = pd.DataFrame(add_income_brackets(ROWS))
    return dd.from_pandas(pdf, npartitions=1)


def test_gold_denial_rates_by_race_matches_record_helpers() -> None:
    g = gold_denial_rates_by_race(_ddf()).compute()
    rows = {r["race_ethnicity"]: r for r in g.to_dict("records")}
    expected = denial_rates_by_race(ROWS)
    for race, summary in expected.items():
        assert int(rows[race]["total"]) == summary["total"]
        assert float(rows[race]["denied"]) == summary["denied"]
        assert float(rows[race]["denial_rate"]) == summary["denial_rate"]


def test_gold_applications_by_race_income_counts() -> None:
    g = gold_applications_by_race_income(_ddf()).compute()
    counts = {(r["race_ethnicity"], r["income_bracket"]): int(r["applications"]) for _, r in g.iterrows()}
    assert counts[("White", "$75-100K")] == 2
    assert counts[("Black or African American", "<$50K")] == 1
    assert sum(counts.values()) == len(ROWS)


def test_gold_denial_rates_by_race_income_columns() -> None:
    g = gold_denial_rates_by_race_income(_ddf()).compute()
    assert list(g.columns) == ["race_ethnicity", "income_bracket", "total", "denied", "denial_rate"]


def test_frame_rollup_count_keeps_missing_keys() -> None:
    pdf = pd.DataFrame({"county": ["Wake", None, "Wake"]})
    g = frame_rollup_count(dd.from_pandas(pdf, npartitions=1), ["county"], "cases").compute()
    assert int(g["cases"].sum()) == 3
    assert int(g.loc[g["county"].isna(), "cases"].iloc[0]) == 1


def test_gold_risk_ratios_against_reference() -> None:
    g = gold_risk_ratios(_ddf(), "White").compute()
    ratios = dict(zip(g["race_ethnicity"], g["risk_ratio"]))
    assert ratios == {"White": "1.00", "Black or African American": "2.00"}
    assert set(g["reference_group"]) == {"White"}


def test_gold_risk_ratios_unknown_reference() -> None:
    g = gold_risk_ratios(_ddf(), "Asian").compute()
    assert set(g["risk_ratio"]) == {"N/A"}
