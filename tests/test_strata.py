import pandas as pd
import pytest

from src.analysis.strata import COLUMNS, stratify, stratify_all
from src.errors import UnknownGeography


def _cohort():
    return pd.DataFrame(
        {
            "region_name": pd.array(["South", "South", "South", "South", "West", pd.NA], dtype="string"),
            "division_name": pd.array(["South Atlantic"] * 4 + ["Pacific", pd.NA], dtype="string"),
            "rural_urban": pd.array(["Rural", "Rural", "Urban", pd.NA, "Urban", "Rural"], dtype="string"),
            "work": pd.array([True, False, pd.NA, True, True, True], dtype="boolean"),
        }
    )


def test_counts_exclude_unknown_and_missing_keys():
    out = stratify(_cohort(), "work", "region")
    assert out.columns.tolist() == COLUMNS
    south_rural = out[(out["geography"] == "South") & (out["rural_urban"] == "Rural")].iloc[0]
    assert (south_rural["positive"], south_rural["total"]) == (1, 2)
    assert south_rural["proportion"] == 1 / 2
    # the only South urban row is unknown; the missing-rural row is dropped
    assert out[(out["geography"] == "South") & (out["rural_urban"] == "Urban")].empty
    assert set(out["geography"]) == {"South", "West"}


def test_totals_never_exceed_cohort():
    cohort = _cohort()
    out = stratify(cohort, "work", "division")
    assert out["total"].sum() <= len(cohort)
    assert (out["proportion"] == out["positive"] / out["total"]).all()
    assert ((out["ci_low"] <= out["proportion"] + 1e-9) & (out["proportion"] <= out["ci_high"] + 1e-9)).all()


def test_all_unknown_gives_empty_table():
    cohort = _cohort().assign(work=pd.array([pd.NA] * 6, dtype="boolean"))
    assert stratify(cohort, "work").empty


def test_unknown_geography():
    with pytest.raises(UnknownGeography):
        stratify(_cohort(), "work", "county")


def test_stratify_all_labels_activity():
    cohort = _cohort().assign(volunteer=pd.array([False] * 6, dtype="boolean"))
    out = stratify_all(cohort, "region", indicators=["work", "volunteer"])
    assert set(out["activity"]) == {"work", "volunteer"}
    assert (out["level"] == "region").all()
