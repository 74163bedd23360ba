from pathlib import Path

import pandas as pd
import pytest


def test_results_shape():
    path = Path("results/strata_region.csv")
    if not path.exists():
        pytest.skip("Results not present; run python -m src.analysis.pipeline after exporting fragments")
    df = pd.read_csv(path)
    # Both strata present
    assert set(df["rural_urban"].unique()) == {"Rural", "Urban"}
    # Every composite reported
    assert {"work", "volunteer", "caregiver", "multi_activity"} <= set(df["activity"])
    assert (df["positive"] <= df["total"]).all()
    assert df["proportion"].between(0, 1).all()
    report = Path("results/run_report.txt").read_text()
    assert "unresolved spousal linkages" in report
