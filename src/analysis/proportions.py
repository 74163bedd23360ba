"""Rural vs urban two-sample proportion tests.

The test is the Pearson chi-square on the 2x2 table with Yates' continuity
correction, i.e. the large-sample z-test for two proportions with continuity
correction (R's ``prop.test`` default). Each geography cell is tested on its
own; no multiple-comparison correction is applied.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from scipy.stats import chi2_contingency

from src.errors import InsufficientStratumData
from src.features.codes import RURAL, URBAN

logger = logging.getLogger(__name__)

INSUFFICIENT = "insufficient cell"

COLUMNS = [
    "level",
    "geography",
    "activity",
    "rural_positive",
    "rural_total",
    "urban_positive",
    "urban_total",
    "rural_estimate",
    "urban_estimate",
    "p_value",
    "status",
]


@dataclass(frozen=True)
class ProportionTest:
    p_value: float
    estimate_1: float
    estimate_2: float
    statistic: float


def two_proportion_test(x1: int, n1: int, x2: int, n2: int) -> ProportionTest:
    if n1 <= 0 or n2 <= 0:
        raise InsufficientStratumData(f"stratum total is zero (n1={n1}, n2={n2})")
    p1, p2 = x1 / n1, x2 / n2
    # equal proportions, including all-negative and all-positive tables (zero expected counts)
    if x1 * n2 == x2 * n1:
        return ProportionTest(p_value=1.0, estimate_1=p1, estimate_2=p2, statistic=0.0)
    table = np.array([[x1, n1 - x1], [x2, n2 - x2]])
    stat, p_value, _, _ = chi2_contingency(table, correction=True)
    return ProportionTest(p_value=float(p_value), estimate_1=p1, estimate_2=p2, statistic=float(stat))


def _counts(cell: pd.DataFrame, stratum: str):
    part = cell[cell["rural_urban"] == stratum]
    return int(part["positive"].sum()), int(part["total"].sum())


def compare_rural_urban(table: pd.DataFrame) -> pd.DataFrame:
    """One row per (level, geography, activity) from a stratum table."""
    rows = []
    for (level, geography, activity), cell in table.groupby(["level", "geography", "activity"], sort=True):
        rural_pos, rural_n = _counts(cell, RURAL)
        urban_pos, urban_n = _counts(cell, URBAN)
        row = {
            "level": level,
            "geography": geography,
            "activity": activity,
            "rural_positive": rural_pos,
            "rural_total": rural_n,
            "urban_positive": urban_pos,
            "urban_total": urban_n,
        }
        try:
            test = two_proportion_test(rural_pos, rural_n, urban_pos, urban_n)
        except InsufficientStratumData:
            logger.warning("No comparison for %s %s (%s): rural n=%d, urban n=%d", level, geography, activity, rural_n, urban_n)
            row.update(rural_estimate=np.nan, urban_estimate=np.nan, p_value=np.nan, status=INSUFFICIENT)
        else:
            row.update(
                rural_estimate=test.estimate_1,
                urban_estimate=test.estimate_2,
                p_value=test.p_value,
                status="ok",
            )
        rows.append(row)
    return pd.DataFrame(rows, columns=COLUMNS)
