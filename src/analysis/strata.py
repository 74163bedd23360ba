"""Indicator tables by geography x rural/urban stratum.

For one indicator and one geography level (census region or division), each
stratum reports:

- total: respondents with a known (True/False) indicator value
- positive: respondents with True
- proportion: positive / total, with a Wilson 95% interval

Rows with missing geography, missing rural/urban status or an unknown
indicator are dropped from that indicator's table only, so denominators are
indicator-specific and reflect item non-response.
"""

from __future__ import annotations

from typing import Iterable, Optional

import pandas as pd
from statsmodels.stats.proportion import proportion_confint

from src.errors import UnknownGeography
from src.features.codes import GEOGRAPHIES
from src.features.indicators import ACTIVITIES

COLUMNS = [
    "level",
    "geography",
    "rural_urban",
    "activity",
    "positive",
    "total",
    "proportion",
    "ci_low",
    "ci_high",
]


def stratify(df: pd.DataFrame, indicator: str, geography: str = "region") -> pd.DataFrame:
    if geography not in GEOGRAPHIES:
        raise UnknownGeography(f"geography must be one of {sorted(GEOGRAPHIES)}, got {geography!r}")
    name_col = f"{geography}_name"
    known = df[[name_col, "rural_urban", indicator]].dropna()
    if known.empty:
        return pd.DataFrame(columns=COLUMNS)

    known = known.assign(_positive=known[indicator].astype(bool).astype(int))
    out = known.groupby([name_col, "rural_urban"], as_index=False, sort=True).agg(
        positive=("_positive", "sum"),
        total=("_positive", "size"),
    )
    out = out.rename(columns={name_col: "geography"})
    out["geography"] = out["geography"].astype(str)
    out["rural_urban"] = out["rural_urban"].astype(str)
    out["level"] = geography
    out["activity"] = indicator
    out["proportion"] = out["positive"] / out["total"]
    low, high = proportion_confint(out["positive"], out["total"], alpha=0.05, method="wilson")
    out["ci_low"] = low
    out["ci_high"] = high
    return out[COLUMNS]


def stratify_all(
    df: pd.DataFrame,
    geography: str = "region",
    indicators: Optional[Iterable[str]] = None,
) -> pd.DataFrame:
    tables = [stratify(df, ind, geography) for ind in (indicators or ACTIVITIES)]
    tables = [t for t in tables if not t.empty]
    if not tables:
        return pd.DataFrame(columns=COLUMNS)
    return pd.concat(tables, ignore_index=True)
