"""Study population: in-wave, community-dwelling respondents aged 65+."""

from __future__ import annotations

import logging

import pandas as pd

from src.features.codes import COMMUNITY_DWELLING, MIN_AGE

logger = logging.getLogger(__name__)


def cohort_mask(df: pd.DataFrame) -> pd.Series:
    # missing age, flag or residence code fails the comparison and drops the row
    age = pd.to_numeric(df["r_agey"], errors="coerce")
    inw = pd.to_numeric(df["inw"], errors="coerce")
    home = pd.to_numeric(df["nursing_home"], errors="coerce")
    return (inw == 1) & home.isin(list(COMMUNITY_DWELLING)) & (age >= MIN_AGE)


def filter_cohort(df: pd.DataFrame) -> pd.DataFrame:
    keep = cohort_mask(df)
    out = df.loc[keep].reset_index(drop=True)
    logger.info("Cohort filter kept %d of %d respondents", len(out), len(df))
    return out
