"""Value tables for the raw HRS items used by the indicators.

Every raw item is read through one of these tables. A code that is not a key
of its table (DK, RF, skip, blank, stray text) is unknown; nothing is ever
guessed for an undocumented code.

Docs:
- RAND HRS Longitudinal File (RwWORK, RwAGEY_E, INWw, SwHHIDPN):
  https://hrsdata.isr.umich.edu/data-products/rand-hrs-longitudinal-file-2020
- HRS core Section G helper relationships (G033/G055 "who helps"):
  https://hrs.isr.umich.edu/documentation/codebooks
- HRS tracker file (NURSHM) and cross-wave geography (REGION, DIVISION, URBRUR):
  https://hrs.isr.umich.edu/data-products/restricted-data
"""

from __future__ import annotations

from typing import Dict

# RAND RwWORK: 1 working for pay, 0 not working; .d/.r/.m are unknown
WORK: Dict[int, bool] = {1: True, 0: False}

# HRS core yes/no items: 1 yes, 5 no; 8 DK and 9 RF are unknown
YES_NO: Dict[int, bool] = {1: True, 5: False}

# Helper relationship codes from the ADL/IADL "who helps" loops.
SPOUSE_PARTNER = 2
HELPER_RELATIONSHIP: Dict[int, bool] = {code: code == SPOUSE_PARTNER for code in range(1, 34)}

# Tracker NURSHM: 1 nursing home, 3 other institution, 5 not in a nursing home
COMMUNITY_DWELLING = frozenset({5})

MIN_AGE = 65

# Beale-based URBRUR: 1 urban, 2 suburban, 3 exurban
RURAL = "Rural"
URBAN = "Urban"
RURAL_URBAN: Dict[int, str] = {1: URBAN, 2: URBAN, 3: RURAL}

# 5 (other/foreign) and 6 (missing) are not census regions
REGION: Dict[int, str] = {
    1: "Northeast",
    2: "Midwest",
    3: "South",
    4: "West",
}

DIVISION: Dict[int, str] = {
    1: "New England",
    2: "Mid Atlantic",
    3: "East North Central",
    4: "West North Central",
    5: "South Atlantic",
    6: "East South Central",
    7: "West South Central",
    8: "Mountain",
    9: "Pacific",
}

GEOGRAPHIES: Dict[str, Dict[int, str]] = {"region": REGION, "division": DIVISION}
