"""End-to-end run: fragments -> indicators -> linkage -> cohort -> tables -> tests.

Stages:
1. join the five fragments on hhidpn (demographic fragment is the base)
2. derive item-level indicators
3. link spousal caregiving onto the spouse's record, then build composites
4. restrict to the cohort (in wave, community-dwelling, 65+)
5. stratum tables per geography level
6. rural vs urban proportion tests per geography value

Each stage returns a new frame. Missing columns or duplicate ids abort the
run before anything is written; unresolved linkages and insufficient cells
are counted in the run report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable

import pandas as pd

from src.analysis.proportions import INSUFFICIENT, compare_rural_urban
from src.analysis.strata import stratify_all
from src.config import Settings
from src.data.cohort import filter_cohort
from src.data.fragments import join_fragments, read_fragments
from src.features.indicators import (
    ACTIVITIES,
    combine_indicators,
    derive_indicators,
    label_strata,
)
from src.features.spouse_linkage import attach_spousal_caregiver, build_caregiver_linkage
from src.viz.plots import write_figures

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    joined: int
    cohort_size: int
    unresolved_linkages: int
    unmatched_spouses: int
    known_counts: Dict[str, int] = field(default_factory=dict)
    insufficient_cells: Dict[str, int] = field(default_factory=dict)

    def to_text(self) -> str:
        lines = [
            "Productive activity run report",
            f"joined respondents: {self.joined}",
            f"cohort size (in wave, community-dwelling, 65+): {self.cohort_size}",
            f"unresolved spousal linkages (excluded, undercount): {self.unresolved_linkages}",
            f"spouse ids without a record: {self.unmatched_spouses}",
            "known indicator values in cohort:",
        ]
        lines += [f"  {k}: {v}" for k, v in self.known_counts.items()]
        lines.append("insufficient cells (no comparison):")
        lines += [f"  {k}: {v}" for k, v in self.insufficient_cells.items()]
        return "\n".join(lines) + "\n"


@dataclass
class PipelineResult:
    cohort: pd.DataFrame
    strata: Dict[str, pd.DataFrame]
    comparisons: Dict[str, pd.DataFrame]
    report: RunReport


def build_cohort(fragments: Dict[str, pd.DataFrame]):
    """Stages 1-4. Returns the joined records, the cohort and the spousal linkage."""
    records = join_fragments(**fragments)
    derived = derive_indicators(records)
    linkage = build_caregiver_linkage(derived)
    combined = combine_indicators(attach_spousal_caregiver(derived, linkage))
    cohort = filter_cohort(label_strata(combined))
    return records, cohort, linkage


def run_pipeline(
    fragments: Dict[str, pd.DataFrame],
    geographies: Iterable[str] = ("region", "division"),
) -> PipelineResult:
    records, cohort, linkage = build_cohort(fragments)
    strata: Dict[str, pd.DataFrame] = {}
    comparisons: Dict[str, pd.DataFrame] = {}
    insufficient: Dict[str, int] = {}
    for level in geographies:
        strata[level] = stratify_all(cohort, level)
        comparisons[level] = compare_rural_urban(strata[level])
        insufficient[level] = int((comparisons[level]["status"] == INSUFFICIENT).sum())

    report = RunReport(
        joined=len(records),
        cohort_size=len(cohort),
        unresolved_linkages=linkage.unresolved,
        unmatched_spouses=linkage.unmatched,
        known_counts={a: int(cohort[a].notna().sum()) for a in ACTIVITIES},
        insufficient_cells=insufficient,
    )
    logger.info("Run complete: cohort=%d, unresolved linkages=%d", report.cohort_size, report.unresolved_linkages)
    return PipelineResult(cohort=cohort, strata=strata, comparisons=comparisons, report=report)


def write_outputs(result: PipelineResult, out_dir: Path) -> None:
    out_dir.mkdir(parents=True, exist_ok=True)
    for level, table in result.strata.items():
        table.to_csv(out_dir / f"strata_{level}.csv", index=False)
    for level, table in result.comparisons.items():
        table.to_csv(out_dir / f"comparison_{level}.csv", index=False)
    (out_dir / "run_report.txt").write_text(result.report.to_text(), encoding="utf-8")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = Settings.from_env()
    try:
        fragments = read_fragments(settings.data_dir)
    except FileNotFoundError as exc:
        print(f"{exc}; export the HRS fragments first.")
        return
    result = run_pipeline(fragments)
    write_outputs(result, settings.out_dir)
    print(f"Wrote {settings.out_dir}/ (cohort size {result.report.cohort_size:,})")
    write_figures(result.strata, settings.figures_dir)
    print(f"Wrote {settings.figures_dir}/ and {settings.figures_dir}/index.html")


if __name__ == "__main__":
    main()
