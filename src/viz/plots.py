"""Matplotlib bar charts for rural vs urban activity proportions.

Figures (one per geography level and activity):
- proportion of respondents engaged, rural vs urban, per region/division,
  with Wilson 95% interval whiskers

Saves PNGs and an index.html with the stratum counts and figures per level.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from src.features.codes import RURAL, URBAN

COLORS = {RURAL: "#6b8e23", URBAN: "#4a6fa5"}


def plot_activity(table: pd.DataFrame, activity: str, out_dir: Path) -> Path:
    df = table[table["activity"] == activity]
    places = sorted(df["geography"].unique())
    x = np.arange(len(places))
    width = 0.38
    fig, ax = plt.subplots(figsize=(max(6, 1.2 * len(places)), 4.5))
    for i, stratum in enumerate([RURAL, URBAN]):
        part = df[df["rural_urban"] == stratum].set_index("geography").reindex(places)
        err = np.vstack([part["proportion"] - part["ci_low"], part["ci_high"] - part["proportion"]])
        ax.bar(x + (i - 0.5) * width, part["proportion"], width, yerr=err, capsize=3,
               label=stratum, color=COLORS[stratum])
    ax.set_xticks(x)
    ax.set_xticklabels(places, rotation=30, ha="right")
    ax.set_ylim(0, 1)
    ax.set_ylabel("Proportion")
    level = df["level"].iloc[0] if len(df) else "geography"
    ax.set_title(f"{activity.replace('_', ' ').title()} by {level} (65+, community-dwelling)")
    ax.legend()
    out = out_dir / f"{level}_{activity}.png"
    fig.tight_layout()
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def _stratum_html(table: pd.DataFrame) -> str:
    """Proportion (positive/total) per geography, one column per activity and stratum."""
    cells = table.assign(
        value=table["proportion"].map("{:.3f}".format) + " (" + table["positive"].astype(str)
        + "/" + table["total"].astype(str) + ")"
    )
    wide = cells.pivot(index="geography", columns=["activity", "rural_urban"], values="value")
    return wide.sort_index(axis=1).fillna("").to_html(border=0)


def _write_index_html(out_dir: Path, sections: Dict[str, List[Path]], strata: Dict[str, pd.DataFrame]) -> None:
    html = ["<html><body><h1>Rural vs Urban Productive Activity (65+, community-dwelling)</h1>"]
    for level, images in sections.items():
        html.append(f"<h2>By {level}</h2>")
        if not strata[level].empty:
            html.append(_stratum_html(strata[level]))
        for img in images:
            html.append(f"<img src='{img.name}' alt='{img.stem}' style='max-width:100%;' />")
    html.append("</body></html>")
    (out_dir / "index.html").write_text("\n".join(html), encoding="utf-8")


def write_figures(strata: Dict[str, pd.DataFrame], out_dir: Path) -> List[Path]:
    out_dir.mkdir(parents=True, exist_ok=True)
    sections = {
        level: [plot_activity(table, activity, out_dir) for activity in table["activity"].unique()]
        for level, table in strata.items()
    }
    _write_index_html(out_dir, sections, strata)
    return [img for images in sections.values() for img in images]
