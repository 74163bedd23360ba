"""Run configuration read from the environment.

Values may be set in a .env file at the repo root:

    PRODUCTIVE_AGING_DATA_DIR=data/raw
    PRODUCTIVE_AGING_OUT_DIR=results
    PRODUCTIVE_AGING_FIGURES_DIR=figures
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data/raw")
    out_dir: Path = Path("results")
    figures_dir: Path = Path("figures")

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            data_dir=Path(os.getenv("PRODUCTIVE_AGING_DATA_DIR", "data/raw")),
            out_dir=Path(os.getenv("PRODUCTIVE_AGING_OUT_DIR", "results")),
            figures_dir=Path(os.getenv("PRODUCTIVE_AGING_FIGURES_DIR", "figures")),
        )
