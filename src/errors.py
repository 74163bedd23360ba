"""Exceptions raised by the productive-activity pipeline.

Fatal conditions (missing columns, duplicate respondents) abort the run.
``InsufficientStratumData`` is raised by the proportion test and turned into
an explicit marker row by the comparator.
"""

from __future__ import annotations

from typing import Iterable


class PipelineError(Exception):
    """Base class for all pipeline errors."""


class MissingInputField(PipelineError, KeyError):
    def __init__(self, fragment: str, missing: Iterable[str]):
        self.fragment = fragment
        self.missing = sorted(missing)
        super().__init__(f"{fragment} fragment is missing required columns: {', '.join(self.missing)}")

    def __str__(self) -> str:
        # KeyError repr-quotes its argument otherwise
        return self.args[0]


class DuplicateRespondent(PipelineError):
    def __init__(self, fragment: str, ids: Iterable[int]):
        self.fragment = fragment
        self.ids = list(ids)
        preview = ", ".join(str(i) for i in self.ids[:5])
        super().__init__(f"{fragment} fragment has {len(self.ids)} repeated respondent ids (e.g. {preview})")


class InsufficientStratumData(PipelineError):
    """A stratum total is zero, so no proportion can be compared."""


class UnknownGeography(PipelineError, ValueError):
    pass
