"""Error taxonomy for the pipeline.

Fatal problems derive from `PipelineError` and abort the run; the CLI tags
them with the stage that raised. Field-level parse problems are recovered
where they occur, and geometry join mismatches are reported as warnings.
"""

from __future__ import annotations


class PipelineError(Exception):
    """Base class for errors that abort a pipeline run."""

    stage: str | None = None


class LoadError(PipelineError):
    """An input file is missing, unreadable or has an unexpected layout."""


class ParseError(PipelineError):
    """A single field value could not be parsed.

    Raised by scalar parsers only; column-level callers absorb it into a
    null value and count the occurrence.
    """


class DataUnavailableError(PipelineError):
    """An external reference data source could not be reached or read."""


class GeometryJoinMismatch(UserWarning):
    """Rows were dropped from a chart because no geometry matched them."""

    def __init__(self, dropped: int, names: list[str]) -> None:
        self.dropped = dropped
        self.names = names
        super().__init__(
            f"{dropped} row(s) without matching geometry dropped: {', '.join(names) or '<unnamed>'}"
        )
