"""
Exception hierarchy for delaycomp.

Every fatal condition of the pipeline raises a subclass of
`DelayCompensationError`. The `stage` attribute names the pipeline step that
failed so the entry point can report it without parsing messages.
"""

from __future__ import annotations

from typing import Optional


class DelayCompensationError(Exception):
    """Base class for fatal pipeline errors."""

    stage = "pipeline"

    def __init__(self, message: str, *, stage: Optional[str] = None):
        if stage is not None:
            self.stage = stage
        super().__init__(message)

    def __str__(self) -> str:
        return f"[{self.stage}] {super().__str__()}"


class WorkbookLoadError(DelayCompensationError):
    """Workbook missing, unreadable, or without an expected worksheet."""

    stage = "load"


class ColumnCollisionError(DelayCompensationError, ValueError):
    """Two distinct raw headers normalize to the same column name."""

    stage = "normalize"


class SchemaError(DelayCompensationError, ValueError):
    """A table lacks a column the pipeline requires."""

    stage = "schema"


class JoinKeyCollisionError(DelayCompensationError, ValueError):
    """The right side of an alignment has duplicated (period, operator) keys."""

    stage = "align"
