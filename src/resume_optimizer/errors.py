"""Error taxonomy for resume decoding and analysis."""

from __future__ import annotations


class ResumeOptimizerError(Exception):
    """Base class for errors raised by resume-optimizer."""


class DecodeError(ResumeOptimizerError, ValueError):
    """A document could not be turned into text (unsupported or corrupt)."""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(message)
        self.file_name = file_name


class EmptyInputError(ResumeOptimizerError, ValueError):
    """Resume text or job description is blank at analyze time."""

    def __init__(self, field: str):
        super().__init__(f"{field} must not be empty")
        self.field = field
