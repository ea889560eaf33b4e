"""
Exception hierarchy for the attribution pipeline.

Every failure aborts the run. Exceptions carry the source name and the
line number where known so the bad input can be located.
"""

from typing import Optional


class AttributionError(Exception):
    """
    Base exception for all attribution pipeline errors.

    Attributes:
        message: Human-readable error message
        source: Name of the input/output the error relates to
        row: 1-based line number within the source, if known
    """

    def __init__(self, message: str, source: Optional[str] = None, row: Optional[int] = None):
        self.message = message
        self.source = source
        self.row = row

        location = ""
        if source is not None and row is not None:
            location = f"{source}, line {row}: "
        elif source is not None:
            location = f"{source}: "

        super().__init__(f"{location}{message}")


class SourceUnavailable(AttributionError):
    """Input cannot be opened or read."""


class MalformedInput(AttributionError):
    """A row's shape or timestamp does not match the expected format."""


class InvalidAmount(AttributionError):
    """A sale amount is not a valid non-negative decimal."""


class SinkUnavailable(AttributionError):
    """Output cannot be created or written."""
