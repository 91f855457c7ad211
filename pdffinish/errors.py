# errors.py
"""
Exception taxonomy. Every error is terminal for the current invocation and
carries the process exit code reported for it.
"""

from typing import Optional

NO_ERROR = 0
GENERAL_ERROR = 1
INPUT_READ_ERROR = 2
CONFIG_READ_ERROR = 3
INVALID_CONFIG_ERROR = 4
PROCESSING_ERROR = 5
WRITE_ERROR = 6


class PDFFinishError(Exception):
    exit_code = GENERAL_ERROR


class UsageError(PDFFinishError):
    """Bad or missing command line arguments."""
    exit_code = GENERAL_ERROR


class InputReadError(PDFFinishError):
    """Input PDF missing or unparsable."""
    exit_code = INPUT_READ_ERROR


class ConfigReadError(PDFFinishError):
    """Configuration file missing or not valid JSON."""
    exit_code = CONFIG_READ_ERROR


class InvalidConfigError(PDFFinishError):
    """Configuration parsed but its content is not acceptable."""
    exit_code = INVALID_CONFIG_ERROR

    def __init__(self, message: str, index: Optional[int] = None):
        if index is not None:
            message = f"toc[{index}]: {message}"
        super().__init__(message)
        self.index = index


class ProcessingError(PDFFinishError):
    """Failure while applying metadata or building the outline."""
    exit_code = PROCESSING_ERROR


class MalformedHierarchyError(ProcessingError):
    """A heading has no parent at the level above it."""

    def __init__(self, heading, reason: str):
        super().__init__(
            f"Cannot place heading {heading.text.strip()!r} "
            f"(level {heading.tag}, page {heading.page + 1}): {reason}"
        )
        self.heading = heading


class WriteError(PDFFinishError):
    """Failure while saving the output PDF."""
    exit_code = WRITE_ERROR
