# src/retailpulse/exceptions.py

"""Errors raised by RetailPulse.

Numeric edge cases (bad cells, zero denominators, empty groups) never
raise; they degrade to NaN or 0. Only structural problems with the
input file surface as exceptions.
"""

from typing import List, Optional


class RetailPulseError(ValueError):
    """Base class for all RetailPulse errors."""


class StructuralInputError(RetailPulseError):
    """The uploaded file is unreadable or lacks required columns."""

    def __init__(self, message: str, missing_columns: Optional[List[str]] = None):
        super().__init__(message)
        self.missing_columns = missing_columns or []
