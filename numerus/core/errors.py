# file: numerus/core/errors.py
"""Errors raised by numerus operations."""

from __future__ import annotations


class NumerusError(ValueError):
    """Base class for all numerus errors."""


class InvalidNumberError(NumerusError):
    """Raised when the supplied did is not a string at all."""


class InvalidNumberFormatError(NumerusError):
    """Raised when a did does not match the grammar a decomposition requires."""


class InvalidFormatError(NumerusError):
    """Raised when a conversion is not valid for the did's region or format."""


class NotFoundError(NumerusError, LookupError):
    """Raised when reference data has no entry for the requested key."""
