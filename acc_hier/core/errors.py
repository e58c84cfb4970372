# Path: acc_hier/core/errors.py
"""
Exception hierarchy for acc_hier.

Per-row data problems never raise; they degrade and surface as warnings,
issues or validation messages. Only an unusable input shape (an empty
report) or bad configuration is raised.
"""


class AccHierError(Exception):
    """Base class for all acc_hier errors."""


class EmptyInputError(AccHierError, ValueError):
    """Raised when a report carries no account rows at all."""

    def __init__(self, message: str = "Report contains no account rows"):
        super().__init__(message)


class ConfigurationError(AccHierError):
    """Raised when configured conventions cannot be used."""


__all__ = ['AccHierError', 'EmptyInputError', 'ConfigurationError']
