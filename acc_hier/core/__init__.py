# Path: acc_hier/core/__init__.py
"""
acc_hier Core Package

Core utilities for the Account Hierarchy Engine.

Submodules:
    - logger: IPO-aware logging system
    - errors: exception hierarchy
"""

from acc_hier.core.errors import AccHierError, EmptyInputError, ConfigurationError

__all__ = [
    'AccHierError',
    'EmptyInputError',
    'ConfigurationError',
]
