# Path: acc_hier/process/revalidation/__init__.py
"""
Revalidation Package for acc_hier

Fans out validation of historical reports after rule changes.
"""

from acc_hier.process.revalidation.revalidator import (
    RetroactiveRevalidator,
    RevalidationSummary,
)

__all__ = ['RetroactiveRevalidator', 'RevalidationSummary']
