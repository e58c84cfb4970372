# Path: acc_hier/process/reconciliation/__init__.py
"""
Reconciliation Package for acc_hier

Compares declared category totals with the sum of classified leaves.
"""

from acc_hier.process.reconciliation.reconciler import (
    HierarchyReconciler,
    ReconciliationCategory,
    ValidationSummary,
    default_categories,
)

__all__ = [
    'HierarchyReconciler',
    'ReconciliationCategory',
    'ValidationSummary',
    'default_categories',
]
