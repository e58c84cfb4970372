# Path: acc_hier/process/reconciliation/reconciler.py
"""
Hierarchy Reconciler - declared totals vs classified leaves.

For each top-level category (ingresos, egresos):
    declared   = signed amount of the category's total row
    classified = sum of signed amounts of classified non-total rows
                 whose tipo belongs to the category
    variance   = declared - classified

The category passes when |variance| <= tolerance (absolute, default 0.01).
All amounts follow the single sign convention of the row loader:
credits minus debits, on both sides of the comparison. Expense
categories are therefore negative, and the direction of a mismatch is
judged on magnitudes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Iterable, Optional

from acc_hier.constants import (
    INGRESOS_CATEGORY,
    EGRESOS_CATEGORY,
    TIPO_INGRESOS,
    TIPO_EGRESOS,
    format_currency,
)
from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.loaders.rule_manager import ClassificationState, StateSource, state_lookup
from acc_hier.process.hierarchy.account_code import Account, key_accounts
from acc_hier.process.hierarchy.forest import HierarchyForest
from acc_hier.process.settings import EngineSettings


@dataclass(frozen=True)
class ReconciliationCategory:
    """
    A top-level category to reconcile.

    Attributes:
        name: Key in the summary (e.g. 'ingresos')
        total_code: Code of the declared total row
        tipo: Classification tipo of the category's leaves
        label: Display name used in messages
    """
    name: str
    total_code: str
    tipo: str
    label: str


def default_categories(settings: Optional[EngineSettings] = None) -> list[ReconciliationCategory]:
    """Ingresos and egresos with the configured total codes."""
    settings = settings or EngineSettings()
    return [
        ReconciliationCategory(INGRESOS_CATEGORY, settings.ingresos_total_code, TIPO_INGRESOS, 'Ingresos'),
        ReconciliationCategory(EGRESOS_CATEGORY, settings.egresos_total_code, TIPO_EGRESOS, 'Egresos'),
    ]


@dataclass
class ValidationSummary:
    """
    Reconciliation outcome of one report.

    Attributes:
        hierarchy_totals: Declared total per category
        classified_totals: Classified sum per category
        variance: declared - classified per category
        unclassified_items: Leaf rows with no classification at all
        is_valid: Every category within tolerance
        errors: One message per failing category, plus unclassified count
    """
    hierarchy_totals: dict[str, Decimal] = field(default_factory=dict)
    classified_totals: dict[str, Decimal] = field(default_factory=dict)
    variance: dict[str, Decimal] = field(default_factory=dict)
    unclassified_items: int = 0
    is_valid: bool = True
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            'hierarchy_totals': {k: str(v) for k, v in self.hierarchy_totals.items()},
            'classified_totals': {k: str(v) for k, v in self.classified_totals.items()},
            'variance': {k: str(v) for k, v in self.variance.items()},
            'unclassified_items': self.unclassified_items,
            'is_valid': self.is_valid,
            'errors': list(self.errors),
        }


class HierarchyReconciler:
    """
    Reconciles declared category totals with classified leaves.

    Example:
        reconciler = HierarchyReconciler()
        summary = reconciler.reconcile(accounts, rule_manager, forest)
        if not summary.is_valid:
            for message in summary.errors:
                print(message)
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        categories: Optional[list[ReconciliationCategory]] = None,
    ):
        """
        Initialize reconciler.

        Args:
            settings: Tolerance and total codes (defaults apply when None)
            categories: Categories to reconcile (ingresos/egresos by default)
        """
        self.settings = settings or EngineSettings()
        self.categories = categories or default_categories(self.settings)
        self.tolerance = self.settings.reconciliation_tolerance
        self.logger = get_process_logger('reconciler')

    def reconcile(
        self,
        accounts: Iterable[Account],
        states: StateSource,
        forest: Optional[HierarchyForest] = None,
    ) -> ValidationSummary:
        """
        Reconcile one report.

        Args:
            accounts: Rows of the report
            states: Rule manager or mapping code -> classification
            forest: Hierarchy of the report; when given, only leaves count
                as unclassified items and rows under a classified
                ancestor are not counted

        Returns:
            ValidationSummary
        """
        lookup = state_lookup(states)
        total_codes = {c.total_code for c in self.categories}

        # keyed like the forest so leaf checks see every malformed row
        rows = key_accounts(accounts)
        classifications = {code: lookup(code) for code in rows}

        summary = ValidationSummary()
        for category in self.categories:
            declared = self._declared_total(category, rows)
            classified = self._classified_total(category, rows, classifications, total_codes)
            variance = declared - classified

            summary.hierarchy_totals[category.name] = declared
            summary.classified_totals[category.name] = classified
            summary.variance[category.name] = variance

            if abs(variance) > self.tolerance:
                summary.is_valid = False
                summary.errors.append(self._mismatch_message(category, declared, classified, variance))

        summary.unclassified_items = self._count_unclassified(rows, classifications, total_codes, forest)
        if summary.unclassified_items > 0:
            summary.errors.append(f"{summary.unclassified_items} items could not be classified")

        self._log_summary(summary)
        return summary

    def _declared_total(self, category: ReconciliationCategory, rows: dict[str, Account]) -> Decimal:
        row = rows.get(category.total_code)
        if row is None:
            self.logger.warning(f"{category.label}: declared total row {category.total_code} not in report")
            return Decimal('0')
        return row.amount

    def _classified_total(
        self,
        category: ReconciliationCategory,
        rows: dict[str, Account],
        classifications: dict[str, Optional[ClassificationState]],
        total_codes: set,
    ) -> Decimal:
        total = Decimal('0')
        for code, account in rows.items():
            if code in total_codes:
                continue
            state = classifications[code]
            if state is not None and state.is_classified and state.tipo == category.tipo:
                total += account.amount
        return total

    def _mismatch_message(
        self,
        category: ReconciliationCategory,
        declared: Decimal,
        classified: Decimal,
        variance: Decimal,
    ) -> str:
        amount = format_currency(variance)
        if abs(classified) < abs(declared):
            return (
                f"{category.label}: declared total is {amount} larger than the classified "
                f"total. {amount} is missing classification."
            )
        return (
            f"{category.label}: classified total is {amount} larger than the declared "
            f"total. Items are over-classified by {amount}."
        )

    def _count_unclassified(
        self,
        rows: dict[str, Account],
        classifications: dict[str, Optional[ClassificationState]],
        total_codes: set,
        forest: Optional[HierarchyForest],
    ) -> int:
        def unset(code: str) -> bool:
            state = classifications.get(code)
            return state is None or state.is_unset

        count = 0
        for code in rows:
            if code in total_codes or not unset(code):
                continue
            if forest is not None:
                node = forest.get(code)
                if node is None or not node.is_leaf:
                    continue
                if any(
                    classifications.get(a.code) is not None and classifications[a.code].is_classified
                    for a in forest.ancestors_of(code)
                ):
                    continue
            count += 1
        return count

    def _log_summary(self, summary: ValidationSummary) -> None:
        """Log reconciliation summary."""
        parts = ", ".join(
            f"{name} variance {variance}" for name, variance in summary.variance.items()
        )
        self.logger.info(
            f"Reconciliation: {'valid' if summary.is_valid else 'INVALID'} ({parts}), "
            f"{summary.unclassified_items} unclassified items"
        )


__all__ = [
    'HierarchyReconciler',
    'ReconciliationCategory',
    'ValidationSummary',
    'default_categories',
]
