# Path: acc_hier/process/validation/amount_checker.py
"""
Parent vs children amount check.

For every node with children, compare its own amount with the sum of
its children's amounts:
- PERFECT: |difference| <= 1
- MINOR_VARIANCE: difference <= 1% of |parent|
- MAJOR_VARIANCE: difference <= 5% of |parent|
- CRITICAL_MISMATCH: anything larger (or any difference on a zero parent)
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from acc_hier.constants import (
    AmountCheckStatus,
    AMOUNT_CHECK_ABSOLUTE_TOLERANCE,
    AMOUNT_CHECK_MINOR_PCT,
    AMOUNT_CHECK_MAJOR_PCT,
)
from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.process.hierarchy.forest import HierarchyForest


@dataclass(frozen=True)
class AmountCheckResult:
    """Comparison of one parent with its children."""
    parent_code: str
    parent_name: str
    parent_amount: Decimal
    children_sum: Decimal
    variance: Decimal
    status: AmountCheckStatus

    def to_dict(self) -> dict[str, Any]:
        return {
            'parent_code': self.parent_code,
            'parent_name': self.parent_name,
            'parent_amount': str(self.parent_amount),
            'children_sum': str(self.children_sum),
            'variance': str(self.variance),
            'status': self.status.value,
        }


def classify_variance(parent_amount: Decimal, variance: Decimal) -> AmountCheckStatus:
    """
    Status of an absolute variance relative to the parent amount.

    Args:
        parent_amount: Parent's own amount
        variance: |parent - children sum|

    Returns:
        AmountCheckStatus
    """
    if variance <= AMOUNT_CHECK_ABSOLUTE_TOLERANCE:
        return AmountCheckStatus.PERFECT
    if parent_amount == 0:
        return AmountCheckStatus.CRITICAL_MISMATCH
    pct = variance / abs(parent_amount) * 100
    if pct <= AMOUNT_CHECK_MINOR_PCT:
        return AmountCheckStatus.MINOR_VARIANCE
    if pct <= AMOUNT_CHECK_MAJOR_PCT:
        return AmountCheckStatus.MAJOR_VARIANCE
    return AmountCheckStatus.CRITICAL_MISMATCH


class HierarchyAmountChecker:
    """
    Checks declared parent amounts against their children.

    Example:
        checker = HierarchyAmountChecker()
        for result in checker.check(forest, include_perfect=False):
            print(result.parent_code, result.status.value)
    """

    def __init__(self):
        """Initialize amount checker."""
        self.logger = get_process_logger('amount_checker')

    def check(self, forest: HierarchyForest, include_perfect: bool = True) -> list[AmountCheckResult]:
        """
        Compare every parent with the sum of its direct children.

        Args:
            forest: Hierarchy of the report
            include_perfect: Also return PERFECT results

        Returns:
            List of AmountCheckResult in input order
        """
        results = []
        for node in forest:
            if not node.children:
                continue
            children_sum = sum((c.amount for c in forest.children_of(node.code)), Decimal('0'))
            variance = abs(node.amount - children_sum)
            status = classify_variance(node.amount, variance)
            if status == AmountCheckStatus.PERFECT and not include_perfect:
                continue
            results.append(AmountCheckResult(
                parent_code=node.code,
                parent_name=node.concept,
                parent_amount=node.amount,
                children_sum=children_sum,
                variance=variance,
                status=status,
            ))

        mismatches = sum(1 for r in results if r.status != AmountCheckStatus.PERFECT)
        self.logger.info(f"Amount check: {mismatches} parents differ from their children")
        return results


__all__ = ['HierarchyAmountChecker', 'AmountCheckResult', 'classify_variance']
