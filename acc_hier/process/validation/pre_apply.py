# Path: acc_hier/process/validation/pre_apply.py
"""
Pre-apply check for a proposed classification.

Before a user classifies an account, reject the change if it would put
the same money under two classifications:
- PARENT_ALREADY_CLASSIFIED: an ancestor is already classified
- CHILDREN_ALREADY_CLASSIFIED: some descendants are already classified
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from acc_hier.constants import Severity, format_currency
from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.loaders.rule_manager import ClassificationState, StateSource, state_lookup
from acc_hier.process.hierarchy.forest import HierarchyForest


PARENT_ALREADY_CLASSIFIED = 'PARENT_ALREADY_CLASSIFIED'
CHILDREN_ALREADY_CLASSIFIED = 'CHILDREN_ALREADY_CLASSIFIED'


@dataclass(frozen=True)
class PreApplyResult:
    """
    Outcome of a pre-apply check.

    Attributes:
        valid: True if the change can be applied
        error: PARENT_ALREADY_CLASSIFIED / CHILDREN_ALREADY_CLASSIFIED
        severity: CRITICAL when rejected
        financial_impact: Amount that would be double counted
        message: Human-readable explanation
        suggested_action: What the user can do instead
        conflicting_codes: Codes that already carry a classification
    """
    valid: bool
    error: Optional[str] = None
    severity: Optional[Severity] = None
    financial_impact: Decimal = Decimal('0')
    message: str = ''
    suggested_action: Optional[str] = None
    conflicting_codes: tuple = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            'valid': self.valid,
            'error': self.error,
            'severity': self.severity.value if self.severity else None,
            'financial_impact': str(self.financial_impact),
            'message': self.message,
            'suggested_action': self.suggested_action,
            'conflicting_codes': list(self.conflicting_codes),
        }


class PreApplyValidator:
    """
    Checks one proposed classification against the current hierarchy.

    Example:
        validator = PreApplyValidator()
        result = validator.check('5000-1000-001-000', proposed, forest, manager)
        if not result.valid:
            print(result.message)
    """

    def __init__(self):
        """Initialize pre-apply validator."""
        self.logger = get_process_logger('pre_apply')

    def check(
        self,
        code: str,
        proposed: Optional[ClassificationState],
        forest: HierarchyForest,
        states: StateSource,
    ) -> PreApplyResult:
        """
        Check whether classifying `code` would cause double counting.

        Args:
            code: Account code to classify
            proposed: Proposed classification (None or partial clears)
            forest: Hierarchy of the report
            states: Current classifications

        Returns:
            PreApplyResult
        """
        if proposed is None or not proposed.is_classified:
            return PreApplyResult(valid=True, message="Clearing a classification cannot double count")

        node = forest.get(code)
        if node is None:
            return PreApplyResult(valid=True, message=f"{code} is not part of this report")

        lookup = state_lookup(states)

        def classified(c: str) -> bool:
            state = lookup(c)
            return state is not None and state.is_classified

        for ancestor in forest.ancestors_of(code):
            if classified(ancestor.code):
                self.logger.info(f"Rejected {code}: ancestor {ancestor.code} already classified")
                return PreApplyResult(
                    valid=False,
                    error=PARENT_ALREADY_CLASSIFIED,
                    severity=Severity.CRITICAL,
                    financial_impact=abs(ancestor.amount),
                    message=(
                        f"Parent account {ancestor.code} is already classified. "
                        f"This would cause double counting."
                    ),
                    suggested_action='UNCLASSIFY_PARENT_OR_USE_PARENT_ONLY',
                    conflicting_codes=(ancestor.code,),
                )

        children = [d for d in forest.descendants_of(code) if classified(d.code)]
        if children:
            amount = sum((abs(d.amount) for d in children), Decimal('0'))
            self.logger.info(f"Rejected {code}: {len(children)} descendants already classified")
            return PreApplyResult(
                valid=False,
                error=CHILDREN_ALREADY_CLASSIFIED,
                severity=Severity.CRITICAL,
                financial_impact=amount,
                message=(
                    f"{len(children)} child accounts are already classified. "
                    f"{format_currency(amount)} would be double counted."
                ),
                suggested_action='UNCLASSIFY_CHILDREN_OR_USE_CHILDREN_ONLY',
                conflicting_codes=tuple(d.code for d in children),
            )

        return PreApplyResult(valid=True)


__all__ = [
    'PreApplyValidator',
    'PreApplyResult',
    'PARENT_ALREADY_CLASSIFIED',
    'CHILDREN_ALREADY_CLASSIFIED',
]
