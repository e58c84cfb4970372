# Path: acc_hier/process/validation/scoring.py
"""
Severity and priority from an amount at risk.

Severity buckets (defaults): >= 1,000,000 CRITICAL, >= 500,000 HIGH,
>= 100,000 MEDIUM, else LOW.
Priority ranks (defaults): >= 5,000,000 -> 1, >= 1,000,000 -> 2,
>= 500,000 -> 3, >= 100,000 -> 4, else 5.
"""

from decimal import Decimal

from acc_hier.constants import Severity, LOWEST_PRIORITY


class IssueScorer:
    """
    Maps amounts to severity and priority rank.

    Example:
        scorer = IssueScorer(settings.severity_thresholds, settings.priority_thresholds)
        scorer.severity(Decimal('750000'))  # Severity.HIGH
        scorer.priority(Decimal('750000'))  # 3
    """

    def __init__(self, severity_thresholds: tuple, priority_thresholds: tuple):
        """
        Initialize scorer.

        Args:
            severity_thresholds: (critical, high, medium) minimum amounts
            priority_thresholds: minimum amounts for ranks 1..4
        """
        self.severity_thresholds = tuple(Decimal(t) for t in severity_thresholds)
        self.priority_thresholds = tuple(Decimal(t) for t in priority_thresholds)

    def severity(self, amount: Decimal) -> Severity:
        """Severity of an amount at risk (sign ignored)."""
        amount = abs(amount)
        critical, high, medium = self.severity_thresholds
        if amount >= critical:
            return Severity.CRITICAL
        if amount >= high:
            return Severity.HIGH
        if amount >= medium:
            return Severity.MEDIUM
        return Severity.LOW

    def priority(self, amount: Decimal) -> int:
        """Priority rank of an amount at risk, 1 is most urgent."""
        amount = abs(amount)
        for rank, threshold in enumerate(self.priority_thresholds, start=1):
            if amount >= threshold:
                return rank
        return LOWEST_PRIORITY


__all__ = ['IssueScorer']
