# Path: acc_hier/process/validation/models.py
"""
Result models for family validation.

All results are recomputed per validation run and never persisted.
Amounts are Decimal; to_dict renders them as strings.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from acc_hier.constants import (
    ClassificationStatus,
    IssueType,
    RecommendedApproach,
    Severity,
)
from acc_hier.loaders.rule_manager import ClassificationState


@dataclass(frozen=True)
class ClassificationIssue:
    """
    One classification-consistency problem.

    Attributes:
        issue_id: Stable id, e.g. 'MIXED_LEVEL4_5000-1000-001-000'
        issue_type: Kind of issue
        severity: CRITICAL/HIGH/MEDIUM/LOW
        parent_account: Code of the parent the issue is about, if any
        classified_children: Codes of classified (or covered) members
        unclassified_children: Codes of unclassified members
        financial_impact: Amount at risk (always >= 0)
        completeness_pct: Share of classified members (mixed groups)
        message: Short description
        business_impact: What the problem does to reports
        resolution_steps: Ordered human instructions
        auto_fixable: True if a confident fix can be suggested
        priority_rank: 1 (most urgent) to 5
        family_code: Family the issue belongs to
        suggested_template: Shared sibling classification (mixed groups)
        classified_descendants: Every classified code under the parent
            (over-classification and duplicate issues)
    """
    issue_id: str
    issue_type: IssueType
    severity: Severity
    parent_account: Optional[str] = None
    classified_children: tuple = ()
    unclassified_children: tuple = ()
    financial_impact: Decimal = Decimal('0')
    completeness_pct: Optional[float] = None
    message: str = ''
    business_impact: str = ''
    resolution_steps: tuple = ()
    auto_fixable: bool = False
    priority_rank: int = 5
    family_code: str = ''
    suggested_template: Optional[ClassificationState] = None
    classified_descendants: tuple = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            'issue_id': self.issue_id,
            'issue_type': self.issue_type.value,
            'severity': self.severity.value,
            'parent_account': self.parent_account,
            'classified_children': list(self.classified_children),
            'unclassified_children': list(self.unclassified_children),
            'financial_impact': str(self.financial_impact),
            'completeness_pct': self.completeness_pct,
            'message': self.message,
            'business_impact': self.business_impact,
            'resolution_steps': list(self.resolution_steps),
            'auto_fixable': self.auto_fixable,
            'priority_rank': self.priority_rank,
            'family_code': self.family_code,
        }


@dataclass(frozen=True)
class FamilyRecommendation:
    """Advisory classification approach for one family."""
    approach: RecommendedApproach
    current_completeness: float
    reasoning: str
    specific_actions: tuple = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            'approach': self.approach.value,
            'current_completeness': self.current_completeness,
            'reasoning': self.reasoning,
            'specific_actions': list(self.specific_actions),
        }


@dataclass
class FamilyValidationResult:
    """
    Validation outcome of one family.

    Attributes:
        family_code: 's1-s2' key
        family_name: Display name
        total_amount: Sum of |amount| of the family's detail accounts
        issues: Issues found in the family
        recommendation: Advisory approach
    """
    family_code: str
    family_name: str
    total_amount: Decimal
    issues: list[ClassificationIssue] = field(default_factory=list)
    recommendation: Optional[FamilyRecommendation] = None

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    @property
    def financial_impact(self) -> Decimal:
        return sum((issue.financial_impact for issue in self.issues), Decimal('0'))

    def to_dict(self) -> dict[str, Any]:
        return {
            'family_code': self.family_code,
            'family_name': self.family_name,
            'total_amount': str(self.total_amount),
            'has_issues': self.has_issues,
            'financial_impact': str(self.financial_impact),
            'issues': [issue.to_dict() for issue in self.issues],
            'recommendation': self.recommendation.to_dict() if self.recommendation else None,
        }


@dataclass
class FamilyValidationReport:
    """
    All family results of one report.

    Attributes:
        families: Per-family results, largest financial impact first
        issues: Flat issue list, by priority rank then impact
        statuses: Classification status per code
    """
    families: list[FamilyValidationResult] = field(default_factory=list)
    issues: list[ClassificationIssue] = field(default_factory=list)
    statuses: dict[str, ClassificationStatus] = field(default_factory=dict)

    @property
    def orphans(self) -> list[ClassificationIssue]:
        """ORPHAN_ACCOUNT diagnostics for malformed codes."""
        return self.issues_of_type(IssueType.ORPHAN_ACCOUNT)

    @property
    def total_financial_impact(self) -> Decimal:
        return sum((issue.financial_impact for issue in self.issues), Decimal('0'))

    @property
    def critical_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == Severity.CRITICAL)

    @property
    def auto_fixable_count(self) -> int:
        return sum(1 for issue in self.issues if issue.auto_fixable)

    def issues_of_type(self, issue_type: IssueType) -> list[ClassificationIssue]:
        return [issue for issue in self.issues if issue.issue_type == issue_type]

    def to_dict(self) -> dict[str, Any]:
        return {
            'summary': {
                'families': len(self.families),
                'families_with_issues': sum(1 for f in self.families if f.has_issues),
                'issues': len(self.issues),
                'critical_issues': self.critical_count,
                'auto_fixable_issues': self.auto_fixable_count,
                'total_financial_impact': str(self.total_financial_impact),
            },
            'families': [family.to_dict() for family in self.families],
            'issues': [issue.to_dict() for issue in self.issues],
        }


__all__ = [
    'ClassificationIssue',
    'FamilyRecommendation',
    'FamilyValidationResult',
    'FamilyValidationReport',
]
