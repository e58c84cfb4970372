# Path: acc_hier/process/validation/family_validator.py
"""
Family Validator - bottom-up classification consistency checks.

Single pass over the forest of one report:
- MIXED_LEVEL4_SIBLINGS: level-4 siblings split between classified and
  unclassified (the unclassified money vanishes from detail reports)
- OVER_CLASSIFICATION: a classified parent whose children are all
  covered (its amount would be counted twice)
- DUPLICATE_CLASSIFICATION: a classified parent with some classified
  descendants but not full coverage (partial double counting)
- ORPHAN_ACCOUNT: malformed codes, excluded from grouping

Never raises on malformed data and never applies a fix.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from acc_hier.constants import (
    ClassificationStatus,
    IssueType,
    Severity,
    HIGHEST_PRIORITY,
    LOWEST_PRIORITY,
    PERCENTAGE_PLACES,
    format_currency,
)
from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.loaders.rule_manager import ClassificationState, StateSource, state_lookup
from acc_hier.process.hierarchy.forest import HierarchyForest
from acc_hier.process.hierarchy.node import HierarchyNode
from acc_hier.process.settings import EngineSettings
from .family import Family, group_families
from .models import (
    ClassificationIssue,
    FamilyValidationReport,
    FamilyValidationResult,
)
from .recommendation import recommend_approach
from .scoring import IssueScorer
from .status import compute_statuses, is_covered


class FamilyValidator:
    """
    Detects classification-consistency issues family by family.

    Example:
        validator = FamilyValidator()
        report = validator.validate(forest, rule_manager)
        for issue in report.issues:
            print(issue.priority_rank, issue.issue_type.value, issue.message)
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize validator.

        Args:
            settings: Thresholds (defaults apply when None)
        """
        self.settings = settings or EngineSettings()
        self.scorer = IssueScorer(
            self.settings.severity_thresholds,
            self.settings.priority_thresholds,
        )
        self.logger = get_process_logger('family_validator')

    def validate(self, forest: HierarchyForest, states: StateSource) -> FamilyValidationReport:
        """
        Validate every family of a report.

        Args:
            forest: Hierarchy of the report
            states: Rule manager or mapping code -> classification

        Returns:
            FamilyValidationReport
        """
        lookup = state_lookup(states)
        classifications: dict[str, Optional[ClassificationState]] = {
            node.code: lookup(node.code) for node in forest
        }
        statuses = compute_statuses(forest, classifications.get)

        families = group_families(forest)
        by_family: dict[str, list[ClassificationIssue]] = {f.family_code: [] for f in families}

        issues: list[ClassificationIssue] = []
        issues.extend(self._check_mixed_siblings(forest, statuses, classifications))
        issues.extend(self._check_parent_overlap(forest, statuses))
        for issue in issues:
            by_family.setdefault(issue.family_code, []).append(issue)
        issues.extend(self._orphan_diagnostics(forest))

        results = [self._family_result(family, by_family[family.family_code], statuses)
                   for family in families]
        results.sort(key=lambda r: r.financial_impact, reverse=True)
        issues.sort(key=lambda i: (i.priority_rank, -i.financial_impact))

        report = FamilyValidationReport(families=results, issues=issues, statuses=statuses)
        self._log_summary(report)
        return report

    # ------------------------------------------------------------------
    # Level-4 sibling check
    # ------------------------------------------------------------------

    def _check_mixed_siblings(
        self,
        forest: HierarchyForest,
        statuses: dict[str, ClassificationStatus],
        classifications: dict[str, Optional[ClassificationState]],
    ) -> list[ClassificationIssue]:
        groups: dict[str, list[HierarchyNode]] = {}
        for node in forest:
            if not node.is_valid or node.level != 4:
                continue
            key = node.parent if node.parent is not None else node.family_code
            groups.setdefault(key, []).append(node)

        issues = []
        for key, siblings in groups.items():
            classified = [n for n in siblings if statuses[n.code] == ClassificationStatus.CLASSIFIED]
            unclassified = [n for n in siblings if statuses[n.code] == ClassificationStatus.UNCLASSIFIED]
            if not classified or not unclassified:
                continue
            issues.append(self._mixed_issue(forest, key, siblings, classified, unclassified, classifications))
        return issues

    def _mixed_issue(
        self,
        forest: HierarchyForest,
        key: str,
        siblings: list[HierarchyNode],
        classified: list[HierarchyNode],
        unclassified: list[HierarchyNode],
        classifications: dict[str, Optional[ClassificationState]],
    ) -> ClassificationIssue:
        parent = forest.get(key)
        family_code = parent.family_code if parent is not None else siblings[0].family_code
        impact = sum((abs(n.amount) for n in unclassified), Decimal('0'))

        templates = {classifications[n.code].template_key for n in classified}
        consistent = len(templates) == 1
        auto_fixable = consistent and len(unclassified) <= self.settings.autofix_max_unclassified
        label = parent.code if parent is not None else f"family {key}"

        steps = [f"RECOMMENDED: classify the {len(unclassified)} missing detail accounts:"]
        steps.extend(
            f"  {n.code} - {n.concept} ({format_currency(n.amount)})" for n in unclassified
        )
        steps.append(
            f"ALTERNATIVE: unclassify all {len(classified)} detail accounts and "
            f"classify {label} for summary reporting"
        )
        steps.append("RULE: all level-4 siblings follow the same classification approach")

        return ClassificationIssue(
            issue_id=f"MIXED_LEVEL4_{key}",
            issue_type=IssueType.MIXED_LEVEL4_SIBLINGS,
            severity=self.scorer.severity(impact),
            parent_account=parent.code if parent is not None else None,
            classified_children=tuple(n.code for n in classified),
            unclassified_children=tuple(n.code for n in unclassified),
            financial_impact=impact,
            completeness_pct=round(len(classified) / len(siblings) * 100, PERCENTAGE_PLACES),
            message=(
                f"Mixed level-4 classification under {label}: "
                f"{len(classified)} of {len(siblings)} detail accounts are classified"
            ),
            business_impact=(
                f"{format_currency(impact)} in detail accounts will not appear "
                f"in granular reports"
            ),
            resolution_steps=tuple(steps),
            auto_fixable=auto_fixable,
            priority_rank=self.scorer.priority(impact),
            family_code=family_code,
            suggested_template=classifications[classified[0].code] if consistent else None,
        )

    # ------------------------------------------------------------------
    # Parent / descendant overlap
    # ------------------------------------------------------------------

    def _check_parent_overlap(
        self,
        forest: HierarchyForest,
        statuses: dict[str, ClassificationStatus],
    ) -> list[ClassificationIssue]:
        issues = []
        for node in forest:
            if statuses[node.code] != ClassificationStatus.CLASSIFIED or not node.children:
                continue

            children = forest.children_of(node.code)
            descendants = forest.descendants_of(node.code)
            classified_descendants = [
                d for d in descendants if statuses[d.code] == ClassificationStatus.CLASSIFIED
            ]

            if all(is_covered(statuses[c.code]) for c in children):
                issues.append(self._over_issue(node, children, classified_descendants))
            elif classified_descendants:
                issues.append(self._duplicate_issue(forest, node, classified_descendants, statuses))
        return issues

    def _over_issue(
        self,
        node: HierarchyNode,
        children: list[HierarchyNode],
        classified_descendants: list[HierarchyNode],
    ) -> ClassificationIssue:
        children_total = sum((abs(c.amount) for c in children), Decimal('0'))
        impact = min(abs(node.amount), children_total)
        return ClassificationIssue(
            issue_id=f"OVER_CLASSIFICATION_{node.code}",
            issue_type=IssueType.OVER_CLASSIFICATION,
            severity=Severity.CRITICAL,
            parent_account=node.code,
            classified_children=tuple(c.code for c in children),
            financial_impact=impact,
            completeness_pct=100.0,
            message=(
                f"Over-classification: {node.code} {node.concept} is classified "
                f"and all of its {len(children)} children are classified"
            ),
            business_impact=(
                f"{format_currency(impact)} will be counted twice: once at level "
                f"{node.level} and again through its children"
            ),
            resolution_steps=(
                "CRITICAL: choose one classification level to prevent double counting",
                f"KEEP DETAIL: remove the classification of {node.code}",
                f"KEEP SUMMARY: remove the classification of its "
                f"{len(classified_descendants)} classified descendants",
                "Choose based on reporting needs: detail analysis vs summary reporting",
            ),
            auto_fixable=False,
            priority_rank=HIGHEST_PRIORITY,
            family_code=node.family_code,
            classified_descendants=tuple(d.code for d in classified_descendants),
        )

    def _duplicate_issue(
        self,
        forest: HierarchyForest,
        node: HierarchyNode,
        classified_descendants: list[HierarchyNode],
        statuses: dict[str, ClassificationStatus],
    ) -> ClassificationIssue:
        topmost = [
            d for d in classified_descendants
            if not self._has_classified_ancestor_below(forest, d, node, statuses)
        ]
        overlap = min(abs(node.amount), sum((abs(d.amount) for d in topmost), Decimal('0')))
        return ClassificationIssue(
            issue_id=f"DUPLICATE_CLASSIFICATION_{node.code}",
            issue_type=IssueType.DUPLICATE_CLASSIFICATION,
            severity=self.scorer.severity(overlap),
            parent_account=node.code,
            classified_children=tuple(d.code for d in topmost),
            financial_impact=overlap,
            message=(
                f"Partial double classification: {node.code} {node.concept} is classified "
                f"and {len(classified_descendants)} of its descendants are classified too"
            ),
            business_impact=f"{format_currency(overlap)} is counted at two levels",
            resolution_steps=(
                f"Remove the classification of {node.code} and classify its remaining children",
                f"Or remove the classification of {len(classified_descendants)} descendants",
            ),
            auto_fixable=False,
            priority_rank=self.scorer.priority(overlap),
            family_code=node.family_code,
            classified_descendants=tuple(d.code for d in classified_descendants),
        )

    @staticmethod
    def _has_classified_ancestor_below(
        forest: HierarchyForest,
        node: HierarchyNode,
        top: HierarchyNode,
        statuses: dict[str, ClassificationStatus],
    ) -> bool:
        """True if a classified node sits strictly between `node` and `top`."""
        for ancestor in forest.ancestors_of(node.code):
            if ancestor.code == top.code:
                return False
            if statuses[ancestor.code] == ClassificationStatus.CLASSIFIED:
                return True
        return False

    # ------------------------------------------------------------------
    # Malformed codes
    # ------------------------------------------------------------------

    def _orphan_diagnostics(self, forest: HierarchyForest) -> list[ClassificationIssue]:
        issues = []
        for node in forest:
            if node.is_valid:
                continue
            issues.append(ClassificationIssue(
                issue_id=f"ORPHAN_ACCOUNT_{node.code}",
                issue_type=IssueType.ORPHAN_ACCOUNT,
                severity=Severity.LOW,
                financial_impact=abs(node.amount),
                message=f"Account code '{node.code}' could not be parsed; excluded from family checks",
                business_impact=(
                    f"{format_currency(node.amount)} cannot be placed in the hierarchy"
                ),
                resolution_steps=("Correct the account code in the source data",),
                auto_fixable=False,
                priority_rank=LOWEST_PRIORITY,
                family_code='',
            ))
        return issues

    # ------------------------------------------------------------------
    # Per-family results
    # ------------------------------------------------------------------

    def _family_result(
        self,
        family: Family,
        issues: list[ClassificationIssue],
        statuses: dict[str, ClassificationStatus],
    ) -> FamilyValidationResult:
        return FamilyValidationResult(
            family_code=family.family_code,
            family_name=family.family_name,
            total_amount=family.total_amount,
            issues=issues,
            recommendation=recommend_approach(
                family, statuses, self.settings.summary_recommendation_threshold
            ),
        )

    def _log_summary(self, report: FamilyValidationReport) -> None:
        """Log validation summary."""
        self.logger.info(
            f"Family validation: {len(report.families)} families, "
            f"{len(report.issues)} issues ({report.critical_count} critical, "
            f"{report.auto_fixable_count} auto-fixable), "
            f"impact {format_currency(report.total_financial_impact)}"
        )


__all__ = ['FamilyValidator']
