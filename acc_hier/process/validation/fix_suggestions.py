# Path: acc_hier/process/validation/fix_suggestions.py
"""
Fix suggestions for classification issues.

Suggestions are ClassificationDelta lists for the rule manager. Nothing
here applies a change: a human (or an approval workflow) picks a
suggestion and submits it.
"""

from acc_hier.constants import IssueType, OverClassificationChoice
from acc_hier.loaders.rule_manager import ClassificationDelta
from .models import ClassificationIssue


def suggest_fixes(issue: ClassificationIssue) -> list[ClassificationDelta]:
    """
    Deltas that resolve an auto-fixable mixed sibling group.

    The shared template of the classified siblings is copied onto each
    unclassified sibling. Any other issue returns an empty list.

    Args:
        issue: Issue from FamilyValidator

    Returns:
        List of ClassificationDelta
    """
    if issue.issue_type != IssueType.MIXED_LEVEL4_SIBLINGS:
        return []
    if not issue.auto_fixable or issue.suggested_template is None:
        return []

    template = issue.suggested_template
    return [
        ClassificationDelta(
            code=code,
            new_classification=template,
            reason=(
                f"Copy sibling classification {template.tipo} / {template.categoria_1} / "
                f"{template.sub_categoria} ({issue.issue_id})"
            ),
        )
        for code in issue.unclassified_children
    ]


def resolution_options(
    issue: ClassificationIssue,
) -> dict[OverClassificationChoice, list[ClassificationDelta]]:
    """
    The two explicit ways out of a parent/descendant overlap.

    KEEP_DETAIL clears the parent; KEEP_SUMMARY clears every classified
    descendant. Applies to OVER_CLASSIFICATION and
    DUPLICATE_CLASSIFICATION; other issues return an empty dict.

    Args:
        issue: Issue from FamilyValidator

    Returns:
        Mapping choice -> deltas
    """
    if issue.issue_type not in (IssueType.OVER_CLASSIFICATION, IssueType.DUPLICATE_CLASSIFICATION):
        return {}
    if issue.parent_account is None:
        return {}

    keep_detail = [
        ClassificationDelta(
            code=issue.parent_account,
            new_classification=None,
            reason=f"Keep detail classification; clear parent ({issue.issue_id})",
        )
    ]
    keep_summary = [
        ClassificationDelta(
            code=code,
            new_classification=None,
            reason=f"Keep summary classification on {issue.parent_account} ({issue.issue_id})",
        )
        for code in issue.classified_descendants
    ]
    return {
        OverClassificationChoice.KEEP_DETAIL: keep_detail,
        OverClassificationChoice.KEEP_SUMMARY: keep_summary,
    }


__all__ = ['suggest_fixes', 'resolution_options']
