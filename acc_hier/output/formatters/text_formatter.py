# Path: acc_hier/output/formatters/text_formatter.py
"""
Text Formatter

Renders a ReportValidationResult as ASCII text suitable for console
display and plain-text file output.
"""

from acc_hier.constants import (
    AmountCheckStatus,
    STATUS_OK,
    STATUS_FAIL,
    STATUS_WARN,
    STATUS_INFO,
    format_currency,
)
from acc_hier.process.engine import ReportValidationResult
from acc_hier.process.validation.models import ClassificationIssue, FamilyValidationResult
from .base_formatter import BaseFormatter

LINE_WIDTH = 70
DIVIDER = '=' * LINE_WIDTH
SUB_DIVIDER = '-' * LINE_WIDTH


class TextFormatter(BaseFormatter):
    """Renders result as ASCII text."""

    def __init__(self, show_tree: bool = True):
        self.show_tree = show_tree

    @property
    def format_name(self) -> str:
        return 'text'

    @property
    def file_extension(self) -> str:
        return '.txt'

    def format_result(self, result: ReportValidationResult) -> str:
        """Render full result as text."""
        lines = []
        lines.append('')
        lines.append(DIVIDER)
        lines.append(f"  CLASSIFICATION VALIDATION: {result.report_id or '<unnamed>'}")
        lines.append(f"  {STATUS_OK if result.is_valid else STATUS_FAIL} "
                     f"{'valid' if result.is_valid else 'needs attention'}")
        lines.append(DIVIDER)

        if result.error:
            lines.append('')
            lines.append(f"  {STATUS_FAIL} {result.error}")
            lines.append('')
            return '\n'.join(lines)

        lines.extend(self._render_reconciliation(result))
        lines.extend(self._render_families(result))
        lines.extend(self._render_orphans(result))
        lines.extend(self._render_amount_checks(result))
        lines.extend(self._render_corrections(result))
        if self.show_tree and result.forest is not None:
            lines.append('')
            lines.append(f"  HIERARCHY ({len(result.forest)} accounts):")
            lines.append(SUB_DIVIDER)
            lines.extend(f"    {line}" for line in result.forest.to_text().splitlines())

        lines.append('')
        return '\n'.join(lines)

    def _render_reconciliation(self, result: ReportValidationResult) -> list[str]:
        summary = result.summary
        lines = ['', '  RECONCILIATION:', SUB_DIVIDER]
        for category, declared in summary.hierarchy_totals.items():
            variance = summary.variance[category]
            classified = summary.classified_totals[category]
            lines.append(
                f"    {category:12s} declared {declared:>18,.2f}  "
                f"classified {classified:>18,.2f}  variance {variance:>14,.2f}"
            )
        for message in summary.errors:
            lines.append(f"    {STATUS_FAIL} {message}")
        if not summary.errors:
            lines.append(f"    {STATUS_OK} Totals reconcile")
        return lines

    def _render_families(self, result: ReportValidationResult) -> list[str]:
        families = [f for f in result.family_report.families if f.has_issues]
        lines = ['', f"  FAMILIES WITH ISSUES ({len(families)}):", SUB_DIVIDER]
        if not families:
            lines.append(f"    {STATUS_OK} No classification issues")
        for family in families:
            lines.extend(self._render_family(family))
        return lines

    def _render_family(self, family: FamilyValidationResult) -> list[str]:
        lines = [
            f"    {family.family_code} {family.family_name} "
            f"(impact {format_currency(family.financial_impact)})"
        ]
        for issue in family.issues:
            lines.extend(self._render_issue(issue))
        if family.recommendation:
            rec = family.recommendation
            lines.append(
                f"      {STATUS_INFO} {rec.approach.value} "
                f"({rec.current_completeness:.1f}% complete): {rec.reasoning}"
            )
        return lines

    def _render_issue(self, issue: ClassificationIssue) -> list[str]:
        tag = STATUS_FAIL if issue.priority_rank <= 2 else STATUS_WARN
        fix = ' [auto-fixable]' if issue.auto_fixable else ''
        lines = [
            f"      {tag} P{issue.priority_rank} {issue.severity.value} "
            f"{issue.issue_type.value}{fix}",
            f"           {issue.message}",
        ]
        for step in issue.resolution_steps:
            lines.append(f"           - {step}")
        return lines

    def _render_orphans(self, result: ReportValidationResult) -> list[str]:
        orphans = result.family_report.orphans
        if not orphans:
            return []
        lines = ['', f"  ORPHAN ACCOUNTS ({len(orphans)}):", SUB_DIVIDER]
        for issue in orphans:
            lines.append(f"    {STATUS_WARN} {issue.message}")
        return lines

    def _render_amount_checks(self, result: ReportValidationResult) -> list[str]:
        checks = [c for c in result.amount_checks if c.status != AmountCheckStatus.PERFECT]
        if not checks:
            return []
        lines = ['', f"  PARENT AMOUNT MISMATCHES ({len(checks)}):", SUB_DIVIDER]
        for check in checks:
            lines.append(
                f"    {STATUS_WARN} {check.parent_code} {check.status.value}: "
                f"{check.parent_amount:,.2f} vs children {check.children_sum:,.2f}"
            )
        return lines

    def _render_corrections(self, result: ReportValidationResult) -> list[str]:
        corrections = result.corrections
        if corrections is None or not corrections.corrections:
            return []
        lines = [
            '',
            f"  LEVEL CORRECTIONS ({corrections.corrected_accounts}/"
            f"{corrections.total_accounts}):",
            SUB_DIVIDER,
        ]
        for c in corrections.corrections:
            lines.append(f"    {STATUS_INFO} {c.code} L{c.old_level} -> L{c.new_level} ({c.reason})")
        return lines


__all__ = ['TextFormatter']
