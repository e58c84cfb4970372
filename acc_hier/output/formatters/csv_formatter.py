# Path: acc_hier/output/formatters/csv_formatter.py
"""
CSV Formatter

Renders the classification issues of a result as CSV for spreadsheet
review. One row per issue, ordered as the validator sorted them.
"""

import csv
import io

from acc_hier.process.engine import ReportValidationResult
from .base_formatter import BaseFormatter


CSV_COLUMNS = [
    'report_id', 'issue_id', 'issue_type', 'severity', 'priority_rank',
    'family_code', 'parent_account', 'financial_impact', 'completeness_pct',
    'auto_fixable', 'classified_children', 'unclassified_children', 'message',
]


class CsvFormatter(BaseFormatter):
    """Renders issues as CSV."""

    @property
    def format_name(self) -> str:
        return 'csv'

    @property
    def file_extension(self) -> str:
        return '.csv'

    def format_result(self, result: ReportValidationResult) -> str:
        """Render issues as CSV string."""
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(CSV_COLUMNS)

        if result.family_report is None:
            return output.getvalue()

        for issue in result.family_report.issues:
            writer.writerow([
                result.report_id or '',
                issue.issue_id,
                issue.issue_type.value,
                issue.severity.value,
                issue.priority_rank,
                issue.family_code,
                issue.parent_account or '',
                str(issue.financial_impact),
                self._format_value(issue.completeness_pct),
                issue.auto_fixable,
                ';'.join(issue.classified_children),
                ';'.join(issue.unclassified_children),
                issue.message,
            ])

        return output.getvalue()

    def _format_value(self, value) -> str:
        """Format a value for CSV output."""
        if value is None:
            return ''
        if isinstance(value, float):
            return f"{value:.1f}"
        return str(value)


__all__ = ['CsvFormatter']
