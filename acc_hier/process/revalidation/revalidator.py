# Path: acc_hier/process/revalidation/revalidator.py
"""
Retroactive Re-validation

After classification rules change, every historical report has to be
validated again. Reports are independent, so they are fanned out over a
thread pool and the results are fanned back in. Each report is still
computed single-threaded and deterministically by ReportValidationEngine.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.loaders.rule_manager import InMemoryRuleManager, StateSource
from acc_hier.process.engine import ReportValidationEngine, ReportValidationResult, Row
from acc_hier.process.settings import EngineSettings


Reports = Union[Mapping[str, Iterable[Row]], Iterable[tuple]]


@dataclass
class RevalidationSummary:
    """
    Fan-in of a retroactive run.

    Attributes:
        results: Per-report results, in input order
        failing_reports: Report ids that did not validate
        total_unclassified_items: Sum over all reports
    """
    results: list[ReportValidationResult] = field(default_factory=list)
    failing_reports: list[str] = field(default_factory=list)
    total_unclassified_items: int = 0

    @property
    def total_reports(self) -> int:
        return len(self.results)

    @property
    def all_valid(self) -> bool:
        return not self.failing_reports

    def get(self, report_id: str) -> Optional[ReportValidationResult]:
        for result in self.results:
            if result.report_id == report_id:
                return result
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            'total_reports': self.total_reports,
            'failing_reports': list(self.failing_reports),
            'total_unclassified_items': self.total_unclassified_items,
            'reports': {
                r.report_id: r.summary.to_dict() if r.summary else {'error': r.error}
                for r in self.results
            },
        }


class RetroactiveRevalidator:
    """
    Re-validates many reports against the current rule table.

    Example:
        revalidator = RetroactiveRevalidator()
        summary = revalidator.revalidate({'2024-01': rows_jan, '2024-02': rows_feb}, manager)
        print(summary.failing_reports)
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize revalidator.

        Args:
            settings: Engine settings; max_workers sizes the thread pool
        """
        self.settings = settings or EngineSettings()
        self.engine = ReportValidationEngine(self.settings)
        self.logger = get_process_logger('revalidator')

    def revalidate(self, reports: Reports, rule_manager: StateSource) -> RevalidationSummary:
        """
        Validate every report with the current classifications.

        Args:
            reports: Mapping report_id -> rows, or iterable of (report_id, rows)
            rule_manager: Rule manager or mapping code -> classification

        Returns:
            RevalidationSummary
        """
        items = list(reports.items()) if isinstance(reports, Mapping) else list(reports)
        self.logger.info(
            f"Re-validating {len(items)} reports with {self.settings.max_workers} workers"
        )

        with ThreadPoolExecutor(max_workers=self.settings.max_workers) as executor:
            futures = [
                executor.submit(self.engine.validate_report, list(rows), rule_manager, report_id)
                for report_id, rows in items
            ]
            results = [future.result() for future in futures]

        summary = RevalidationSummary(results=results)
        for result in results:
            summary.total_unclassified_items += result.unclassified_items
            if not result.is_valid:
                summary.failing_reports.append(result.report_id)

        self._log_summary(summary)
        return summary

    def revalidate_registered(self, rule_manager: InMemoryRuleManager) -> RevalidationSummary:
        """
        Re-validate the report snapshots held by an in-memory rule manager.

        Args:
            rule_manager: Manager with registered reports

        Returns:
            RevalidationSummary
        """
        reports = [
            (report_id, rule_manager.report_accounts(report_id))
            for report_id in rule_manager.report_ids
        ]
        return self.revalidate(reports, rule_manager)

    def _log_summary(self, summary: RevalidationSummary) -> None:
        """Log re-validation summary."""
        self.logger.info(
            f"Re-validation complete: {summary.total_reports - len(summary.failing_reports)}/"
            f"{summary.total_reports} reports valid, "
            f"{summary.total_unclassified_items} unclassified items"
        )
        for report_id in summary.failing_reports:
            self.logger.warning(f"Report {report_id} failed validation")


__all__ = ['RetroactiveRevalidator', 'RevalidationSummary']
