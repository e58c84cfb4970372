# Path: acc_hier/process/engine.py
"""
Report Validation Engine

Runs the full pipeline for one report:
    rows -> accounts -> hierarchy forest -> family validation -> reconciliation

Level corrections and parent/children amount checks are produced along
the way. An empty report does not raise: the error is carried on the
result so batch callers can keep going.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Union

from acc_hier.core.errors import EmptyInputError
from acc_hier.core.logger.ipo_logging import get_process_logger
from acc_hier.loaders.report_rows import ReportRowLoader
from acc_hier.loaders.rule_manager import StateSource, coerce_state, state_lookup
from acc_hier.process.hierarchy.account_code import Account
from acc_hier.process.hierarchy.forest import HierarchyForest
from acc_hier.process.hierarchy.tree_builder import CorrectionReport, HierarchyBuilder
from acc_hier.process.reconciliation.reconciler import HierarchyReconciler, ValidationSummary
from acc_hier.process.settings import EngineSettings
from acc_hier.process.validation.amount_checker import AmountCheckResult, HierarchyAmountChecker
from acc_hier.process.validation.family_validator import FamilyValidator
from acc_hier.process.validation.models import FamilyValidationReport
from acc_hier.process.validation.pre_apply import PreApplyResult, PreApplyValidator


Row = Union[Mapping[str, Any], Account]


@dataclass
class ReportValidationResult:
    """
    Everything produced for one report.

    Attributes:
        report_id: Identifier of the report (may be None)
        forest: Hierarchy of the report
        family_report: Classification-consistency findings
        summary: Reconciliation of declared vs classified totals
        corrections: Codes re-leveled by family analysis
        amount_checks: Parent vs children amount comparisons (non-perfect only)
        error: Message when the report could not be processed
    """
    report_id: Optional[str] = None
    forest: Optional[HierarchyForest] = None
    family_report: Optional[FamilyValidationReport] = None
    summary: Optional[ValidationSummary] = None
    corrections: Optional[CorrectionReport] = None
    amount_checks: list[AmountCheckResult] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        """Processed, reconciled and free of classification issues."""
        if self.error or self.summary is None or self.family_report is None:
            return False
        return self.summary.is_valid and not self.family_report.issues

    @property
    def unclassified_items(self) -> int:
        return self.summary.unclassified_items if self.summary else 0

    def to_dict(self) -> dict[str, Any]:
        return {
            'report_id': self.report_id,
            'is_valid': self.is_valid,
            'error': self.error,
            'nodes': self.forest.to_dicts() if self.forest else [],
            'family_report': self.family_report.to_dict() if self.family_report else None,
            'summary': self.summary.to_dict() if self.summary else None,
            'corrections': self.corrections.to_dict() if self.corrections else None,
            'amount_checks': [r.to_dict() for r in self.amount_checks],
        }


class ReportValidationEngine:
    """
    Validates classification consistency of financial reports.

    Example:
        engine = ReportValidationEngine()
        result = engine.validate_report(rows, rule_manager, report_id='2024-01')
        for issue in result.family_report.issues:
            print(issue.issue_type.value, issue.family_code)
    """

    def __init__(self, settings: Optional[EngineSettings] = None):
        """
        Initialize engine.

        Args:
            settings: Thresholds and conventions (defaults apply when None)
        """
        self.settings = settings or EngineSettings()
        self.loader = ReportRowLoader()
        self.builder = HierarchyBuilder(self.settings.conventions)
        self.validator = FamilyValidator(self.settings)
        self.reconciler = HierarchyReconciler(self.settings)
        self.amount_checker = HierarchyAmountChecker()
        self.pre_apply = PreApplyValidator()
        self.logger = get_process_logger('engine')

    def validate_report(
        self,
        rows: Iterable[Row],
        rule_manager: StateSource,
        report_id: Optional[str] = None,
    ) -> ReportValidationResult:
        """
        Validate one report against the current classifications.

        Args:
            rows: Raw rows (mappings) or already loaded Account objects
            rule_manager: Rule manager or mapping code -> classification
            report_id: Optional identifier carried on the result

        Returns:
            ReportValidationResult
        """
        result = ReportValidationResult(report_id=report_id)
        accounts = self.load_accounts(rows)

        try:
            forest = self.builder.build(accounts)
            corrections = self.builder.correction_report(accounts)
        except EmptyInputError as e:
            self.logger.warning(f"Report {report_id or '<unnamed>'} skipped: {e}")
            result.error = str(e)
            return result

        lookup = state_lookup(rule_manager)
        result.forest = forest
        result.corrections = corrections
        result.family_report = self.validator.validate(forest, lookup)
        result.summary = self.reconciler.reconcile(accounts, lookup, forest)
        result.amount_checks = self.amount_checker.check(forest, include_perfect=False)

        self.logger.info(
            f"Report {report_id or '<unnamed>'}: {len(forest)} accounts, "
            f"{len(result.family_report.issues)} issues, "
            f"reconciliation {'valid' if result.summary.is_valid else 'INVALID'}"
        )
        return result

    def check_classification(
        self,
        code: str,
        proposed: Any,
        forest: HierarchyForest,
        rule_manager: StateSource,
    ) -> PreApplyResult:
        """
        Pre-apply check of a proposed classification on one report.

        Args:
            code: Account code to classify
            proposed: ClassificationState, dict, or None
            forest: Hierarchy of the report
            rule_manager: Current classifications

        Returns:
            PreApplyResult
        """
        return self.pre_apply.check(code, coerce_state(proposed), forest, rule_manager)

    def load_accounts(self, rows: Iterable[Row]) -> list[Account]:
        """Load mappings into Account objects; Account rows pass through."""
        accounts = []
        for row in rows:
            if isinstance(row, Account):
                accounts.append(row)
            else:
                accounts.append(self.loader.load_row(row))
        return accounts


__all__ = ['ReportValidationEngine', 'ReportValidationResult']
