# Path: acc_hier/loaders/report_rows.py
"""
Report Row Loader for acc_hier

Turns the raw rows of one report into Account objects.

Rows arrive as mappings with a code, a concept and credit/debit amounts
(None allowed). Both snake_case and camelCase keys are accepted, as are
the Spanish column names of the upload sheets (Codigo, Concepto, Abonos,
Cargos).

SIGN CONVENTION:
Every row, declared totals and leaves alike, is reduced to a single
signed amount as credits minus debits. Expense categories therefore
come out negative. Reconciliation compares these signed amounts on both
sides, so the rule must not be applied differently anywhere else.
"""

from typing import Any, Iterable, Mapping, Optional

from acc_hier.core.logger.ipo_logging import get_input_logger
from acc_hier.process.hierarchy.account_code import Account, parse_account_code, signed_amount, to_decimal


# ==============================================================================
# FIELD ALIASES
# ==============================================================================
CODE_KEYS = ('code', 'codigo', 'Codigo')
CONCEPT_KEYS = ('concept', 'concepto', 'Concepto')
CREDIT_KEYS = ('credit_amount', 'creditAmount', 'abonos', 'Abonos')
DEBIT_KEYS = ('debit_amount', 'debitAmount', 'cargos', 'Cargos')


def _first(row: Mapping[str, Any], keys: tuple) -> Optional[Any]:
    for key in keys:
        if key in row:
            return row[key]
    return None


class ReportRowLoader:
    """
    Loads report rows into Account objects.

    Never raises on a bad row: unparseable codes become invalid
    AccountCodes, unreadable amounts become zero.

    Example:
        loader = ReportRowLoader()
        accounts = loader.load([
            {'code': '4100-0000-000-000', 'concept': 'Ingresos',
             'credit_amount': 1000000, 'debit_amount': None},
        ])
    """

    def __init__(self):
        """Initialize report row loader."""
        self.logger = get_input_logger('report_rows')

    def load(self, rows: Iterable[Mapping[str, Any]]) -> list[Account]:
        """
        Load rows into accounts, preserving input order.

        Args:
            rows: Raw row mappings

        Returns:
            List of Account objects
        """
        accounts = [self.load_row(row) for row in rows]
        invalid = sum(1 for account in accounts if not account.code.is_valid)
        self.logger.info(f"Loaded {len(accounts)} report rows ({invalid} with malformed codes)")
        return accounts

    def load_row(self, row: Mapping[str, Any]) -> Account:
        """
        Load one row.

        Args:
            row: Raw row mapping

        Returns:
            Account with signed amount (credits - debits)
        """
        credit = to_decimal(_first(row, CREDIT_KEYS))
        debit = to_decimal(_first(row, DEBIT_KEYS))
        concept = _first(row, CONCEPT_KEYS)
        return Account(
            code=parse_account_code(_first(row, CODE_KEYS)),
            concept='' if concept is None else str(concept),
            amount=signed_amount(credit, debit),
            credit_amount=credit,
            debit_amount=debit,
        )


__all__ = ['ReportRowLoader', 'signed_amount']
