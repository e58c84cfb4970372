# Path: acc_hier/process/hierarchy/account_code.py
"""
Account codes and accounts.

An account code is four hyphen-delimited segments, e.g. 5000-1000-001-101.
The first two segments form the "family" key. Upstream data is not fully
trustworthy, so parsing never raises: a code that does not split into
exactly four non-empty segments degrades to the all-zero default shape and
is flagged invalid.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional

from acc_hier.core.logger.ipo_logging import get_input_logger
from .constants import (
    SEGMENT_SEPARATOR,
    SEGMENT_COUNT,
    DEFAULT_SEGMENTS,
    ZERO_S3,
    ZERO_S4,
    ZERO_S2,
)


logger = get_input_logger('account_code')

BLANK_CODE = "<blank>"


def is_zero_segment(segment: str) -> bool:
    """True for zero-padding sentinels ('0000', '000', ...)."""
    return bool(segment) and set(segment) == {'0'}


@dataclass(frozen=True)
class AccountCode:
    """
    Parsed four-segment account code.

    Attributes:
        raw: Text as received (None becomes '')
        segments: (s1, s2, s3, s4)
        is_valid: False when the raw text could not be parsed
    """
    raw: str
    segments: tuple
    is_valid: bool = True

    @property
    def s1(self) -> str:
        return self.segments[0]

    @property
    def s2(self) -> str:
        return self.segments[1]

    @property
    def s3(self) -> str:
        return self.segments[2]

    @property
    def s4(self) -> str:
        return self.segments[3]

    @property
    def code(self) -> str:
        """Canonical code text; malformed codes keep their raw text."""
        if not self.is_valid:
            return self.raw
        return SEGMENT_SEPARATOR.join(self.segments)

    @property
    def family(self) -> tuple:
        return (self.s1, self.s2)

    @property
    def family_code(self) -> str:
        return f"{self.s1}{SEGMENT_SEPARATOR}{self.s2}"

    @property
    def is_top_level_shape(self) -> bool:
        """s2, s3 and s4 are all zero sentinels (e.g. 4100-0000-000-000)."""
        return (
            is_zero_segment(self.s2)
            and is_zero_segment(self.s3)
            and is_zero_segment(self.s4)
        )

    @property
    def is_family_root_shape(self) -> bool:
        """s3 and s4 are zero sentinels (e.g. 5000-2000-000-000)."""
        return is_zero_segment(self.s3) and is_zero_segment(self.s4)

    @property
    def is_subcategory_shape(self) -> bool:
        """s4 is a zero sentinel, s3 is not (e.g. 5000-2000-020-000)."""
        return is_zero_segment(self.s4) and not is_zero_segment(self.s3)

    def parent_code(self, s3: Optional[str] = None) -> str:
        """
        Build a candidate ancestor code inside this code's family.

        Args:
            s3: Third segment to keep, or None for the family root

        Returns:
            '(s1)-(s2)-(s3)-000' or '(s1)-(s2)-000-000'
        """
        return SEGMENT_SEPARATOR.join(
            (self.s1, self.s2, s3 if s3 is not None else ZERO_S3, ZERO_S4)
        )

    def top_level_code(self) -> str:
        """Level-1 code for this code's prefix: '(s1)-0000-000-000'."""
        return SEGMENT_SEPARATOR.join((self.s1, ZERO_S2, ZERO_S3, ZERO_S4))

    def __str__(self) -> str:
        return self.code


def parse_account_code(raw: Any) -> AccountCode:
    """
    Parse a raw code into an AccountCode.

    Never raises. Empty, None or malformed input returns the default
    segments with is_valid=False and logs a warning.

    Args:
        raw: Code text (anything else is treated as malformed)

    Returns:
        AccountCode
    """
    if raw is None:
        logger.warning("Empty account code (None); using default segments")
        return AccountCode(raw='', segments=DEFAULT_SEGMENTS, is_valid=False)

    text = str(raw).strip()
    if not text:
        logger.warning("Empty account code; using default segments")
        return AccountCode(raw=text, segments=DEFAULT_SEGMENTS, is_valid=False)

    parts = [part.strip() for part in text.split(SEGMENT_SEPARATOR)]
    if len(parts) != SEGMENT_COUNT or not all(parts):
        logger.warning(
            f"Malformed account code '{text}': expected {SEGMENT_COUNT} "
            f"non-empty segments, got {len(parts)}"
        )
        return AccountCode(raw=text, segments=DEFAULT_SEGMENTS, is_valid=False)

    return AccountCode(raw=text, segments=tuple(parts), is_valid=True)


def to_decimal(value: Any) -> Decimal:
    """
    Convert an amount field to Decimal; None and blanks become zero.

    Floats go through str() so 0.1 stays 0.1.
    """
    if value is None:
        return Decimal('0')
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    text = str(value).strip().replace(',', '')
    if not text:
        return Decimal('0')
    try:
        return Decimal(text)
    except InvalidOperation:
        logger.warning(f"Unreadable amount '{text}'; using 0")
        return Decimal('0')


def signed_amount(credit_amount: Any, debit_amount: Any) -> Decimal:
    """
    Reduce a row to one signed amount: credits minus debits.

    Every Account amount is produced here, so declared totals and leaves
    always share the same sign convention.

    Args:
        credit_amount: Credit side (None is 0)
        debit_amount: Debit side (None is 0)

    Returns:
        Signed Decimal amount
    """
    return to_decimal(credit_amount) - to_decimal(debit_amount)


@dataclass(frozen=True)
class Account:
    """
    One row of a report: code, concept and amounts.

    Attributes:
        code: Parsed account code
        concept: Account description
        amount: Signed amount (credits minus debits)
        credit_amount: Declared credit amount
        debit_amount: Declared debit amount
    """
    code: AccountCode
    concept: str = ''
    amount: Decimal = Decimal('0')
    credit_amount: Decimal = Decimal('0')
    debit_amount: Decimal = Decimal('0')

    @property
    def code_str(self) -> str:
        return self.code.code

    @classmethod
    def from_code(
        cls,
        code: str,
        concept: str = '',
        amount: Any = None,
    ) -> Account:
        """
        Convenience constructor for a row with a single signed amount.

        A positive amount is recorded as a credit, a negative one as a debit.
        """
        signed = to_decimal(amount)
        credit = signed if signed > 0 else Decimal('0')
        debit = -signed if signed < 0 else Decimal('0')
        return cls(
            code=parse_account_code(code),
            concept=concept,
            amount=signed_amount(credit, debit),
            credit_amount=credit,
            debit_amount=debit,
        )


def key_accounts(accounts: Iterable[Account]) -> dict[str, Account]:
    """
    Key the rows of one report by code text, in input order.

    A repeated valid code keeps its first row. Malformed rows are never
    merged: a blank code, or a malformed code already seen, is re-keyed
    as '<text>#<row number>' (rows count from 1).

    Args:
        accounts: Account rows of the report

    Returns:
        Dictionary code -> Account
    """
    unique: dict[str, Account] = {}
    for position, account in enumerate(accounts, start=1):
        key = account.code.code
        if account.code.is_valid:
            if key in unique:
                logger.warning(f"Duplicate account code {key!r}: keeping first occurrence")
                continue
        elif not key or key in unique:
            key = f"{key or BLANK_CODE}#{position}"
            account = replace(account, code=replace(account.code, raw=key))
        unique[key] = account
    return unique


__all__ = [
    'AccountCode',
    'Account',
    'parse_account_code',
    'is_zero_segment',
    'to_decimal',
    'signed_amount',
    'key_accounts',
]
