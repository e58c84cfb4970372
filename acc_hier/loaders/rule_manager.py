# Path: acc_hier/loaders/rule_manager.py
"""
Classification Rule Manager boundary for acc_hier

The code -> classification table is an external, versioned dataset. The
engine reads it through ClassificationRuleManager.get_classification and
hands approved fixes back as ClassificationDelta objects through
submit_deltas, which returns a RuleImpactSummary.

InMemoryRuleManager is a complete in-process implementation: it keeps at
most one classification per code and computes impact over the report
snapshots registered with it.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from acc_hier.constants import (
    DEFAULT_TIPO,
    DEFAULT_CATEGORIA_1,
    DEFAULT_SUB_CATEGORIA,
    DEFAULT_CLASIFICACION,
)
from acc_hier.core.logger.ipo_logging import get_input_logger
from acc_hier.process.hierarchy.account_code import Account


_DEFAULTS = {
    'tipo': DEFAULT_TIPO,
    'categoria_1': DEFAULT_CATEGORIA_1,
    'sub_categoria': DEFAULT_SUB_CATEGORIA,
    'clasificacion': DEFAULT_CLASIFICACION,
}


def _is_set(value: Optional[str], default: str) -> bool:
    return bool(value) and value.strip() != '' and value != default


@dataclass(frozen=True)
class ClassificationState:
    """
    Four-part business classification of one account.

    Attributes:
        tipo: Top category (e.g. 'Ingresos', 'Egresos')
        categoria_1: First-level category
        sub_categoria: Sub-category
        clasificacion: Final classification label
    """
    tipo: str = DEFAULT_TIPO
    categoria_1: str = DEFAULT_CATEGORIA_1
    sub_categoria: str = DEFAULT_SUB_CATEGORIA
    clasificacion: str = DEFAULT_CLASIFICACION

    @property
    def is_classified(self) -> bool:
        """Both tipo and categoria_1 are set; partial classification does not count."""
        return (
            _is_set(self.tipo, DEFAULT_TIPO)
            and _is_set(self.categoria_1, DEFAULT_CATEGORIA_1)
        )

    @property
    def is_unset(self) -> bool:
        """No field carries a non-default value."""
        return not any(
            _is_set(getattr(self, name), default) for name, default in _DEFAULTS.items()
        )

    @property
    def template_key(self) -> tuple:
        """(tipo, categoria_1, sub_categoria) used to compare sibling patterns."""
        return (self.tipo, self.categoria_1, self.sub_categoria)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ClassificationState:
        """Build from a mapping; missing or None fields take defaults."""
        values = {}
        for name, default in _DEFAULTS.items():
            value = data.get(name)
            values[name] = default if value is None else str(value)
        return cls(**values)

    def to_dict(self) -> dict[str, str]:
        return {
            'tipo': self.tipo,
            'categoria_1': self.categoria_1,
            'sub_categoria': self.sub_categoria,
            'clasificacion': self.clasificacion,
        }


def coerce_state(value: Any) -> Optional[ClassificationState]:
    """Accept a ClassificationState, a mapping or None."""
    if value is None or isinstance(value, ClassificationState):
        return value
    if isinstance(value, Mapping):
        return ClassificationState.from_dict(value)
    raise TypeError(f"Cannot use {type(value).__name__} as a classification state")


@dataclass(frozen=True)
class ClassificationDelta:
    """
    A proposed classification change handed to the rule manager.

    Attributes:
        code: Account code the change applies to
        new_classification: Classification to store (None clears it)
        reason: Human-readable justification
    """
    code: str
    new_classification: Optional[ClassificationState]
    reason: str = ''

    def to_dict(self) -> dict[str, Any]:
        return {
            'code': self.code,
            'new_classification': (
                self.new_classification.to_dict() if self.new_classification else None
            ),
            'reason': self.reason,
        }


@dataclass
class RuleImpactSummary:
    """
    Impact of applying deltas across stored reports.

    Attributes:
        affected_records: Report rows whose classification changed
        affected_reports: Ids of reports containing such rows
        total_financial_impact: Sum of |amount| of affected rows
    """
    affected_records: int = 0
    affected_reports: list[str] = field(default_factory=list)
    total_financial_impact: Decimal = Decimal('0')

    def to_dict(self) -> dict[str, Any]:
        return {
            'affected_records': self.affected_records,
            'affected_reports': list(self.affected_reports),
            'total_financial_impact': str(self.total_financial_impact),
        }


class ClassificationRuleManager(ABC):
    """
    Read/feedback interface to the classification rule table.
    """

    @abstractmethod
    def get_classification(self, code: str) -> Optional[ClassificationState]:
        """
        Current classification of a code.

        Args:
            code: Canonical account code

        Returns:
            ClassificationState or None when the code has no rule
        """

    @abstractmethod
    def submit_deltas(self, deltas: Iterable[ClassificationDelta]) -> RuleImpactSummary:
        """
        Persist approved deltas and report their retroactive impact.

        Args:
            deltas: Approved classification changes

        Returns:
            RuleImpactSummary
        """


StateSource = Union[
    ClassificationRuleManager,
    Mapping[str, Any],
    Callable[[str], Optional[ClassificationState]],
    None,
]


def state_lookup(states: StateSource) -> Callable[[str], Optional[ClassificationState]]:
    """
    Normalize a rule manager or a plain mapping into a lookup function.

    Args:
        states: ClassificationRuleManager, mapping code -> state/dict,
            an existing lookup function, or None

    Returns:
        Function code -> Optional[ClassificationState]
    """
    if states is None:
        return lambda code: None
    if isinstance(states, ClassificationRuleManager):
        return states.get_classification
    if isinstance(states, Mapping):
        return lambda code: coerce_state(states.get(code))
    return states


class InMemoryRuleManager(ClassificationRuleManager):
    """
    Rule table held in memory.

    Keeps at most one classification per code: loading a code twice
    keeps the last value and logs the conflict as a data-quality issue.

    Example:
        manager = InMemoryRuleManager({'5000-1000-001-101': {'tipo': 'Egresos', ...}})
        manager.register_report('2024-01', accounts)
        impact = manager.submit_deltas(deltas)
    """

    def __init__(self, classifications: Optional[Mapping[str, Any]] = None):
        """
        Initialize manager.

        Args:
            classifications: Initial mapping code -> state or dict
        """
        self.logger = get_input_logger('rule_manager')
        self._rules: dict[str, ClassificationState] = {}
        self._reports: dict[str, list[Account]] = {}
        self._lock = threading.Lock()
        if classifications:
            self.load(classifications.items())

    def __len__(self) -> int:
        return len(self._rules)

    def load(self, entries: Iterable[tuple]) -> int:
        """
        Load (code, classification) pairs.

        Args:
            entries: Iterable of (code, state or dict)

        Returns:
            Number of distinct codes after loading
        """
        with self._lock:
            for code, value in entries:
                state = coerce_state(value)
                if state is None:
                    continue
                existing = self._rules.get(code)
                if existing is not None and existing != state:
                    self.logger.warning(
                        f"Duplicate rule for {code}: replacing "
                        f"{existing.template_key} with {state.template_key}"
                    )
                self._rules[code] = state
            count = len(self._rules)
        self.logger.info(f"Rule table holds {count} classifications")
        return count

    def get_classification(self, code: str) -> Optional[ClassificationState]:
        with self._lock:
            return self._rules.get(code)

    def register_report(self, report_id: str, accounts: Iterable[Account]) -> None:
        """
        Keep a snapshot of a report's rows for retroactive impact.

        Args:
            report_id: Report identifier
            accounts: Rows of the report
        """
        with self._lock:
            self._reports[report_id] = list(accounts)

    @property
    def report_ids(self) -> list[str]:
        with self._lock:
            return list(self._reports)

    def report_accounts(self, report_id: str) -> list[Account]:
        with self._lock:
            return list(self._reports.get(report_id, []))

    def submit_deltas(self, deltas: Iterable[ClassificationDelta]) -> RuleImpactSummary:
        deltas = list(deltas)
        summary = RuleImpactSummary()

        with self._lock:
            changed = set()
            for delta in deltas:
                previous = self._rules.get(delta.code)
                if delta.new_classification is None:
                    self._rules.pop(delta.code, None)
                else:
                    self._rules[delta.code] = delta.new_classification
                if previous != delta.new_classification:
                    changed.add(delta.code)
                self.logger.debug(f"Delta applied to {delta.code}: {delta.reason}")

            for report_id, accounts in self._reports.items():
                hit = False
                for account in accounts:
                    if account.code.code in changed:
                        summary.affected_records += 1
                        summary.total_financial_impact += abs(account.amount)
                        hit = True
                if hit:
                    summary.affected_reports.append(report_id)

        self.logger.info(
            f"Applied {len(deltas)} deltas: {summary.affected_records} records in "
            f"{len(summary.affected_reports)} reports, impact {summary.total_financial_impact}"
        )
        return summary


__all__ = [
    'ClassificationState',
    'ClassificationDelta',
    'RuleImpactSummary',
    'ClassificationRuleManager',
    'InMemoryRuleManager',
    'StateSource',
    'state_lookup',
    'coerce_state',
]
