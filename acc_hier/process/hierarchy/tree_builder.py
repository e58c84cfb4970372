# Path: acc_hier/process/hierarchy/tree_builder.py
"""
Hierarchy Builder - orchestrates parsing, level and parent resolution.

Given the full set of accounts of one report:
1. index every valid code (hash-set membership only)
2. resolve every level (needs the index for sequence evidence)
3. record levels in the index (sibling groups depend on them)
4. resolve every parent
5. derive children by inverse lookup

The result depends only on the set of codes, not on their order.

Example:
    builder = HierarchyBuilder()
    forest = builder.build(accounts)
    report = builder.correction_report(accounts)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional

from acc_hier.core.errors import EmptyInputError
from acc_hier.core.logger.ipo_logging import get_process_logger
from .account_code import Account, key_accounts
from .code_index import CodeIndex
from .constants import DetectedBy, ParentType
from .conventions import HierarchyConventions
from .forest import HierarchyForest
from .level_resolver import (
    HierarchyLevelResolver,
    LevelResolution,
    analyze_zero_pattern,
    is_problematic_shape,
)
from .node import HierarchyNode
from .parent_resolver import ParentResolver, ParentResolution


@dataclass(frozen=True)
class LevelCorrection:
    """A code whose resolved level differs from its plain zero-pattern level."""
    code: str
    old_level: int
    new_level: int
    reason: str
    detected_by: DetectedBy

    def to_dict(self) -> dict[str, Any]:
        return {
            'code': self.code,
            'old_level': self.old_level,
            'new_level': self.new_level,
            'reason': self.reason,
            'detected_by': self.detected_by.value,
        }


@dataclass
class CorrectionReport:
    """
    Level corrections made by family analysis over the zero pattern.

    Attributes:
        corrections: One entry per corrected code
        total_accounts: Accounts examined
    """
    corrections: list[LevelCorrection] = field(default_factory=list)
    total_accounts: int = 0

    @property
    def corrected_accounts(self) -> int:
        return len(self.corrections)

    @property
    def family_based_corrections(self) -> int:
        return sum(1 for c in self.corrections if c.detected_by == DetectedBy.FAMILY_ANALYSIS)

    @property
    def hybrid_corrections(self) -> int:
        return sum(1 for c in self.corrections if c.detected_by == DetectedBy.HYBRID)

    def to_dict(self) -> dict[str, Any]:
        return {
            'corrections': [c.to_dict() for c in self.corrections],
            'summary': {
                'total_accounts': self.total_accounts,
                'corrected_accounts': self.corrected_accounts,
                'family_based_corrections': self.family_based_corrections,
                'hybrid_corrections': self.hybrid_corrections,
            },
        }


class HierarchyBuilder:
    """
    Builds a HierarchyForest from the accounts of one report.

    Example:
        builder = HierarchyBuilder()
        forest = builder.build(accounts)
        for root in forest.roots:
            print(root.code, len(forest.descendants_of(root.code)))
    """

    def __init__(self, conventions: Optional[HierarchyConventions] = None):
        """
        Initialize the hierarchy builder.

        Args:
            conventions: Bucket conventions (defaults apply when None)
        """
        self.conventions = conventions or HierarchyConventions()
        self.level_resolver = HierarchyLevelResolver(self.conventions)
        self.logger = get_process_logger('hierarchy_builder')

    def build(self, accounts: Iterable[Account]) -> HierarchyForest:
        """
        Build the forest for one report.

        Args:
            accounts: Account rows of the report

        Returns:
            HierarchyForest

        Raises:
            EmptyInputError: If there are no accounts at all
        """
        unique = self._deduplicate(accounts)
        index, levels = self._resolve_levels(unique)

        parent_resolver = ParentResolver(index, self.conventions)
        parents: dict[str, ParentResolution] = {
            code: parent_resolver.resolve(account.code, levels[code].level)
            for code, account in unique.items()
        }
        self._break_cycles(parents)

        children: dict[str, list[str]] = {code: [] for code in unique}
        for code in unique:
            parent = parents[code].parent
            if parent is not None and parent in children:
                children[parent].append(code)

        nodes = [
            HierarchyNode(
                account=account,
                level=levels[code].level,
                parent=parents[code].parent,
                parent_type=parents[code].parent_type,
                children=tuple(children[code]),
                detected_by=levels[code].detected_by,
                warnings=parents[code].warnings,
                grouped_with=parents[code].grouped_with,
            )
            for code, account in unique.items()
        ]
        forest = HierarchyForest(nodes)
        self._log_summary(forest)
        return forest

    def correction_report(self, accounts: Iterable[Account]) -> CorrectionReport:
        """
        List codes whose resolved level differs from the zero pattern.

        Args:
            accounts: Account rows of the report

        Returns:
            CorrectionReport

        Raises:
            EmptyInputError: If there are no accounts at all
        """
        unique = self._deduplicate(accounts)
        _, levels = self._resolve_levels(unique)

        report = CorrectionReport(total_accounts=len(unique))
        for code, account in unique.items():
            old_level = analyze_zero_pattern(account.code).level
            resolution = levels[code]
            if old_level == resolution.level:
                continue
            report.corrections.append(LevelCorrection(
                code=code,
                old_level=old_level,
                new_level=resolution.level,
                reason=self._correction_reason(account, old_level, resolution.level),
                detected_by=resolution.detected_by,
            ))

        self.logger.info(
            f"Correction report: {report.corrected_accounts} of "
            f"{report.total_accounts} accounts re-leveled"
        )
        return report

    def _deduplicate(self, accounts: Iterable[Account]) -> dict[str, Account]:
        """Keep the first occurrence of each valid code; malformed rows all stay."""
        unique = key_accounts(accounts)
        if not unique:
            raise EmptyInputError()
        return unique

    def _resolve_levels(
        self,
        unique: dict[str, Account],
    ) -> tuple[CodeIndex, dict[str, LevelResolution]]:
        index = CodeIndex(account.code for account in unique.values())
        levels = {
            code: self.level_resolver.resolve(account.code, index)
            for code, account in unique.items()
        }
        index.set_levels({code: resolution.level for code, resolution in levels.items()})
        return index, levels

    def _break_cycles(self, parents: dict[str, ParentResolution]) -> None:
        """Turn any node whose parent chain leads back to itself into a root."""
        for code in parents:
            seen = {code}
            current = parents[code].parent
            while current is not None and current in parents:
                if current == code:
                    self.logger.warning(f"{code}: parent chain forms a cycle, kept as root")
                    parents[code] = ParentResolution(
                        parent=None,
                        parent_type=ParentType.ROOT,
                        warnings=parents[code].warnings + (
                            f"Parent link to {parents[code].parent} forms a cycle; kept as root",
                        ),
                        grouped_with=parents[code].grouped_with,
                    )
                    break
                if current in seen:
                    break
                seen.add(current)
                current = parents[current].parent

    def _correction_reason(self, account: Account, old_level: int, new_level: int) -> str:
        code = account.code
        if is_problematic_shape(code):
            return (
                f"{code.code} ends in -000 but belongs to family {code.family_code}; "
                f"level {old_level} -> {new_level}"
            )
        return f"Level adjusted from {old_level} to {new_level} by family analysis"

    def _log_summary(self, forest: HierarchyForest) -> None:
        warned = sum(1 for node in forest if node.warnings)
        orphans = sum(
            1 for node in forest
            if node.parent_type == ParentType.ROOT and node.level > 1
        )
        self.logger.info(
            f"Built hierarchy: {len(forest)} nodes, {len(forest.roots)} roots, "
            f"{orphans} orphan roots, {warned} nodes with warnings"
        )


__all__ = [
    'HierarchyBuilder',
    'CorrectionReport',
    'LevelCorrection',
]
