# Path: acc_hier/process/hierarchy/node.py
"""
Hierarchy Node - one account placed in the inferred hierarchy.

Nodes are built once per validation pass and never mutated; parent and
children are held as code strings and navigated through HierarchyForest.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .account_code import Account
from .constants import ParentType, DetectedBy


@dataclass(frozen=True)
class HierarchyNode:
    """
    An account with its resolved level, parent and children.

    Attributes:
        account: Source account row
        level: 1 (top total) to 4 (detail)
        parent: Parent code, None for roots
        parent_type: How the parent was found
        children: Codes of direct children, in input order
        detected_by: Strategy that decided the level
        warnings: Diagnostics from parsing and parent resolution
        grouped_with: Same-level anchor of a parentless code, None otherwise.
            A sibling link only; the anchor is not an ancestor.

    Example:
        node = forest.get('5000-1000-001-101')
        print(node.level, node.parent, node.parent_type.value)
    """
    account: Account
    level: int
    parent: Optional[str]
    parent_type: ParentType
    children: tuple = ()
    detected_by: DetectedBy = DetectedBy.ZERO_PATTERN
    warnings: tuple = ()
    grouped_with: Optional[str] = None

    @property
    def code(self) -> str:
        return self.account.code.code

    @property
    def family(self) -> tuple:
        return self.account.code.family

    @property
    def family_code(self) -> str:
        return self.account.code.family_code

    @property
    def amount(self) -> Decimal:
        return self.account.amount

    @property
    def concept(self) -> str:
        return self.account.concept

    @property
    def is_valid(self) -> bool:
        return self.account.code.is_valid

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> dict[str, Any]:
        """
        Convert node to a flat dictionary.

        Returns:
            Dictionary representation (amount as string)
        """
        return {
            'code': self.code,
            'concept': self.concept,
            'amount': str(self.amount),
            'level': self.level,
            'family': self.family_code,
            'parent': self.parent,
            'parent_type': self.parent_type.value,
            'children': list(self.children),
            'detected_by': self.detected_by.value,
            'grouped_with': self.grouped_with,
            'warnings': list(self.warnings),
        }

    def __str__(self) -> str:
        """String representation."""
        children_str = f" ({len(self.children)} children)" if self.children else ""
        return f"{self.code} {self.concept} = {self.amount}{children_str}"

    def __repr__(self) -> str:
        """Debug representation."""
        return (
            f"HierarchyNode(code='{self.code}', "
            f"level={self.level}, "
            f"parent={self.parent!r}, "
            f"parent_type={self.parent_type.value})"
        )


__all__ = ['HierarchyNode']
