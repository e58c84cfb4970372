# Path: acc_hier/process/validation/family.py
"""
Families: accounts sharing the first two code segments.

A family is recomputed per validation run from the forest and is
partitioned by resolved level. Malformed codes belong to no family.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from acc_hier.process.hierarchy.forest import HierarchyForest
from acc_hier.process.hierarchy.node import HierarchyNode


@dataclass
class Family:
    """
    Nodes of one family.

    Attributes:
        family_code: 's1-s2' key
        nodes: Members in input order
    """
    family_code: str
    nodes: list[HierarchyNode] = field(default_factory=list)

    def level(self, level: int) -> list[HierarchyNode]:
        """Members at one level."""
        return [node for node in self.nodes if node.level == level]

    @property
    def family_name(self) -> str:
        """Concept of the first level-2 member, else level-1, else first member."""
        for level in (2, 1):
            for node in self.nodes:
                if node.level == level and node.concept:
                    return node.concept
        for node in self.nodes:
            if node.concept:
                return node.concept
        return self.family_code

    @property
    def total_amount(self) -> Decimal:
        """Sum of |amount| of the family's leaf members."""
        return sum((abs(node.amount) for node in self.nodes if node.is_leaf), Decimal('0'))


def group_families(forest: HierarchyForest) -> list[Family]:
    """
    Group valid nodes by family, in order of first appearance.

    Args:
        forest: Hierarchy of the report

    Returns:
        List of Family
    """
    return [
        Family(family_code=family_code, nodes=nodes)
        for family_code, nodes in forest.families().items()
    ]


__all__ = ['Family', 'group_families']
