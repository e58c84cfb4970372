# Path: acc_hier/process/validation/status.py
"""
Classification status of every node of a forest.

CLASSIFIED comes straight from the rule table (tipo and categoria_1 both
set). IMPLICITLY_CLASSIFIED is derived: an unclassified node with at
least one child whose children are all covered, recursively. It is never
written back anywhere.
"""

from typing import Callable, Optional

from acc_hier.constants import ClassificationStatus
from acc_hier.loaders.rule_manager import ClassificationState
from acc_hier.process.hierarchy.forest import HierarchyForest


COVERED_STATUSES = frozenset({
    ClassificationStatus.CLASSIFIED,
    ClassificationStatus.IMPLICITLY_CLASSIFIED,
})


def is_covered(status: ClassificationStatus) -> bool:
    """True for CLASSIFIED and IMPLICITLY_CLASSIFIED."""
    return status in COVERED_STATUSES


def compute_statuses(
    forest: HierarchyForest,
    lookup: Callable[[str], Optional[ClassificationState]],
) -> dict[str, ClassificationStatus]:
    """
    Status of every node, children resolved before parents.

    Args:
        forest: Hierarchy of the report
        lookup: code -> ClassificationState or None

    Returns:
        Mapping code -> ClassificationStatus
    """
    statuses: dict[str, ClassificationStatus] = {}

    for node in reversed(list(forest.iter_preorder())):
        state = lookup(node.code)
        if state is not None and state.is_classified:
            statuses[node.code] = ClassificationStatus.CLASSIFIED
            continue

        child_statuses = [statuses.get(child) for child in node.children]
        if child_statuses and all(s is not None and is_covered(s) for s in child_statuses):
            statuses[node.code] = ClassificationStatus.IMPLICITLY_CLASSIFIED
        else:
            statuses[node.code] = ClassificationStatus.UNCLASSIFIED

    # Nodes unreachable from a root cannot occur after cycle breaking,
    # but every code still gets a status.
    for node in forest:
        if node.code not in statuses:
            state = lookup(node.code)
            statuses[node.code] = (
                ClassificationStatus.CLASSIFIED
                if state is not None and state.is_classified
                else ClassificationStatus.UNCLASSIFIED
            )
    return statuses


__all__ = ['compute_statuses', 'is_covered', 'COVERED_STATUSES']
