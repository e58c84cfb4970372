# Path: acc_hier/process/hierarchy/forest.py
"""
Hierarchy Forest - immutable collection of the nodes of one report.

Provides navigation (roots, children, ancestors, descendants) and
text/dict renderings for diagnostic views.
"""

from __future__ import annotations

from typing import Any, Iterator, Optional

from .constants import DEFAULT_INDENT_SIZE
from .node import HierarchyNode


class HierarchyForest:
    """
    Nodes of one report keyed by code, in input order.

    Example:
        forest = builder.build(accounts)
        for node in forest.iter_preorder():
            print(node.level, node.code)
    """

    def __init__(self, nodes: list[HierarchyNode]):
        self._nodes: dict[str, HierarchyNode] = {node.code: node for node in nodes}

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[HierarchyNode]:
        return iter(self._nodes.values())

    def __contains__(self, code: str) -> bool:
        return code in self._nodes

    @property
    def nodes(self) -> list[HierarchyNode]:
        return list(self._nodes.values())

    @property
    def roots(self) -> list[HierarchyNode]:
        return [node for node in self._nodes.values() if node.is_root]

    def get(self, code: str) -> Optional[HierarchyNode]:
        return self._nodes.get(code)

    def children_of(self, code: str) -> list[HierarchyNode]:
        """Direct children of a code."""
        node = self._nodes.get(code)
        if node is None:
            return []
        return [self._nodes[child] for child in node.children if child in self._nodes]

    def parent_of(self, code: str) -> Optional[HierarchyNode]:
        node = self._nodes.get(code)
        if node is None or node.parent is None:
            return None
        return self._nodes.get(node.parent)

    def ancestors_of(self, code: str) -> list[HierarchyNode]:
        """Ancestors from the direct parent up to the root."""
        result = []
        seen = {code}
        current = self.parent_of(code)
        while current is not None and current.code not in seen:
            result.append(current)
            seen.add(current.code)
            current = self.parent_of(current.code)
        return result

    def descendants_of(self, code: str) -> list[HierarchyNode]:
        """All descendants of a code in pre-order (excluding the code)."""
        result = []
        seen = {code}
        stack = list(reversed(self.children_of(code)))
        while stack:
            node = stack.pop()
            if node.code in seen:
                continue
            seen.add(node.code)
            result.append(node)
            stack.extend(reversed(self.children_of(node.code)))
        return result

    def iter_preorder(self) -> Iterator[HierarchyNode]:
        """Iterate every tree depth-first, roots in input order."""
        for root in self.roots:
            yield root
            yield from self.descendants_of(root.code)

    def depth_of(self, code: str) -> int:
        """Distance from the root of the code's tree (roots are 0)."""
        return len(self.ancestors_of(code))

    def families(self) -> dict[str, list[HierarchyNode]]:
        """Nodes grouped by family code, malformed codes excluded."""
        result: dict[str, list[HierarchyNode]] = {}
        for node in self._nodes.values():
            if node.is_valid:
                result.setdefault(node.family_code, []).append(node)
        return result

    def to_dicts(self) -> list[dict[str, Any]]:
        """Flat list of node dictionaries in input order."""
        return [node.to_dict() for node in self._nodes.values()]

    def to_text(self, indent_size: int = DEFAULT_INDENT_SIZE) -> str:
        """
        Convert the forest to indented text.

        Args:
            indent_size: Spaces per indentation level

        Returns:
            Multi-line text representation
        """
        lines = []
        for node in self.iter_preorder():
            indent = ' ' * (self.depth_of(node.code) * indent_size)
            lines.append(f"{indent}[L{node.level}] {node.code} {node.concept} = {node.amount}")
        return '\n'.join(lines)


__all__ = ['HierarchyForest']
