# Path: acc_hier/process/hierarchy/parent_resolver.py
"""
Parent Resolver

Finds the best available ancestor of a code among the codes that exist
in the same report. Real charts of accounts are incomplete, so each
level walks a cascade of candidates from most to least specific and
records how the parent was found (ParentType) plus a warning whenever a
more specific parent was expected but missing.

Level 4: direct level-3 parent -> bucket root -> family root ->
         level-1 adoption -> root
Level 3: bucket root (sub-families) -> sequence parent -> family root ->
         level-1 adoption -> root
Level 2: sequence parent -> level-1 account -> root
Level 1: root

Parentless level-3 and level-2 codes that share a prefix are grouped
with the smallest such code (grouped_with). Grouping never makes one of
them the parent of another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from acc_hier.core.logger.ipo_logging import get_process_logger
from .account_code import AccountCode
from .code_index import CodeIndex
from .conventions import HierarchyConventions
from .constants import ParentType


@dataclass(frozen=True)
class ParentResolution:
    """
    Parent of a code and how it was found.

    Attributes:
        parent: Parent code, None for roots
        parent_type: Strategy that produced the parent
        warnings: Explanations for degraded resolutions
        grouped_with: Same-level anchor the code is grouped with (not a parent)
    """
    parent: Optional[str]
    parent_type: ParentType
    warnings: tuple = ()
    grouped_with: Optional[str] = None


class ParentResolver:
    """
    Resolves parents for the codes of one report.

    Requires an index whose levels have been set (CodeIndex.set_levels),
    since sibling grouping and parent checks depend on resolved levels.

    Example:
        resolver = ParentResolver(index)
        resolution = resolver.resolve(code, level=4)
    """

    def __init__(
        self,
        index: CodeIndex,
        conventions: Optional[HierarchyConventions] = None,
    ):
        """
        Initialize resolver.

        Args:
            index: Index of the report's codes, with levels set
            conventions: Bucket conventions (defaults apply when None)
        """
        self.index = index
        self.conventions = conventions or HierarchyConventions()
        self.logger = get_process_logger('parent_resolver')

    def resolve(self, code: AccountCode, level: int) -> ParentResolution:
        """
        Resolve the parent of one code.

        Args:
            code: Parsed code
            level: Resolved level of the code

        Returns:
            ParentResolution
        """
        if not code.is_valid:
            return ParentResolution(
                parent=None,
                parent_type=ParentType.ROOT,
                warnings=(f"Unparseable account code '{code.raw}': kept as root with default level",),
            )

        if level == 4:
            resolution = self._resolve_detail(code)
        elif level == 3:
            resolution = self._resolve_subcategory(code)
        elif level == 2:
            resolution = self._resolve_family_root(code)
        else:
            resolution = ParentResolution(parent=None, parent_type=ParentType.ROOT)

        if resolution.warnings:
            self.logger.debug(f"{code.code}: {'; '.join(resolution.warnings)}")
        return resolution

    def _usable(self, candidate: Optional[str], code: AccountCode, level: int) -> bool:
        """Candidate exists, is not the code itself and sits no deeper than it."""
        if candidate is None or candidate == code.code:
            return False
        if not self.index.contains(candidate):
            return False
        candidate_level = self.index.level_of(candidate)
        return candidate_level is None or candidate_level <= level

    def _resolve_detail(self, code: AccountCode) -> ParentResolution:
        direct = code.parent_code(code.s3)
        if self._usable(direct, code, 4):
            return ParentResolution(direct, ParentType.DIRECT)

        bucket = self.conventions.bucket_root_code(
            code.s1, code.s2, self.conventions.detail_bucket_digits
        )
        if self._usable(bucket, code, 4):
            return ParentResolution(
                bucket,
                ParentType.FAMILY_ROOT,
                (f"Level-3 parent {direct} not found; attached to bucket root {bucket}",),
            )

        family_root = code.parent_code()
        if self._usable(family_root, code, 4):
            return ParentResolution(
                family_root,
                ParentType.FAMILY_ROOT,
                (f"Level-3 parent {direct} not found; attached to family root {family_root}",),
            )

        top = code.top_level_code()
        if self._usable(top, code, 4):
            return ParentResolution(
                top,
                ParentType.ORPHAN_ADOPTION,
                (f"Intermediate parents not found; adopted by top-level account {top}",),
            )

        return ParentResolution(
            None,
            ParentType.ROOT,
            ("Orphan account: no parent found at any level",),
        )

    def _resolve_subcategory(self, code: AccountCode) -> ParentResolution:
        if code.is_family_root_shape:
            bucket = self.conventions.bucket_root_code(
                code.s1, code.s2, self.conventions.subfamily_bucket_digits
            )
            if self._usable(bucket, code, 3):
                return ParentResolution(
                    bucket,
                    ParentType.FAMILY_ROOT,
                    (f"Sub-family {code.code} attached to bucket root {bucket}",),
                )

        sequence_parent = self.index.sequence_parent(code)
        if self._usable(sequence_parent, code, 3):
            return ParentResolution(
                sequence_parent,
                ParentType.DIRECT,
                (f"Numeric sequence: {code.code} is a child of {sequence_parent}",),
            )

        family_root = code.parent_code()
        if self._usable(family_root, code, 3):
            return ParentResolution(family_root, ParentType.FAMILY_ROOT)

        grouped_with = self._group_anchor(code, 3)
        grouping = (
            (f"Grouped with level-3 sibling {grouped_with} in family {code.family_code}",)
            if grouped_with else ()
        )

        top = code.top_level_code()
        if self._usable(top, code, 3):
            return ParentResolution(
                top,
                ParentType.ORPHAN_ADOPTION,
                grouping + (f"Family root {family_root} not found; adopted by top-level account {top}",),
                grouped_with,
            )

        return ParentResolution(
            None,
            ParentType.ROOT,
            grouping + (f"Family {code.family_code} has no root account and no top-level account",),
            grouped_with,
        )

    def _resolve_family_root(self, code: AccountCode) -> ParentResolution:
        sequence_parent = self.index.sequence_parent(code)
        if self._usable(sequence_parent, code, 2):
            return ParentResolution(
                sequence_parent,
                ParentType.DIRECT,
                (f"Numeric sequence: {code.code} is a child of {sequence_parent}",),
            )

        top = code.top_level_code()
        if self._usable(top, code, 2):
            return ParentResolution(top, ParentType.DIRECT)

        grouped_with = self._group_anchor(code, 2)
        grouping = (
            (f"Grouped with level-2 sibling {grouped_with} under prefix {code.s1}",)
            if grouped_with else ()
        )

        return ParentResolution(
            None,
            ParentType.ROOT,
            grouping + ("No parent found; kept as root",),
            grouped_with,
        )

    def _group_anchor(self, code: AccountCode, level: int) -> Optional[str]:
        """
        Same-level group anchor of a parentless code, None for the anchor itself.

        Grouping is a sibling relation: the code is never placed beneath
        its anchor, so grouped amounts are not nested.
        """
        anchor = self.index.group_anchor(code, level)
        return anchor if self._usable(anchor, code, level) else None


__all__ = ['ParentResolver', 'ParentResolution']
