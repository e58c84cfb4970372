# Path: acc_hier/process/hierarchy/level_resolver.py
"""
Hierarchy Level Resolver

Two independent strategies estimate the structural depth (1-4) of a code:

- zero-pattern analysis: looks only at which trailing segments are zero
- family analysis: looks at bucket conventions and at the other codes of
  the same report (numeric-sequence runs)

Each returns a LevelEstimate(level, confidence). resolve_level_conflict
combines them and records which strategy won.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from acc_hier.core.logger.ipo_logging import get_process_logger
from .account_code import AccountCode, is_zero_segment
from .code_index import CodeIndex
from .conventions import HierarchyConventions
from .constants import (
    DetectedBy,
    ZERO_PATTERN_CONFIDENCE,
    MALFORMED_CONFIDENCE,
    TOP_LEVEL_CONFIDENCE,
    FAMILY_ROOT_CONFIDENCE,
    SUBFAMILY_CONFIDENCE,
    SEQUENCE_PARENT_CONFIDENCE,
    SEQUENCE_CHILD_CONFIDENCE,
    SUBCATEGORY_CONFIDENCE,
    DETAIL_CONFIDENCE,
    NO_EVIDENCE_CONFIDENCE,
    FAMILY_TRUST_THRESHOLD,
    FAMILY_REJECT_THRESHOLD,
)


@dataclass(frozen=True)
class LevelEstimate:
    """Level proposed by one strategy, with its confidence (0.0-1.0)."""
    level: int
    confidence: float


@dataclass(frozen=True)
class LevelResolution:
    """
    Final level of a code and the evidence behind it.

    Attributes:
        level: Resolved level (1 = top total, 4 = detail)
        detected_by: Strategy that decided the level
        family_estimate: Family-analysis estimate
        zero_estimate: Zero-pattern estimate
    """
    level: int
    detected_by: DetectedBy
    family_estimate: LevelEstimate
    zero_estimate: LevelEstimate


def analyze_zero_pattern(code: AccountCode) -> LevelEstimate:
    """
    Baseline level from trailing zero segments.

    Level 4 by default; 3 if s4 is zero; 2 if s3 and s4 are zero;
    1 if s2, s3 and s4 are zero. Malformed codes get level 4 with
    reduced confidence.
    """
    if not code.is_valid:
        return LevelEstimate(4, MALFORMED_CONFIDENCE)

    level = 4
    if is_zero_segment(code.s4):
        level = 3
    if is_zero_segment(code.s3) and is_zero_segment(code.s4):
        level = 2
    if code.is_top_level_shape:
        level = 1
    return LevelEstimate(level, ZERO_PATTERN_CONFIDENCE)


def analyze_family(
    code: AccountCode,
    index: CodeIndex,
    conventions: Optional[HierarchyConventions] = None,
) -> LevelEstimate:
    """
    Level from family conventions and same-report evidence.

    Args:
        code: Code to analyze
        index: Index of the report's codes
        conventions: Bucket conventions (defaults apply when None)

    Returns:
        LevelEstimate; confidence 0.0 means "no family evidence"
    """
    conventions = conventions or HierarchyConventions()

    if not code.is_valid:
        return LevelEstimate(4, NO_EVIDENCE_CONFIDENCE)

    if code.is_top_level_shape:
        return LevelEstimate(1, TOP_LEVEL_CONFIDENCE)

    if code.is_family_root_shape:
        if conventions.is_family_root_segment(code.s1, code.s2):
            return LevelEstimate(2, FAMILY_ROOT_CONFIDENCE)

        if conventions.bucket_root_code(code.s1, code.s2, conventions.detail_bucket_digits):
            # Sub-family of a bucket, e.g. 5000-2001-000-000
            return LevelEstimate(3, SUBFAMILY_CONFIDENCE)

        role = index.sequence_role(code)
        if role == 'parent':
            return LevelEstimate(2, SEQUENCE_PARENT_CONFIDENCE)
        if role == 'child':
            return LevelEstimate(3, SEQUENCE_CHILD_CONFIDENCE)
        return LevelEstimate(2, NO_EVIDENCE_CONFIDENCE)

    if code.is_subcategory_shape:
        return LevelEstimate(3, SUBCATEGORY_CONFIDENCE)

    return LevelEstimate(4, DETAIL_CONFIDENCE)


def is_problematic_shape(code: AccountCode) -> bool:
    """
    Codes like 5000-2000-020-000: s4 is zero, s3 is a positive number.

    These read as subcategories under the zero pattern but belong to
    their family, so family analysis is preferred when the two disagree.
    """
    return (
        code.is_valid
        and code.is_subcategory_shape
        and code.s3.isdigit()
        and int(code.s3) > 0
    )


def resolve_level_conflict(
    family: LevelEstimate,
    zero: LevelEstimate,
    code: AccountCode,
) -> tuple[int, DetectedBy]:
    """
    Combine the two estimates into a level.

    - family confidence >= 0.8: family wins
    - family confidence < 0.5: zero pattern wins
    - problematic shape with disagreeing levels: family wins (HYBRID)
    - otherwise the higher confidence wins, ties go to family

    Returns:
        (level, detected_by)
    """
    if family.confidence >= FAMILY_TRUST_THRESHOLD:
        return family.level, DetectedBy.FAMILY_ANALYSIS

    if family.confidence < FAMILY_REJECT_THRESHOLD:
        return zero.level, DetectedBy.ZERO_PATTERN

    if is_problematic_shape(code) and family.level != zero.level:
        return family.level, DetectedBy.HYBRID

    if family.confidence >= zero.confidence:
        return family.level, DetectedBy.FAMILY_ANALYSIS
    return zero.level, DetectedBy.ZERO_PATTERN


class HierarchyLevelResolver:
    """
    Resolves the level of every code of a report.

    Example:
        resolver = HierarchyLevelResolver()
        resolution = resolver.resolve(code, index)
        print(resolution.level, resolution.detected_by)
    """

    def __init__(self, conventions: Optional[HierarchyConventions] = None):
        """
        Initialize resolver.

        Args:
            conventions: Bucket conventions (defaults apply when None)
        """
        self.conventions = conventions or HierarchyConventions()
        self.logger = get_process_logger('level_resolver')

    def resolve(self, code: AccountCode, index: CodeIndex) -> LevelResolution:
        """
        Resolve the level of one code.

        Args:
            code: Parsed code
            index: Index of the report's codes

        Returns:
            LevelResolution
        """
        family = analyze_family(code, index, self.conventions)
        zero = analyze_zero_pattern(code)
        level, detected_by = resolve_level_conflict(family, zero, code)

        self.logger.debug(
            f"{code.code}: level {level} via {detected_by.value} "
            f"(family={family.level}@{family.confidence}, "
            f"zero={zero.level}@{zero.confidence})"
        )
        return LevelResolution(
            level=level,
            detected_by=detected_by,
            family_estimate=family,
            zero_estimate=zero,
        )


__all__ = [
    'LevelEstimate',
    'LevelResolution',
    'HierarchyLevelResolver',
    'analyze_zero_pattern',
    'analyze_family',
    'resolve_level_conflict',
    'is_problematic_shape',
]
