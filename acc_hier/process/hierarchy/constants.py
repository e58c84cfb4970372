# Path: acc_hier/process/hierarchy/constants.py
"""
Constants for Hierarchy Builder

Defines parent types, detection strategies, confidence values and the
code-shape constants used throughout hierarchy inference.
"""

from enum import Enum
from typing import Final


# ==============================================================================
# PARENT TYPE ENUMERATION
# ==============================================================================
class ParentType(str, Enum):
    """
    How a node's parent was found.

    DIRECT: the expected immediate parent exists (or a sequence link)
    FAMILY_ROOT: attached to a family or bucket root one level up
    ORPHAN_ADOPTION: attached to the level-1 account of its prefix
    ROOT: no parent; top of a tree
    """
    DIRECT = "DIRECT"
    FAMILY_ROOT = "FAMILY_ROOT"
    ORPHAN_ADOPTION = "ORPHAN_ADOPTION"
    ROOT = "ROOT"


class DetectedBy(str, Enum):
    """
    Which level heuristic won for a code.
    """
    FAMILY_ANALYSIS = "FAMILY_ANALYSIS"
    ZERO_PATTERN = "ZERO_PATTERN"
    HYBRID = "HYBRID"


# ==============================================================================
# CODE SHAPE
# ==============================================================================
SEGMENT_SEPARATOR: Final[str] = "-"
SEGMENT_COUNT: Final[int] = 4

ZERO_S1: Final[str] = "0000"
ZERO_S2: Final[str] = "0000"
ZERO_S3: Final[str] = "000"
ZERO_S4: Final[str] = "000"

DEFAULT_SEGMENTS: Final[tuple] = (ZERO_S1, ZERO_S2, ZERO_S3, ZERO_S4)
"""Segments given to a code that cannot be parsed."""


# ==============================================================================
# LEVEL CONFIDENCE
# ==============================================================================
ZERO_PATTERN_CONFIDENCE: Final[float] = 0.8
MALFORMED_CONFIDENCE: Final[float] = 0.5

TOP_LEVEL_CONFIDENCE: Final[float] = 1.0
FAMILY_ROOT_CONFIDENCE: Final[float] = 1.0
SUBFAMILY_CONFIDENCE: Final[float] = 0.9
SEQUENCE_PARENT_CONFIDENCE: Final[float] = 0.9
SEQUENCE_CHILD_CONFIDENCE: Final[float] = 0.85
SUBCATEGORY_CONFIDENCE: Final[float] = 0.8
DETAIL_CONFIDENCE: Final[float] = 0.7
NO_EVIDENCE_CONFIDENCE: Final[float] = 0.0

# Conflict resolution cut-offs
FAMILY_TRUST_THRESHOLD: Final[float] = 0.8
FAMILY_REJECT_THRESHOLD: Final[float] = 0.5


# ==============================================================================
# TEXT RENDERING
# ==============================================================================
DEFAULT_INDENT_SIZE: Final[int] = 2
"""Default indentation spaces for text representation."""


__all__ = [
    'ParentType',
    'DetectedBy',
    'SEGMENT_SEPARATOR',
    'SEGMENT_COUNT',
    'ZERO_S1',
    'ZERO_S2',
    'ZERO_S3',
    'ZERO_S4',
    'DEFAULT_SEGMENTS',
    'ZERO_PATTERN_CONFIDENCE',
    'MALFORMED_CONFIDENCE',
    'TOP_LEVEL_CONFIDENCE',
    'FAMILY_ROOT_CONFIDENCE',
    'SUBFAMILY_CONFIDENCE',
    'SEQUENCE_PARENT_CONFIDENCE',
    'SEQUENCE_CHILD_CONFIDENCE',
    'SUBCATEGORY_CONFIDENCE',
    'DETAIL_CONFIDENCE',
    'NO_EVIDENCE_CONFIDENCE',
    'FAMILY_TRUST_THRESHOLD',
    'FAMILY_REJECT_THRESHOLD',
    'DEFAULT_INDENT_SIZE',
]
