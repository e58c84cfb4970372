# Path: acc_hier/process/hierarchy/__init__.py
"""
Hierarchy Package for acc_hier

Infers a four-level tree over hyphen-delimited account codes.

Components:
- parse_account_code / AccountCode / Account: code parsing and rows
- CodeIndex: per-report hash-set index and numeric-sequence runs
- HierarchyLevelResolver: zero-pattern and family strategies plus
  conflict resolution
- ParentResolver: best-available-ancestor cascades
- HierarchyBuilder: orchestrator producing a HierarchyForest
- HierarchyConventions: bucket conventions of the chart of accounts

Example:
    from acc_hier.process.hierarchy import HierarchyBuilder, Account

    accounts = [Account.from_code('5000-1000-001-000', 'Materials', 300)]
    forest = HierarchyBuilder().build(accounts)
"""

from acc_hier.process.hierarchy.constants import ParentType, DetectedBy
from acc_hier.process.hierarchy.account_code import (
    AccountCode,
    Account,
    parse_account_code,
    is_zero_segment,
    to_decimal,
)
from acc_hier.process.hierarchy.conventions import HierarchyConventions
from acc_hier.process.hierarchy.code_index import CodeIndex, SequenceRun
from acc_hier.process.hierarchy.level_resolver import (
    LevelEstimate,
    LevelResolution,
    HierarchyLevelResolver,
    analyze_zero_pattern,
    analyze_family,
    resolve_level_conflict,
    is_problematic_shape,
)
from acc_hier.process.hierarchy.parent_resolver import ParentResolver, ParentResolution
from acc_hier.process.hierarchy.node import HierarchyNode
from acc_hier.process.hierarchy.forest import HierarchyForest
from acc_hier.process.hierarchy.tree_builder import (
    HierarchyBuilder,
    CorrectionReport,
    LevelCorrection,
)

__all__ = [
    # Enums
    'ParentType',
    'DetectedBy',

    # Codes and rows
    'AccountCode',
    'Account',
    'parse_account_code',
    'is_zero_segment',
    'to_decimal',

    # Resolution
    'HierarchyConventions',
    'CodeIndex',
    'SequenceRun',
    'LevelEstimate',
    'LevelResolution',
    'HierarchyLevelResolver',
    'analyze_zero_pattern',
    'analyze_family',
    'resolve_level_conflict',
    'is_problematic_shape',
    'ParentResolver',
    'ParentResolution',

    # Structure
    'HierarchyNode',
    'HierarchyForest',
    'HierarchyBuilder',
    'CorrectionReport',
    'LevelCorrection',
]
