# Path: acc_hier/loaders/__init__.py
"""
Loaders Package for acc_hier (INPUT layer)

- ReportRowLoader: raw report rows -> Account objects (credits - debits)
- ClassificationRuleManager: read/feedback boundary to the rule table
- InMemoryRuleManager: in-process rule table with retroactive impact
- read_report_file / read_rules_file: JSON input files
"""

from acc_hier.loaders.report_rows import ReportRowLoader, signed_amount
from acc_hier.loaders.rule_manager import (
    ClassificationState,
    ClassificationDelta,
    RuleImpactSummary,
    ClassificationRuleManager,
    InMemoryRuleManager,
    StateSource,
    state_lookup,
    coerce_state,
)
from acc_hier.loaders.json_files import InputFileError, read_report_file, read_rules_file

__all__ = [
    'ReportRowLoader',
    'signed_amount',
    'ClassificationState',
    'ClassificationDelta',
    'RuleImpactSummary',
    'ClassificationRuleManager',
    'InMemoryRuleManager',
    'StateSource',
    'state_lookup',
    'coerce_state',
    'InputFileError',
    'read_report_file',
    'read_rules_file',
]
