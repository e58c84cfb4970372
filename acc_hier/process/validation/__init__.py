# Path: acc_hier/process/validation/__init__.py
"""
Validation Package for acc_hier

Classification-consistency checks over a hierarchy forest.

Components:
- FamilyValidator: mixed siblings, over/duplicate classification, orphans
- compute_statuses: CLASSIFIED / UNCLASSIFIED / IMPLICITLY_CLASSIFIED
- recommend_approach: advisory detail vs summary classification
- suggest_fixes / resolution_options: deltas for the rule manager
- PreApplyValidator: rejects a change that would double count
- HierarchyAmountChecker: parent amount vs sum of children
"""

from acc_hier.process.validation.models import (
    ClassificationIssue,
    FamilyRecommendation,
    FamilyValidationResult,
    FamilyValidationReport,
)
from acc_hier.process.validation.status import compute_statuses, is_covered
from acc_hier.process.validation.scoring import IssueScorer
from acc_hier.process.validation.family import Family, group_families
from acc_hier.process.validation.recommendation import recommend_approach
from acc_hier.process.validation.family_validator import FamilyValidator
from acc_hier.process.validation.fix_suggestions import suggest_fixes, resolution_options
from acc_hier.process.validation.pre_apply import (
    PreApplyValidator,
    PreApplyResult,
    PARENT_ALREADY_CLASSIFIED,
    CHILDREN_ALREADY_CLASSIFIED,
)
from acc_hier.process.validation.amount_checker import (
    HierarchyAmountChecker,
    AmountCheckResult,
    classify_variance,
)

__all__ = [
    'ClassificationIssue',
    'FamilyRecommendation',
    'FamilyValidationResult',
    'FamilyValidationReport',
    'compute_statuses',
    'is_covered',
    'IssueScorer',
    'Family',
    'group_families',
    'recommend_approach',
    'FamilyValidator',
    'suggest_fixes',
    'resolution_options',
    'PreApplyValidator',
    'PreApplyResult',
    'PARENT_ALREADY_CLASSIFIED',
    'CHILDREN_ALREADY_CLASSIFIED',
    'HierarchyAmountChecker',
    'AmountCheckResult',
    'classify_variance',
]
