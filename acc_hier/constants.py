# Path: acc_hier/constants.py
"""
System-Wide Constants for acc_hier (Account Hierarchy Engine)

Central repository for constant values shared by the classification,
validation and reconciliation layers.

Constants are organized by category:
- Classification Status and Defaults
- Severity Levels and Thresholds
- Issue Types
- Recommendations
- Amount Check Status
- Reconciliation
- Display
"""

from decimal import Decimal
from enum import Enum
from typing import Final


# ==============================================================================
# CLASSIFICATION STATUS
# ==============================================================================

class ClassificationStatus(str, Enum):
    """
    Classification state of a single account.

    CLASSIFIED: tipo and categoria_1 are both set to non-default values
    UNCLASSIFIED: no usable classification
    IMPLICITLY_CLASSIFIED: unclassified, but every child is covered
        (derived during validation, never persisted)
    """
    CLASSIFIED = 'CLASSIFIED'
    UNCLASSIFIED = 'UNCLASSIFIED'
    IMPLICITLY_CLASSIFIED = 'IMPLICITLY_CLASSIFIED'


# Default (placeholder) values written by the rule table for "nothing set"
DEFAULT_TIPO: Final[str] = 'Indefinido'
DEFAULT_CATEGORIA_1: Final[str] = 'Sin Categoría'
DEFAULT_SUB_CATEGORIA: Final[str] = 'Sin Subcategoría'
DEFAULT_CLASIFICACION: Final[str] = 'Sin Clasificación'


# ==============================================================================
# SEVERITY LEVELS
# ==============================================================================

class Severity(str, Enum):
    """
    Severity of a classification issue.
    """
    CRITICAL = 'CRITICAL'
    HIGH = 'HIGH'
    MEDIUM = 'MEDIUM'
    LOW = 'LOW'


# Amount buckets for severity (absolute currency units)
SEVERITY_CRITICAL_MIN: Final[Decimal] = Decimal('1000000')
SEVERITY_HIGH_MIN: Final[Decimal] = Decimal('500000')
SEVERITY_MEDIUM_MIN: Final[Decimal] = Decimal('100000')

# Amount buckets for priority rank (1 = most urgent)
PRIORITY_1_MIN: Final[Decimal] = Decimal('5000000')
PRIORITY_2_MIN: Final[Decimal] = Decimal('1000000')
PRIORITY_3_MIN: Final[Decimal] = Decimal('500000')
PRIORITY_4_MIN: Final[Decimal] = Decimal('100000')
LOWEST_PRIORITY: Final[int] = 5
HIGHEST_PRIORITY: Final[int] = 1


# ==============================================================================
# ISSUE TYPES
# ==============================================================================

class IssueType(str, Enum):
    """
    Kinds of classification-consistency issues.
    """
    MIXED_LEVEL4_SIBLINGS = 'MIXED_LEVEL4_SIBLINGS'
    OVER_CLASSIFICATION = 'OVER_CLASSIFICATION'
    DUPLICATE_CLASSIFICATION = 'DUPLICATE_CLASSIFICATION'
    ORPHAN_ACCOUNT = 'ORPHAN_ACCOUNT'


# Auto-fix is only offered for small mixed groups
AUTOFIX_MAX_UNCLASSIFIED: Final[int] = 2


# ==============================================================================
# RECOMMENDATIONS
# ==============================================================================

class RecommendedApproach(str, Enum):
    """
    Advisory classification approach for a family.
    """
    DETAIL_CLASSIFICATION = 'DETAIL_CLASSIFICATION'
    SUMMARY_CLASSIFICATION = 'SUMMARY_CLASSIFICATION'


class OverClassificationChoice(str, Enum):
    """
    The two explicit ways out of an over-classification.
    """
    KEEP_DETAIL = 'KEEP_DETAIL'
    KEEP_SUMMARY = 'KEEP_SUMMARY'


# Families with more level-4 accounts than this get summary advice
SUMMARY_RECOMMENDATION_THRESHOLD: Final[int] = 15


# ==============================================================================
# PARENT / CHILDREN AMOUNT CHECK
# ==============================================================================

class AmountCheckStatus(str, Enum):
    """
    Outcome of comparing a parent amount with the sum of its children.
    """
    PERFECT = 'PERFECT'
    MINOR_VARIANCE = 'MINOR_VARIANCE'
    MAJOR_VARIANCE = 'MAJOR_VARIANCE'
    CRITICAL_MISMATCH = 'CRITICAL_MISMATCH'


AMOUNT_CHECK_ABSOLUTE_TOLERANCE: Final[Decimal] = Decimal('1')
AMOUNT_CHECK_MINOR_PCT: Final[Decimal] = Decimal('1')
AMOUNT_CHECK_MAJOR_PCT: Final[Decimal] = Decimal('5')


# ==============================================================================
# RECONCILIATION
# ==============================================================================

DEFAULT_RECONCILIATION_TOLERANCE: Final[Decimal] = Decimal('0.01')

INGRESOS_CATEGORY: Final[str] = 'ingresos'
EGRESOS_CATEGORY: Final[str] = 'egresos'

DEFAULT_INGRESOS_TOTAL_CODE: Final[str] = '4100-0000-000-000'
DEFAULT_EGRESOS_TOTAL_CODE: Final[str] = '5000-0000-000-000'

TIPO_INGRESOS: Final[str] = 'Ingresos'
TIPO_EGRESOS: Final[str] = 'Egresos'


# ==============================================================================
# DISPLAY FORMATTING
# ==============================================================================

DECIMAL_PLACES: Final[int] = 2
PERCENTAGE_PLACES: Final[int] = 1

# Status indicators (ASCII only - no emojis)
STATUS_OK: Final[str] = '[OK]'
STATUS_FAIL: Final[str] = '[FAIL]'
STATUS_WARN: Final[str] = '[WARN]'
STATUS_INFO: Final[str] = '[INFO]'

# CLI banner
MENU_WIDTH: Final[int] = 70
MENU_HEADER: Final[str] = '=' * MENU_WIDTH


def format_currency(amount: Decimal) -> str:
    """
    Format an amount for human-readable messages.

    Args:
        amount: Amount to format (sign is dropped)

    Returns:
        String like '$1,500.00'
    """
    return f"${abs(amount):,.{DECIMAL_PLACES}f}"


# ==============================================================================
# EXPORTS
# ==============================================================================

__all__ = [
    # Enums
    'ClassificationStatus',
    'Severity',
    'IssueType',
    'RecommendedApproach',
    'OverClassificationChoice',
    'AmountCheckStatus',

    # Classification defaults
    'DEFAULT_TIPO',
    'DEFAULT_CATEGORIA_1',
    'DEFAULT_SUB_CATEGORIA',
    'DEFAULT_CLASIFICACION',

    # Severity / priority
    'SEVERITY_CRITICAL_MIN',
    'SEVERITY_HIGH_MIN',
    'SEVERITY_MEDIUM_MIN',
    'PRIORITY_1_MIN',
    'PRIORITY_2_MIN',
    'PRIORITY_3_MIN',
    'PRIORITY_4_MIN',
    'LOWEST_PRIORITY',
    'HIGHEST_PRIORITY',
    'AUTOFIX_MAX_UNCLASSIFIED',
    'SUMMARY_RECOMMENDATION_THRESHOLD',

    # Amount check
    'AMOUNT_CHECK_ABSOLUTE_TOLERANCE',
    'AMOUNT_CHECK_MINOR_PCT',
    'AMOUNT_CHECK_MAJOR_PCT',

    # Reconciliation
    'DEFAULT_RECONCILIATION_TOLERANCE',
    'INGRESOS_CATEGORY',
    'EGRESOS_CATEGORY',
    'DEFAULT_INGRESOS_TOTAL_CODE',
    'DEFAULT_EGRESOS_TOTAL_CODE',
    'TIPO_INGRESOS',
    'TIPO_EGRESOS',

    # Display
    'DECIMAL_PLACES',
    'PERCENTAGE_PLACES',
    'STATUS_OK',
    'STATUS_FAIL',
    'STATUS_WARN',
    'STATUS_INFO',
    'MENU_WIDTH',
    'MENU_HEADER',
    'format_currency',
]
