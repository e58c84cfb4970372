# Path: tests/conftest.py
"""
Pytest Configuration and Shared Fixtures for acc_hier

Provides common test fixtures used across all test modules.
"""

import json
import os
import sys
import tempfile
from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

# Add repository root and the tests directory (helpers) to path for imports
ACC_HIER_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ACC_HIER_ROOT))
sys.path.insert(0, str(Path(__file__).parent))

from acc_hier.loaders.rule_manager import InMemoryRuleManager
from helpers import egresos, ingresos, make_account, make_accounts


# ==============================================================================
# ENVIRONMENT FIXTURES
# ==============================================================================

@pytest.fixture
def mock_env_vars(temp_dir):
    """Provide mock environment variables for testing."""
    env_vars = {
        'ACC_HIER_ENVIRONMENT': 'test',
        'ACC_HIER_DEBUG': 'true',

        # Logging / output
        'ACC_HIER_LOG_DIR': str(temp_dir / 'logs'),
        'ACC_HIER_LOG_LEVEL': 'DEBUG',
        'ACC_HIER_LOG_CONSOLE': 'false',
        'ACC_HIER_OUTPUT_DIR': str(temp_dir / 'output'),

        # Reconciliation
        'ACC_HIER_RECONCILIATION_TOLERANCE': '0.05',

        # Thresholds
        'ACC_HIER_SEVERITY_CRITICAL_MIN': '2000000',
        'ACC_HIER_AUTOFIX_MAX_UNCLASSIFIED': '3',

        # Performance
        'ACC_HIER_MAX_WORKERS': '2',
    }

    with patch.dict(os.environ, env_vars, clear=False):
        yield env_vars


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# ==============================================================================
# ACCOUNT / CLASSIFICATION FIXTURES
# ==============================================================================

@pytest.fixture
def detail_family_accounts():
    """Level-3 parent with two level-4 detail rows."""
    return make_accounts(
        ('5000-1000-001-000', -300000, 'Servicios generales'),
        ('5000-1000-001-101', -200000, 'Limpieza'),
        ('5000-1000-001-102', -100000, 'Vigilancia'),
    )


@pytest.fixture
def full_family_accounts(detail_family_accounts):
    """Detail family under its family root 5000-1000-000-000."""
    return [make_account('5000-1000-000-000', -300000, 'Gastos generales')] + detail_family_accounts


@pytest.fixture
def grouped_family_accounts():
    """Two level-3 accounts of 5000-1000 with no family root or top-level row."""
    return make_accounts(
        ('5000-1000-001-000', -300, 'Servicios'),
        ('5000-1000-001-101', -300, 'Limpieza'),
        ('5000-1000-002-000', -500, 'Mantenimiento'),
        ('5000-1000-002-101', -500, 'Reparaciones'),
    )


@pytest.fixture
def sample_report_rows():
    """Raw rows of a small report with revenue and expense totals."""
    return [
        {'code': '4100-0000-000-000', 'concept': 'Ingresos', 'credit_amount': 1000000, 'debit_amount': None},
        {'code': '4100-1000-000-000', 'concept': 'Ventas', 'credit_amount': 1000000, 'debit_amount': None},
        {'code': '4100-1000-001-000', 'concept': 'Ventas nacionales', 'credit_amount': 1000000, 'debit_amount': None},
        {'code': '4100-1000-001-101', 'concept': 'Ventas contado', 'credit_amount': 600000, 'debit_amount': None},
        {'code': '4100-1000-001-102', 'concept': 'Ventas credito', 'credit_amount': 400000, 'debit_amount': None},
        {'code': '5000-0000-000-000', 'concept': 'Egresos', 'credit_amount': None, 'debit_amount': 300000},
        {'code': '5000-1000-000-000', 'concept': 'Gastos generales', 'credit_amount': None, 'debit_amount': 300000},
        {'code': '5000-1000-001-000', 'concept': 'Servicios', 'credit_amount': None, 'debit_amount': 300000},
        {'code': '5000-1000-001-101', 'concept': 'Limpieza', 'credit_amount': None, 'debit_amount': 200000},
        {'code': '5000-1000-001-102', 'concept': 'Vigilancia', 'credit_amount': None, 'debit_amount': 100000},
    ]


@pytest.fixture
def sample_classifications():
    """Leaf-level classification of every detail row of sample_report_rows."""
    return {
        '4100-1000-001-101': ingresos(),
        '4100-1000-001-102': ingresos(),
        '5000-1000-001-101': egresos(),
        '5000-1000-001-102': egresos(),
    }


@pytest.fixture
def rule_manager(sample_classifications):
    """In-memory rule manager holding sample_classifications."""
    return InMemoryRuleManager(sample_classifications)


@pytest.fixture
def write_json(temp_dir):
    """Write a JSON document into temp_dir and return its path."""
    def _write(name, data):
        path = temp_dir / name
        path.write_text(json.dumps(data, default=str), encoding='utf-8')
        return path
    return _write


# ==============================================================================
# MOCK FIXTURES
# ==============================================================================

@pytest.fixture
def mock_config(temp_dir):
    """Create a mock ConfigLoader for testing."""
    config = MagicMock()
    config.get.side_effect = lambda key, default=None: {
        'environment': 'test',
        'debug': True,
        'output_dir': temp_dir / 'output',
        'output_formats': ['json', 'text'],
        'log_dir': None,
        'log_level': 'INFO',
        'log_console': False,
        'reconciliation_tolerance': Decimal('0.01'),
        'ingresos_total_code': '4100-0000-000-000',
        'egresos_total_code': '5000-0000-000-000',
        'severity_critical_min': Decimal('1000000'),
        'severity_high_min': Decimal('500000'),
        'severity_medium_min': Decimal('100000'),
        'priority_thresholds': [Decimal('5000000'), Decimal('1000000'), Decimal('500000'), Decimal('100000')],
        'autofix_max_unclassified': 2,
        'summary_recommendation_threshold': 15,
        'family_root_prefix': '5000',
        'family_root_segments': ['2000', '3000', '4000', '5000', '8000', '9000'],
        'detail_bucket_digits': ['2', '3', '4', '5', '8', '9'],
        'subfamily_bucket_digits': ['1', '2', '3', '4', '5', '8', '9'],
        'max_workers': 2,
    }.get(key, default)
    return config


# ==============================================================================
# UTILITY FIXTURES
# ==============================================================================

@pytest.fixture
def capture_logs():
    """Capture log output for testing."""
    import logging
    from io import StringIO

    log_capture = StringIO()
    handler = logging.StreamHandler(log_capture)
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger()
    previous_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(handler)

    yield log_capture

    root_logger.removeHandler(handler)
    root_logger.setLevel(previous_level)


@pytest.fixture
def reset_singletons():
    """Reset any singleton instances between tests."""
    from acc_hier.config_loader import ConfigLoader
    ConfigLoader._instance = None
    ConfigLoader._initialized = False

    yield

    ConfigLoader._instance = None
    ConfigLoader._initialized = False
