# Path: acc_hier/config_loader.py
"""
Configuration Loader for acc_hier (Account Hierarchy Engine)

Loads configuration from .env file for the hierarchy/validation engine.
Singleton pattern ensures consistent configuration across all components.

Every key is optional. Defaults reproduce the chart-of-accounts
conventions the engine was built against.
"""

import os
from decimal import Decimal, InvalidOperation
from typing import Optional, Any
from pathlib import Path
from dotenv import load_dotenv


# ==============================================================================
# DEFAULT CONFIGURATION VALUES
# ==============================================================================

# Logging Defaults
DEFAULT_LOG_LEVEL: str = 'INFO'

# Output Defaults
DEFAULT_OUTPUT_FORMATS: str = 'json,text'

# Reconciliation Defaults
DEFAULT_RECONCILIATION_TOLERANCE: str = '0.01'
DEFAULT_INGRESOS_TOTAL_CODE: str = '4100-0000-000-000'
DEFAULT_EGRESOS_TOTAL_CODE: str = '5000-0000-000-000'

# Severity / Priority Thresholds
DEFAULT_SEVERITY_CRITICAL_MIN: str = '1000000'
DEFAULT_SEVERITY_HIGH_MIN: str = '500000'
DEFAULT_SEVERITY_MEDIUM_MIN: str = '100000'
DEFAULT_PRIORITY_THRESHOLDS: str = '5000000,1000000,500000,100000'
DEFAULT_AUTOFIX_MAX_UNCLASSIFIED: int = 2
DEFAULT_SUMMARY_RECOMMENDATION_THRESHOLD: int = 15

# Hierarchy Conventions
DEFAULT_FAMILY_ROOT_PREFIX: str = '5000'
DEFAULT_FAMILY_ROOT_SEGMENTS: str = '2000,3000,4000,5000,8000,9000'
DEFAULT_DETAIL_BUCKET_DIGITS: str = '2,3,4,5,8,9'
DEFAULT_SUBFAMILY_BUCKET_DIGITS: str = '1,2,3,4,5,8,9'

# Performance Defaults
DEFAULT_MAX_WORKERS: int = 4


class ConfigLoader:
    """
    Singleton configuration loader for acc_hier.

    Loads configuration from environment variables with type conversion
    and sensible defaults.

    Example:
        config = ConfigLoader()
        tolerance = config.get('reconciliation_tolerance')  # Decimal
        digits = config.get('detail_bucket_digits')  # list[str]
    """

    _instance: Optional['ConfigLoader'] = None
    _initialized: bool = False

    def __new__(cls) -> 'ConfigLoader':
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Initialize configuration loader.

        Only runs once due to singleton pattern. Loads .env file
        on first instantiation.
        """
        if ConfigLoader._initialized:
            return

        # acc_hier/config_loader.py -> .env is in same directory
        current_file = Path(__file__).resolve()
        project_root = current_file.parent
        env_path = project_root / '.env'

        if env_path.exists():
            load_dotenv(dotenv_path=env_path, interpolate=True)

        self._config = self._load_configuration()
        ConfigLoader._initialized = True

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values with proper types
        """
        config = {
            # ================================================================
            # ENVIRONMENT & DEBUG
            # ================================================================
            'environment': self._get_env('ACC_HIER_ENVIRONMENT', 'development'),
            'debug': self._get_bool('ACC_HIER_DEBUG', False),

            # ================================================================
            # LOGGING
            # ================================================================
            'log_dir': self._get_path('ACC_HIER_LOG_DIR'),
            'log_level': self._get_env('ACC_HIER_LOG_LEVEL', DEFAULT_LOG_LEVEL),
            'log_console': self._get_bool('ACC_HIER_LOG_CONSOLE', True),

            # ================================================================
            # OUTPUT
            # ================================================================
            'output_dir': self._get_path('ACC_HIER_OUTPUT_DIR'),
            'output_formats': self._get_list('ACC_HIER_OUTPUT_FORMATS', DEFAULT_OUTPUT_FORMATS),

            # ================================================================
            # RECONCILIATION
            # ================================================================
            'reconciliation_tolerance': self._get_decimal(
                'ACC_HIER_RECONCILIATION_TOLERANCE', DEFAULT_RECONCILIATION_TOLERANCE
            ),
            'ingresos_total_code': self._get_env(
                'ACC_HIER_INGRESOS_TOTAL_CODE', DEFAULT_INGRESOS_TOTAL_CODE
            ),
            'egresos_total_code': self._get_env(
                'ACC_HIER_EGRESOS_TOTAL_CODE', DEFAULT_EGRESOS_TOTAL_CODE
            ),

            # ================================================================
            # FAMILY VALIDATION THRESHOLDS
            # ================================================================
            'severity_critical_min': self._get_decimal(
                'ACC_HIER_SEVERITY_CRITICAL_MIN', DEFAULT_SEVERITY_CRITICAL_MIN
            ),
            'severity_high_min': self._get_decimal(
                'ACC_HIER_SEVERITY_HIGH_MIN', DEFAULT_SEVERITY_HIGH_MIN
            ),
            'severity_medium_min': self._get_decimal(
                'ACC_HIER_SEVERITY_MEDIUM_MIN', DEFAULT_SEVERITY_MEDIUM_MIN
            ),
            'priority_thresholds': [
                Decimal(value) for value in self._get_list(
                    'ACC_HIER_PRIORITY_THRESHOLDS', DEFAULT_PRIORITY_THRESHOLDS
                )
            ],
            'autofix_max_unclassified': self._get_int(
                'ACC_HIER_AUTOFIX_MAX_UNCLASSIFIED', DEFAULT_AUTOFIX_MAX_UNCLASSIFIED
            ),
            'summary_recommendation_threshold': self._get_int(
                'ACC_HIER_SUMMARY_RECOMMENDATION_THRESHOLD',
                DEFAULT_SUMMARY_RECOMMENDATION_THRESHOLD
            ),

            # ================================================================
            # HIERARCHY CONVENTIONS
            # ================================================================
            'family_root_prefix': self._get_env(
                'ACC_HIER_FAMILY_ROOT_PREFIX', DEFAULT_FAMILY_ROOT_PREFIX
            ),
            'family_root_segments': self._get_list(
                'ACC_HIER_FAMILY_ROOT_SEGMENTS', DEFAULT_FAMILY_ROOT_SEGMENTS
            ),
            'detail_bucket_digits': self._get_list(
                'ACC_HIER_DETAIL_BUCKET_DIGITS', DEFAULT_DETAIL_BUCKET_DIGITS
            ),
            'subfamily_bucket_digits': self._get_list(
                'ACC_HIER_SUBFAMILY_BUCKET_DIGITS', DEFAULT_SUBFAMILY_BUCKET_DIGITS
            ),

            # ================================================================
            # PERFORMANCE
            # ================================================================
            'max_workers': self._get_int('ACC_HIER_MAX_WORKERS', DEFAULT_MAX_WORKERS),
        }

        return config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def _get_path(self, key: str) -> Optional[Path]:
        """
        Get path from environment variable.

        Args:
            key: Environment variable name

        Returns:
            Path object or None
        """
        value = os.getenv(key)

        if value is None:
            return None

        # Handle variable interpolation
        if '${' in value:
            value = os.path.expandvars(value)

        return Path(value)

    def _get_env(self, key: str, default: str = '') -> str:
        """Get string environment variable."""
        return os.getenv(key, default)

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            return default

    def _get_decimal(self, key: str, default: str) -> Decimal:
        """Get decimal environment variable (money amounts never go through float)."""
        value = os.getenv(key)
        if value is None:
            return Decimal(default)
        try:
            return Decimal(value.strip())
        except InvalidOperation:
            return Decimal(default)

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default
        return value.lower() in ('true', '1', 'yes', 'on')

    def _get_list(self, key: str, default: str) -> list[str]:
        """Get comma-separated list environment variable."""
        value = os.getenv(key, default)
        return [item.strip() for item in value.split(',') if item.strip()]

    def __repr__(self) -> str:
        """String representation showing key settings."""
        return (
            f"ConfigLoader("
            f"environment={self._config.get('environment')}, "
            f"family_root_prefix={self._config.get('family_root_prefix')})"
        )


__all__ = ['ConfigLoader']
