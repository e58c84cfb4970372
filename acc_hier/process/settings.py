# Path: acc_hier/process/settings.py
"""
Engine Settings

Typed view over ConfigLoader values used by validation, reconciliation
and retroactive re-validation. Defaults come from acc_hier.constants, so
EngineSettings() works without any environment.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from acc_hier.config_loader import ConfigLoader
from acc_hier.constants import (
    DEFAULT_RECONCILIATION_TOLERANCE,
    DEFAULT_INGRESOS_TOTAL_CODE,
    DEFAULT_EGRESOS_TOTAL_CODE,
    SEVERITY_CRITICAL_MIN,
    SEVERITY_HIGH_MIN,
    SEVERITY_MEDIUM_MIN,
    PRIORITY_1_MIN,
    PRIORITY_2_MIN,
    PRIORITY_3_MIN,
    PRIORITY_4_MIN,
    AUTOFIX_MAX_UNCLASSIFIED,
    SUMMARY_RECOMMENDATION_THRESHOLD,
)
from acc_hier.core.errors import ConfigurationError
from acc_hier.process.hierarchy.conventions import HierarchyConventions


@dataclass(frozen=True)
class EngineSettings:
    """
    Thresholds and codes used by one engine instance.

    Attributes:
        reconciliation_tolerance: Absolute tolerance for declared vs classified
        severity_thresholds: (critical, high, medium) minimum amounts
        priority_thresholds: Minimum amounts for priority ranks 1..4
        autofix_max_unclassified: Largest mixed group still auto-fixable
        summary_recommendation_threshold: Level-4 count above which
            summary classification is advised
        ingresos_total_code: Declared total row of the revenue category
        egresos_total_code: Declared total row of the expense category
        max_workers: Thread pool size for retroactive re-validation
        conventions: Hierarchy bucket conventions
    """
    reconciliation_tolerance: Decimal = DEFAULT_RECONCILIATION_TOLERANCE
    severity_thresholds: tuple = (SEVERITY_CRITICAL_MIN, SEVERITY_HIGH_MIN, SEVERITY_MEDIUM_MIN)
    priority_thresholds: tuple = (PRIORITY_1_MIN, PRIORITY_2_MIN, PRIORITY_3_MIN, PRIORITY_4_MIN)
    autofix_max_unclassified: int = AUTOFIX_MAX_UNCLASSIFIED
    summary_recommendation_threshold: int = SUMMARY_RECOMMENDATION_THRESHOLD
    ingresos_total_code: str = DEFAULT_INGRESOS_TOTAL_CODE
    egresos_total_code: str = DEFAULT_EGRESOS_TOTAL_CODE
    max_workers: int = 4
    conventions: HierarchyConventions = field(default_factory=HierarchyConventions)

    def __post_init__(self):
        if self.reconciliation_tolerance < 0:
            raise ConfigurationError("reconciliation_tolerance must not be negative")
        if len(self.severity_thresholds) != 3:
            raise ConfigurationError("severity_thresholds needs exactly 3 values")
        if len(self.priority_thresholds) != 4:
            raise ConfigurationError("priority_thresholds needs exactly 4 values")
        if self.max_workers < 1:
            raise ConfigurationError("max_workers must be at least 1")

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> 'EngineSettings':
        """
        Build settings from ConfigLoader values.

        Args:
            config: Loader to read from (defaults to the singleton)

        Returns:
            EngineSettings instance

        Raises:
            ConfigurationError: If a configured value is unusable
        """
        config = config or ConfigLoader()
        return cls(
            reconciliation_tolerance=config.get('reconciliation_tolerance'),
            severity_thresholds=(
                config.get('severity_critical_min'),
                config.get('severity_high_min'),
                config.get('severity_medium_min'),
            ),
            priority_thresholds=tuple(config.get('priority_thresholds')),
            autofix_max_unclassified=config.get('autofix_max_unclassified'),
            summary_recommendation_threshold=config.get('summary_recommendation_threshold'),
            ingresos_total_code=config.get('ingresos_total_code'),
            egresos_total_code=config.get('egresos_total_code'),
            max_workers=config.get('max_workers'),
            conventions=HierarchyConventions.from_config(config),
        )


__all__ = ['EngineSettings']
