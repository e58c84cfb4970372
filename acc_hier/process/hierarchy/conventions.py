# Path: acc_hier/process/hierarchy/conventions.py
"""
Chart-of-accounts conventions used by level and parent resolution.

One prefix (s1) in the chart is organised into "buckets": the leading
digit of s2 selects a bucket root such as 5000-2000-000-000. Which prefix,
which root numerals and which digits map to buckets is data, not code,
so it is carried here and loaded from configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

from acc_hier.config_loader import ConfigLoader
from acc_hier.core.errors import ConfigurationError
from .constants import SEGMENT_SEPARATOR, ZERO_S3, ZERO_S4


@dataclass(frozen=True)
class HierarchyConventions:
    """
    Bucket conventions for the family-root prefix.

    Attributes:
        family_root_prefix: s1 value whose s2 numerals are bucketed
        family_root_segments: s2 numerals that are bucket roots (level 2)
        detail_bucket_digits: leading s2 digits that route level-4
            rows to a bucket root
        subfamily_bucket_digits: leading s2 digits that route
            sub-family (level-3) rows to a bucket root
    """
    family_root_prefix: str = '5000'
    family_root_segments: frozenset = field(
        default_factory=lambda: frozenset({'2000', '3000', '4000', '5000', '8000', '9000'})
    )
    detail_bucket_digits: frozenset = field(
        default_factory=lambda: frozenset({'2', '3', '4', '5', '8', '9'})
    )
    subfamily_bucket_digits: frozenset = field(
        default_factory=lambda: frozenset({'1', '2', '3', '4', '5', '8', '9'})
    )

    def __post_init__(self):
        if not self.family_root_prefix:
            raise ConfigurationError("family_root_prefix must not be empty")
        for digits in (self.detail_bucket_digits, self.subfamily_bucket_digits):
            bad = [d for d in digits if len(d) != 1 or not d.isdigit()]
            if bad:
                raise ConfigurationError(f"Bucket digits must be single digits: {sorted(bad)}")

    @classmethod
    def from_config(cls, config: Optional[ConfigLoader] = None) -> 'HierarchyConventions':
        """
        Build conventions from ConfigLoader values.

        Args:
            config: Loader to read from (defaults to the singleton)

        Returns:
            HierarchyConventions instance
        """
        config = config or ConfigLoader()
        return cls(
            family_root_prefix=config.get('family_root_prefix'),
            family_root_segments=frozenset(config.get('family_root_segments')),
            detail_bucket_digits=frozenset(config.get('detail_bucket_digits')),
            subfamily_bucket_digits=frozenset(config.get('subfamily_bucket_digits')),
        )

    def is_family_root_segment(self, s1: str, s2: str) -> bool:
        """True when (s1, s2) names a bucket root such as 5000-2000."""
        return s1 == self.family_root_prefix and s2 in self.family_root_segments

    def bucket_root_code(self, s1: str, s2: str, digits: frozenset) -> Optional[str]:
        """
        Code of the bucket root that (s1, s2) belongs to.

        Args:
            s1: First segment
            s2: Second segment
            digits: Leading digits that are bucketed for this row kind

        Returns:
            Code like '5000-2000-000-000', or None if not bucketed
        """
        if s1 != self.family_root_prefix or not s2:
            return None
        leading = s2[0]
        if leading not in digits:
            return None
        root_s2 = leading + '0' * (len(s2) - 1)
        return SEGMENT_SEPARATOR.join((s1, root_s2, ZERO_S3, ZERO_S4))


__all__ = ['HierarchyConventions']
