# Path: tests/unit/test_hierarchy/test_level_resolver.py
"""
Tests for the two level strategies and their conflict resolution.
"""

import pytest

from acc_hier.process.hierarchy.account_code import parse_account_code
from acc_hier.process.hierarchy.code_index import CodeIndex
from acc_hier.process.hierarchy.constants import DetectedBy
from acc_hier.process.hierarchy.conventions import HierarchyConventions
from acc_hier.core.errors import ConfigurationError
from acc_hier.process.hierarchy.level_resolver import (
    HierarchyLevelResolver,
    LevelEstimate,
    analyze_family,
    analyze_zero_pattern,
    is_problematic_shape,
    resolve_level_conflict,
)


def index_of(*codes):
    return CodeIndex(parse_account_code(c) for c in codes)


class TestZeroPattern:
    """Test the zero-pattern strategy."""

    @pytest.mark.parametrize('raw,level', [
        ('5000-1000-001-101', 4),
        ('5000-1000-001-000', 3),
        ('5000-1000-000-000', 2),
        ('5000-0000-000-000', 1),
        ('5000-0000-001-000', 3),
    ])
    def test_levels(self, raw, level):
        """Trailing zero segments decide the level."""
        estimate = analyze_zero_pattern(parse_account_code(raw))

        assert estimate.level == level
        assert estimate.confidence == 0.8

    def test_malformed_code(self):
        """Malformed codes get level 4 with reduced confidence."""
        estimate = analyze_zero_pattern(parse_account_code('BADCODE'))

        assert estimate == LevelEstimate(4, 0.5)


class TestFamilyAnalysis:
    """Test the family strategy."""

    def test_top_level(self):
        """Top-level shape is level 1 with full confidence."""
        code = parse_account_code('4100-0000-000-000')
        assert analyze_family(code, index_of(code.code)) == LevelEstimate(1, 1.0)

    def test_bucket_root(self):
        """Configured bucket roots are level 2."""
        code = parse_account_code('5000-2000-000-000')
        assert analyze_family(code, index_of(code.code)) == LevelEstimate(2, 1.0)

    def test_bucket_sub_family(self):
        """Family-root shaped codes inside a bucket are level 3."""
        code = parse_account_code('5000-2001-000-000')
        assert analyze_family(code, index_of(code.code)) == LevelEstimate(3, 0.9)

    def test_subcategory(self):
        """Subcategory shape is level 3."""
        code = parse_account_code('5000-2000-020-000')
        assert analyze_family(code, index_of(code.code)) == LevelEstimate(3, 0.8)

    def test_detail(self):
        """Detail codes are level 4 with moderate confidence."""
        code = parse_account_code('5000-1000-001-101')
        assert analyze_family(code, index_of(code.code)) == LevelEstimate(4, 0.7)

    def test_sequence_parent_and_children(self):
        """In a consecutive run the smallest is level 2, the rest level 3."""
        codes = ['6000-0100-000-000', '6000-0101-000-000', '6000-0102-000-000']
        index = index_of(*codes)

        assert analyze_family(parse_account_code(codes[0]), index) == LevelEstimate(2, 0.9)
        assert analyze_family(parse_account_code(codes[1]), index) == LevelEstimate(3, 0.85)
        assert analyze_family(parse_account_code(codes[2]), index) == LevelEstimate(3, 0.85)

    def test_non_consecutive_values_are_not_a_sequence(self):
        """A gap in the numerals means no run and no evidence."""
        codes = ['6000-0100-000-000', '6000-0105-000-000']
        index = index_of(*codes)

        assert index.sequence_role(parse_account_code(codes[0])) is None
        assert analyze_family(parse_account_code(codes[1]), index) == LevelEstimate(2, 0.0)

    def test_non_numeric_segments_are_skipped(self):
        """Non-numeric s2 values never join a run."""
        index = index_of('6000-ABCD-000-000', '6000-0100-000-000')
        assert index.sequence_role(parse_account_code('6000-0100-000-000')) is None

    def test_malformed_code_has_no_evidence(self):
        """Malformed codes carry no family evidence."""
        code = parse_account_code('BADCODE')
        assert analyze_family(code, index_of()).confidence == 0.0

    def test_custom_conventions(self):
        """Bucket conventions come from the injected object."""
        conventions = HierarchyConventions(
            family_root_prefix='6000',
            family_root_segments=frozenset({'1000'}),
        )
        code = parse_account_code('6000-1000-000-000')
        assert analyze_family(code, index_of(code.code), conventions) == LevelEstimate(2, 1.0)

    def test_invalid_conventions(self):
        """Multi-character bucket digits are a configuration error."""
        with pytest.raises(ConfigurationError):
            HierarchyConventions(detail_bucket_digits=frozenset({'20'}))


class TestConflictResolution:
    """Test resolve_level_conflict."""

    def test_trusted_family_wins(self):
        """Family confidence >= 0.8 wins."""
        code = parse_account_code('5000-2001-000-000')
        result = resolve_level_conflict(LevelEstimate(3, 0.9), LevelEstimate(2, 0.8), code)
        assert result == (3, DetectedBy.FAMILY_ANALYSIS)

    def test_weak_family_loses(self):
        """Family confidence < 0.5 loses to the zero pattern."""
        code = parse_account_code('5000-1000-000-000')
        result = resolve_level_conflict(LevelEstimate(2, 0.0), LevelEstimate(2, 0.8), code)
        assert result == (2, DetectedBy.ZERO_PATTERN)

    def test_problematic_shape_is_hybrid(self):
        """Disagreement on a -000 subcategory code goes to family as HYBRID."""
        code = parse_account_code('5000-2000-020-000')
        assert is_problematic_shape(code)

        result = resolve_level_conflict(LevelEstimate(4, 0.7), LevelEstimate(3, 0.8), code)
        assert result == (4, DetectedBy.HYBRID)

    def test_higher_confidence_wins(self):
        """Otherwise the more confident estimate wins."""
        code = parse_account_code('5000-1000-001-101')
        result = resolve_level_conflict(LevelEstimate(4, 0.7), LevelEstimate(4, 0.8), code)
        assert result == (4, DetectedBy.ZERO_PATTERN)

    def test_tie_goes_to_family(self):
        """Equal confidence favours family analysis."""
        code = parse_account_code('5000-1000-001-101')
        result = resolve_level_conflict(LevelEstimate(3, 0.6), LevelEstimate(4, 0.6), code)
        assert result == (3, DetectedBy.FAMILY_ANALYSIS)


class TestHierarchyLevelResolver:
    """Test the resolver facade."""

    def test_resolution_carries_both_estimates(self):
        """The resolution records both estimates and the winner."""
        code = parse_account_code('5000-2001-000-000')
        resolution = HierarchyLevelResolver().resolve(code, index_of(code.code))

        assert resolution.level == 3
        assert resolution.detected_by == DetectedBy.FAMILY_ANALYSIS
        assert resolution.family_estimate == LevelEstimate(3, 0.9)
        assert resolution.zero_estimate == LevelEstimate(2, 0.8)

    def test_family_root_without_evidence(self):
        """A family root with no bucket or run falls back to the zero pattern."""
        code = parse_account_code('5000-1000-000-000')
        resolution = HierarchyLevelResolver().resolve(code, index_of(code.code))

        assert resolution.level == 2
        assert resolution.detected_by == DetectedBy.ZERO_PATTERN
