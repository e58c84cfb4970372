# Path: tests/unit/test_hierarchy/test_hierarchy_builder.py
"""
Tests for HierarchyBuilder.

Covers end-to-end tree construction, order independence, malformed
codes, duplicates and the level correction report.
"""

import random

import pytest

from acc_hier.core.errors import EmptyInputError
from acc_hier.process.hierarchy import HierarchyBuilder
from acc_hier.process.hierarchy.constants import DetectedBy, ParentType
from helpers import make_account, make_accounts


@pytest.fixture
def builder():
    return HierarchyBuilder()


class TestCleanFamily:
    """A complete family resolves to a single clean tree."""

    def test_levels_and_parents(self, builder, full_family_accounts):
        """Every code gets its zero-pattern level and direct parent."""
        forest = builder.build(full_family_accounts)

        root = forest.get('5000-1000-000-000')
        group = forest.get('5000-1000-001-000')
        leaf = forest.get('5000-1000-001-101')

        assert root.level == 2
        assert root.is_root
        assert group.level == 3
        assert group.parent == '5000-1000-000-000'
        assert group.parent_type == ParentType.FAMILY_ROOT
        assert leaf.level == 4
        assert leaf.parent == '5000-1000-001-000'
        assert leaf.parent_type == ParentType.DIRECT

    def test_children_follow_input_order(self, builder, full_family_accounts):
        """Children are derived by inverse lookup in input order."""
        forest = builder.build(full_family_accounts)

        assert forest.get('5000-1000-001-000').children == (
            '5000-1000-001-101',
            '5000-1000-001-102',
        )
        assert forest.get('5000-1000-000-000').children == ('5000-1000-001-000',)

    def test_only_root_is_warned(self, builder, full_family_accounts):
        """Below the family root a complete family has no warnings."""
        forest = builder.build(full_family_accounts)

        assert forest.get('5000-1000-000-000').warnings == ("No parent found; kept as root",)
        assert all(not node.warnings for node in forest if not node.is_root)

    def test_top_level_prefix(self, builder):
        """A level-1 total adopts its family roots."""
        forest = builder.build(make_accounts(
            ('5000-0000-000-000', -300),
            ('5000-1000-000-000', -300),
        ))

        assert forest.get('5000-0000-000-000').level == 1
        assert forest.get('5000-1000-000-000').parent == '5000-0000-000-000'


class TestSiblingGrouping:
    """Parentless level-3 accounts of one family."""

    def test_grouped_accounts_are_not_nested(self, builder, grouped_family_accounts):
        """Neither level-3 account is placed beneath the other."""
        forest = builder.build(grouped_family_accounts)

        second = forest.get('5000-1000-002-000')
        assert second.parent is None
        assert second.grouped_with == '5000-1000-001-000'
        assert forest.get('5000-1000-001-000').children == ('5000-1000-001-101',)
        assert [a.code for a in forest.ancestors_of('5000-1000-002-101')] == ['5000-1000-002-000']
        assert forest.get('5000-1000-002-000').to_dict()['grouped_with'] == '5000-1000-001-000'


class TestMalformedCodes:
    """Malformed codes never abort the build."""

    def test_badcode_is_a_warned_root(self, builder, full_family_accounts):
        """BADCODE becomes a level-4 root with a warning."""
        accounts = full_family_accounts + [make_account('BADCODE', -10)]
        forest = builder.build(accounts)

        node = forest.get('BADCODE')
        assert node.level == 4
        assert node.detected_by == DetectedBy.ZERO_PATTERN
        assert node.parent_type == ParentType.ROOT
        assert node.parent is None
        assert 'BADCODE' in node.warnings[0]
        assert len(forest) == 5

    def test_every_orphan_carries_a_warning(self, builder):
        """Non-top-level roots always explain themselves."""
        forest = builder.build(make_accounts(
            ('7000-1000-001-101', 1),
            ('8000-2000-003-000', 2),
            ('BADCODE', 3),
            ('4100-0000-000-000', 4),
        ))

        for node in forest.roots:
            if node.level > 1:
                assert node.warnings, node.code


class TestOrderIndependence:
    """The forest depends only on the set of codes."""

    def test_shuffled_input(self, builder):
        """Shuffling the input yields the same levels and parents."""
        accounts = make_accounts(
            ('5000-0000-000-000', 0),
            ('5000-2000-000-000', 0),
            ('5000-2001-000-000', 0),
            ('5000-2001-001-101', 0),
            ('5000-2000-020-000', 0),
            ('6000-0100-000-000', 0),
            ('6000-0101-000-000', 0),
            ('6000-0102-000-000', 0),
            ('7000-1000-001-000', 0),
            ('7000-1000-002-000', 0),
        )
        expected = {
            node.code: (node.level, node.parent, node.parent_type)
            for node in builder.build(accounts)
        }

        shuffled = list(accounts)
        random.Random(7).shuffle(shuffled)
        actual = {
            node.code: (node.level, node.parent, node.parent_type)
            for node in builder.build(shuffled)
        }

        assert actual == expected

    def test_rebuild_is_identical(self, builder, full_family_accounts):
        """Building twice gives the same node dictionaries."""
        first = builder.build(full_family_accounts).to_dicts()
        second = builder.build(full_family_accounts).to_dicts()
        assert first == second


class TestDuplicatesAndEmptyInput:
    """Duplicates and empty reports."""

    def test_duplicates_keep_first(self, builder):
        """The first row of a duplicated code wins."""
        forest = builder.build(make_accounts(
            ('5000-1000-001-101', -10, 'first'),
            ('5000-1000-001-101', -99, 'second'),
        ))

        assert len(forest) == 1
        assert forest.get('5000-1000-001-101').concept == 'first'

    def test_blank_codes_are_kept_apart(self, builder):
        """Each blank-code row becomes its own node."""
        forest = builder.build(make_accounts(
            ('4100-0000-000-000', 300),
            (None, 100),
            ('', 200),
        ))

        assert len(forest) == 3
        assert [node.code for node in forest] == ['4100-0000-000-000', '<blank>#2', '<blank>#3']
        assert sorted(node.amount for node in forest if not node.is_valid) == [100, 200]

    def test_repeated_malformed_code_is_kept(self, builder):
        """A malformed code seen twice keeps both rows."""
        forest = builder.build(make_accounts(('BADCODE', 1), ('BADCODE', 2)))

        assert [node.code for node in forest] == ['BADCODE', 'BADCODE#2']
        assert forest.get('BADCODE').amount == 1

    def test_empty_input_raises(self, builder):
        """No rows at all is an error."""
        with pytest.raises(EmptyInputError):
            builder.build([])


class TestCorrectionReport:
    """Level corrections made over the zero pattern."""

    def test_bucket_sub_family_correction(self, builder):
        """A bucketed sub-family is re-leveled from 2 to 3."""
        report = builder.correction_report(make_accounts(
            ('5000-2000-000-000', 0),
            ('5000-2001-000-000', 0),
            ('5000-2001-001-101', 0),
        ))

        assert report.total_accounts == 3
        assert report.corrected_accounts == 1
        correction = report.corrections[0]
        assert correction.code == '5000-2001-000-000'
        assert correction.old_level == 2
        assert correction.new_level == 3
        assert correction.detected_by == DetectedBy.FAMILY_ANALYSIS
        assert report.family_based_corrections == 1
        assert report.hybrid_corrections == 0

    def test_clean_family_has_no_corrections(self, builder, full_family_accounts):
        """Zero-pattern levels are kept when family analysis agrees."""
        report = builder.correction_report(full_family_accounts)
        assert report.corrected_accounts == 0

    def test_to_dict(self, builder):
        """The report serializes corrections and a summary."""
        report = builder.correction_report(make_accounts(
            ('6000-0100-000-000', 0),
            ('6000-0101-000-000', 0),
        ))
        data = report.to_dict()

        assert set(data) == {'corrections', 'summary'}
        assert data['summary'] == {
            'total_accounts': 2,
            'corrected_accounts': 1,
            'family_based_corrections': 1,
            'hybrid_corrections': 0,
        }
        assert data['corrections'][0]['code'] == '6000-0101-000-000'
        assert data['corrections'][0]['detected_by'] == DetectedBy.FAMILY_ANALYSIS.value

    def test_empty_input_raises(self, builder):
        """The correction report also rejects empty input."""
        with pytest.raises(EmptyInputError):
            builder.correction_report([])
