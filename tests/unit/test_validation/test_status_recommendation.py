# Path: tests/unit/test_validation/test_status_recommendation.py
"""
Tests for classification statuses, scoring and family recommendations.
"""

from decimal import Decimal

import pytest

from acc_hier.constants import ClassificationStatus, RecommendedApproach, Severity
from acc_hier.loaders.rule_manager import ClassificationState
from acc_hier.process.hierarchy import HierarchyBuilder
from acc_hier.process.validation import (
    IssueScorer,
    compute_statuses,
    group_families,
    is_covered,
    recommend_approach,
)
from acc_hier.process.settings import EngineSettings
from helpers import egresos, make_account, make_accounts


class TestComputeStatuses:
    """Status derivation, children before parents."""

    def test_explicit_and_implicit(self, full_family_accounts):
        """Covered children make unclassified ancestors implicit."""
        forest = HierarchyBuilder().build(full_family_accounts)
        states = {
            '5000-1000-001-101': egresos(),
            '5000-1000-001-102': egresos(),
        }
        statuses = compute_statuses(forest, states.get)

        assert statuses['5000-1000-001-101'] == ClassificationStatus.CLASSIFIED
        assert statuses['5000-1000-001-000'] == ClassificationStatus.IMPLICITLY_CLASSIFIED
        assert statuses['5000-1000-000-000'] == ClassificationStatus.IMPLICITLY_CLASSIFIED

    def test_partial_children_block_implicit(self, detail_family_accounts):
        """One unclassified child keeps the parent unclassified."""
        forest = HierarchyBuilder().build(detail_family_accounts)
        statuses = compute_statuses(forest, {'5000-1000-001-101': egresos()}.get)

        assert statuses['5000-1000-001-000'] == ClassificationStatus.UNCLASSIFIED
        assert statuses['5000-1000-001-102'] == ClassificationStatus.UNCLASSIFIED

    def test_leaf_without_state_is_unclassified(self):
        """A childless unclassified node is never implicit."""
        forest = HierarchyBuilder().build([make_account('5000-1000-001-101', -5)])
        statuses = compute_statuses(forest, lambda code: None)

        assert statuses == {'5000-1000-001-101': ClassificationStatus.UNCLASSIFIED}

    def test_is_covered(self):
        """Covered means classified explicitly or implicitly."""
        assert is_covered(ClassificationStatus.CLASSIFIED)
        assert is_covered(ClassificationStatus.IMPLICITLY_CLASSIFIED)
        assert not is_covered(ClassificationStatus.UNCLASSIFIED)


class TestClassificationState:
    """The both-fields rule for classification."""

    def test_defaults_are_unclassified(self):
        """The all-default state is unset and unclassified."""
        state = ClassificationState()
        assert state.is_unset
        assert not state.is_classified

    def test_tipo_alone_is_partial(self):
        """tipo without categoria_1 is not classified."""
        state = ClassificationState(tipo='Egresos')
        assert not state.is_classified
        assert not state.is_unset

    def test_blank_values_do_not_count(self):
        """Whitespace-only fields are treated as unset."""
        state = ClassificationState(tipo='Egresos', categoria_1='   ')
        assert not state.is_classified

    def test_from_dict_fills_defaults(self):
        """Missing keys fall back to placeholder values."""
        state = ClassificationState.from_dict({'tipo': 'Egresos', 'categoria_1': 'Gastos'})
        assert state.is_classified
        assert state.template_key[2] == ClassificationState().sub_categoria


class TestIssueScorer:
    """Severity and priority buckets."""

    @pytest.fixture
    def scorer(self):
        settings = EngineSettings()
        return IssueScorer(settings.severity_thresholds, settings.priority_thresholds)

    @pytest.mark.parametrize('amount,severity', [
        ('1000000', Severity.CRITICAL),
        ('999999.99', Severity.HIGH),
        ('500000', Severity.HIGH),
        ('100000', Severity.MEDIUM),
        ('99999', Severity.LOW),
        ('-2000000', Severity.CRITICAL),
    ])
    def test_severity(self, scorer, amount, severity):
        """Severity follows the amount buckets, sign ignored."""
        assert scorer.severity(Decimal(amount)) == severity

    @pytest.mark.parametrize('amount,rank', [
        ('5000000', 1),
        ('1000000', 2),
        ('750000', 3),
        ('100000', 4),
        ('10', 5),
    ])
    def test_priority(self, scorer, amount, rank):
        """Priority ranks 1 to 5 by amount."""
        assert scorer.priority(Decimal(amount)) == rank


class TestRecommendation:
    """Advisory detail vs summary recommendation."""

    @staticmethod
    def family_of(accounts):
        forest = HierarchyBuilder().build(accounts)
        return forest, group_families(forest)[0]

    def test_detail_pattern_continues(self, detail_family_accounts):
        """Existing detail classification keeps the detail approach."""
        forest, family = self.family_of(detail_family_accounts)
        statuses = compute_statuses(forest, {'5000-1000-001-101': egresos()}.get)

        recommendation = recommend_approach(family, statuses)

        assert recommendation.approach == RecommendedApproach.DETAIL_CLASSIFICATION
        assert recommendation.current_completeness == 50.0
        assert '1 level-4' in recommendation.specific_actions[0]

    def test_summary_pattern_continues(self, detail_family_accounts):
        """Existing level-3 classification keeps the summary approach."""
        forest, family = self.family_of(detail_family_accounts)
        statuses = compute_statuses(forest, {'5000-1000-001-000': egresos()}.get)

        recommendation = recommend_approach(family, statuses)

        assert recommendation.approach == RecommendedApproach.SUMMARY_CLASSIFICATION
        assert recommendation.current_completeness == 100.0

    def test_small_untouched_family(self, detail_family_accounts):
        """Small families with nothing classified get detail advice."""
        forest, family = self.family_of(detail_family_accounts)
        recommendation = recommend_approach(family, compute_statuses(forest, lambda c: None))

        assert recommendation.approach == RecommendedApproach.DETAIL_CLASSIFICATION
        assert recommendation.current_completeness == 0.0

    def test_large_untouched_family(self):
        """Many level-4 accounts steer to summary classification."""
        rows = [('5000-1000-001-000', -16)]
        rows += [(f'5000-1000-001-{n:03d}', -1) for n in range(101, 117)]
        forest, family = self.family_of(make_accounts(*rows))

        recommendation = recommend_approach(family, compute_statuses(forest, lambda c: None))

        assert recommendation.approach == RecommendedApproach.SUMMARY_CLASSIFICATION
        assert '16 level-4' in recommendation.reasoning

    def test_threshold_is_configurable(self, detail_family_accounts):
        """A lower threshold flips small families to summary advice."""
        forest, family = self.family_of(detail_family_accounts)
        recommendation = recommend_approach(
            family, compute_statuses(forest, lambda c: None), summary_threshold=1
        )

        assert recommendation.approach == RecommendedApproach.SUMMARY_CLASSIFICATION

    def test_family_name_and_total(self, full_family_accounts):
        """Name comes from the level-2 concept, total from leaves."""
        _, family = self.family_of(full_family_accounts)

        assert family.family_name == 'Gastos generales'
        assert family.total_amount == Decimal('300000')
