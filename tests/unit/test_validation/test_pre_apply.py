# Path: tests/unit/test_validation/test_pre_apply.py
"""
Tests for PreApplyValidator.
"""

from decimal import Decimal

import pytest

from acc_hier.constants import Severity
from acc_hier.loaders.rule_manager import ClassificationState
from acc_hier.process.hierarchy import HierarchyBuilder
from acc_hier.process.validation import (
    CHILDREN_ALREADY_CLASSIFIED,
    PARENT_ALREADY_CLASSIFIED,
    PreApplyValidator,
)
from helpers import egresos


@pytest.fixture
def forest(full_family_accounts):
    return HierarchyBuilder().build(full_family_accounts)


@pytest.fixture
def validator():
    return PreApplyValidator()


class TestRejections:
    """Changes that would double count are rejected."""

    def test_parent_already_classified(self, validator, forest):
        """Classifying a detail row under a classified parent."""
        result = validator.check(
            '5000-1000-001-101', egresos(), forest, {'5000-1000-001-000': egresos()}
        )

        assert not result.valid
        assert result.error == PARENT_ALREADY_CLASSIFIED
        assert result.severity == Severity.CRITICAL
        assert result.conflicting_codes == ('5000-1000-001-000',)
        assert result.financial_impact == Decimal('300000')
        assert result.suggested_action == 'UNCLASSIFY_PARENT_OR_USE_PARENT_ONLY'

    def test_grandparent_already_classified(self, validator, forest):
        """Any classified ancestor blocks the change."""
        result = validator.check(
            '5000-1000-001-101', egresos(), forest, {'5000-1000-000-000': egresos()}
        )

        assert result.error == PARENT_ALREADY_CLASSIFIED
        assert result.conflicting_codes == ('5000-1000-000-000',)

    def test_children_already_classified(self, validator, forest):
        """Classifying a parent over classified detail rows."""
        result = validator.check(
            '5000-1000-001-000', egresos(), forest, {'5000-1000-001-101': egresos()}
        )

        assert not result.valid
        assert result.error == CHILDREN_ALREADY_CLASSIFIED
        assert result.conflicting_codes == ('5000-1000-001-101',)
        assert result.financial_impact == Decimal('200000')
        assert '$200,000.00' in result.message


class TestAcceptedChanges:
    """Changes that cannot double count are accepted."""

    def test_clean_family(self, validator, forest):
        """Nothing classified around the code."""
        result = validator.check('5000-1000-001-101', egresos(), forest, {})
        assert result.valid
        assert result.error is None

    def test_clearing_is_always_valid(self, validator, forest):
        """Removing a classification cannot double count."""
        result = validator.check(
            '5000-1000-001-101', None, forest, {'5000-1000-001-000': egresos()}
        )
        assert result.valid

    def test_partial_proposal_is_valid(self, validator, forest):
        """A partial classification does not count as classified."""
        result = validator.check(
            '5000-1000-001-101',
            ClassificationState(tipo='Egresos'),
            forest,
            {'5000-1000-001-000': egresos()},
        )
        assert result.valid

    def test_grouped_sibling_is_not_a_parent(self, validator, grouped_family_accounts):
        """A classified level-3 account does not block its grouped sibling."""
        forest = HierarchyBuilder().build(grouped_family_accounts)
        result = validator.check(
            '5000-1000-002-000', egresos(), forest, {'5000-1000-001-000': egresos()}
        )

        assert result.valid
        assert result.error is None

    def test_unknown_code(self, validator, forest):
        """Codes outside the report have nothing to conflict with."""
        result = validator.check('9000-1000-001-101', egresos(), forest, {})
        assert result.valid

    def test_to_dict(self, validator, forest):
        """Serialized result uses plain values."""
        data = validator.check(
            '5000-1000-001-101', egresos(), forest, {'5000-1000-001-000': egresos()}
        ).to_dict()

        assert data['valid'] is False
        assert data['severity'] == 'CRITICAL'
        assert data['financial_impact'] == '300000'
