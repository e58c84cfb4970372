# Path: tests/unit/test_validation/test_fix_suggestions.py
"""
Tests for fix suggestions and over-classification resolution options.
"""

import pytest

from acc_hier.constants import IssueType, OverClassificationChoice
from acc_hier.loaders.rule_manager import InMemoryRuleManager
from acc_hier.process.hierarchy import HierarchyBuilder
from acc_hier.process.validation import FamilyValidator, resolution_options, suggest_fixes
from helpers import egresos


@pytest.fixture
def forest(detail_family_accounts):
    return HierarchyBuilder().build(detail_family_accounts)


class TestSuggestFixes:
    """Deltas for auto-fixable mixed groups."""

    def test_copies_sibling_template(self, forest):
        """The unclassified sibling gets the shared template."""
        issue = FamilyValidator().validate(forest, {'5000-1000-001-101': egresos()}).issues[0]

        deltas = suggest_fixes(issue)

        assert len(deltas) == 1
        assert deltas[0].code == '5000-1000-001-102'
        assert deltas[0].new_classification == egresos()
        assert issue.issue_id in deltas[0].reason

    def test_applied_fix_clears_the_issue(self, forest):
        """Submitting the suggestion resolves the mixed group."""
        manager = InMemoryRuleManager({'5000-1000-001-101': egresos()})
        validator = FamilyValidator()
        issue = validator.validate(forest, manager).issues[0]

        manager.submit_deltas(suggest_fixes(issue))

        assert validator.validate(forest, manager).issues == []

    def test_other_issue_types_have_no_fix(self, forest):
        """Over-classification is never auto-fixed."""
        issue = FamilyValidator().validate(forest, {
            '5000-1000-001-000': egresos(),
            '5000-1000-001-101': egresos(),
            '5000-1000-001-102': egresos(),
        }).issues[0]

        assert issue.issue_type == IssueType.OVER_CLASSIFICATION
        assert suggest_fixes(issue) == []


class TestResolutionOptions:
    """KEEP_DETAIL and KEEP_SUMMARY delta sets."""

    @pytest.fixture
    def over_issue(self, forest):
        return FamilyValidator().validate(forest, {
            '5000-1000-001-000': egresos(),
            '5000-1000-001-101': egresos(),
            '5000-1000-001-102': egresos(),
        }).issues[0]

    def test_keep_detail_clears_parent(self, over_issue):
        """KEEP_DETAIL removes the parent classification only."""
        options = resolution_options(over_issue)
        keep_detail = options[OverClassificationChoice.KEEP_DETAIL]

        assert [d.code for d in keep_detail] == ['5000-1000-001-000']
        assert keep_detail[0].new_classification is None

    def test_keep_summary_clears_descendants(self, over_issue):
        """KEEP_SUMMARY removes every classified descendant."""
        options = resolution_options(over_issue)
        keep_summary = options[OverClassificationChoice.KEEP_SUMMARY]

        assert [d.code for d in keep_summary] == ['5000-1000-001-101', '5000-1000-001-102']
        assert all(d.new_classification is None for d in keep_summary)

    @pytest.mark.parametrize('choice', list(OverClassificationChoice))
    def test_either_choice_resolves(self, forest, choice):
        """Both options leave the family free of issues."""
        manager = InMemoryRuleManager({
            '5000-1000-001-000': egresos(),
            '5000-1000-001-101': egresos(),
            '5000-1000-001-102': egresos(),
        })
        validator = FamilyValidator()
        issue = validator.validate(forest, manager).issues[0]

        manager.submit_deltas(resolution_options(issue)[choice])

        assert validator.validate(forest, manager).issues == []

    def test_mixed_issue_has_no_options(self, forest):
        """Only overlap issues have resolution options."""
        issue = FamilyValidator().validate(forest, {'5000-1000-001-101': egresos()}).issues[0]
        assert resolution_options(issue) == {}
