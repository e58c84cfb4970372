# Path: acc_hier/process/validation/recommendation.py
"""
Family recommendation: detail vs summary classification.

Advisory only. The dominant existing pattern wins; when nothing is
classified yet, large families (many level-4 accounts) are steered to
summary classification for manageability.
"""

from acc_hier.constants import (
    ClassificationStatus,
    RecommendedApproach,
    PERCENTAGE_PLACES,
    SUMMARY_RECOMMENDATION_THRESHOLD,
)
from .family import Family
from .models import FamilyRecommendation


def _pct(part: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(part / total * 100, PERCENTAGE_PLACES)


def recommend_approach(
    family: Family,
    statuses: dict[str, ClassificationStatus],
    summary_threshold: int = SUMMARY_RECOMMENDATION_THRESHOLD,
) -> FamilyRecommendation:
    """
    Recommend a classification approach for one family.

    Args:
        family: Family to assess
        statuses: Status per code
        summary_threshold: Level-4 count above which summary is advised

    Returns:
        FamilyRecommendation
    """
    level4 = family.level(4)
    level3 = family.level(3)

    def classified(nodes):
        return sum(1 for n in nodes if statuses.get(n.code) == ClassificationStatus.CLASSIFIED)

    level4_classified = classified(level4)
    level3_classified = classified(level3)

    if level4_classified > 0 and level4_classified > level3_classified:
        completeness = _pct(level4_classified, len(level4))
        return FamilyRecommendation(
            approach=RecommendedApproach.DETAIL_CLASSIFICATION,
            current_completeness=completeness,
            reasoning=(
                f"Family is {completeness}% complete with detail classification. "
                f"Continue classifying level-4 accounts."
            ),
            specific_actions=(
                f"Classify the remaining {len(level4) - level4_classified} level-4 accounts",
                "Keep level-3 and level-2 parents unclassified to avoid double counting",
            ),
        )

    if level3_classified > 0:
        completeness = _pct(level3_classified, len(level3))
        return FamilyRecommendation(
            approach=RecommendedApproach.SUMMARY_CLASSIFICATION,
            current_completeness=completeness,
            reasoning=(
                f"Family is {completeness}% complete with summary classification. "
                f"Continue classifying level-3 accounts."
            ),
            specific_actions=(
                f"Classify the remaining {len(level3) - level3_classified} level-3 accounts",
                "Keep level-4 detail accounts unclassified",
            ),
        )

    if len(level4) > summary_threshold:
        return FamilyRecommendation(
            approach=RecommendedApproach.SUMMARY_CLASSIFICATION,
            current_completeness=0.0,
            reasoning=(
                f"Family has {len(level4)} level-4 accounts; "
                f"summary classification is more manageable."
            ),
            specific_actions=("Start by classifying level-3 summary accounts",),
        )

    return FamilyRecommendation(
        approach=RecommendedApproach.DETAIL_CLASSIFICATION,
        current_completeness=0.0,
        reasoning=(
            f"Family has {len(level4)} level-4 accounts; "
            f"detail classification gives the most insight."
        ),
        specific_actions=("Start by classifying level-4 detail accounts",),
    )


__all__ = ['recommend_approach']
