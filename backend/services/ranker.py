"""Recommendation ranker: similarity + boost, stable sort, top-N, drivers.

Pure function over in-memory data. Scores are not clamped after boosting;
``match_percentage`` is the display value and is capped at 100.
"""

import logging

from models.schemas.candidate import Candidate
from models.schemas.personal_info import PersonalInformation
from models.schemas.recommendation import Recommendation
from services.booster import compute_boost_breakdown
from services.rationale import explain
from services.similarity import score_many

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 5


def display_percentage(score: float) -> int:
    """Round a final score to a 0-100 match percentage."""
    return min(100, max(0, round(score * 100)))


def rank(
    user_vector: list[float],
    personal_info: PersonalInformation | None,
    candidates: list[Candidate],
    limit: int = DEFAULT_LIMIT,
) -> list[Recommendation]:
    """Rank candidates for one trait vector.

    Ties keep catalog order. The caller validates ``limit``; a non-positive
    value yields an empty list.
    """
    if not candidates or limit <= 0:
        return []

    base_scores = score_many(user_vector, candidates)
    scored = []
    for candidate, base in zip(candidates, base_scores):
        breakdown = compute_boost_breakdown(personal_info, candidate)
        scored.append((base + breakdown.total, base, breakdown, candidate))

    # sorted() is stable: equal final scores keep catalog order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)[:limit]

    recommendations = [
        Recommendation(
            candidate=candidate,
            score=final,
            base_score=base,
            boost=breakdown.total,
            match_percentage=display_percentage(final),
            drivers=explain(user_vector, personal_info, candidate, final, breakdown=breakdown),
        )
        for final, base, breakdown, candidate in scored
    ]
    logger.debug("Ranked %d candidates, returning %d", len(candidates), len(recommendations))
    return recommendations
