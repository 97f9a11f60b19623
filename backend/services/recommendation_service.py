"""Orchestrator: stored user data + catalog snapshots -> ranked recommendations.

Flow:
    latest completed attempt  -> trait vector / summary
    personal info (optional)  -> booster input (consent checked in the core)
    catalog snapshot          -> candidates
      ranker.rank(...)        -> scored, sorted, top-N with drivers
      rationale.generate_rationale(...) per result (concurrently)
"""

import asyncio
import logging

from models.responses import RecommendationsResponse, TrackRecommendationsResponse
from models.schemas.assessment import AssessmentAttempt
from models.schemas.candidate import SHSTrack
from models.schemas.personal_info import PersonalInformation
from models.schemas.recommendation import Recommendation, TrackRecommendation
from services.catalog import Catalog
from services.grade_alignment import (
    academic_readiness,
    analyze_grade_alignment,
    calculate_dropout_risk,
)
from services.rationale import generate_rationale
from services.ranker import rank
from services.storage import AttemptStore, PersonalInfoStore, utcnow

logger = logging.getLogger(__name__)


class NoAssessmentDataError(LookupError):
    """The user has no completed assessment to rank against."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"No completed assessment found for user {user_id}")
        self.user_id = user_id


def _require_attempt(user_id: str, attempts: AttemptStore) -> AssessmentAttempt:
    attempt = attempts.latest_attempt(user_id)
    if attempt is None:
        raise NoAssessmentDataError(user_id)
    return attempt


async def _with_rationales(
    recommendations: list[Recommendation],
    trait_summary: dict[str, float],
    personal_info: PersonalInformation | None,
) -> list[Recommendation]:
    rationales = await asyncio.gather(*(
        generate_rationale(
            rec.candidate, rec.drivers, rec.score, trait_summary, personal_info,
        )
        for rec in recommendations
    ))
    return [
        rec.model_copy(update={"rationale": text})
        for rec, text in zip(recommendations, rationales)
    ]


async def recommend_from_vector(
    trait_vector: list[float],
    trait_summary: dict[str, float],
    personal_info: PersonalInformation | None,
    catalog: Catalog,
    limit: int = 5,
) -> RecommendationsResponse:
    """Rank job paths for an arbitrary trait profile ("what-if")."""
    ranked = rank(trait_vector, personal_info, catalog.job_paths(), limit)
    recommendations = await _with_rationales(ranked, trait_summary, personal_info)
    return RecommendationsResponse(
        recommendations=recommendations,
        generated_at=utcnow(),
        count=len(recommendations),
    )


async def recommend_for_user(
    user_id: str,
    catalog: Catalog,
    attempts: AttemptStore,
    personal_info_store: PersonalInfoStore,
    limit: int = 5,
) -> RecommendationsResponse:
    """Job-path recommendations from the user's latest completed assessment.

    Raises NoAssessmentDataError when there is nothing to rank against.
    """
    attempt = _require_attempt(user_id, attempts)
    personal_info = personal_info_store.get(user_id)
    logger.info(
        "Generating %d recommendations for user %s from attempt %s",
        limit, user_id, attempt.id,
    )
    return await recommend_from_vector(
        attempt.trait_vector, attempt.trait_summary, personal_info, catalog, limit,
    )


async def recommend_tracks_for_user(
    user_id: str,
    catalog: Catalog,
    attempts: AttemptStore,
    personal_info_store: PersonalInfoStore,
    limit: int = 3,
) -> TrackRecommendationsResponse:
    """SHS track recommendations with grade alignment, dropout risk and linked career paths."""
    attempt = _require_attempt(user_id, attempts)
    personal_info = personal_info_store.get(user_id)

    ranked = rank(attempt.trait_vector, personal_info, catalog.shs_tracks(), limit)
    ranked = await _with_rationales(ranked, attempt.trait_summary, personal_info)

    job_paths = {jp.id: jp for jp in catalog.job_paths()}
    results = []
    for rec in ranked:
        track: SHSTrack = rec.candidate  # type: ignore[assignment]
        linked = [job_paths[pid] for pid in track.career_pathways if pid in job_paths][:3]
        results.append(TrackRecommendation(
            track=track,
            score=rec.score,
            base_score=rec.base_score,
            boost=rec.boost,
            match_percentage=rec.match_percentage,
            drivers=rec.drivers,
            rationale=rec.rationale,
            grade_alignment=analyze_grade_alignment(personal_info, track),
            academic_readiness=academic_readiness(personal_info, track),
            dropout_risk=calculate_dropout_risk(personal_info, track),
            top_career_paths=linked,
        ))

    return TrackRecommendationsResponse(
        recommendations=results,
        generated_at=utcnow(),
        count=len(results),
    )
