from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import (
    get_attempt_store,
    get_catalog,
    get_personal_info_store,
    get_user_id,
)
from config import settings
from models.requests import (
    CompleteAttemptRequest,
    PreviewRequest,
    SaveProgressRequest,
    StartAttemptRequest,
)
from models.responses import (
    AttemptResponse,
    RecommendationsResponse,
    TraitScoresResponse,
    TrackRecommendationsResponse,
)
from models.schemas.assessment import Assessment, AssessmentAttempt
from models.schemas.candidate import College, JobPath, Scholarship, SHSTrack
from models.schemas.personal_info import PersonalInformation
from services import recommendation_service
from services.catalog import Catalog
from services.recommendation_service import NoAssessmentDataError
from services.storage import AttemptNotFoundError, AttemptStore, PersonalInfoStore
from services.trait_scorer import compute_trait_scores

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)

NO_ASSESSMENT_DETAIL = {
    "error": "No assessment found",
    "message": "Please complete an assessment before viewing recommendations.",
}


def _clamp_limit(limit: int | None, default: int) -> int:
    if limit is None:
        return default
    return max(1, min(limit, settings.max_recommendations))


def _owned_in_progress(attempt_id: str, user_id: str, attempts: AttemptStore) -> AssessmentAttempt:
    attempt = attempts.get_in_progress(attempt_id)
    if attempt is None:
        raise HTTPException(status_code=404, detail="Attempt not found")
    if attempt.user_id != user_id:
        raise HTTPException(status_code=403, detail="Forbidden")
    return attempt


@router.get("/health")
async def health():
    return {
        "status": "ok",
        "gemini_configured": bool(settings.gemini_api_key),
    }


# --- Assessments -----------------------------------------------------------

@router.get("/assessments/attempts", response_model=list[AssessmentAttempt])
async def list_attempts(
    user_id: str = Depends(get_user_id),
    attempts: AttemptStore = Depends(get_attempt_store),
):
    return attempts.user_attempts(user_id)


@router.get("/assessments/{assessment_id}", response_model=Assessment)
async def get_assessment(assessment_id: str, catalog: Catalog = Depends(get_catalog)):
    assessment = catalog.get_assessment(assessment_id)
    if assessment is None:
        raise HTTPException(status_code=404, detail="Assessment not found")
    return assessment


@router.post("/assessments/attempts", response_model=AttemptResponse, status_code=201)
async def start_attempt(
    body: StartAttemptRequest,
    user_id: str = Depends(get_user_id),
    catalog: Catalog = Depends(get_catalog),
    attempts: AttemptStore = Depends(get_attempt_store),
):
    if catalog.get_assessment(body.assessment_id) is None:
        raise HTTPException(status_code=404, detail="Assessment not found")
    attempt = attempts.create_attempt(user_id, body.assessment_id)
    return AttemptResponse(attempt_id=attempt.id, assessment_id=attempt.assessment_id)


@router.put("/assessments/attempts/{attempt_id}", response_model=AttemptResponse)
async def save_progress(
    attempt_id: str,
    body: SaveProgressRequest,
    user_id: str = Depends(get_user_id),
    attempts: AttemptStore = Depends(get_attempt_store),
):
    _owned_in_progress(attempt_id, user_id, attempts)
    try:
        attempt = attempts.update_progress(attempt_id, body.responses, body.current_module_index)
    except AttemptNotFoundError:
        raise HTTPException(status_code=404, detail="Attempt not found")
    return AttemptResponse(
        attempt_id=attempt.id,
        assessment_id=attempt.assessment_id,
        current_module_index=attempt.current_module_index,
        responses_saved=len(attempt.responses),
    )


@router.post("/assessments/attempts/{attempt_id}/complete", response_model=TraitScoresResponse)
@limiter.limit(settings.rate_limit)
async def complete_attempt(
    request: Request,
    attempt_id: str,
    body: CompleteAttemptRequest,
    user_id: str = Depends(get_user_id),
    catalog: Catalog = Depends(get_catalog),
    attempts: AttemptStore = Depends(get_attempt_store),
):
    attempt = _owned_in_progress(attempt_id, user_id, attempts)

    if catalog.get_assessment(attempt.assessment_id) is None:
        raise HTTPException(status_code=404, detail="Assessment not found")

    responses = body.responses if body.responses is not None else attempt.responses
    scores = compute_trait_scores(responses, catalog.questions(attempt.assessment_id))

    try:
        completed = attempts.complete_attempt(attempt_id, scores, responses)
    except AttemptNotFoundError:
        raise HTTPException(status_code=404, detail="Attempt not found")

    return TraitScoresResponse(
        attempt_id=completed.id,
        trait_vector=completed.trait_vector,
        trait_summary=completed.trait_summary,
    )


# --- Recommendations -------------------------------------------------------

@router.get("/recommendations", response_model=RecommendationsResponse)
@limiter.limit(settings.rate_limit)
async def recommendations(
    request: Request,
    limit: int | None = None,
    user_id: str = Depends(get_user_id),
    catalog: Catalog = Depends(get_catalog),
    attempts: AttemptStore = Depends(get_attempt_store),
    personal_info: PersonalInfoStore = Depends(get_personal_info_store),
):
    try:
        return await recommendation_service.recommend_for_user(
            user_id,
            catalog,
            attempts,
            personal_info,
            limit=_clamp_limit(limit, settings.default_recommendations),
        )
    except NoAssessmentDataError:
        raise HTTPException(status_code=404, detail=NO_ASSESSMENT_DETAIL)


@router.post("/recommendations/preview", response_model=RecommendationsResponse)
@limiter.limit(settings.rate_limit)
async def preview_recommendations(
    request: Request,
    body: PreviewRequest,
    catalog: Catalog = Depends(get_catalog),
):
    return await recommendation_service.recommend_from_vector(
        body.trait_vector,
        body.trait_summary,
        body.personal_info,
        catalog,
        limit=_clamp_limit(body.limit, settings.default_recommendations),
    )


@router.get("/shs-recommendations", response_model=TrackRecommendationsResponse)
@limiter.limit(settings.rate_limit)
async def shs_recommendations(
    request: Request,
    limit: int | None = None,
    user_id: str = Depends(get_user_id),
    catalog: Catalog = Depends(get_catalog),
    attempts: AttemptStore = Depends(get_attempt_store),
    personal_info: PersonalInfoStore = Depends(get_personal_info_store),
):
    try:
        return await recommendation_service.recommend_tracks_for_user(
            user_id,
            catalog,
            attempts,
            personal_info,
            limit=_clamp_limit(limit, settings.default_track_recommendations),
        )
    except NoAssessmentDataError:
        raise HTTPException(status_code=404, detail=NO_ASSESSMENT_DETAIL)


# --- Personal information --------------------------------------------------

@router.get("/personal-info", response_model=PersonalInformation)
async def get_personal_info(
    user_id: str = Depends(get_user_id),
    store: PersonalInfoStore = Depends(get_personal_info_store),
):
    info = store.get(user_id)
    if info is None:
        raise HTTPException(status_code=404, detail="No personal information saved")
    return info


@router.put("/personal-info", response_model=PersonalInformation)
async def put_personal_info(
    body: PersonalInformation,
    user_id: str = Depends(get_user_id),
    store: PersonalInfoStore = Depends(get_personal_info_store),
):
    return store.upsert(user_id, body)


@router.delete("/personal-info", status_code=204)
async def delete_personal_info(
    user_id: str = Depends(get_user_id),
    store: PersonalInfoStore = Depends(get_personal_info_store),
):
    store.delete(user_id)


# --- Catalog ---------------------------------------------------------------

@router.get("/job-paths", response_model=list[JobPath])
async def job_paths(
    q: str | None = None,
    category: str | None = None,
    catalog: Catalog = Depends(get_catalog),
):
    if not q:
        return catalog.job_paths_by_category(category) if category else catalog.job_paths()
    results = catalog.search_job_paths(q)
    if category:
        results = [jp for jp in results if jp.category == category]
    return results


@router.get("/job-paths/{job_path_id}", response_model=JobPath)
async def job_path(job_path_id: str, catalog: Catalog = Depends(get_catalog)):
    found = catalog.get_job_path(job_path_id)
    if found is None:
        raise HTTPException(status_code=404, detail="Job path not found")
    return found


@router.get("/shs-tracks", response_model=list[SHSTrack])
async def shs_tracks(
    track_type: str | None = None,
    strand: str | None = None,
    catalog: Catalog = Depends(get_catalog),
):
    tracks = catalog.shs_tracks()
    if track_type:
        tracks = [t for t in tracks if t.track_type == track_type]
    if strand:
        tracks = [t for t in tracks if t.strand == strand]
    return tracks


@router.get("/shs-tracks/{track_id}", response_model=SHSTrack)
async def shs_track(track_id: str, catalog: Catalog = Depends(get_catalog)):
    found = catalog.get_shs_track(track_id)
    if found is None:
        raise HTTPException(status_code=404, detail="SHS track not found")
    return found


@router.get("/colleges", response_model=list[College])
async def colleges(
    degree_level: str | None = None,
    state: str | None = None,
    modality: str | None = None,
    tuition_max: float | None = None,
    acceptance_rate_min: float | None = None,
    acceptance_rate_max: float | None = None,
    program: str | None = None,
    catalog: Catalog = Depends(get_catalog),
):
    return catalog.filter_colleges(
        degree_level=degree_level,
        state=state,
        modality=modality,
        tuition_max=tuition_max,
        acceptance_rate_min=acceptance_rate_min,
        acceptance_rate_max=acceptance_rate_max,
        program=program,
    )


@router.get("/scholarships", response_model=list[Scholarship])
async def scholarships(
    type: str | None = None,
    amount_min: float | None = None,
    deadline_after: date | None = None,
    deadline_before: date | None = None,
    upcoming: bool = False,
    catalog: Catalog = Depends(get_catalog),
):
    if upcoming:
        return catalog.upcoming_scholarships()
    return catalog.filter_scholarships(
        type=type,
        amount_min=amount_min,
        deadline_after=deadline_after,
        deadline_before=deadline_before,
    )


@router.post("/catalog/reload")
async def reload_catalog(catalog: Catalog = Depends(get_catalog)):
    catalog.invalidate()
    return {"status": "ok"}
