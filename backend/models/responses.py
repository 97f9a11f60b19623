from datetime import datetime

from pydantic import BaseModel

from models.schemas.recommendation import Recommendation, TrackRecommendation


class TraitScoresResponse(BaseModel):
    attempt_id: str
    trait_vector: list[float] = []
    trait_summary: dict[str, float] = {}


class AttemptResponse(BaseModel):
    attempt_id: str
    assessment_id: str
    current_module_index: int = 0
    responses_saved: int = 0


class RecommendationsResponse(BaseModel):
    recommendations: list[Recommendation] = []
    generated_at: datetime
    count: int = 0


class TrackRecommendationsResponse(BaseModel):
    recommendations: list[TrackRecommendation] = []
    generated_at: datetime
    count: int = 0
