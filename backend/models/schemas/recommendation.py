"""Scoring outputs: booster breakdown, ranked recommendations, track analysis."""

from pydantic import BaseModel, SerializeAsAny

from models.schemas.candidate import Candidate, JobPath, SHSTrack


class AcademicProfile(BaseModel):
    """Grade-derived summary. Strengths are subject means divided by 100."""
    overall_average: float = 0.0
    performance: str = "none"  # excellent, good, average, needs_improvement, none
    math_strength: float = 0.0
    science_strength: float = 0.0
    english_strength: float = 0.0
    strongest_subject: str | None = None


class BoostBreakdown(BaseModel):
    """Per-signal booster contributions for one (user, candidate) pair.

    ``total`` is the clamped sum and is the only value the ranker adds.
    """
    academic: float = 0.0
    subjects: float = 0.0
    math: float = 0.0
    science: float = 0.0
    english: float = 0.0
    achievements: float = 0.0
    leadership: float = 0.0
    hobbies: float = 0.0
    hobby_skill: float = 0.0
    skills: float = 0.0
    total: float = 0.0

    relevant_achievements: list[str] = []
    relevant_hobbies: list[str] = []
    matching_skills: list[str] = []
    profile: AcademicProfile = AcademicProfile()


class Recommendation(BaseModel):
    candidate: SerializeAsAny[Candidate]
    score: float = 0.0  # similarity + boost, unclamped
    base_score: float = 0.0
    boost: float = 0.0
    match_percentage: int = 0  # display value, capped at 100
    drivers: list[str] = []
    rationale: str = ""


class GradeAlignment(BaseModel):
    meets_requirements: bool = False
    strength_areas: list[str] = []
    improvement_areas: list[str] = []


class DropoutRisk(BaseModel):
    """Likelihood that a student struggles in or leaves a track."""
    level: str = "low"  # low, medium, high
    score: int = 0
    factors: list[str] = []
    recommendations: list[str] = []


class TrackRecommendation(BaseModel):
    track: SHSTrack
    score: float = 0.0
    base_score: float = 0.0
    boost: float = 0.0
    match_percentage: int = 0
    drivers: list[str] = []
    rationale: str = ""
    grade_alignment: GradeAlignment = GradeAlignment()
    academic_readiness: int = 50
    dropout_risk: DropoutRisk = DropoutRisk()
    top_career_paths: list[JobPath] = []
