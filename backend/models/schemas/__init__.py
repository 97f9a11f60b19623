"""Pydantic contracts shared by the scoring core and the API layer."""

from models.schemas.assessment import (
    Assessment,
    AssessmentAttempt,
    AssessmentModule,
    Question,
    Response,
    TraitScores,
)
from models.schemas.candidate import (
    Candidate,
    College,
    JobPath,
    Scholarship,
    SHSTrack,
)
from models.schemas.personal_info import (
    Achievement,
    GradeLevel,
    Hobby,
    PersonalInformation,
)
from models.schemas.recommendation import (
    AcademicProfile,
    BoostBreakdown,
    DropoutRisk,
    GradeAlignment,
    Recommendation,
    TrackRecommendation,
)

__all__ = [
    "Assessment",
    "AssessmentAttempt",
    "AssessmentModule",
    "Question",
    "Response",
    "TraitScores",
    "Candidate",
    "College",
    "JobPath",
    "Scholarship",
    "SHSTrack",
    "Achievement",
    "GradeLevel",
    "Hobby",
    "PersonalInformation",
    "AcademicProfile",
    "BoostBreakdown",
    "DropoutRisk",
    "GradeAlignment",
    "Recommendation",
    "TrackRecommendation",
]
