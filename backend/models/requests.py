from pydantic import BaseModel, Field

from models.schemas.assessment import Response
from models.schemas.personal_info import PersonalInformation


class StartAttemptRequest(BaseModel):
    assessment_id: str = Field(..., max_length=100)


class SaveProgressRequest(BaseModel):
    responses: list[Response] = Field(default_factory=list, max_length=500)
    current_module_index: int = Field(0, ge=0)


class CompleteAttemptRequest(BaseModel):
    # Omitted -> score the responses saved with the in-progress attempt
    responses: list[Response] | None = Field(None, max_length=500)


class PreviewRequest(BaseModel):
    trait_vector: list[float] = Field(..., min_length=8, max_length=8)
    trait_summary: dict[str, float] = {}
    personal_info: PersonalInformation | None = None
    limit: int = Field(5, ge=1, le=20)
