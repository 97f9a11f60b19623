"""Catalog records: the candidates being scored and the browse-only listings."""

from datetime import date

from pydantic import BaseModel


class Candidate(BaseModel):
    """Anything that can be matched against a trait profile.

    ``vector`` is an 8-slot target affinity profile. When it is missing or has
    the wrong length, the similarity engine derives one from ``tags``.
    """
    id: str
    title: str = ""
    description: str = ""
    category: str = ""
    tags: list[str] = []
    vector: list[float] | None = None


class SalaryRange(BaseModel):
    min: float = 0
    max: float = 0


class JobPath(Candidate):
    salary_range: SalaryRange = SalaryRange()
    education_level: str = ""  # e.g. "Bachelor's"
    growth_rate: float = 0.0  # projected market growth, percent
    image_url: str | None = None


class RecommendedGrades(BaseModel):
    math: float | None = None
    science: float | None = None
    english: float | None = None
    gpa: float | None = None

    def is_empty(self) -> bool:
        return not any((self.math, self.science, self.english, self.gpa))


class SHSTrack(Candidate):
    """Senior-high-school track/strand (Academic, TVL, Sports, Arts and Design)."""
    track_type: str = ""
    strand: str = ""
    recommended_grades: RecommendedGrades = RecommendedGrades()
    career_pathways: list[str] = []  # job path ids
    college_programs: list[str] = []


class Tuition(BaseModel):
    in_state: float = 0
    out_of_state: float = 0


class College(BaseModel):
    id: str
    name: str
    location: str = ""
    state: str = ""
    programs: list[str] = []
    degree_level: list[str] = []
    tuition: Tuition = Tuition()
    acceptance_rate: float = 0.0  # 0-100
    modality: list[str] = []
    url: str | None = None


class Scholarship(BaseModel):
    id: str
    name: str
    provider: str = ""
    amount: float = 0
    type: str = ""  # Merit, Need-based, Demographic, Field-specific
    deadline: date
    eligibility: list[str] = []
    description: str = ""
    url: str | None = None
