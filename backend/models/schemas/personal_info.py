"""Self-reported academic and extracurricular data used by the booster."""

from pydantic import BaseModel


class GradeLevel(BaseModel):
    """Scores for one school year, nominally 0-100. Any field may be missing."""
    math: float | None = None
    english: float | None = None
    science: float | None = None
    filipino: float | None = None
    total_average: float | None = None
    custom_subjects: dict[str, float] = {}

    def numeric_grades(self) -> list[float]:
        """Every supplied grade on this level, custom subjects included."""
        values = [
            v for v in (self.math, self.english, self.science, self.filipino, self.total_average)
            if v is not None
        ]
        values.extend(self.custom_subjects.values())
        return values


class Achievement(BaseModel):
    category: str = ""  # e.g. academic, leadership, sports, arts
    title: str
    description: str = ""


class Hobby(BaseModel):
    name: str
    skill_level: str = ""  # beginner, intermediate, advanced, expert


class PersonalInformation(BaseModel):
    grade7: GradeLevel | None = None
    grade8: GradeLevel | None = None
    grade9: GradeLevel | None = None
    grade10: GradeLevel | None = None
    grade11: GradeLevel | None = None
    grade12: GradeLevel | None = None
    achievements: list[Achievement] = []
    hobbies: list[Hobby] = []
    extracurriculars: list[str] = []
    skills: list[str] = []
    languages: list[str] = []
    additional_notes: str = ""
    consent_to_use: bool = False

    def grade_levels(self) -> list[GradeLevel]:
        """Supplied grade levels, oldest first."""
        levels = (self.grade7, self.grade8, self.grade9, self.grade10, self.grade11, self.grade12)
        return [level for level in levels if level is not None]
