"""Shared test configuration, pytest markers and fixtures."""

import pytest

from config import settings
from models.schemas.assessment import Question
from models.schemas.candidate import JobPath, RecommendedGrades, SalaryRange, SHSTrack
from models.schemas.personal_info import (
    Achievement,
    GradeLevel,
    Hobby,
    PersonalInformation,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: exercises the bundled catalog files end to end"
    )


@pytest.fixture(autouse=True)
def _template_rationales(monkeypatch):
    """Keep Gemini out of unit tests regardless of the local .env."""
    monkeypatch.setattr(settings, "use_llm_rationale", False)


@pytest.fixture
def questions():
    return [
        Question(id="q1", type="likert", weights={"analytical": 1.0}),
        Question(id="q2", type="likert", weights={"analytical": 0.5, "technical": 1.0}),
        Question(id="q3", type="likert", weights={"social": 1.0, "empathetic": 0.5}),
        Question(
            id="q4",
            type="multiple-choice",
            options=["Rarely", "Sometimes", "Often"],
            weights={"creative": 1.0},
        ),
    ]


@pytest.fixture
def tech_job():
    return JobPath(
        id="software-engineer",
        title="Software Engineer",
        category="Technology",
        vector=[0.9, 0.95, 0.4, 0.6, 0.3, 0.4, 0.5, 0.7],
        tags=["technical", "analytical", "programming"],
        salary_range=SalaryRange(min=70000, max=150000),
        education_level="Bachelor's",
        growth_rate=25,
    )


@pytest.fixture
def care_job():
    return JobPath(
        id="registered-nurse",
        title="Registered Nurse",
        category="Healthcare",
        vector=[0.6, 0.5, 0.8, 0.3, 0.95, 0.8, 0.5, 0.8],
        tags=["healthcare", "medical", "empathetic"],
        salary_range=SalaryRange(min=55000, max=95000),
        education_level="Bachelor's",
        growth_rate=6,
    )


@pytest.fixture
def art_job():
    return JobPath(
        id="graphic-designer",
        title="Graphic Designer",
        category="Arts & Design",
        tags=["creative", "artistic", "design"],
        growth_rate=3,
    )


@pytest.fixture
def stem_track():
    return SHSTrack(
        id="academic-stem",
        title="STEM",
        track_type="Academic",
        strand="STEM",
        vector=[0.95, 0.9, 0.4, 0.5, 0.4, 0.5, 0.5, 0.6],
        tags=["analytical", "scientific", "technical"],
        recommended_grades=RecommendedGrades(math=85, science=85),
        career_pathways=["software-engineer", "missing-path"],
        college_programs=["BS Computer Science", "BS Biology"],
    )


@pytest.fixture
def strong_student():
    return PersonalInformation(
        grade9=GradeLevel(math=92, science=90, english=84),
        grade10=GradeLevel(math=96, science=94, english=86),
        achievements=[
            Achievement(category="academic", title="Regional math olympiad", description="Analytical problem solving"),
            Achievement(category="leadership", title="Student council president"),
        ],
        hobbies=[Hobby(name="Programming", skill_level="Advanced")],
        extracurriculars=["Robotics club"],
        skills=["Technical", "Analytical", "Cooking"],
        consent_to_use=True,
    )


@pytest.fixture
def analytical_user():
    # analytical, technical high; social, empathetic low
    return [0.95, 0.9, 0.3, 0.5, 0.2, 0.4, 0.5, 0.6]
