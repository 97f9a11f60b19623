"""Personal-information booster.

Adds a small, capped bonus to a candidate's match score from self-reported
grades, achievements, hobbies and skills. Every signal is gated by overlap
with the candidate's tags, except the overall academic tier.

Only consulted when the user consented; otherwise the boost is zero.
"""

import logging
import re

from models.schemas.candidate import Candidate
from models.schemas.personal_info import PersonalInformation
from models.schemas.recommendation import AcademicProfile, BoostBreakdown

logger = logging.getLogger(__name__)

BOOST_CAP = 0.25

# Overall performance tiers: (minimum average, label, boost)
PERFORMANCE_TIERS: tuple[tuple[float, str, float], ...] = (
    (85.0, "excellent", 0.05),
    (75.0, "good", 0.03),
    (65.0, "average", 0.01),
)

STEM_TAGS = frozenset({"analytical", "technical", "scientific", "mathematical", "engineering"})
HEALTH_TAGS = frozenset({"healthcare", "medical", "biological"})
COMMUNICATION_TAGS = frozenset({"creative", "communication", "writing", "artistic", "social"})
LEADERSHIP_TAGS = frozenset({"leadership", "management"})
SKILLED_LEVELS = frozenset({"advanced", "expert"})

MATH_WEIGHT = 0.04
SCIENCE_WEIGHT = 0.04
HEALTH_SCIENCE_WEIGHT = 0.06
ENGLISH_WEIGHT = 0.04

ACHIEVEMENT_STEP, ACHIEVEMENT_CAP = 0.01, 0.03
LEADERSHIP_BONUS = 0.02
HOBBY_STEP, HOBBY_CAP = 0.01, 0.02
HOBBY_SKILL_BONUS = 0.01
SKILL_STEP, SKILL_CAP = 0.015, 0.04


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _subject_mean(info: PersonalInformation, subject: str) -> float:
    """Mean of one subject over the levels where it was supplied."""
    values = [
        getattr(level, subject)
        for level in info.grade_levels()
        if getattr(level, subject) is not None
    ]
    return _mean(values)


def academic_profile(info: PersonalInformation) -> AcademicProfile:
    """Overall tier and per-subject strengths from all supplied grade levels."""
    all_grades = [g for level in info.grade_levels() for g in level.numeric_grades()]
    if not all_grades:
        return AcademicProfile()

    overall = _mean(all_grades)
    performance = "needs_improvement"
    for minimum, label, _ in PERFORMANCE_TIERS:
        if overall >= minimum:
            performance = label
            break

    subject_means = {
        "Math": _subject_mean(info, "math"),
        "Science": _subject_mean(info, "science"),
        "English": _subject_mean(info, "english"),
    }
    best = max(subject_means.values())
    strongest = None
    if best > 0:
        strongest = next(name for name, avg in subject_means.items() if avg == best)

    return AcademicProfile(
        overall_average=overall,
        performance=performance,
        math_strength=subject_means["Math"] / 100,
        science_strength=subject_means["Science"] / 100,
        english_strength=subject_means["English"] / 100,
        strongest_subject=strongest,
    )


def _tier_boost(performance: str) -> float:
    for _, label, boost in PERFORMANCE_TIERS:
        if label == performance:
            return boost
    return 0.0


def _normalized_tags(candidate: Candidate) -> set[str]:
    return {t.strip().lower() for t in candidate.tags if t.strip()}


def mentions_tag(text: str, tags: set[str]) -> bool:
    """True when ``text`` contains any tag as a whole word (case-insensitive)."""
    lowered = text.lower()
    return any(re.search(rf"(?<!\w){re.escape(tag)}(?!\w)", lowered) for tag in tags)


def compute_boost_breakdown(
    info: PersonalInformation | None,
    candidate: Candidate,
) -> BoostBreakdown:
    """Itemized boost for one candidate. All-zero without info or consent."""
    if info is None or not info.consent_to_use:
        return BoostBreakdown()

    tags = _normalized_tags(candidate)
    profile = academic_profile(info)

    # Academic tier
    academic = _tier_boost(profile.performance)

    # Subject alignment
    math = science = english = 0.0
    if tags & STEM_TAGS:
        math += profile.math_strength * MATH_WEIGHT
        science += profile.science_strength * SCIENCE_WEIGHT
    if tags & HEALTH_TAGS:
        science += profile.science_strength * HEALTH_SCIENCE_WEIGHT
    if tags & COMMUNICATION_TAGS:
        english += profile.english_strength * ENGLISH_WEIGHT
    subjects = math + science + english

    # Achievements
    relevant_achievements = [
        a.title for a in info.achievements
        if mentions_tag(f"{a.title} {a.description}", tags)
    ]
    achievements = min(ACHIEVEMENT_CAP, ACHIEVEMENT_STEP * len(relevant_achievements))
    has_leadership = any(a.category.strip().lower() == "leadership" for a in info.achievements)
    leadership = LEADERSHIP_BONUS if has_leadership and tags & LEADERSHIP_TAGS else 0.0

    # Hobbies and extracurriculars
    interests = [h.name for h in info.hobbies] + list(info.extracurriculars)
    relevant_hobbies = [name for name in interests if mentions_tag(name, tags)]
    hobbies = min(HOBBY_CAP, HOBBY_STEP * len(relevant_hobbies))
    hobby_skill = (
        HOBBY_SKILL_BONUS
        if any(h.skill_level.strip().lower() in SKILLED_LEVELS for h in info.hobbies)
        else 0.0
    )

    # Skill tags
    matching_skills = [s for s in info.skills if s.strip().lower() in tags]
    skills = min(SKILL_CAP, SKILL_STEP * len(matching_skills))

    raw = academic + subjects + achievements + leadership + hobbies + hobby_skill + skills
    total = min(BOOST_CAP, max(0.0, raw))

    return BoostBreakdown(
        academic=academic,
        subjects=subjects,
        math=math,
        science=science,
        english=english,
        achievements=achievements,
        leadership=leadership,
        hobbies=hobbies,
        hobby_skill=hobby_skill,
        skills=skills,
        total=total,
        relevant_achievements=relevant_achievements,
        relevant_hobbies=relevant_hobbies,
        matching_skills=matching_skills,
        profile=profile,
    )


def compute_boost(info: PersonalInformation | None, candidate: Candidate) -> float:
    """Additive score adjustment in [0, BOOST_CAP]."""
    return compute_boost_breakdown(info, candidate).total


def grade_summary(info: PersonalInformation | None) -> str | None:
    """One-line academic summary for narrative rationales, or None without data."""
    if info is None or not info.consent_to_use:
        return None

    profile = academic_profile(info)
    if profile.performance == "none":
        return None

    parts = [
        f"Overall academic performance: {profile.performance} "
        f"({profile.overall_average:.1f}% average)"
    ]
    if profile.strongest_subject:
        parts.append(f"Strongest subject: {profile.strongest_subject}")

    subject_scores = []
    for name, strength in (
        ("Math", profile.math_strength),
        ("English", profile.english_strength),
        ("Science", profile.science_strength),
    ):
        if strength > 0:
            subject_scores.append(f"{name}: {strength * 100:.1f}%")
    if subject_scores:
        parts.append(", ".join(subject_scores))

    return " | ".join(parts)
