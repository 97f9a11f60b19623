"""Match explanations.

Two layers:
    explain()            -> short "driver" labels for badges (pure, always used)
    generate_rationale() -> a narrative paragraph; Gemini when configured,
                            otherwise a deterministic template
"""

import logging

from config import settings
from models.schemas.candidate import Candidate, JobPath, SHSTrack
from models.schemas.personal_info import PersonalInformation
from models.schemas.recommendation import BoostBreakdown
from services import gemini_client, prompt_builder
from services.booster import compute_boost_breakdown, grade_summary
from services.similarity import candidate_vector, identify_drivers

logger = logging.getLogger(__name__)

STRONG_SUBJECT = 0.75  # subject strength needed before naming it
STRONG_MATCH = 0.5  # below this only two trait drivers are shown

_TRAIT_INSIGHTS: dict[str, str] = {
    "analytical": "Your analytical mindset will help you excel in the problem-solving side of this path.",
    "creative": "Your creativity will be a valuable asset for fresh approaches and new ideas.",
    "social": "Your social strengths will support collaboration and relationship building.",
    "leadership": "Your leadership qualities position you well to grow into management roles.",
    "technical": "Your technical aptitude will help you pick up the tools of this field quickly.",
    "empathetic": "Your empathy will matter in work centered on helping people.",
    "hands-on": "Your practical, hands-on approach will help you deliver tangible results.",
    "adaptable": "Your adaptability will help you thrive as this field changes.",
}


def _plural(n: int, word: str) -> str:
    return f"{n} {word}{'' if n == 1 else 's'}"


def boost_phrase(breakdown: BoostBreakdown) -> str | None:
    """Strongest personal-information signal, in booster contribution order."""
    if breakdown.total <= 0:
        return None

    profile = breakdown.profile
    if breakdown.math > 0 and profile.math_strength > STRONG_SUBJECT:
        return "strong math skills align with this technical field"
    if breakdown.science > 0 and profile.science_strength > STRONG_SUBJECT:
        return "excellent science background suits this field"
    if breakdown.english > 0 and profile.english_strength > STRONG_SUBJECT:
        return "communication skills fit this path"

    if breakdown.achievements > 0:
        return _plural(len(breakdown.relevant_achievements), "relevant achievement")
    if breakdown.leadership > 0:
        return "leadership experience fits this path"
    if breakdown.hobbies > 0:
        return "your interests align with this path"
    if breakdown.skills > 0:
        return _plural(len(breakdown.matching_skills), "matching skill")
    if profile.performance == "excellent":
        return "outstanding academic record"
    return None


def explain(
    user_vector: list[float],
    personal_info: PersonalInformation | None,
    candidate: Candidate,
    final_score: float,
    breakdown: BoostBreakdown | None = None,
) -> list[str]:
    """Driver phrases for one recommendation. Never None, never raises on missing data.

    ``breakdown`` may be passed in when the caller already computed it.
    """
    top_k = 3 if final_score >= STRONG_MATCH else 2
    drivers = identify_drivers(user_vector, candidate_vector(candidate), top_k=top_k)

    if breakdown is None:
        breakdown = compute_boost_breakdown(personal_info, candidate)
    phrase = boost_phrase(breakdown)
    if phrase:
        drivers.append(phrase)
    return drivers


def match_quality(score: float) -> str:
    if score >= 0.9:
        return "an excellent"
    if score >= 0.8:
        return "a very strong"
    if score >= 0.7:
        return "a strong"
    if score >= 0.6:
        return "a good"
    if score >= 0.5:
        return "a moderate"
    return "a potential"


def _trait_drivers(drivers: list[str]) -> list[str]:
    """Driver labels that name a canonical trait (drops the boost phrase)."""
    return [d for d in drivers if d.lower() in _TRAIT_INSIGHTS]


def deterministic_rationale(
    candidate: Candidate,
    drivers: list[str],
    score: float,
    trait_summary: dict[str, float],
    boost_text: str | None = None,
) -> str:
    """Template rationale that needs no external service."""
    traits = _trait_drivers(drivers)
    parts = [f"This path is {match_quality(score)} match for you."]

    if traits:
        parts.append(f"Your {', '.join(traits)} strengths align well with what it requires.")
    if boost_text:
        parts.append(f"Additionally, {boost_text}.")

    if isinstance(candidate, JobPath):
        if candidate.salary_range.max > 0:
            salary = prompt_builder.format_salary_range(
                candidate.salary_range.min, candidate.salary_range.max
            )
            sentence = f"{candidate.title} roles typically offer {salary}"
            if candidate.education_level:
                sentence += f" and usually require {candidate.education_level} level education"
            parts.append(sentence + ".")
        if candidate.growth_rate > 5:
            parts.append(
                f"The field is growing strongly ({candidate.growth_rate}% projected), "
                "which means good room for advancement."
            )
        elif candidate.growth_rate < 0:
            parts.append(
                f"Growth in this field is slower ({candidate.growth_rate}% projected), "
                "so competition may be higher."
            )
    elif isinstance(candidate, SHSTrack) and candidate.college_programs:
        parts.append(
            f"This track opens doors to programs like {' and '.join(candidate.college_programs[:2])}."
        )

    for driver in traits[:2]:
        key = driver.lower()
        if trait_summary.get(key, 0) > 0.7:
            parts.append(_TRAIT_INSIGHTS[key])

    return " ".join(parts)


async def generate_rationale(
    candidate: Candidate,
    drivers: list[str],
    score: float,
    trait_summary: dict[str, float],
    personal_info: PersonalInformation | None = None,
    breakdown: BoostBreakdown | None = None,
) -> str:
    """Narrative rationale. Uses Gemini when available, else the template."""
    if breakdown is None:
        breakdown = compute_boost_breakdown(personal_info, candidate)
    boost_text = boost_phrase(breakdown)

    if settings.use_llm_rationale and settings.gemini_api_key:
        top_traits = dict(
            sorted(trait_summary.items(), key=lambda kv: kv[1], reverse=True)[:5]
        )
        salary_text = ""
        education_level = ""
        growth_rate = None
        if isinstance(candidate, JobPath):
            salary_text = prompt_builder.format_salary_range(
                candidate.salary_range.min, candidate.salary_range.max
            )
            education_level = candidate.education_level
            growth_rate = candidate.growth_rate

        prompt = prompt_builder.build_rationale_prompt(
            title=candidate.title,
            description=candidate.description,
            tags=candidate.tags,
            score=score,
            drivers=drivers,
            top_traits=top_traits,
            salary_text=salary_text,
            education_level=education_level,
            growth_rate=growth_rate,
            grade_summary=grade_summary(personal_info),
            boost=breakdown.total,
        )
        data = await gemini_client.generate_json(prompt)
        text = data.get("rationale", "") if isinstance(data, dict) else ""
        if isinstance(text, str) and text.strip():
            return text.strip()
        logger.warning("Gemini rationale unavailable for %s, using template", candidate.id)

    return deterministic_rationale(candidate, drivers, score, trait_summary, boost_text)
