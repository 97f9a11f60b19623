"""All prompt templates for Gemini API calls."""


def format_salary_range(minimum: float, maximum: float) -> str:
    """Render a salary range as e.g. "$45K - $80K"."""

    def _fmt(amount: float) -> str:
        if amount >= 1_000_000:
            return f"${amount / 1_000_000:.1f}M"
        if amount >= 1000:
            return f"${amount / 1000:.0f}K"
        return f"${amount:.0f}"

    return f"{_fmt(minimum)} - {_fmt(maximum)}"


def build_rationale_prompt(
    title: str,
    description: str,
    tags: list[str],
    score: float,
    drivers: list[str],
    top_traits: dict[str, float],
    salary_text: str = "",
    education_level: str = "",
    growth_rate: float | None = None,
    grade_summary: str | None = None,
    boost: float = 0.0,
) -> str:
    """Career-match explanation for one recommendation.

    Grade context is only included when the user consented to share grades.
    """
    traits_text = ", ".join(f"{name}: {value:.2f}" for name, value in top_traits.items())

    details = [f"- Title: {title}", f"- Description: {description}"]
    if salary_text:
        details.append(f"- Salary Range: {salary_text}")
    if education_level:
        details.append(f"- Education Required: {education_level}")
    if growth_rate is not None:
        details.append(f"- Job Market Growth Rate: {growth_rate}%")
    details.append(f"- Key Tags: {', '.join(tags)}")

    academic_section = ""
    focus = [
        f"1. How their key strengths ({', '.join(drivers[:3])}) align with the path",
        "2. What makes this path exciting based on their personality",
    ]
    if grade_summary:
        academic_section = f"""
Academic Background:
- {grade_summary}"""
        if boost > 0.01:
            academic_section += f"""
- Academic Boost to Match: +{boost * 100:.1f}% (grades and activities enhanced this recommendation)"""
        focus.append("3. How their academic background supports this choice")
    focus.append(f"{len(focus) + 1}. One practical benefit (salary, growth, or education fit)")
    focus_text = "\n".join(focus)

    return f"""You are a friendly career advisor helping a student understand why a path matches their personality and skills.

Path Details:
{chr(10).join(details)}

Match Analysis:
- Match Score: {score * 100:.1f}% ({score:.3f} on 0-1 scale)
- Key Trait Drivers: {', '.join(drivers)}
- Student's Top Traits: {traits_text}
{academic_section}

Task: Write a brief, friendly, natural explanation (2-3 sentences, max 150 words) of why this path is a good fit. Focus on:
{focus_text}

Be conversational and encouraging, not robotic. Avoid phrases like "based on your traits" or "according to the data."

Respond with ONLY valid JSON (no markdown, no code fences) in this exact structure:
{{
  "rationale": "<the explanation>"
}}"""
