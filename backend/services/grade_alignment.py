"""How a student's grades line up with an SHS track's recommended grades.

Uses the most recent junior-high level supplied (grade 10, then 9, 8, 7).
"""

from models.schemas.candidate import SHSTrack
from models.schemas.personal_info import GradeLevel, PersonalInformation
from models.schemas.recommendation import DropoutRisk, GradeAlignment

EXCELLENT_MARGIN = 10  # points above the requirement
GPA_EXCELLENT_MARGIN = 0.5

# Dropout risk points per factor and the level thresholds
MAJOR_GAP, MINOR_GAP = 15, 5
MAJOR_GAP_POINTS, MINOR_GAP_POINTS = 30, 15
NO_GRADES_POINTS = 10
NO_ASSESSMENT_POINTS = 10
HARD_TRACK_WEAK_POINTS, HARD_TRACK_FAIR_POINTS = 20, 10
HIGH_RISK, MEDIUM_RISK = 50, 25


def latest_grades(info: PersonalInformation | None) -> GradeLevel | None:
    if info is None:
        return None
    return info.grade10 or info.grade9 or info.grade8 or info.grade7


def _check(
    name: str,
    value: float | None,
    required: float,
    margin: float,
    strengths: list[str],
    improvements: list[str],
    fmt: str = "{:.0f}%",
) -> bool:
    if value is None:
        improvements.append(f"{name} grade not provided")
        return False
    shown = fmt.format(value)
    if value >= required + margin:
        strengths.append(f"{name} ({shown} - Excellent!)")
    elif value >= required:
        strengths.append(f"{name} ({shown} - Meets requirements)")
    else:
        improvements.append(f"{name} ({shown} - Recommended: {fmt.format(required)}+)")
        return False
    return True


def analyze_grade_alignment(
    info: PersonalInformation | None,
    track: SHSTrack,
) -> GradeAlignment:
    if info is None:
        return GradeAlignment(
            improvement_areas=["Please provide your academic grades for personalized analysis"],
        )

    grades = latest_grades(info)
    if grades is None:
        return GradeAlignment(improvement_areas=["No grade data available"])

    required = track.recommended_grades
    if required.is_empty():
        return GradeAlignment(
            meets_requirements=True,
            strength_areas=["This track has flexible academic requirements"],
        )

    strengths: list[str] = []
    improvements: list[str] = []
    met = True
    if required.math:
        met &= _check("Math", grades.math, required.math, EXCELLENT_MARGIN, strengths, improvements)
    if required.science:
        met &= _check("Science", grades.science, required.science, EXCELLENT_MARGIN, strengths, improvements)
    if required.english:
        met &= _check("English", grades.english, required.english, EXCELLENT_MARGIN, strengths, improvements)
    if required.gpa:
        met &= _check(
            "GPA", grades.total_average, required.gpa, GPA_EXCELLENT_MARGIN,
            strengths, improvements, fmt="{:.2f}",
        )

    return GradeAlignment(
        meets_requirements=met,
        strength_areas=strengths,
        improvement_areas=improvements,
    )


def academic_readiness(info: PersonalInformation | None, track: SHSTrack) -> int:
    """Readiness for a track as 0-100; 50 when no grades are known."""
    grades = latest_grades(info)
    if grades is None:
        return 50

    required = track.recommended_grades
    ratios = []
    for value, target in (
        (grades.math, required.math),
        (grades.science, required.science),
        (grades.english, required.english),
        (grades.total_average, required.gpa),
    ):
        if value is not None and target:
            ratios.append(min(100.0, value / target * 100))

    if ratios:
        return round(sum(ratios) / len(ratios))

    supplied = [g for g in (grades.math, grades.science, grades.english) if g is not None]
    if supplied:
        return round(sum(supplied) / len(supplied))
    return 75


def track_complexity(track: SHSTrack) -> str:
    """STEM and academic ABM are the demanding strands."""
    if track.strand == "STEM" or (track.strand == "ABM" and track.track_type == "Academic"):
        return "high"
    return "medium"


def grade_gap(grades: GradeLevel, track: SHSTrack) -> tuple[int, list[str]]:
    """Average shortfall below the track's recommended grades, and the subjects short."""
    required = track.recommended_grades
    gaps = []
    weak_areas = []
    for name, value, target in (
        ("Math", grades.math, required.math),
        ("Science", grades.science, required.science),
        ("English", grades.english, required.english),
        ("GPA", grades.total_average, required.gpa),
    ):
        if value is not None and target and value < target:
            gaps.append(target - value)
            weak_areas.append(name)
    if not gaps:
        return 0, []
    return round(sum(gaps) / len(gaps)), weak_areas


def _core_average(grades: GradeLevel) -> float:
    core = [g for g in (grades.math, grades.english, grades.science) if g is not None]
    if core:
        return sum(core) / len(core)
    return grades.total_average or 0.0


def calculate_dropout_risk(
    info: PersonalInformation | None,
    track: SHSTrack,
    assessment_completed: bool = True,
) -> DropoutRisk:
    """Risk of struggling in a track from grade gaps, missing data and track difficulty."""
    factors: list[str] = []
    recommendations: list[str] = []
    score = 0

    grades = latest_grades(info)
    if grades is None:
        score += NO_GRADES_POINTS
        factors.append("No academic performance data available")
        recommendations.append("Provide your grades for better track matching")
    else:
        gap, weak_areas = grade_gap(grades, track)
        if gap > MAJOR_GAP:
            score += MAJOR_GAP_POINTS
            factors.append(f"Academic grades significantly below track requirements ({gap}% gap)")
            recommendations.append(f"Focus on improving {', '.join(weak_areas)} before enrollment")
        elif gap > MINOR_GAP:
            score += MINOR_GAP_POINTS
            factors.append(f"Academic grades slightly below track requirements ({gap}% gap)")
            recommendations.append(f"Consider tutoring in {', '.join(weak_areas)}")

    if not assessment_completed:
        score += NO_ASSESSMENT_POINTS
        factors.append("Career assessment not completed")
        recommendations.append("Complete the career assessment for personalized guidance")

    if grades is not None and track_complexity(track) == "high":
        average = _core_average(grades)
        if average < 80:
            score += HARD_TRACK_WEAK_POINTS
            factors.append("High-difficulty track with lower academic performance")
            recommendations.append("Consider additional preparation or a related but less demanding track")
        elif average < 85:
            score += HARD_TRACK_FAIR_POINTS
            factors.append("High-difficulty track requires strong academic foundation")
            recommendations.append("Ensure you have strong study habits and support systems")

    if score >= HIGH_RISK:
        level = "high"
        recommendations += [
            "Consult with a guidance counselor before enrolling",
            "Consider foundational courses to strengthen skills",
        ]
    elif score >= MEDIUM_RISK:
        level = "medium"
        recommendations += [
            "Develop a strong support network (tutors, mentors)",
            "Set realistic academic goals and track your progress",
        ]
    else:
        level = "low"
        recommendations += [
            "You're well-prepared for this track",
            "Stay consistent with your studies and seek help when needed",
        ]

    return DropoutRisk(level=level, score=score, factors=factors, recommendations=recommendations)
