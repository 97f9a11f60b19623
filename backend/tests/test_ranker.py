import pytest

from models.schemas.candidate import Candidate
from models.schemas.personal_info import PersonalInformation
from services.booster import BOOST_CAP
from services.ranker import display_percentage, rank


def test_empty_candidates():
    assert rank([0.5] * 8, None, [], limit=5) == []


def test_non_positive_limit(analytical_user, tech_job):
    assert rank(analytical_user, None, [tech_job], limit=0) == []
    assert rank(analytical_user, None, [tech_job], limit=-3) == []


def test_sorted_descending_and_limited(analytical_user, tech_job, care_job, art_job):
    results = rank(analytical_user, None, [care_job, art_job, tech_job], limit=2)
    assert len(results) == 2
    assert results[0].candidate.id == "software-engineer"
    assert results[0].score >= results[1].score


def test_limit_larger_than_catalog(analytical_user, tech_job, care_job):
    assert len(rank(analytical_user, None, [tech_job, care_job], limit=10)) == 2


def test_without_personal_info_score_equals_base(analytical_user, tech_job):
    (result,) = rank(analytical_user, None, [tech_job])
    assert result.boost == 0.0
    assert result.score == result.base_score


def test_final_score_is_base_plus_boost(analytical_user, strong_student, tech_job):
    (result,) = rank(analytical_user, strong_student, [tech_job])
    assert 0 < result.boost <= BOOST_CAP
    assert result.score == pytest.approx(result.base_score + result.boost)


def test_ties_keep_catalog_order():
    vector = [0.5, 0.6, 0.2, 0.1, 0.3, 0.4, 0.2, 0.9]
    first = Candidate(id="first", vector=vector)
    second = Candidate(id="second", vector=vector)
    third = Candidate(id="third", vector=vector)
    results = rank([0.7] * 8, None, [first, second, third], limit=3)
    assert [r.candidate.id for r in results] == ["first", "second", "third"]


def test_boost_can_reorder_equal_matches():
    vector = [0.8, 0.8, 0.2, 0.2, 0.2, 0.2, 0.2, 0.2]
    plain = Candidate(id="plain", vector=vector, tags=["hospitality"])
    matching = Candidate(id="matching", vector=vector, tags=["technical"])
    info = PersonalInformation(skills=["technical"], consent_to_use=True)

    results = rank([0.9] * 8, info, [plain, matching], limit=2)
    assert [r.candidate.id for r in results] == ["matching", "plain"]


def test_boosted_perfect_match_displays_at_most_100(strong_student, tech_job):
    (result,) = rank(tech_job.vector, strong_student, [tech_job])
    assert result.score > 1.0
    assert result.match_percentage == 100


def test_drivers_present(analytical_user, strong_student, tech_job):
    (result,) = rank(analytical_user, strong_student, [tech_job])
    # analytical and technical contribute equally; canonical order breaks the tie
    assert result.drivers[:3] == ["Analytical", "Technical", "Adaptable"]
    assert result.drivers[3] == "strong math skills align with this technical field"


def test_ranking_is_deterministic(analytical_user, strong_student, tech_job, care_job, art_job):
    candidates = [tech_job, care_job, art_job]
    assert rank(analytical_user, strong_student, candidates) == rank(
        analytical_user, strong_student, candidates
    )


@pytest.mark.parametrize("score,expected", [(0.0, 0), (0.456, 46), (0.999, 100), (1.2, 100), (-0.1, 0)])
def test_display_percentage(score, expected):
    assert display_percentage(score) == expected


def test_empty_user_vector_ranks_without_error(tech_job, care_job):
    results = rank([], None, [tech_job, care_job], limit=5)
    assert [r.candidate.id for r in results] == ["software-engineer", "registered-nurse"]
    assert all(r.score == 0.0 and r.match_percentage == 0 for r in results)
    assert all(r.drivers == [] for r in results)
