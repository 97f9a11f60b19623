import pytest

from models.schemas.candidate import Candidate
from services.similarity import (
    calculate_percentile,
    candidate_vector,
    cosine_similarity,
    identify_drivers,
    score,
    score_many,
    tag_vector,
)


def test_cosine_similarity_identical():
    v = [0.9, 0.2, 0.5, 0.1, 0.3, 0.7, 0.4, 0.6]
    assert cosine_similarity(v, v) == pytest.approx(1.0)


def test_cosine_similarity_orthogonal():
    a = [1.0, 0, 0, 0, 0, 0, 0, 0]
    b = [0, 1.0, 0, 0, 0, 0, 0, 0]
    assert cosine_similarity(a, b) == pytest.approx(0.0)


def test_cosine_similarity_opposite_is_clamped():
    assert cosine_similarity([1.0, -1.0], [-1.0, 1.0]) == 0.0


def test_cosine_similarity_zero_and_empty():
    assert cosine_similarity([0.0] * 8, [0.5] * 8) == 0.0
    assert cosine_similarity([0.5] * 8, [0.0] * 8) == 0.0
    assert cosine_similarity([], []) == 0.0


def test_cosine_similarity_length_mismatch():
    with pytest.raises(ValueError):
        cosine_similarity([0.1, 0.2], [0.1, 0.2, 0.3])


def test_scores_stay_in_unit_range(analytical_user, tech_job, care_job, art_job):
    for s in score_many(analytical_user, [tech_job, care_job, art_job]):
        assert 0.0 <= s <= 1.0


def test_analytical_user_prefers_tech(analytical_user, tech_job, care_job):
    assert score(analytical_user, tech_job) > score(analytical_user, care_job)


def test_score_many_keeps_input_order(analytical_user, tech_job, care_job):
    assert score_many(analytical_user, [care_job, tech_job]) == [
        score(analytical_user, care_job),
        score(analytical_user, tech_job),
    ]


def test_tag_vector_marks_associated_traits():
    vector = tag_vector(["Creative", "design", "unknown-tag"])
    # canonical order: analytical, technical, social, creative, ...
    assert vector == [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 0.0]


def test_candidate_without_vector_uses_tags(art_job):
    assert art_job.vector is None
    assert candidate_vector(art_job) == tag_vector(art_job.tags)


def test_candidate_with_wrong_length_vector_uses_tags():
    candidate = Candidate(id="x", vector=[1.0, 0.5], tags=["social"])
    assert candidate_vector(candidate) == tag_vector(["social"])


def test_candidate_with_no_tags_or_vector_scores_zero(analytical_user):
    assert score(analytical_user, Candidate(id="blank")) == 0.0


def test_identify_drivers_orders_by_contribution():
    user = [0.9, 0.8, 0.1, 0.1, 0.1, 0.1, 0.1, 0.1]
    target = [1.0, 1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0]
    assert identify_drivers(user, target) == ["Analytical", "Technical"]


def test_identify_drivers_ties_keep_canonical_order():
    user = [0.5] * 8
    target = [0.5] * 8
    assert identify_drivers(user, target, top_k=3) == ["Analytical", "Technical", "Social"]


def test_identify_drivers_falls_back_to_user_strengths():
    user = [0.1, 0.2, 0.9, 0.3, 0.8, 0.0, 0.0, 0.0]
    assert identify_drivers(user, [0.0] * 8, top_k=2) == ["Social", "Empathetic"]


def test_identify_drivers_label_hands_on():
    user = [0, 0, 0, 0, 0, 1.0, 0, 0]
    assert identify_drivers(user, user, top_k=1) == ["Hands-On"]


def test_calculate_percentile():
    scores = [0.1, 0.2, 0.3, 0.4]
    assert calculate_percentile(0.35, scores) == pytest.approx(75.0)
    assert calculate_percentile(0.1, scores) == pytest.approx(0.0)
    assert calculate_percentile(0.5, []) == 0.0


def test_empty_vector_against_full_candidate(tech_job):
    assert cosine_similarity([], [0.5] * 8) == 0.0
    assert cosine_similarity([0.5] * 8, []) == 0.0
    assert score([], tech_job) == 0.0


def test_zero_vector_of_any_length_scores_zero(tech_job):
    assert cosine_similarity([0.0, 0.0], [0.5] * 8) == 0.0
    assert score([0.0, 0.0, 0.0], tech_job) == 0.0


def test_identify_drivers_empty_vectors():
    assert identify_drivers([], [0.5] * 8) == []
    assert identify_drivers([0.5] * 8, []) == []
