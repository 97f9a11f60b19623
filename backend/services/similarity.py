"""Cosine similarity engine for trait-vector matching.

User vectors and candidate profiles share the canonical 8-trait order from
``services.trait_scorer``. Candidates without a usable vector are mapped to a
pseudo-vector through their tags.
"""

import logging

import numpy as np
from sklearn.metrics.pairwise import cosine_similarity as sklearn_cosine

from models.schemas.candidate import Candidate
from services.trait_scorer import CANONICAL_TRAITS, TRAIT_LABELS

logger = logging.getLogger(__name__)

# Catalog tag -> canonical traits it signals
TAG_TRAIT_ASSOCIATIONS: dict[str, tuple[str, ...]] = {
    "analytical": ("analytical",),
    "mathematical": ("analytical",),
    "scientific": ("analytical", "technical"),
    "research": ("analytical",),
    "data": ("analytical", "technical"),
    "finance": ("analytical",),
    "technical": ("technical",),
    "engineering": ("technical", "analytical"),
    "technology": ("technical",),
    "programming": ("technical", "analytical"),
    "social": ("social",),
    "communication": ("social",),
    "teaching": ("social", "empathetic"),
    "sales": ("social", "leadership"),
    "creative": ("creative",),
    "artistic": ("creative",),
    "design": ("creative",),
    "writing": ("creative",),
    "media": ("creative", "social"),
    "empathetic": ("empathetic",),
    "healthcare": ("empathetic", "hands-on"),
    "medical": ("empathetic", "analytical"),
    "biological": ("analytical",),
    "counseling": ("empathetic", "social"),
    "hands-on": ("hands-on",),
    "practical": ("hands-on",),
    "trades": ("hands-on", "technical"),
    "sports": ("hands-on", "adaptable"),
    "outdoor": ("hands-on", "adaptable"),
    "leadership": ("leadership",),
    "management": ("leadership",),
    "business": ("leadership", "analytical"),
    "entrepreneurial": ("leadership", "adaptable"),
    "adaptable": ("adaptable",),
    "dynamic": ("adaptable",),
    "hospitality": ("social", "adaptable"),
}


def cosine_similarity(vector_a: list[float], vector_b: list[float]) -> float:
    """Cosine similarity clamped to [0, 1].

    Empty or zero-magnitude vectors score 0.0, whatever the other side holds.
    """
    a = np.asarray(vector_a, dtype=float).reshape(1, -1)
    b = np.asarray(vector_b, dtype=float).reshape(1, -1)
    if not np.any(a) or not np.any(b):
        return 0.0
    if a.shape != b.shape:
        raise ValueError(f"Vector length mismatch: {a.shape[1]} vs {b.shape[1]}")

    score = sklearn_cosine(a, b)[0][0]
    return float(min(1.0, max(0.0, score)))


def tag_vector(tags: list[str]) -> list[float]:
    """Pseudo-vector from catalog tags: 1.0 for every associated trait, else 0.0."""
    slots = {trait: 0.0 for trait in CANONICAL_TRAITS}
    for tag in tags:
        for trait in TAG_TRAIT_ASSOCIATIONS.get(tag.strip().lower(), ()):
            slots[trait] = 1.0
    return [slots[trait] for trait in CANONICAL_TRAITS]


def candidate_vector(candidate: Candidate) -> list[float]:
    """The candidate's target profile in canonical order."""
    if candidate.vector is not None and len(candidate.vector) == len(CANONICAL_TRAITS):
        return list(candidate.vector)
    if candidate.vector:
        logger.debug(
            "Candidate %s vector has %d slots, using tags instead",
            candidate.id, len(candidate.vector),
        )
    return tag_vector(candidate.tags)


def score(user_vector: list[float], candidate: Candidate) -> float:
    """Base match score between a user trait vector and one candidate."""
    return cosine_similarity(user_vector, candidate_vector(candidate))


def score_many(user_vector: list[float], candidates: list[Candidate]) -> list[float]:
    """Base match scores for a batch of candidates, in input order."""
    return [score(user_vector, candidate) for candidate in candidates]


def identify_drivers(
    user_vector: list[float],
    target_vector: list[float],
    top_k: int = 3,
) -> list[str]:
    """Trait labels that contribute most to a match.

    Contribution is ``user[i] * target[i]``; only positive contributions count.
    When nothing contributes, the user's own strongest traits are returned.
    An empty vector on either side yields no drivers.
    """
    if not user_vector or not target_vector:
        return []
    if len(user_vector) != len(target_vector):
        raise ValueError("Vector length mismatch")

    labels = [TRAIT_LABELS.get(t, t) for t in CANONICAL_TRAITS]
    contributions = [
        (user_score * target_vector[i], i)
        for i, user_score in enumerate(user_vector[: len(labels)])
    ]
    # sorted() is stable, so equal contributions keep canonical order
    ranked = sorted(contributions, key=lambda c: c[0], reverse=True)
    drivers = [labels[i] for value, i in ranked if value > 0][:top_k]
    if drivers:
        return drivers

    by_user = sorted(range(len(user_vector[: len(labels)])), key=lambda i: user_vector[i], reverse=True)
    return [labels[i] for i in by_user[:top_k]]


def calculate_percentile(value: float, all_scores: list[float]) -> float:
    """Share of scores strictly below ``value``, as 0-100."""
    if not all_scores:
        return 0.0
    below = sum(1 for s in all_scores if s < value)
    return below / len(all_scores) * 100
