"""Questionnaire scoring: weighted responses -> normalized trait vector + summary.

Each answer is mapped onto a 1-5 scale, centered on neutral (3), multiplied by
the question's per-trait weights and averaged by the absolute weight seen for
that trait. The average (in [-2, 2]) is rescaled to [0, 1].
"""

import logging
import math
from collections import defaultdict

from models.schemas.assessment import Question, Response, TraitScores

logger = logging.getLogger(__name__)

# Canonical trait order for the fixed vector. Job path / track vectors in the
# catalog use the same order.
CANONICAL_TRAITS: tuple[str, ...] = (
    "analytical",
    "technical",
    "social",
    "creative",
    "empathetic",
    "hands-on",
    "leadership",
    "adaptable",
)

TRAIT_LABELS: dict[str, str] = {
    "analytical": "Analytical",
    "technical": "Technical",
    "social": "Social",
    "creative": "Creative",
    "empathetic": "Empathetic",
    "hands-on": "Hands-On",
    "leadership": "Leadership",
    "adaptable": "Adaptable",
}

_TRAIT_INDEX = {trait: i for i, trait in enumerate(CANONICAL_TRAITS)}

NEUTRAL_VALUE = 3.0
NEUTRAL_SCORE = 0.5
SCALE_MIN = 1.0
SCALE_MAX = 5.0


def _latest_responses(responses: list[Response]) -> dict[str, Response]:
    """Latest response per question id.

    A later timestamp wins; with equal or missing timestamps the later list
    entry wins.
    """
    latest: dict[str, Response] = {}
    for response in responses:
        previous = latest.get(response.question_id)
        if (
            previous is not None
            and previous.timestamp is not None
            and response.timestamp is not None
            and response.timestamp.timestamp() < previous.timestamp.timestamp()
        ):
            continue
        latest[response.question_id] = response
    return latest


def _likert_value(value: object) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return NEUTRAL_VALUE
    if not math.isfinite(value):
        return NEUTRAL_VALUE
    return min(SCALE_MAX, max(SCALE_MIN, float(value)))


def _choice_value(question: Question, value: object) -> float:
    """Rescale the selected option's index onto 1-5.

    Single-option questions have no spread, so they count as neutral.
    """
    n_options = len(question.options)
    if n_options < 2 or not isinstance(value, str):
        return NEUTRAL_VALUE
    try:
        index = question.options.index(value)
    except ValueError:
        return NEUTRAL_VALUE
    return index / (n_options - 1) * 4 + 1


def scale_value(question: Question, response: Response) -> float:
    """Map a raw answer onto the 1-5 response scale."""
    if question.type == "likert":
        return _likert_value(response.value)
    if question.type == "multiple-choice":
        return _choice_value(question, response.value)
    return NEUTRAL_VALUE


def compute_trait_scores(
    responses: list[Response],
    questions: list[Question],
) -> TraitScores:
    """Score a completed questionnaire.

    Unanswered questions contribute nothing. Traits that never received a
    nonzero weight are left out of the summary; canonical vector slots
    without a score stay at 0.5.
    """
    by_question = _latest_responses(responses)

    trait_sums: dict[str, float] = defaultdict(float)
    trait_weights: dict[str, float] = defaultdict(float)

    for question in questions:
        response = by_question.get(question.id)
        if response is None:
            continue

        centered = scale_value(question, response) - NEUTRAL_VALUE  # [-2, +2]

        for trait, weight in question.weights.items():
            if not math.isfinite(weight):
                logger.debug("Skipping non-finite weight for %s on %s", trait, question.id)
                continue
            trait_sums[trait] += centered * weight
            trait_weights[trait] += abs(weight)

    trait_summary: dict[str, float] = {}
    for trait, total_weight in trait_weights.items():
        if total_weight <= 0:
            continue
        average = trait_sums[trait] / total_weight
        trait_summary[trait] = min(1.0, max(0.0, (average + 2) / 4))

    trait_vector = [NEUTRAL_SCORE] * len(CANONICAL_TRAITS)
    for trait, score in trait_summary.items():
        index = _TRAIT_INDEX.get(trait)
        if index is not None:
            trait_vector[index] = score

    return TraitScores(trait_vector=trait_vector, trait_summary=trait_summary)


def normalize_vector(vector: list[float]) -> list[float]:
    """Scale a vector to unit length. A zero vector comes back as zeros."""
    magnitude = math.sqrt(sum(v * v for v in vector))
    if magnitude == 0:
        return [0.0 for _ in vector]
    return [v / magnitude for v in vector]
