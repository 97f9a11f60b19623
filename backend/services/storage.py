"""In-memory stores for assessment attempts and personal information.

Process-local and lock-protected. A database-backed store only needs to keep
the same method signatures.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone

from models.schemas.assessment import AssessmentAttempt, Response, TraitScores
from models.schemas.personal_info import PersonalInformation

logger = logging.getLogger(__name__)


class AttemptNotFoundError(LookupError):
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AttemptStore:
    def __init__(self) -> None:
        self._in_progress: dict[str, AssessmentAttempt] = {}
        self._completed: dict[str, AssessmentAttempt] = {}
        self._lock = threading.Lock()

    def create_attempt(self, user_id: str, assessment_id: str) -> AssessmentAttempt:
        attempt = AssessmentAttempt(
            id=f"attempt-{uuid.uuid4().hex}",
            user_id=user_id,
            assessment_id=assessment_id,
            created_at=utcnow(),
        )
        with self._lock:
            self._in_progress[attempt.id] = attempt
        logger.info("Started attempt %s for user %s", attempt.id, user_id)
        return attempt

    def get_in_progress(self, attempt_id: str) -> AssessmentAttempt | None:
        with self._lock:
            return self._in_progress.get(attempt_id)

    def update_progress(
        self,
        attempt_id: str,
        responses: list[Response],
        current_module_index: int,
    ) -> AssessmentAttempt:
        with self._lock:
            attempt = self._in_progress.get(attempt_id)
            if attempt is None:
                raise AttemptNotFoundError(attempt_id)
            updated = attempt.model_copy(
                update={"responses": list(responses), "current_module_index": current_module_index}
            )
            self._in_progress[attempt_id] = updated
            return updated

    def complete_attempt(
        self,
        attempt_id: str,
        trait_scores: TraitScores,
        responses: list[Response] | None = None,
    ) -> AssessmentAttempt:
        with self._lock:
            attempt = self._in_progress.pop(attempt_id, None)
            if attempt is None:
                raise AttemptNotFoundError(attempt_id)
            completed = attempt.model_copy(
                update={
                    "responses": list(responses) if responses is not None else attempt.responses,
                    "trait_vector": list(trait_scores.trait_vector),
                    "trait_summary": dict(trait_scores.trait_summary),
                    "completed_at": utcnow(),
                }
            )
            self._completed[attempt_id] = completed
        logger.info("Completed attempt %s", attempt_id)
        return completed

    def get_attempt(self, attempt_id: str) -> AssessmentAttempt | None:
        with self._lock:
            return self._completed.get(attempt_id)

    def user_attempts(self, user_id: str) -> list[AssessmentAttempt]:
        """Completed attempts for a user, newest first.

        Equal completion times fall back to completion order.
        """
        with self._lock:
            attempts = [a for a in self._completed.values() if a.user_id == user_id]
        return sorted(reversed(attempts), key=lambda a: a.completed_at, reverse=True)

    def latest_attempt(self, user_id: str) -> AssessmentAttempt | None:
        attempts = self.user_attempts(user_id)
        return attempts[0] if attempts else None

    def delete_user_attempts(self, user_id: str) -> int:
        with self._lock:
            doomed = [k for k, a in self._completed.items() if a.user_id == user_id]
            doomed_open = [k for k, a in self._in_progress.items() if a.user_id == user_id]
            for k in doomed:
                del self._completed[k]
            for k in doomed_open:
                del self._in_progress[k]
        return len(doomed) + len(doomed_open)


class PersonalInfoStore:
    def __init__(self) -> None:
        self._records: dict[str, PersonalInformation] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> PersonalInformation | None:
        with self._lock:
            return self._records.get(user_id)

    def upsert(self, user_id: str, info: PersonalInformation) -> PersonalInformation:
        with self._lock:
            self._records[user_id] = info
        return info

    def delete(self, user_id: str) -> bool:
        with self._lock:
            return self._records.pop(user_id, None) is not None
