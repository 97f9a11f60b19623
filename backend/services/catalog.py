"""JSON catalog loader with an explicit, invalidatable cache.

Files live in ``settings.catalog_dir``. A missing or malformed file is logged
and treated as an empty catalog; callers never see the I/O error.
"""

import json
import logging
import threading
from datetime import date
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from models.schemas.assessment import Assessment, Question
from models.schemas.candidate import College, JobPath, Scholarship, SHSTrack

logger = logging.getLogger(__name__)

ASSESSMENTS_FILE = "assessment.json"
JOB_PATHS_FILE = "job_paths.json"
SHS_TRACKS_FILE = "shs_tracks.json"
COLLEGES_FILE = "colleges.json"
SCHOLARSHIPS_FILE = "scholarships.json"

_ADAPTERS: dict[str, TypeAdapter] = {
    ASSESSMENTS_FILE: TypeAdapter(list[Assessment]),
    JOB_PATHS_FILE: TypeAdapter(list[JobPath]),
    SHS_TRACKS_FILE: TypeAdapter(list[SHSTrack]),
    COLLEGES_FILE: TypeAdapter(list[College]),
    SCHOLARSHIPS_FILE: TypeAdapter(list[Scholarship]),
}


class Catalog:
    """Read-only catalog snapshots, loaded lazily and cached per file."""

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir)
        self._cache: dict[str, list[Any]] = {}
        self._lock = threading.Lock()

    def _load(self, filename: str) -> list[Any]:
        with self._lock:
            if filename in self._cache:
                return self._cache[filename]

            path = self.data_dir / filename
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                records = _ADAPTERS[filename].validate_python(raw)
                logger.info("Loaded %d records from %s", len(records), path)
            except FileNotFoundError:
                logger.error("Catalog file not found: %s", path)
                records = []
            except OSError as e:
                logger.error("Cannot read catalog file %s: %s", path, e)
                records = []
            except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
                logger.error("Invalid catalog file %s: %s", path, e)
                records = []

            self._cache[filename] = records
            return records

    def invalidate(self) -> None:
        """Drop every cached snapshot; the next access reloads from disk."""
        with self._lock:
            self._cache.clear()
        logger.info("Catalog cache cleared")

    # --- Assessments -------------------------------------------------------

    def assessments(self) -> list[Assessment]:
        return list(self._load(ASSESSMENTS_FILE))

    def get_assessment(self, assessment_id: str) -> Assessment | None:
        return next((a for a in self.assessments() if a.id == assessment_id), None)

    def questions(self, assessment_id: str) -> list[Question]:
        assessment = self.get_assessment(assessment_id)
        return assessment.questions() if assessment else []

    # --- Job paths ---------------------------------------------------------

    def job_paths(self) -> list[JobPath]:
        return list(self._load(JOB_PATHS_FILE))

    def get_job_path(self, job_path_id: str) -> JobPath | None:
        return next((jp for jp in self.job_paths() if jp.id == job_path_id), None)

    def job_paths_by_category(self, category: str) -> list[JobPath]:
        return [jp for jp in self.job_paths() if jp.category == category]

    def search_job_paths(self, query: str) -> list[JobPath]:
        q = query.lower()
        return [
            jp for jp in self.job_paths()
            if q in jp.title.lower()
            or q in jp.description.lower()
            or any(q in tag.lower() for tag in jp.tags)
        ]

    # --- SHS tracks --------------------------------------------------------

    def shs_tracks(self) -> list[SHSTrack]:
        return list(self._load(SHS_TRACKS_FILE))

    def get_shs_track(self, track_id: str) -> SHSTrack | None:
        return next((t for t in self.shs_tracks() if t.id == track_id), None)

    # --- Colleges ----------------------------------------------------------

    def colleges(self) -> list[College]:
        return list(self._load(COLLEGES_FILE))

    def filter_colleges(
        self,
        degree_level: str | None = None,
        state: str | None = None,
        modality: str | None = None,
        tuition_max: float | None = None,
        acceptance_rate_min: float | None = None,
        acceptance_rate_max: float | None = None,
        program: str | None = None,
    ) -> list[College]:
        results = []
        for college in self.colleges():
            if degree_level and degree_level not in college.degree_level:
                continue
            if state and college.state != state:
                continue
            if modality and modality not in college.modality:
                continue
            if tuition_max is not None:
                if min(college.tuition.in_state, college.tuition.out_of_state) > tuition_max:
                    continue
            if acceptance_rate_min is not None and college.acceptance_rate < acceptance_rate_min:
                continue
            if acceptance_rate_max is not None and college.acceptance_rate > acceptance_rate_max:
                continue
            if program and not any(program.lower() in p.lower() for p in college.programs):
                continue
            results.append(college)
        return results

    # --- Scholarships ------------------------------------------------------

    def scholarships(self) -> list[Scholarship]:
        return list(self._load(SCHOLARSHIPS_FILE))

    def filter_scholarships(
        self,
        type: str | None = None,
        amount_min: float | None = None,
        deadline_after: date | None = None,
        deadline_before: date | None = None,
    ) -> list[Scholarship]:
        results = []
        for s in self.scholarships():
            if type and s.type != type:
                continue
            if amount_min is not None and s.amount < amount_min:
                continue
            if deadline_after and s.deadline < deadline_after:
                continue
            if deadline_before and s.deadline > deadline_before:
                continue
            results.append(s)
        return results

    def upcoming_scholarships(self, limit: int = 10, today: date | None = None) -> list[Scholarship]:
        today = today or date.today()
        upcoming = [s for s in self.scholarships() if s.deadline > today]
        return sorted(upcoming, key=lambda s: s.deadline)[:limit]
