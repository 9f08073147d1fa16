"""Save and load JobAnalysis records in a key-value store.

Key scheme: ``job_analysis:{id}``, value is the camelCase JSON of the record.
Records are written once and never updated in place.
"""

import logging

from pydantic import ValidationError as PydanticValidationError

from jobprep.core.errors import StorageError
from jobprep.core.schemas import JobAnalysis, KVItem
from jobprep.storage.kv import KeyValueStore

logger = logging.getLogger(__name__)

KEY_PREFIX = "job_analysis:"


def analysis_key(analysis_id: str) -> str:
    return f"{KEY_PREFIX}{analysis_id}"


def serialize_analysis(analysis: JobAnalysis) -> str:
    return analysis.model_dump_json(by_alias=True)


def deserialize_analysis(raw: str) -> JobAnalysis:
    """Parse stored JSON. Raises StorageError if the record is corrupt."""
    try:
        return JobAnalysis.model_validate_json(raw)
    except PydanticValidationError as e:
        msg = f"Stored job analysis is corrupt: {e.error_count()} validation error(s)"
        raise StorageError(msg) from e


class AnalysisRepository:
    """JobAnalysis persistence on top of any KeyValueStore.

    Usage::

        repo = AnalysisRepository(store)
        repo.save(analysis)
        again = repo.get(analysis.id)
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def save(self, analysis: JobAnalysis) -> str:
        """Store the analysis and return its key."""
        key = analysis_key(analysis.id)
        if not self._store.set(key, serialize_analysis(analysis)):
            msg = f"Store rejected write for '{key}'"
            raise StorageError(msg)
        logger.info("Saved job analysis %s", key)
        return key

    def get(self, analysis_id: str) -> JobAnalysis | None:
        raw = self._store.get(analysis_key(analysis_id))
        if raw is None:
            return None
        return deserialize_analysis(raw)

    def list_recent(self) -> list[JobAnalysis]:
        """All stored analyses, most recent analysis_date first. Corrupt entries are skipped."""
        items = self._store.list(f"{KEY_PREFIX}*", return_values=True)
        analyses: list[JobAnalysis] = []
        for item in items:
            if not isinstance(item, KVItem):
                continue
            try:
                analyses.append(deserialize_analysis(item.value))
            except StorageError:
                logger.warning("Skipping corrupt job analysis at '%s'", item.key)
        analyses.sort(key=lambda a: a.analysis_date, reverse=True)
        return analyses

    def delete(self, analysis_id: str) -> bool:
        deleted = self._store.delete(analysis_key(analysis_id))
        if deleted:
            logger.info("Deleted job analysis %s", analysis_id)
        return deleted

    def wipe(self) -> int:
        """Delete every stored analysis. Returns how many were removed."""
        keys = self._store.list(f"{KEY_PREFIX}*")
        removed = sum(1 for key in keys if isinstance(key, str) and self._store.delete(key))
        logger.info("Wiped %d job analyses", removed)
        return removed
