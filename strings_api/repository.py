import logging
import threading
from typing import Dict, List

from .exceptions import RecordConflict, RecordNotFound
from .models import StringRecord
from .utils import compute_sha256

logger = logging.getLogger(__name__)


class StringRepository:
    """
    Content-addressed in-memory store of analyzed strings.

    Records are keyed by the SHA-256 of their value. Every read and write
    takes the same lock, so the uniqueness check and the insert run as one
    step and readers never see a half-applied change.
    """

    def __init__(self):
        self._records: Dict[str, StringRecord] = {}
        self._lock = threading.RLock()

    def insert(self, record: StringRecord) -> StringRecord:
        with self._lock:
            if record.id in self._records:
                raise RecordConflict(record.id)
            self._records[record.id] = record
        logger.debug("Stored string id=%s", record.id)
        return record

    def get_by_id(self, record_id: str) -> StringRecord:
        with self._lock:
            try:
                return self._records[record_id]
            except KeyError:
                raise RecordNotFound(record_id) from None

    def get_by_value(self, value: str) -> StringRecord:
        return self.get_by_id(compute_sha256(value))

    def delete(self, value: str) -> StringRecord:
        record_id = compute_sha256(value)
        with self._lock:
            try:
                record = self._records.pop(record_id)
            except KeyError:
                raise RecordNotFound(record_id) from None
        logger.debug("Deleted string id=%s", record_id)
        return record

    def all(self) -> List[StringRecord]:
        """Snapshot of all records in insertion order."""
        with self._lock:
            return list(self._records.values())

    def clear(self):
        with self._lock:
            self._records.clear()

    def __contains__(self, record_id):
        with self._lock:
            return record_id in self._records

    def __len__(self):
        with self._lock:
            return len(self._records)
