"""JSON-file store of parsed resumes, newest first."""

from __future__ import annotations

import json
import threading
from datetime import UTC, datetime
from pathlib import Path

import structlog
from pydantic import ValidationError

from resume_ranker_core.constants import PARSED_RESUMES_FILENAME, RESUME_STORE_VERSION
from resume_ranker_core.exceptions import StorageError
from resume_ranker_core.models.resume import ParsedResume
from resume_ranker_infra.storage.files import write_text_atomic

logger = structlog.get_logger()

_path_locks: dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    """One lock per store file, shared by every ResumeStore in the process."""
    key = path.resolve()
    with _path_locks_guard:
        return _path_locks.setdefault(key, threading.Lock())


class ResumeStore:
    """Parsed-resume records kept in a single JSON document."""

    def __init__(self, storage_dir: Path) -> None:
        """Initialize with the storage directory."""
        self._path = storage_dir / PARSED_RESUMES_FILENAME
        self._lock = _lock_for(self._path)

    @property
    def path(self) -> Path:
        return self._path

    def list_all(self) -> list[ParsedResume]:
        """All stored records, newest first. A missing file is an empty store."""
        if not self._path.exists():
            return []

        try:
            document = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            msg = f"Failed to read resume store {self._path}: {e}"
            raise StorageError(msg) from e

        if not isinstance(document, dict) or not isinstance(document.get("resumes"), list):
            msg = f"Resume store {self._path} has an unexpected layout"
            raise StorageError(msg)

        records: list[ParsedResume] = []
        for raw in document["resumes"]:
            try:
                records.append(ParsedResume.model_validate(raw))
            except ValidationError as e:
                logger.warning(
                    "resume_record_skipped",
                    path=str(self._path),
                    error_count=e.error_count(),
                )
        return records

    def get(self, resume_id: str) -> ParsedResume | None:
        """Look up one record by id."""
        for record in self.list_all():
            if record.id == resume_id:
                return record
        return None

    def upsert(self, record: ParsedResume) -> ParsedResume:
        """Insert or replace a record by id and move it to the front.

        The read-modify-write holds the per-file lock so concurrent upserts
        of different ids never drop each other.
        """
        with self._lock:
            records = [r for r in self.list_all() if r.id != record.id]
            records.insert(0, record)
            self._write(records)
        logger.info("resume_record_saved", resume_id=record.id, total=len(records))
        return record

    def _write(self, records: list[ParsedResume]) -> None:
        document = {
            "version": RESUME_STORE_VERSION,
            "updated_at": datetime.now(UTC).isoformat(),
            "resumes": [r.model_dump(mode="json") for r in records],
        }
        write_text_atomic(self._path, json.dumps(document, indent=2))
