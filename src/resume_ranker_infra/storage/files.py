"""Filesystem helpers for uploaded PDFs, LaTeX renditions and JSON documents."""

from __future__ import annotations

import os
import re
import tempfile
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

import structlog

from resume_ranker_core.constants import LATEX_DIRNAME
from resume_ranker_core.exceptions import StorageError

logger = structlog.get_logger()

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(frozen=True)
class StoredPdf:
    """A PDF found in the storage directory."""

    name: str
    path: Path
    size_bytes: int
    modified_at: datetime


def sanitize_filename(filename: str) -> str:
    """Reduce an uploaded filename to a safe basename.

    Directory components are dropped, characters outside ``[A-Za-z0-9._-]``
    become ``_`` and leading dots are stripped.
    """
    base = filename.replace("\\", "/").rsplit("/", 1)[-1]
    safe = _UNSAFE_CHARS.sub("_", base).lstrip(".")
    return safe or "resume.pdf"


def resolve_resume_id(resume_id: str) -> str:
    """Return the basename of a client-supplied resume id."""
    return resume_id.replace("\\", "/").rsplit("/", 1)[-1]


def unique_pdf_path(storage_dir: Path, safe_name: str) -> Path:
    """Path for a new upload; prefixes an epoch-ms timestamp on collision."""
    path = storage_dir / safe_name
    if path.exists():
        path = storage_dir / f"{int(time.time() * 1000)}_{safe_name}"
    return path


def latex_path_for(storage_dir: Path, resume_id: str) -> Path:
    """Location of the .tex rendition for a stored resume."""
    return storage_dir / LATEX_DIRNAME / f"{Path(resume_id).stem}.tex"


def write_text_atomic(path: Path, content: str) -> None:
    """Write content to a temp file beside path, then replace path with it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
        tmp_path.replace(path)
    except OSError as e:
        tmp_path.unlink(missing_ok=True)
        msg = f"Failed to write {path}: {e}"
        raise StorageError(msg) from e


def write_bytes(path: Path, data: bytes) -> None:
    """Write raw bytes, creating the parent directory."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        msg = f"Failed to write {path}: {e}"
        raise StorageError(msg) from e


def safe_delete(path: Path | None) -> None:
    """Best-effort removal used when rolling back a failed upload."""
    if path is None:
        return
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning("cleanup_failed", path=str(path), error=str(e))


def list_uploaded_pdfs(storage_dir: Path) -> list[StoredPdf]:
    """Stored PDFs with size and mtime, newest first."""
    if not storage_dir.exists():
        return []

    pdfs: list[StoredPdf] = []
    for path in storage_dir.iterdir():
        if not path.is_file() or path.suffix.lower() != ".pdf":
            continue
        stat = path.stat()
        pdfs.append(
            StoredPdf(
                name=path.name,
                path=path,
                size_bytes=stat.st_size,
                modified_at=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
            )
        )
    pdfs.sort(key=lambda p: p.modified_at, reverse=True)
    return pdfs
