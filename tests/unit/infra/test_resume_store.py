"""Tests for the parsed-resume JSON store."""

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from resume_ranker_core.exceptions import StorageError
from resume_ranker_infra.storage.resume_store import ResumeStore
from tests.mocks.mock_factories import make_parsed_resume


@pytest.mark.unit
class TestResumeStore:
    """Test ResumeStore round trips and failure handling."""

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        store = ResumeStore(tmp_path)
        assert store.list_all() == []
        assert store.get("jane.pdf") is None

    def test_upsert_round_trip(self, tmp_path: Path) -> None:
        store = ResumeStore(tmp_path)
        record = make_parsed_resume("jane.pdf")
        store.upsert(record)

        loaded = ResumeStore(tmp_path).get("jane.pdf")
        assert loaded == record

        document = json.loads(store.path.read_text())
        assert document["version"] == 2
        assert "updated_at" in document

    def test_upsert_replaces_and_moves_to_front(self, tmp_path: Path) -> None:
        store = ResumeStore(tmp_path)
        store.upsert(make_parsed_resume("a.pdf"))
        store.upsert(make_parsed_resume("b.pdf"))
        store.upsert(make_parsed_resume("a.pdf", is_editable=True))

        records = store.list_all()
        assert [r.id for r in records] == ["a.pdf", "b.pdf"]
        assert records[0].is_editable is True

    def test_invalid_json_raises_storage_error(self, tmp_path: Path) -> None:
        (tmp_path / "parsed-resumes.json").write_text("{not json")
        with pytest.raises(StorageError, match="Failed to read"):
            ResumeStore(tmp_path).list_all()

    def test_unexpected_layout_raises_storage_error(self, tmp_path: Path) -> None:
        (tmp_path / "parsed-resumes.json").write_text("[]")
        with pytest.raises(StorageError, match="unexpected layout"):
            ResumeStore(tmp_path).list_all()

    def test_malformed_records_are_skipped(self, tmp_path: Path) -> None:
        good = make_parsed_resume("good.pdf").model_dump(mode="json")
        document = {"version": 2, "resumes": [{"id": "broken"}, good]}
        (tmp_path / "parsed-resumes.json").write_text(json.dumps(document))

        records = ResumeStore(tmp_path).list_all()

        assert [r.id for r in records] == ["good.pdf"]

    def test_concurrent_upserts_keep_every_record(self, tmp_path: Path) -> None:
        """Parallel upserts of distinct ids all survive."""
        count = 16
        barrier = threading.Barrier(count)
        errors: list[BaseException] = []

        def worker(index: int) -> None:
            store = ResumeStore(tmp_path)
            barrier.wait()
            try:
                store.upsert(make_parsed_resume(f"r{index}.pdf"))
            except BaseException as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        stored = {r.id for r in ResumeStore(tmp_path).list_all()}
        assert stored == {f"r{i}.pdf" for i in range(count)}

    def test_stores_for_same_file_share_a_lock(self, tmp_path: Path) -> None:
        assert ResumeStore(tmp_path)._lock is ResumeStore(tmp_path / "sub" / "..")._lock
