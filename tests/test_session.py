"""
Session and loader tests for ReviewPack.

Tests snapshot loading, last-good-snapshot refresh and the session lookups.
"""

import json

import pytest

from reviewpack.review import (
    CellState,
    ReviewSession,
    ReviewView,
    SnapshotLoader,
    SnapshotLoadError,
    parse_snapshot,
)
from reviewpack.schemas import Package, ReviewSnapshot


class TestSnapshotLoader:
    """Test reading snapshots from disk."""

    def test_load_valid(self, snapshot_file):
        snapshot = SnapshotLoader(snapshot_file).load()
        assert snapshot.package_id == "pkg-1"
        assert len(snapshot.results) == 3

    def test_missing_file(self, tmp_path):
        loader = SnapshotLoader(tmp_path / "nope.json")
        assert loader.exists() is False
        with pytest.raises(SnapshotLoadError) as exc:
            loader.load()
        assert "not found" in exc.value.message

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SnapshotLoadError):
            SnapshotLoader(path).load()

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(SnapshotLoadError):
            SnapshotLoader(path).load()

    def test_results_must_be_list(self):
        with pytest.raises(SnapshotLoadError):
            parse_snapshot({"package": {"id": "p"}, "results": "everyone"})

    def test_stats_key_ignored(self):
        snapshot = parse_snapshot({
            "package": {"id": "p"},
            "results": [],
            "stats": {"totalStudents": 99},
        })
        assert snapshot.results == []


class TestReviewSession:
    """Test the per-page session facade."""

    def test_empty_session(self):
        session = ReviewSession()
        assert session.has_package is False
        assert session.stats.total_students == 0
        assert session.matrix.row_count == 0
        assert session.matrix.column_count == 0
        assert session.selected_student is None
        assert session.selected_checkpoint is None
        assert session.selected_breakdown() is None
        assert session.selected_student_detail() == []

    def test_derived_on_snapshot(self, snapshot):
        session = ReviewSession(snapshot)
        assert session.package_title == "Water cycle"
        assert [item.id for item in session.ordering] == ["c2", "c1"]
        assert session.stats.submitted_count == 1
        assert session.stats.average_score == 90
        assert session.matrix.row_count == 3

    def test_resolve_pairs(self, snapshot):
        session = ReviewSession(snapshot)
        assert session.resolve("s1", "c2").state == CellState.CORRECT
        assert session.resolve("s1", "c1").state == CellState.INCORRECT
        assert session.resolve("s2", "c1").state == CellState.UNANSWERED
        assert session.resolve("ghost", "c1") is None

    def test_matrix_then_student_flow(self, snapshot):
        session = ReviewSession(snapshot)
        session.show_matrix()
        assert session.view == ReviewView.MATRIX
        assert session.selected_checkpoint.id == "c2"
        assert session.selected_breakdown().correct_count == 1

        session.select_student_from_matrix("s1")
        assert session.view == ReviewView.STUDENTS
        assert session.selected_student.student_name == "Bella"
        states = [c.state for c in session.selected_student_detail()]
        assert states == [CellState.CORRECT, CellState.INCORRECT]

    def test_question_list_flow(self, snapshot):
        session = ReviewSession(snapshot)
        session.select_checkpoint_from_list("c1")
        assert session.view == ReviewView.MATRIX
        assert session.selected_checkpoint.position == 2
        session.show_students()
        session.show_matrix()
        assert session.selection.checkpoint_id == "c1"

    def test_stale_selection_resolves_to_none(self, snapshot):
        session = ReviewSession(snapshot)
        session.select_student("ghost")
        session.select_checkpoint("ghost")
        assert session.selected_student is None
        assert session.selected_checkpoint is None
        assert session.selected_breakdown() is None
        assert session.selected_student_detail() == []

    def test_same_package_keeps_selection(self, snapshot, results):
        session = ReviewSession(snapshot)
        session.select_student("s3")
        session.replace_snapshot(ReviewSnapshot(package=snapshot.package, results=results[2:]))
        assert session.selection.student_id == "s3"
        assert session.stats.total_students == 1

    def test_new_package_resets_selection(self, snapshot, results):
        session = ReviewSession(snapshot)
        session.select_checkpoint_from_list("c1")
        session.select_student("s1")
        other = Package.model_validate({"id": "pkg-2", "checkpoints": []})
        session.replace_snapshot(ReviewSnapshot(package=other, results=results))
        assert session.selection.student_id is None
        assert session.selection.checkpoint_id is None
        assert session.view == ReviewView.STUDENTS
        assert session.matrix.column_count == 0

    def test_refresh_success(self, snapshot_file):
        session = ReviewSession()
        assert session.refresh(SnapshotLoader(snapshot_file)) is True
        assert session.has_package
        assert session.error_message is None

    def test_refresh_failure_keeps_last_good(self, snapshot_file, tmp_path):
        session = ReviewSession()
        session.refresh(SnapshotLoader(snapshot_file))
        session.select_student("s1")

        assert session.refresh(SnapshotLoader(tmp_path / "missing.json")) is False
        assert "not found" in session.error_message
        assert session.snapshot.package_id == "pkg-1"
        assert session.stats.total_students == 3
        assert session.selected_student.student_id == "s1"

        assert session.refresh(SnapshotLoader(snapshot_file)) is True
        assert session.error_message is None

    def test_refresh_failure_on_bad_content(self, snapshot_file):
        session = ReviewSession()
        session.refresh(SnapshotLoader(snapshot_file))
        snapshot_file.write_text(json.dumps({"package": {"id": "x"}, "results": 5}), encoding="utf-8")
        assert session.refresh(SnapshotLoader(snapshot_file)) is False
        assert session.snapshot.package_id == "pkg-1"

    def test_refresh_failure_on_non_utf8_file(self, snapshot_file):
        session = ReviewSession()
        session.refresh(SnapshotLoader(snapshot_file))
        snapshot_file.write_bytes(b'{"package": {"id": "\xff"}, "results": []}')
        assert session.refresh(SnapshotLoader(snapshot_file)) is False
        assert "UTF-8" in session.error_message
        assert session.snapshot.package_id == "pkg-1"

    def test_refresh_with_oversized_numbers(self, tmp_path):
        path = tmp_path / "huge.json"
        huge = "9" * 400
        path.write_text(
            '{"package": {"id": "p", "checkpoints": ['
            f'{{"id": "c", "timestampSec": {huge}, "options": ["a"], "correctIndex": {huge}}}]}},'
            f' "results": [{{"studentId": "s", "score": {huge},'
            f' "answers": [{{"checkpointId": "c", "selectedIndex": {huge}}}]}}]}}',
            encoding="utf-8",
        )
        session = ReviewSession()
        assert session.refresh(SnapshotLoader(path)) is True
        assert session.resolve("s", "c").state == CellState.UNANSWERED

    def test_duplicate_student_ids_agree(self, package):
        results = [
            {"studentId": "dup", "studentName": "Zoe", "answers": [{"checkpointId": "c2", "selectedIndex": 0}]},
            {"studentId": "dup", "studentName": "Adam", "answers": [{"checkpointId": "c2", "selectedIndex": 1}]},
        ]
        session = ReviewSession(ReviewSnapshot.model_validate({"package": package, "results": results}))
        session.select_student("dup")
        assert session.selected_student.student_name == "Zoe"
        assert session.resolve("dup", "c2").state == CellState.CORRECT
        detail = {cell.checkpoint_id: cell.state for cell in session.selected_student_detail()}
        assert detail["c2"] == CellState.CORRECT
        assert session.matrix.cell("dup", "c2").state == CellState.CORRECT

    def test_student_list_order(self, snapshot):
        assert [r.student_id for r in ReviewSession(snapshot).student_list()] == ["s1", "s2", "s3"]
        by_id = ReviewSession(snapshot, student_order="student_id")
        assert [v.student_id for v in by_id.student_views()] == ["s1", "s2", "s3"]
