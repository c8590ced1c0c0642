"""Shared fixtures: the two-checkpoint package used throughout the tests."""

import json

import pytest

from reviewpack.schemas import Package, ReviewSnapshot, StudentResult


PACKAGE_DATA = {
    "id": "pkg-1",
    "title": "Water cycle",
    "subject": "Science",
    "checkpoints": [
        {"id": "c1", "timestampSec": 30, "correctIndex": 1, "options": ["a", "b", "c"], "required": True},
        {"id": "c2", "timestampSec": 10, "correctIndex": 0, "options": ["x", "y"]},
    ],
}

RESULTS_DATA = [
    {
        "studentId": "s1",
        "studentName": "Bella",
        "className": "4A",
        "status": "submitted",
        "maxReachedSec": 95,
        "watchedToEnd": True,
        "score": 90,
        "answers": [
            {"checkpointId": "c2", "selectedIndex": 0},
            {"checkpointId": "c1", "selectedIndex": 2},
        ],
        "completedAt": "2026-10-12T09:17:30",
    },
    {
        "studentId": "s2",
        "studentName": "Aaron",
        "className": "4A",
        "status": "not_started",
        "score": None,
        "answers": [],
    },
    {
        "studentId": "s3",
        "studentName": "Chloe",
        "className": "3C",
        "status": "in_progress",
        "maxReachedSec": 20,
        "answers": [{"checkpointId": "c2", "selectedIndex": 1}],
    },
]


@pytest.fixture
def package() -> Package:
    return Package.model_validate(PACKAGE_DATA)


@pytest.fixture
def results() -> list[StudentResult]:
    return [StudentResult.model_validate(r) for r in RESULTS_DATA]


@pytest.fixture
def snapshot(package, results) -> ReviewSnapshot:
    return ReviewSnapshot(package=package, results=results)


@pytest.fixture
def snapshot_file(tmp_path):
    path = tmp_path / "snapshot.json"
    path.write_text(
        json.dumps({"package": PACKAGE_DATA, "results": RESULTS_DATA}),
        encoding="utf-8",
    )
    return path
