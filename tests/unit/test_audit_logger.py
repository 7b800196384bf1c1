"""Tests for audit logger module."""

import json
from datetime import datetime
from pathlib import Path

import jsonschema
import pytest

from albumdedupe.api import mark_distinct, merge_albums, scan_duplicates
from albumdedupe.audit import AuditLogger, generate_run_id
from albumdedupe.errors import ConflictError
from albumdedupe.store import CatalogStore

_SCHEMAS_DIR = Path(__file__).parent.parent.parent / "schemas"


@pytest.fixture(scope="module")
def event_schema() -> dict:
    """Load log event JSON schema."""
    with (_SCHEMAS_DIR / "log_event.schema.json").open() as f:
        return json.load(f)


@pytest.fixture
def logger(tmp_path: Path) -> AuditLogger:
    """Create a logger that auto-closes after test."""
    lg = AuditLogger(run_id="test_run", log_path=tmp_path / "events.jsonl")
    yield lg
    lg.close()


def _read_events(path: Path) -> list[dict]:
    """Read all JSONL events from file."""
    with path.open() as f:
        return [json.loads(line) for line in f if line.strip()]


@pytest.mark.unit
def test_logger_init_creates_file(logger: AuditLogger) -> None:
    """Test logger creates the log file and sets initial state."""
    assert logger.log_path.exists()
    assert logger.current_stage is None
    assert logger.run_id == "test_run"


@pytest.mark.unit
def test_logger_event_writes_valid_jsonl(logger: AuditLogger, event_schema: dict) -> None:
    """Test event() writes a valid JSONL line with correct envelope."""
    logger.event("custom", data={"key": "value"}, level="DEBUG", album_id="a1")

    events = _read_events(logger.log_path)

    assert len(events) == 1
    evt = events[0]
    jsonschema.validate(instance=evt, schema=event_schema)
    assert evt["run_id"] == "test_run"
    assert evt["data"] == {"key": "value"}
    assert evt["album_id"] == "a1"
    assert evt["ts"].endswith("Z")


@pytest.mark.unit
def test_logger_scan_stage_is_inherited(logger: AuditLogger) -> None:
    """Test events logged during a scan carry its stage until it finishes."""
    logger.scan_started("manual_audit", 0.15, 4)
    logger.event("custom")
    logger.scan_finished("manual_audit", 0.01)
    logger.event("after")

    stages = [e["stage"] for e in _read_events(logger.log_path)]

    assert stages == ["manual_audit", "manual_audit", "manual_audit", None]
    assert logger.current_stage is None


@pytest.mark.unit
@pytest.mark.parametrize(
    ("method", "kwargs", "expected_event", "expected_level"),
    [
        (
            "scan_started",
            {"stage": "scan", "sensitivity": 0.1, "total_records": 3},
            "scan_started",
            "INFO",
        ),
        ("scan_finished", {"stage": "scan", "duration_seconds": 0.5}, "scan_finished", "INFO"),
        (
            "merge_applied",
            {"keep_id": "k", "delete_id": "d", "counters": {}},
            "merge_applied",
            "INFO",
        ),
        (
            "merge_conflict",
            {"keep_id": "k", "delete_id": "d", "message": "m"},
            "merge_conflict",
            "WARN",
        ),
        (
            "pair_marked_distinct",
            {"album_id_1": "a", "album_id_2": "b", "created": True},
            "pair_marked_distinct",
            "INFO",
        ),
        (
            "review_action",
            {"action": "skip", "pair_id": "a::b", "outcome": {}},
            "review_action",
            "INFO",
        ),
        ("error", {"exception_class": "StorageError", "message": "bad"}, "error", "ERROR"),
    ],
)
def test_logger_convenience_methods(
    logger: AuditLogger,
    event_schema: dict,
    method: str,
    kwargs: dict,
    expected_event: str,
    expected_level: str,
) -> None:
    """Test all convenience methods produce correct event type and level."""
    getattr(logger, method)(**kwargs)

    events = _read_events(logger.log_path)

    assert len(events) == 1
    assert events[0]["event"] == expected_event
    assert events[0]["level"] == expected_level
    jsonschema.validate(instance=events[0], schema=event_schema)


@pytest.mark.unit
def test_operations_emit_events(
    logger: AuditLogger, event_schema: dict, pink_floyd_store: CatalogStore
) -> None:
    """Test scan, mark-distinct and merge write schema-valid events."""
    scan_duplicates(pink_floyd_store, logger=logger)
    mark_distinct(pink_floyd_store, "pf-3", "pf-1", created_by="alice", logger=logger)
    merge_albums(pink_floyd_store, "pf-1", "pf-2", logger=logger)
    with pytest.raises(ConflictError):
        merge_albums(pink_floyd_store, "pf-1", "pf-2", logger=logger)

    events = _read_events(logger.log_path)

    assert [e["event"] for e in events] == [
        "scan_started",
        "scan_finished",
        "pair_marked_distinct",
        "merge_applied",
        "merge_conflict",
    ]
    for evt in events:
        jsonschema.validate(instance=evt, schema=event_schema)
    assert events[1]["data"]["counters"]["matches"] == 1
    assert events[2]["data"]["album_id_1"] == "pf-1"
    assert events[3]["album_id"] == "pf-1"
    assert events[3]["data"]["delete_id"] == "pf-2"


@pytest.mark.unit
def test_generate_run_id_is_unique() -> None:
    """Test run IDs carry a parseable timestamp and a random suffix."""
    first, second = generate_run_id(), generate_run_id()

    assert first != second
    timestamp, _, suffix = first.partition("__")
    assert datetime.fromisoformat(timestamp).tzinfo is not None
    assert len(suffix) == 8
