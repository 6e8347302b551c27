"""Tests for JSONL logging."""

import json
import tempfile
from pathlib import Path

import pytest

from ghostbook.logging import JSONLLogger, LogEntry, configure_logger, get_logger


@pytest.fixture
def temp_log_dir():
    """Create a temporary directory for logs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def logger(temp_log_dir: Path) -> JSONLLogger:
    return JSONLLogger(log_dir=temp_log_dir)


def read_entries(logger: JSONLLogger) -> list[dict]:
    with open(logger.log_path, encoding="utf-8") as f:
        return [json.loads(line) for line in f]


def test_log_entry_to_dict():
    """Test LogEntry excludes None values."""
    entry = LogEntry(timestamp="2024-01-01T00:00:00Z", event="test")
    data = entry.to_dict()

    assert "timestamp" in data
    assert "event" in data
    assert "session_id" not in data  # None excluded
    assert "extra" not in data  # Empty dict excluded


def test_log_creates_file(logger: JSONLLogger):
    """Test that logging creates the log file."""
    logger.log("test_event")

    assert logger.log_path.exists()


def test_log_writes_jsonl(logger: JSONLLogger):
    """Test that logs are written in JSONL format."""
    logger.log("event1", chat_id="123")
    logger.log("event2", session_id="journal-1")

    entries = read_entries(logger)

    assert len(entries) == 2
    assert entries[0]["event"] == "event1"
    assert entries[0]["chat_id"] == "123"
    assert entries[1]["session_id"] == "journal-1"


def test_log_session_lifecycle(logger: JSONLLogger):
    """Test the session start, event and end helpers."""
    logger.log_session_start("journal-1", owner_id="5", allowed_users=["5", "@bob"])
    logger.log_session_event("journal-1", "toggle", "applied", actor_id="5", possible=3)
    logger.log_session_end("journal-1", "idle")

    start, event, end = read_entries(logger)

    assert start["event"] == "session_start"
    assert start["actor_id"] == "5"
    assert start["extra"]["allowed_users"] == ["5", "@bob"]
    assert event["outcome"] == "applied"
    assert event["extra"]["kind"] == "toggle"
    assert event["extra"]["possible"] == 3
    assert end["reason"] == "idle"
    assert "error" not in end


def test_log_session_end_with_error(logger: JSONLLogger):
    logger.log_session_end("journal-1", "render_failed", error="message was deleted")

    (entry,) = read_entries(logger)
    assert entry["error"] == "message was deleted"


def test_rotation(temp_log_dir: Path):
    """Test log rotation when max size is exceeded."""
    logger = JSONLLogger(log_dir=temp_log_dir, max_size_mb=0.001)  # ~1KB

    # Write enough to trigger rotation
    for i in range(100):
        logger.log(f"event_{i}", data="x" * 100)

    # Should have rotated files
    log_files = list(temp_log_dir.glob("logs*.jsonl"))
    assert len(log_files) >= 2


def test_extra_fields(logger: JSONLLogger):
    """Test that extra fields are included."""
    logger.log("custom", custom_field="value", another=123)

    (entry,) = read_entries(logger)

    assert entry["extra"]["custom_field"] == "value"
    assert entry["extra"]["another"] == 123


def test_log_dir_from_env(temp_log_dir: Path, monkeypatch):
    monkeypatch.setenv("GHOSTBOOK_LOG_DIR", str(temp_log_dir / "env"))

    logger = JSONLLogger()

    assert logger.log_dir == temp_log_dir / "env"
    assert logger.log_dir.exists()


def test_configure_logger_replaces_global(temp_log_dir: Path, monkeypatch):
    monkeypatch.setattr("ghostbook.logging._logger", None)
    configured = configure_logger(log_dir=temp_log_dir)

    assert get_logger() is configured
    assert configured.log_dir == temp_log_dir
