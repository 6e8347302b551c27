"""JSONL logging for journal sessions."""

import json
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


@dataclass
class LogEntry:
    """A single log entry."""

    timestamp: str
    event: str
    session_id: str | None = None
    chat_id: str | None = None
    actor_id: str | None = None
    outcome: str | None = None
    reason: str | None = None
    error: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict, excluding None values."""
        data = asdict(self)
        return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class JSONLLogger:
    """Logger that writes structured logs in JSONL format."""

    def __init__(
        self,
        log_dir: str | Path | None = None,
        filename: str = "logs.jsonl",
        max_size_mb: float = 10.0,
    ) -> None:
        if log_dir is None:
            log_dir = os.getenv("GHOSTBOOK_LOG_DIR") or Path.home() / ".ghostbook" / "logs"
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.filename = filename
        self.max_size_bytes = int(max_size_mb * 1024 * 1024)

    @property
    def log_path(self) -> Path:
        """Current log file path."""
        return self.log_dir / self.filename

    def _rotate_if_needed(self) -> None:
        """Rotate log file if it exceeds max size."""
        if not self.log_path.exists():
            return

        if self.log_path.stat().st_size >= self.max_size_bytes:
            timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
            rotated_name = f"{self.log_path.stem}_{timestamp}.jsonl"
            self.log_path.rename(self.log_dir / rotated_name)

    def _write(self, entry: LogEntry) -> None:
        """Write a log entry to the file."""
        self._rotate_if_needed()

        with open(self.log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry.to_dict(), ensure_ascii=False) + "\n")

    def log(
        self,
        event: str,
        *,
        session_id: str | None = None,
        chat_id: str | None = None,
        actor_id: str | None = None,
        outcome: str | None = None,
        reason: str | None = None,
        error: str | None = None,
        **extra: Any,
    ) -> None:
        """Log an event."""
        entry = LogEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            event=event,
            session_id=session_id,
            chat_id=chat_id,
            actor_id=actor_id,
            outcome=outcome,
            reason=reason,
            error=error,
            extra=extra if extra else {},
        )
        self._write(entry)

    def log_session_start(
        self,
        session_id: str,
        *,
        owner_id: str,
        allowed_users: list[str],
    ) -> None:
        """Log a journal that finished starting."""
        self.log(
            "session_start",
            session_id=session_id,
            actor_id=owner_id,
            allowed_users=allowed_users,
        )

    def log_session_event(
        self,
        session_id: str,
        kind: str,
        outcome: str,
        *,
        actor_id: str | None = None,
        possible: int | None = None,
    ) -> None:
        """Log an interaction with a journal and what came of it."""
        self.log(
            "session_event",
            session_id=session_id,
            actor_id=actor_id,
            outcome=outcome,
            kind=kind,
            possible=possible,
        )

    def log_session_end(
        self,
        session_id: str,
        reason: str,
        *,
        error: str | None = None,
    ) -> None:
        """Log when a journal is terminated."""
        self.log("session_end", session_id=session_id, reason=reason, error=error)


# Global logger instance
_logger: JSONLLogger | None = None


def get_logger() -> JSONLLogger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = JSONLLogger()
    return _logger


def configure_logger(log_dir: str | Path | None = None, max_size_mb: float = 10.0) -> JSONLLogger:
    """Configure and return the global logger."""
    global _logger
    _logger = JSONLLogger(log_dir=log_dir, max_size_mb=max_size_mb)
    return _logger
