"""Audit logging interfaces and implementations for skillscope.

This module provides the AuditSink abstract interface for recording discovery
and validation operations, along with concrete implementations for different
logging backends.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

from skillscope.models import AuditEvent


class AuditSink(ABC):
    """Abstract interface for audit logging.

    Discovery queries ("detect", "list"), skipped bundles ("skip") and
    single-file validations ("validate") are reported through an AuditSink
    when one is configured.
    """

    @abstractmethod
    def log(self, event: AuditEvent) -> None:
        """Record an audit event.

        Args:
            event: The AuditEvent to record.
        """
        pass


def _to_json_line(event: AuditEvent) -> str:
    return json.dumps(event.to_dict(), separators=(',', ':'), ensure_ascii=False)


class JSONLAuditSink(AuditSink):
    """Appends audit events to a JSONL (JSON Lines) file.

    Example log file content:
        {"ts":"2024-01-01T12:00:00","kind":"list","skill":"*","path":null,"detail":{"scope":"all","count":3}}
        {"ts":"2024-01-01T12:00:00","kind":"skip","skill":"broken","path":"/p/.claude/skills/broken/SKILL.md",...}
    """

    def __init__(self, log_path: Path):
        """Initialize JSONLAuditSink with log file path.

        Args:
            log_path: Path to the JSONL log file. Parent directories are
                created if they don't exist.
        """
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log(self, event: AuditEvent) -> None:
        """Append audit event as a JSON line to the log file."""
        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(_to_json_line(event) + '\n')


class StdoutAuditSink(AuditSink):
    """Writes audit events to stdout, one JSON object per line."""

    def log(self, event: AuditEvent) -> None:
        """Print audit event as a JSON line to stdout."""
        print(_to_json_line(event))
