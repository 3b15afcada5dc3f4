"""
Audit log for the Ancestry Chart Viewer.

Timestamped trail of chart lifecycle transitions, data loads and
reported failures.  Failures are also echoed to stderr so that a
headless run leaves a visible reason behind.
"""

import datetime
import sys
from dataclasses import dataclass, field
from typing import List, Optional, TextIO

from . import APP_NAME, APP_VERSION


@dataclass(frozen=True)
class AuditEntry:
    action: str
    description: str
    details: str = ""
    timestamp: datetime.datetime = field(default_factory=datetime.datetime.now)

    def format(self) -> List[str]:
        """Header line plus one indented line per line of details."""
        stamp = self.timestamp.strftime('%Y-%m-%d %H:%M:%S')
        lines = [f"[{stamp}] [{self.action}] {self.description}"]
        if self.details:
            lines.extend(f"    {line}" for line in self.details.splitlines())
        return lines


class AuditLog:
    """Timestamped audit trail of chart actions and failures.

    Parameters
    ----------
    stream : file-like, optional
        Where failures are echoed; ``sys.stderr`` when omitted.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self.entries: List[AuditEntry] = []
        self._stream = stream
        self.log("SESSION_START", f"{APP_NAME} v{APP_VERSION} started")

    def log(self, action: str, description: str, details: str = "") -> AuditEntry:
        entry = AuditEntry(action, description, details)
        self.entries.append(entry)
        return entry

    def log_transition(self, old_state, new_state):
        self.log("STATE", f"{old_state.value} -> {new_state.value}")

    def log_data_load(self, source: str, details: str):
        self.log("DATA_LOAD", f"Read {source}", details)

    def log_failure(self, kind: str, message: str):
        self.log("FAILURE", message, kind)
        stream = self._stream if self._stream is not None else sys.stderr
        print(f"[AncestryChart] {kind}: {message}", file=stream)

    def log_export(self, path: str):
        self.log("EXPORT", f"Chart saved to {path}")

    def actions(self) -> List[str]:
        return [e.action for e in self.entries]

    @property
    def last_failure(self) -> Optional[AuditEntry]:
        failures = [e for e in self.entries if e.action == "FAILURE"]
        return failures[-1] if failures else None

    def export_text(self) -> str:
        rule = "-" * 60
        out = [
            rule,
            f"{APP_NAME} {APP_VERSION} audit log "
            f"({len(self.entries)} entries)",
            rule,
        ]
        for entry in self.entries:
            out.extend(entry.format())
        return "\n".join(out)
