"""Diagnostic and metrics types reported alongside decoded posts.

Non-fatal findings (orphaned comments, duplicate post ids, discarded entries)
are recorded as diagnostics rather than printed, so callers decide how to
present them.
"""

import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostic entries."""

    DEBUG = auto()      # Debug-level information
    INFO = auto()       # Informational messages
    WARNING = auto()    # Data excluded from the result, decode continued


@dataclass
class DiagnosticEntry:
    """Single diagnostic entry with context information."""

    severity: DiagnosticSeverity
    message: str
    component: str
    details: Optional[Dict[str, Any]] = None
    timestamp: float = field(default_factory=time.time)
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate diagnostic entry."""
        if not self.message:
            raise ValueError("Diagnostic message cannot be empty")
        if not self.component:
            raise ValueError("Diagnostic component cannot be empty")


@dataclass
class DecodeMetrics:
    """Counters collected during one decode call."""

    processing_time_ms: float = 0.0
    entries_seen: int = 0
    posts: int = 0
    comments: int = 0
    attached_comments: int = 0
    orphaned_comments: int = 0
    discarded_entries: int = 0
    duplicate_post_ids: int = 0
    drafts: int = 0
    kind_distribution: Dict[str, int] = field(default_factory=dict)

    @property
    def entries_per_second(self) -> float:
        """Calculate entries decoded per second."""
        if self.processing_time_ms <= 0:
            return 0.0
        return (self.entries_seen * 1000.0) / self.processing_time_ms

    def add_kind(self, kind_name: str) -> None:
        """Count one finished entry of the given kind."""
        self.kind_distribution[kind_name] = self.kind_distribution.get(kind_name, 0) + 1
