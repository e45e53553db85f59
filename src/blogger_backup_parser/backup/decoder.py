"""Streaming decoder for Blogger backup feeds.

A Blogger backup has a schema with the following path types::

    feed
    feed=>author=>{name,email}
    feed=>entry
    feed=>entry=>app:control=>app:draft
    feed=>entry=>author=>{name,email,uri}
    feed=>entry=>{content,id,published,title,updated,thr:total}
    feed=>{generator,id,title,updated}

Only ``feed=>entry`` carries blog data, and both posts and comments are
entries. ``BackupDecoder`` walks the lxml event stream once, tracking the
current path, filling one ``Entry`` per entry element, classifying it from its
attribute-only children and buffering the typed result. Comments are attached
to posts after the scan, and posts come back ordered by publication time.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from lxml import etree

from blogger_backup_parser.backup.classifier import classify_attributes
from blogger_backup_parser.backup.models import Comment, Entry, EntryKind, Post
from blogger_backup_parser.backup.resolver import resolve_comments
from blogger_backup_parser.markup.decoding import (
    SourceType,
    attribute_values,
    element_text,
    is_attribute_only,
    iter_events,
    qualified_name,
    release,
)
from blogger_backup_parser.markup.path import XPath
from blogger_backup_parser.shared.config import DecoderConfig
from blogger_backup_parser.shared.errors import BackupStructureError, TimestampParseError
from blogger_backup_parser.shared.logging import get_logger, set_package_level
from blogger_backup_parser.shared.result import (
    DecodeMetrics,
    DiagnosticEntry,
    DiagnosticSeverity,
)

MS_PER_SECOND = 1000


def parse_published(text: str) -> datetime:
    """Parse an offset-aware ISO 8601 timestamp such as ``2020-01-01T00:00:00+00:00``.

    Raises:
        TimestampParseError: the text is not a date-time or has no UTC offset.
    """
    try:
        published = datetime.fromisoformat(text.strip().replace("Z", "+00:00"))
    except ValueError as e:
        raise TimestampParseError(text) from e
    if published.tzinfo is None:
        raise TimestampParseError(text)
    return published


def describe_source(source: SourceType) -> str:
    if isinstance(source, (bytes, bytearray)):
        return f"<{len(source)} bytes>"
    return str(getattr(source, "name", source))


@dataclass
class ScanState:
    """Working sets collected by a single forward pass."""

    posts_by_id: Dict[str, Post] = field(default_factory=dict)
    comments: List[Comment] = field(default_factory=list)
    metrics: DecodeMetrics = field(default_factory=DecodeMetrics)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


@dataclass
class DecodeResult:
    """Posts decoded from one backup, with non-fatal findings."""

    posts: List[Post] = field(default_factory=list)
    orphans: List[Comment] = field(default_factory=list)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)
    metrics: DecodeMetrics = field(default_factory=DecodeMetrics)
    correlation_id: Optional[str] = None

    @property
    def post_count(self) -> int:
        return len(self.posts)

    @property
    def comment_count(self) -> int:
        return sum(post.comment_count for post in self.posts)

    @property
    def has_orphans(self) -> bool:
        return bool(self.orphans)

    @property
    def published_range(self) -> Optional[Tuple[datetime, datetime]]:
        """First and last publication time, or None without posts."""
        if not self.posts:
            return None
        return self.posts[0].published, self.posts[-1].published

    @property
    def warnings(self) -> List[DiagnosticEntry]:
        return [
            diagnostic for diagnostic in self.diagnostics
            if diagnostic.severity is DiagnosticSeverity.WARNING
        ]


class BackupDecoder:
    """Decode a Blogger backup into posts carrying their comments."""

    def __init__(
        self,
        config: Optional[DecoderConfig] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        self.config = config or DecoderConfig()
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "backup_decoder")
        set_package_level(self.config.logging_level)
        self._routes = self.config.routing.field_routes()
        self._entry_path = self.config.routing.entry_path

    def decode(self, source: SourceType) -> DecodeResult:
        """Scan ``source`` and resolve comments onto their posts.

        Raises:
            BackupError: any fatal read, encoding, structure, timestamp or
                conversion failure. No partial result is returned.
        """
        start_time = time.time()
        self.logger.info(
            "Starting backup decode", extra={"source": describe_source(source)}
        )

        state = self.scan(source)
        metrics = state.metrics
        resolution = resolve_comments(
            state.posts_by_id, state.comments, self.logger.child("resolver")
        )
        for orphan in resolution.orphans:
            state.diagnostics.append(self._diagnostic(
                DiagnosticSeverity.WARNING,
                "Missing post for comment",
                "resolver",
                {"comment_id": orphan.id, "post_id": orphan.post_id},
            ))

        metrics.attached_comments = resolution.attached_count
        metrics.orphaned_comments = len(resolution.orphans)
        metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND

        self.logger.info(
            "Backup decode finished",
            extra={
                "posts": metrics.posts,
                "comments": metrics.comments,
                "orphans": metrics.orphaned_comments,
                "processing_time_ms": metrics.processing_time_ms,
            },
        )
        return DecodeResult(
            posts=resolution.posts,
            orphans=resolution.orphans,
            diagnostics=state.diagnostics,
            metrics=metrics,
            correlation_id=self.correlation_id,
        )

    def scan(self, source: SourceType) -> ScanState:
        """Single forward pass collecting posts by id and a flat comment list."""
        state = ScanState()
        xpath = XPath(self.config.routing.separator)
        entry: Optional[Entry] = None

        for event, element in iter_events(source, self.config.stream):
            name = qualified_name(element)
            if event == "start":
                xpath.push(name)
                if entry is None and xpath.as_string() == self._entry_path:
                    entry = Entry()
                continue

            path = xpath.as_string()
            if entry is not None:
                if is_attribute_only(element):
                    self._classify(entry, element)
                field_name = self._routes.get(path)
                if field_name is not None:
                    self._route(entry, field_name, element_text(element))
                if path == self._entry_path:
                    self._finish_entry(entry, state)
                    entry = None
                    release(element)
            xpath.pop_checked(name)

        if len(xpath):
            raise BackupStructureError(f"Input ended inside {xpath.as_string()}")

        state.metrics.posts = len(state.posts_by_id)
        state.metrics.comments = len(state.comments)
        state.metrics.drafts = sum(1 for post in state.posts_by_id.values() if post.draft)
        return state

    def _classify(self, entry: Entry, element: etree._Element) -> None:
        classification = classify_attributes(
            attribute_values(element), self.config.markers
        )
        if classification.matched:
            entry.kind = classification.kind
            if classification.post_id is not None:
                entry.post_id = classification.post_id

    def _route(self, entry: Entry, field_name: str, text: str) -> None:
        if field_name == "published":
            entry.published = parse_published(text)
        elif field_name == "draft":
            if text == self.config.routing.draft_value:
                entry.draft = True
                self.logger.debug("Entry marked as draft")
        else:
            setattr(entry, field_name, text)

    def _finish_entry(self, entry: Entry, state: ScanState) -> None:
        metrics = state.metrics
        metrics.entries_seen += 1
        metrics.add_kind(entry.kind.name if entry.kind else "UNCLASSIFIED")

        if entry.kind is EntryKind.POST:
            post = entry.to_post()
            if post.id in state.posts_by_id:
                metrics.duplicate_post_ids += 1
                self.logger.warning(
                    "Duplicate post id, keeping the later entry",
                    extra={"post_id": post.id},
                )
                state.diagnostics.append(self._diagnostic(
                    DiagnosticSeverity.WARNING,
                    "Duplicate post id, keeping the later entry",
                    "backup_decoder",
                    {"post_id": post.id},
                ))
            state.posts_by_id[post.id] = post
        elif entry.kind is EntryKind.COMMENT:
            state.comments.append(entry.to_comment())
        else:
            metrics.discarded_entries += 1
            self.logger.debug(
                "Discarding entry",
                extra={
                    "entry_kind": entry.kind.name if entry.kind else None,
                    "entry_id": entry.id,
                },
            )

    def _diagnostic(self, severity, message, component, details) -> DiagnosticEntry:
        return DiagnosticEntry(
            severity=severity,
            message=message,
            component=component,
            details=details,
            correlation_id=self.correlation_id,
        )
