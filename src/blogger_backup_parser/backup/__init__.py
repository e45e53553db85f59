"""Blogger backup decoding engine.

Key Components:
    BackupDecoder: Streaming driver turning a backup feed into posts
    Entry: Accumulator for the entry currently being scanned
    Post / Comment: Typed results returned to callers
    classify_attributes: Pure entry classifier over attribute values
    resolve_comments: Post-scan join of comments onto their posts
"""

from .classifier import Classification, classify_attributes, classify_value
from .decoder import BackupDecoder, DecodeResult, ScanState, parse_published
from .models import Comment, Entry, EntryKind, Post
from .resolver import ResolutionResult, resolve_comments, sort_posts

__all__ = [
    "BackupDecoder",
    "Classification",
    "Comment",
    "DecodeResult",
    "Entry",
    "EntryKind",
    "Post",
    "ResolutionResult",
    "ScanState",
    "classify_attributes",
    "classify_value",
    "parse_published",
    "resolve_comments",
    "sort_posts",
]
