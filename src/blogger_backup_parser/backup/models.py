"""Data model for decoded Blogger backups.

``Entry`` is the transient accumulator filled while one ``<entry>`` element is
being scanned. Once the entry closes it is converted into a ``Post`` or a
``Comment`` according to its recorded ``EntryKind``.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum, auto
from typing import Any, Dict, List, Optional

from blogger_backup_parser.shared.errors import EntryConversionError


class EntryKind(Enum):
    """Classification of an entry, decided from its attribute markers."""

    COMMENT = auto()
    POST = auto()
    SETTINGS = auto()
    TEMPLATE = auto()


@dataclass
class Comment:
    """A reader comment belonging to exactly one post."""

    author_name: str
    content: str
    id: str
    post_id: str
    published: datetime
    title: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author_name": self.author_name,
            "content": self.content,
            "id": self.id,
            "post_id": self.post_id,
            "published": self.published.isoformat(),
            "title": self.title,
        }


@dataclass
class Post:
    """A blog post with the comments attached to it.

    ``comments`` stays empty while the backup is scanned and is filled in
    document order by the resolver.
    """

    author_name: str
    content: str
    draft: bool
    id: str
    published: datetime
    title: str
    comments: List[Comment] = field(default_factory=list)

    @property
    def comment_count(self) -> int:
        return len(self.comments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "author_name": self.author_name,
            "content": self.content,
            "draft": self.draft,
            "id": self.id,
            "published": self.published.isoformat(),
            "title": self.title,
            "comments": [comment.to_dict() for comment in self.comments],
        }


_POST_FIELDS = ("author_name", "content", "id", "published", "title")
_COMMENT_FIELDS = ("author_name", "content", "id", "post_id", "published", "title")


@dataclass
class Entry:
    """Fields collected for the entry currently being read."""

    author_name: Optional[str] = None
    content: Optional[str] = None
    draft: bool = False
    id: Optional[str] = None
    kind: Optional[EntryKind] = None
    post_id: Optional[str] = None
    published: Optional[datetime] = None
    title: Optional[str] = None

    def _missing(self, names: tuple) -> List[str]:
        return [name for name in names if getattr(self, name) is None]

    def to_post(self) -> Post:
        """Convert an entry classified as a post.

        Raises:
            ValueError: the entry is not classified as a post.
            EntryConversionError: a mandatory post field was never filled.
        """
        if self.kind is not EntryKind.POST:
            raise ValueError(f"Entry of kind {self.kind} is not a post")
        missing = self._missing(_POST_FIELDS)
        if missing:
            raise EntryConversionError("post", missing, self.id)
        return Post(
            author_name=self.author_name,
            content=self.content,
            draft=self.draft,
            id=self.id,
            published=self.published,
            title=self.title,
        )

    def to_comment(self) -> Comment:
        """Convert an entry classified as a comment.

        Raises:
            ValueError: the entry is not classified as a comment.
            EntryConversionError: a mandatory comment field was never filled.
        """
        if self.kind is not EntryKind.COMMENT:
            raise ValueError(f"Entry of kind {self.kind} is not a comment")
        missing = self._missing(_COMMENT_FIELDS)
        if missing:
            raise EntryConversionError("comment", missing, self.id)
        return Comment(
            author_name=self.author_name,
            content=self.content,
            id=self.id,
            post_id=self.post_id,
            published=self.published,
            title=self.title,
        )

    def clear(self) -> None:
        """Reset every field to its default."""
        for entry_field in fields(self):
            setattr(self, entry_field.name, entry_field.default)
