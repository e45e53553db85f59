"""Structural position tracking over an XML event stream.

``XPath`` is a stack of currently-open element names. Its string form, e.g.
``feed=>entry=>published``, tells same-named elements apart by nesting.
"""

from typing import List, Optional

from blogger_backup_parser.shared.errors import BackupStructureError

DEFAULT_SEPARATOR = "=>"


class XPath:
    """Stack of open element names with a delimited string rendering."""

    def __init__(self, separator: str = DEFAULT_SEPARATOR) -> None:
        self.separator = separator
        self._segments: List[str] = []

    def push(self, tag: str) -> None:
        """Append a segment for a newly opened element."""
        self._segments.append(tag)

    def pop(self) -> Optional[str]:
        """Remove and return the top segment, or None when empty."""
        if not self._segments:
            return None
        return self._segments.pop()

    def pop_checked(self, tag: str) -> str:
        """Remove the top segment, which must equal ``tag``.

        Raises:
            BackupStructureError: the stack is empty or its top differs from
                ``tag``, meaning the markup is unbalanced.
        """
        top = self.pop()
        if top is None:
            raise BackupStructureError(f"Closing tag </{tag}> without a matching start")
        if top != tag:
            raise BackupStructureError(
                f"Closing tag </{tag}> does not match open element <{top}> "
                f"at {self.as_string() or '(root)'}"
            )
        return top

    @property
    def depth(self) -> int:
        return len(self._segments)

    @property
    def top(self) -> Optional[str]:
        return self._segments[-1] if self._segments else None

    def as_string(self) -> str:
        """Render the full stack joined by the separator."""
        return self.separator.join(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __str__(self) -> str:
        return self.as_string()

    def __repr__(self) -> str:
        return f"XPath({self.as_string()!r})"
