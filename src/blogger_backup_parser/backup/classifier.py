"""Entry classification from attribute markers.

Blogger tags every entry with short machine-readable values on attribute-only
children, e.g.::

    <category scheme="http://schemas.google.com/g/2005#kind"
              term="http://schemas.google.com/blogger/2008/kind#post"/>
    <thr:in-reply-to ref="tag:blogger.com,1999:blog-1.post-2" .../>

``classify_attributes`` is a pure function from a set of attribute values to a
``Classification``; it knows nothing about the parser driving it.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from blogger_backup_parser.backup.models import EntryKind
from blogger_backup_parser.shared.config import MarkerConfig

_DEFAULT_MARKERS = MarkerConfig()


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one set of attribute values."""

    kind: Optional[EntryKind] = None
    post_id: Optional[str] = None

    @property
    def matched(self) -> bool:
        return self.kind is not None


UNCLASSIFIED = Classification()


def classify_value(value: str, markers: MarkerConfig = _DEFAULT_MARKERS) -> Classification:
    """Classify a single attribute value.

    Unrecognised values return ``UNCLASSIFIED``.
    """
    if value == markers.post_kind:
        return Classification(EntryKind.POST)
    if value == markers.settings_kind:
        return Classification(EntryKind.SETTINGS)
    if value == markers.template_kind:
        return Classification(EntryKind.TEMPLATE)
    if value.startswith(markers.post_id_prefix):
        return Classification(EntryKind.COMMENT, post_id=value)
    return UNCLASSIFIED


def classify_attributes(
    values: Iterable[str],
    markers: MarkerConfig = _DEFAULT_MARKERS,
) -> Classification:
    """Classify an entry from the attribute values of one element.

    In well-formed backups at most one value matches; if several do, the last
    one wins.
    """
    result = UNCLASSIFIED
    for value in values:
        candidate = classify_value(value, markers)
        if candidate.matched:
            result = candidate
    return result
