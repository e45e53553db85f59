"""Exploratory scans of a backup document.

Each function re-reads the document independently with the same event stream
and ``XPath`` tracker the decoder uses. Nothing here feeds back into decoding;
these helpers exist to find out what a particular backup contains.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Set, Tuple

from lxml import etree

from blogger_backup_parser.markup.decoding import (
    SourceType,
    attribute_pairs,
    iter_events,
    qualified_name,
    release,
    to_text,
)
from blogger_backup_parser.markup.path import XPath
from blogger_backup_parser.shared.config import StreamConfig


@dataclass
class PathOccurrence:
    """One element found at the inspected path."""

    index: int
    attributes: List[Tuple[str, str]] = field(default_factory=list)
    text: str = ""
    child_tags: List[str] = field(default_factory=list)


def _walk(
    source: SourceType,
    config: Optional[StreamConfig] = None,
) -> Iterator[Tuple[str, etree._Element, XPath]]:
    """Yield events with the path already pushed (start) or not yet popped (end)."""
    xpath = XPath()
    for event, element in iter_events(source, config):
        name = qualified_name(element)
        if event == "start":
            xpath.push(name)
            yield event, element, xpath
            continue
        yield event, element, xpath
        depth = xpath.depth
        xpath.pop_checked(name)
        if depth == 2:
            release(element)


def tag_names(source: SourceType, config: Optional[StreamConfig] = None) -> Set[str]:
    """All distinct element names in the document."""
    return {
        xpath.top for event, _, xpath in _walk(source, config) if event == "start"
    }


def paths(source: SourceType, config: Optional[StreamConfig] = None) -> List[str]:
    """Sorted distinct element paths; siblings of the same name share a path."""
    return sorted({
        xpath.as_string() for event, _, xpath in _walk(source, config) if event == "start"
    })


def all_attributes(source: SourceType, config: Optional[StreamConfig] = None) -> List[str]:
    """Sorted distinct ``name="value"`` strings over every element."""
    attributes = set()
    for event, element, _ in _walk(source, config):
        if event == "start":
            attributes.update(
                f'{name}="{value}"' for name, value in attribute_pairs(element)
            )
    return sorted(attributes)


def all_text(
    source: SourceType,
    config: Optional[StreamConfig] = None,
    skip_whitespace: bool = True,
) -> List[str]:
    """Every text node in the document.

    Text is grouped per element (its own text, then the tails of its
    children), with elements in the order they close. Text between the
    root's direct children is dropped along with the children themselves.
    """
    texts: List[str] = []
    for event, element, _ in _walk(source, config):
        if event != "end":
            continue
        chunks = [element.text, *(child.tail for child in element)]
        for chunk in chunks:
            if chunk is None or (skip_whitespace and not chunk.strip()):
                continue
            texts.append(to_text(chunk))
    return texts


def path_contents(
    source: SourceType,
    path: str,
    first: int = 1,
    last: Optional[int] = None,
    config: Optional[StreamConfig] = None,
) -> List[PathOccurrence]:
    """Elements at ``path`` whose 1-based occurrence index is in ``[first, last]``.

    Example:
        >>> path_contents("backup.xml", "feed=>entry=>app:control=>app:draft", 1, 5)
    """
    if first < 1:
        raise ValueError("first must be >= 1")
    if last is not None and last < first:
        raise ValueError("last must be >= first")

    occurrences: List[PathOccurrence] = []
    index = 0
    for event, element, xpath in _walk(source, config):
        if event != "end" or xpath.as_string() != path:
            continue
        index += 1
        if index < first:
            continue
        if last is not None and index > last:
            break
        occurrences.append(PathOccurrence(
            index=index,
            attributes=attribute_pairs(element),
            text=to_text(element.text),
            child_tags=[qualified_name(child) for child in element],
        ))
    return occurrences
