"""Text and byte decoding at the boundary between lxml and the decoder.

Every element name, text node and attribute value leaves this module as a
validated ``str``. lxml syntax errors are translated into the package's
exception hierarchy: encoding problems become ``BackupEncodingError``, any
other malformation becomes ``BackupStructureError``.
"""

import io
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple, Union

from lxml import etree

from blogger_backup_parser.shared.config import StreamConfig
from blogger_backup_parser.shared.errors import (
    BackupEncodingError,
    BackupError,
    BackupReadError,
    BackupStructureError,
)

SourceType = Union[str, Path, bytes, bytearray, BinaryIO]

# libxml2 error codes that indicate undecodable input rather than bad markup
_ENCODING_ERROR_NAMES = (
    "ERR_INVALID_CHAR",
    "ERR_INVALID_ENCODING",
    "ERR_UNKNOWN_ENCODING",
    "ERR_UNSUPPORTED_ENCODING",
    "ERR_ENCODING_NAME",
)
ENCODING_ERROR_CODES = frozenset(
    getattr(etree.ErrorTypes, name)
    for name in _ENCODING_ERROR_NAMES
    if hasattr(etree.ErrorTypes, name)
)


def to_text(value: Union[str, bytes, None], what: str = "text") -> str:
    """Return ``value`` as validated text.

    Bytes are decoded strictly as UTF-8; strings are checked to be encodable,
    which rejects lone surrogates. ``None`` becomes the empty string.

    Raises:
        BackupEncodingError: the value is not valid UTF-8 text.
    """
    if value is None:
        return ""
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BackupEncodingError(f"Invalid UTF-8 in {what}: {e}") from e
    try:
        value.encode("utf-8")
    except UnicodeEncodeError as e:
        raise BackupEncodingError(f"Invalid character in {what}: {e}") from e
    return value


def _prefixed(prefix: Optional[str], localname: str) -> str:
    return f"{prefix}:{localname}" if prefix else localname


def qualified_name(element: etree._Element) -> str:
    """Element name as written in the document, e.g. ``app:draft``.

    Elements in the default namespace render without a prefix.
    """
    localname = etree.QName(element).localname
    return to_text(_prefixed(element.prefix, localname), "element name")


def attribute_name(element: etree._Element, key: str) -> str:
    """Attribute name as written in the document, e.g. ``xml:lang``."""
    qname = etree.QName(key)
    if qname.namespace is None:
        return to_text(qname.localname, "attribute name")
    prefix = None
    for candidate, uri in element.nsmap.items():
        if uri == qname.namespace and candidate is not None:
            prefix = candidate
            break
    if prefix is None and qname.namespace == "http://www.w3.org/XML/1998/namespace":
        prefix = "xml"
    return to_text(_prefixed(prefix, qname.localname), "attribute name")


def attribute_values(element: etree._Element) -> List[str]:
    """All attribute values of ``element`` in document order."""
    return [to_text(value, "attribute value") for value in element.attrib.values()]


def attribute_pairs(element: etree._Element) -> List[Tuple[str, str]]:
    """``(name, value)`` pairs with document-style attribute names."""
    return [
        (attribute_name(element, key), to_text(value, "attribute value"))
        for key, value in element.attrib.items()
    ]


def element_text(element: etree._Element) -> str:
    """Text directly inside ``element`` before its first child."""
    return to_text(element.text)


def is_attribute_only(element: etree._Element) -> bool:
    """True for an element with attributes but no children and no text.

    This is how ``<category term="..."/>`` style markers appear once parsed.
    """
    return len(element) == 0 and element.text is None and len(element.attrib) > 0


def translate_syntax_error(error: etree.XMLSyntaxError) -> BackupError:
    """Map an lxml syntax error onto the package's exception hierarchy."""
    message = str(error)
    line = error.position[0] if error.position else None
    if error.code in ENCODING_ERROR_CODES or "not proper UTF-8" in message:
        return BackupEncodingError(f"Undecodable input: {message}", position=line)
    return BackupStructureError(f"Malformed markup: {message}", position=line)


@contextmanager
def open_source(source: SourceType) -> Iterator[BinaryIO]:
    """Yield a binary stream for a path, raw bytes or an open binary file.

    Streams passed in by the caller are not closed here.

    Raises:
        BackupReadError: the path cannot be opened.
    """
    if isinstance(source, (str, Path)):
        try:
            handle = open(source, "rb")
        except OSError as e:
            raise BackupReadError(f"Cannot open backup {source}: {e}") from e
        with handle:
            yield handle
    elif isinstance(source, (bytes, bytearray)):
        yield io.BytesIO(source)
    elif hasattr(source, "read"):
        yield source
    else:
        raise TypeError(f"Unsupported backup source type: {type(source).__name__}")


def iter_events(
    source: SourceType,
    config: Optional[StreamConfig] = None,
) -> Iterator[Tuple[str, etree._Element]]:
    """Stream ``("start" | "end", element)`` events from a backup.

    Comments and processing instructions are dropped. Errors raised while
    reading or parsing surface as ``BackupError`` subclasses.
    """
    config = config or StreamConfig()
    with open_source(source) as stream:
        context = etree.iterparse(
            stream,
            events=("start", "end"),
            huge_tree=config.huge_tree,
            resolve_entities=config.resolve_entities,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        try:
            for event, element in context:
                yield event, element
        except etree.XMLSyntaxError as e:
            raise translate_syntax_error(e) from e
        except OSError as e:
            raise BackupReadError(f"Failed reading backup: {e}") from e


def release(element: etree._Element) -> None:
    """Free a fully processed element and its already-processed siblings."""
    element.clear()
    parent = element.getparent()
    if parent is None:
        return
    while element.getprevious() is not None:
        del parent[0]
