"""Public API for Blogger backup decoding."""

from .decode import BloggerBackupParser, decode, decode_file, decode_with_report

__all__ = [
    "BloggerBackupParser",
    "decode",
    "decode_file",
    "decode_with_report",
]
