"""Blogger Backup Parser.

Decodes a Google Blogger backup (an Atom feed of posts, comments, settings and
templates) into posts ordered by publication time, each carrying its comments.

Progressive API Disclosure:
- Level 1: Simple functions - decode(), decode_file()
- Level 2: Configured parser - BloggerBackupParser class, decode_with_report()
"""

__version__ = "0.1.0"
__author__ = "Blogger Backup Parser Team"

# Progressive API disclosure - Level 1: Simple functions
# Progressive API disclosure - Level 2: Advanced configuration
from .api import BloggerBackupParser, decode, decode_file, decode_with_report

# Core result objects for all API levels
from .backup import Comment, DecodeResult, Post

# Configuration and errors for advanced usage
from .shared.config import DecoderConfig
from .shared.errors import BackupError

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple decoding functions
    "decode",
    "decode_file",

    # Level 2: Advanced parser class
    "BloggerBackupParser",
    "decode_with_report",

    # Result objects and data structures
    "Comment",
    "DecodeResult",
    "Post",

    # Configuration and errors
    "DecoderConfig",
    "BackupError",
]
