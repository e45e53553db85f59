"""Collaborator tools for decoded backups.

This module provides filesystem helpers for saving post content and
exploratory scans for looking inside a backup document.
"""

from .inspection import PathOccurrence, all_attributes, all_text, path_contents, paths, tag_names
from .storage import content_path, copy_dir_all, save, save_all, save_post_content

__all__ = [
    "PathOccurrence",
    "all_attributes",
    "all_text",
    "path_contents",
    "paths",
    "tag_names",
    "content_path",
    "copy_dir_all",
    "save",
    "save_all",
    "save_post_content",
]
