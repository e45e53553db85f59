"""Command-line interface for Blogger backup decoding.

This module provides CLI tools to list decoded posts, save their content,
inspect a backup's structure and copy directories.
"""

from .main import main

__all__ = ["main"]
