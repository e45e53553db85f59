"""Filesystem helpers for decoded posts.

Post content is written to one file per post, named after its publication
time, e.g. ``data/bookroot/post_content_for_2020-1-2-13-5-9``.
"""

import shutil
from pathlib import Path
from typing import Iterable, List, Optional, Union

from blogger_backup_parser.backup.models import Post
from blogger_backup_parser.shared.config import StorageConfig
from blogger_backup_parser.shared.logging import get_logger

PathLike = Union[str, Path]

logger = get_logger(__name__, component="storage")


def content_path(post: Post, config: Optional[StorageConfig] = None) -> Path:
    """Destination of a post's content, derived from its publication time.

    Date and time parts are written without zero padding.
    """
    config = config or StorageConfig()
    published = post.published
    stamp = "-".join(str(part) for part in (
        published.year,
        published.month,
        published.day,
        published.hour,
        published.minute,
        published.second,
    ))
    return Path(config.content_root) / f"{config.filename_prefix}{stamp}"


def save(path: PathLike, text: str, encoding: str = "utf-8") -> Path:
    """Write ``text`` to ``path``, replacing any existing file.

    Parent directories are created as needed.
    """
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.unlink(missing_ok=True)
    file_path.write_text(text, encoding=encoding)
    return file_path


def save_post_content(post: Post, config: Optional[StorageConfig] = None) -> Path:
    """Save one post's content and return where it was written."""
    config = config or StorageConfig()
    path = save(content_path(post, config), post.content, config.encoding)
    logger.debug("Saved post content", extra={"post_id": post.id, "path": str(path)})
    return path


def save_all(posts: Iterable[Post], config: Optional[StorageConfig] = None) -> List[Path]:
    """Save the content of every post.

    Posts published in the same second share a path; the later one wins.
    """
    paths = [save_post_content(post, config) for post in posts]
    logger.info("Saved post content", extra={"files": len(paths)})
    return paths


def copy_dir_all(src: PathLike, dst: PathLike) -> None:
    """Copy a directory and all its contents into ``dst``.

    ``dst`` may already exist; files in it are overwritten.
    """
    source = Path(src)
    destination = Path(dst)
    destination.mkdir(parents=True, exist_ok=True)
    for child in source.iterdir():
        target = destination / child.name
        if child.is_dir():
            copy_dir_all(child, target)
        else:
            shutil.copy(child, target)
