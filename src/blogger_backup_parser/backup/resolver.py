"""Attach buffered comments to their posts once the scan is complete."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from blogger_backup_parser.backup.models import Comment, Post
from blogger_backup_parser.shared.logging import CorrelationLogger, get_logger


@dataclass
class ResolutionResult:
    """Posts in publication order plus the comments that had no post."""

    posts: List[Post] = field(default_factory=list)
    orphans: List[Comment] = field(default_factory=list)

    @property
    def attached_count(self) -> int:
        return sum(post.comment_count for post in self.posts)


def sort_posts(posts: Iterable[Post]) -> List[Post]:
    """Order posts by ascending publication time, then by id."""
    return sorted(posts, key=lambda post: (post.published, post.id))


def resolve_comments(
    posts_by_id: Dict[str, Post],
    comments: Iterable[Comment],
    logger: Optional[CorrelationLogger] = None,
) -> ResolutionResult:
    """Move each comment into its owning post.

    Comments are appended in the order given, which is document order.
    A comment whose post id is unknown is reported and left out; it never
    aborts the resolution. ``posts_by_id`` is drained.
    """
    logger = logger or get_logger(__name__, component="resolver")
    orphans: List[Comment] = []
    for comment in comments:
        post = posts_by_id.get(comment.post_id)
        if post is None:
            logger.warning(
                "Missing post for comment",
                extra={"comment_id": comment.id, "post_id": comment.post_id},
            )
            orphans.append(comment)
            continue
        post.comments.append(comment)

    posts = sort_posts(posts_by_id.values())
    posts_by_id.clear()
    return ResolutionResult(posts=posts, orphans=orphans)
