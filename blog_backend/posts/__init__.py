"""Blog posts: storage queries and who gets to see what."""

from .crud import create_post, get_post_by_slug, list_posts, soft_delete_post, update_post
from .visibility import visibility_predicate

__all__ = [
    "create_post",
    "get_post_by_slug",
    "list_posts",
    "soft_delete_post",
    "update_post",
    "visibility_predicate",
]
