"""
Blog API Backend - Post Service (Business Logic)
=================================================

What:  List, get, create, update and delete posts.
How:   Applies the business rules (required fields, patch semantics,
       timestamps, id generation) on top of a PostStore.
Who:   Called by the /posts route handlers.

Error Handling Strategy:
    Validation runs before any store write, so a rejected request never
    mutates the collection. Unknown ids raise NotFoundError; the global
    handler turns it into a 404.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from app.exceptions import BadRequestError, NotFoundError
from app.schemas.post import (
    MessageResponse,
    Post,
    PostCreate,
    PostMutationResponse,
    PostUpdate,
)
from app.store import MUTABLE_FIELDS, PostStore

logger = logging.getLogger(__name__)

POST_NOT_FOUND_MESSAGE = "Blog post not found"
MISSING_FIELDS_MESSAGE = "Missing 'title', 'content', or 'author' in request body"


class PostService:
    """
    Business logic layer for posts.

    `actor` arguments name the authenticated user for log attribution only.
    They never restrict which posts may be changed.
    """

    def __init__(self, store: PostStore):
        self.store = store

    def list_posts(self) -> List[Post]:
        logger.info("Fetching all blog posts.")
        return self.store.list_all()

    def get_post(self, post_id: str) -> Post:
        logger.info("Fetching post with ID: %s", post_id)
        post = self.store.get(post_id)
        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND_MESSAGE, resource_id=post_id)
        return post

    def create_post(self, data: PostCreate, actor: Optional[str] = None) -> PostMutationResponse:
        """
        Create a post from a body holding non-empty title, content and author.

        Raises:
            BadRequestError: Any of the three fields is missing or empty.
        """
        logger.info("User '%s' attempting to create a new post.", actor)

        missing = [name for name in MUTABLE_FIELDS if not getattr(data, name)]
        if missing:
            raise BadRequestError(message=MISSING_FIELDS_MESSAGE, fields=missing)

        now = datetime.now(timezone.utc)
        post = self.store.insert(
            Post(
                id=str(uuid.uuid4()),
                title=data.title,
                content=data.content,
                author=data.author,
                created_at=now,
                updated_at=now,
            )
        )

        logger.info("Post created by '%s' with ID: %s", actor, post.id)
        return PostMutationResponse(message="Blog post created successfully", post=post)

    def update_post(
        self, post_id: str, data: PostUpdate, actor: Optional[str] = None
    ) -> PostMutationResponse:
        """
        Overwrite the truthy fields of `data` on an existing post.

        Empty strings count as "not provided", so a field cannot be cleared.
        updated_at is refreshed even when no field changes.
        """
        logger.info("User '%s' attempting to update post with ID: %s", actor, post_id)

        changes = {name: getattr(data, name) for name in MUTABLE_FIELDS if getattr(data, name)}
        post = self.store.update(post_id, changes)
        if post is None:
            raise NotFoundError(message=POST_NOT_FOUND_MESSAGE, resource_id=post_id)

        logger.info("Post with ID '%s' updated by '%s'.", post_id, actor)
        return PostMutationResponse(message="Blog post updated successfully", post=post)

    def delete_post(self, post_id: str, actor: Optional[str] = None) -> MessageResponse:
        logger.info("User '%s' attempting to delete post with ID: %s", actor, post_id)

        if not self.store.remove(post_id):
            raise NotFoundError(message=POST_NOT_FOUND_MESSAGE, resource_id=post_id)

        logger.info("Post with ID '%s' deleted by '%s'.", post_id, actor)
        return MessageResponse(message=f"Post deleted successfully. ID: {post_id}")
