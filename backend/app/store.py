"""
Blog API Backend - Post Store
==============================

What:  Storage abstraction for posts plus the process-local implementation.
How:   Services talk to the abstract PostStore; InMemoryPostStore keeps an
       insertion-ordered list guarded by a lock.
When:  Created once per application instance and seeded from the seed list.

Records live only for the lifetime of the process. A restart starts again
from the seed list.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import TypeAdapter

from app.schemas.post import Post

logger = logging.getLogger(__name__)

# Fields an update may overwrite; id and created_at are immutable
MUTABLE_FIELDS = ("title", "content", "author")


class PostStore(ABC):
    """
    Abstract interface for post storage.

    Contract:
        - list_all() returns records in insertion order
        - get/update/remove match ids exactly
        - insert() rejects an id already present
        - returned records are copies; mutating them does not touch the store
    """

    @abstractmethod
    def list_all(self) -> List[Post]:
        ...

    @abstractmethod
    def get(self, post_id: str) -> Optional[Post]:
        ...

    @abstractmethod
    def insert(self, post: Post) -> Post:
        ...

    @abstractmethod
    def update(self, post_id: str, changes: dict) -> Optional[Post]:
        """
        Overwrite the given fields on a record and refresh updated_at.

        Returns:
            The updated record, or None when no record has this id.
        """

    @abstractmethod
    def remove(self, post_id: str) -> bool:
        """Remove a record. Returns False when no record has this id."""


class InMemoryPostStore(PostStore):
    """
    Process-local store backed by a list.

    Lookups are linear scans; the collection is small. Every operation runs
    under one re-entrant lock so at most one caller mutates it at a time,
    even when uvicorn runs sync handlers in its threadpool.
    """

    def __init__(self, posts: Optional[Iterable[Post]] = None):
        self._posts: List[Post] = []
        self._lock = threading.RLock()
        for post in posts or ():
            self.insert(post)

    def __len__(self) -> int:
        with self._lock:
            return len(self._posts)

    def _index_of(self, post_id: str) -> int:
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                return index
        return -1

    def list_all(self) -> List[Post]:
        with self._lock:
            return [post.model_copy() for post in self._posts]

    def get(self, post_id: str) -> Optional[Post]:
        with self._lock:
            index = self._index_of(post_id)
            if index == -1:
                return None
            return self._posts[index].model_copy()

    def insert(self, post: Post) -> Post:
        with self._lock:
            if self._index_of(post.id) != -1:
                raise ValueError(f"Post with ID '{post.id}' already exists")
            self._posts.append(post.model_copy())
            return post.model_copy()

    def update(self, post_id: str, changes: dict) -> Optional[Post]:
        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be updated: {sorted(unknown)}")

        with self._lock:
            index = self._index_of(post_id)
            if index == -1:
                return None
            current = self._posts[index]
            updated = current.model_copy(
                update={**changes, "updated_at": datetime.now(timezone.utc)}
            )
            self._posts[index] = updated
            return updated.model_copy()

    def remove(self, post_id: str) -> bool:
        with self._lock:
            index = self._index_of(post_id)
            if index == -1:
                return False
            del self._posts[index]
            return True


_post_list_adapter = TypeAdapter(List[Post])


def load_seed_posts(path: Path) -> List[Post]:
    """
    Read the seed list from a JSON array of posts.

    Raises:
        FileNotFoundError: The seed file does not exist.
        ValueError: The file is not a valid post list or repeats an id.
    """
    raw = Path(path).read_text(encoding="utf-8")
    posts = _post_list_adapter.validate_python(json.loads(raw))

    seen = set()
    for post in posts:
        if post.id in seen:
            raise ValueError(f"Seed file {path} repeats post ID '{post.id}'")
        seen.add(post.id)

    logger.info("Loaded %d seed posts from %s", len(posts), path)
    return posts
