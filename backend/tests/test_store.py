"""
Blog API Backend - Post Store Unit Tests
=========================================

What:  Tests for InMemoryPostStore and seed loading.

What we test:
    ✅ Insertion order is preserved
    ✅ Duplicate ids are rejected
    ✅ Updates touch only the given fields and refresh updated_at
    ✅ Returned records are copies
    ✅ Seed file loading and duplicate detection
"""

import json
from datetime import datetime, timezone

import pytest

from app.config import DEFAULT_SEED_FILE
from app.schemas.post import Post
from app.store import InMemoryPostStore, load_seed_posts


def make_post(post_id: str, title: str = "Title") -> Post:
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Post(
        id=post_id, title=title, content="Body", author="Author",
        created_at=ts, updated_at=ts,
    )


class TestInMemoryPostStore:
    """Tests for the store operations."""

    def test_list_keeps_insertion_order(self):
        store = InMemoryPostStore([make_post("b"), make_post("a")])
        store.insert(make_post("c"))

        assert [p.id for p in store.list_all()] == ["b", "a", "c"]

    def test_get_exact_match(self):
        store = InMemoryPostStore([make_post("a1"), make_post("a10")])

        assert store.get("a10").id == "a10"
        assert store.get("A1") is None

    def test_insert_duplicate_id_rejected(self):
        store = InMemoryPostStore([make_post("a1")])

        with pytest.raises(ValueError, match="already exists"):
            store.insert(make_post("a1"))
        assert len(store) == 1

    def test_update_overwrites_given_fields_only(self):
        original = make_post("a1", title="Keep me")
        store = InMemoryPostStore([original])

        updated = store.update("a1", {"content": "New body"})

        assert updated.content == "New body"
        assert updated.title == "Keep me"
        assert updated.created_at == original.created_at
        assert updated.updated_at > original.updated_at

    def test_update_unknown_id_returns_none(self):
        store = InMemoryPostStore([make_post("a1")])
        assert store.update("missing", {"title": "x"}) is None

    def test_update_rejects_immutable_fields(self):
        store = InMemoryPostStore([make_post("a1")])

        with pytest.raises(ValueError):
            store.update("a1", {"id": "b2"})
        assert store.get("a1") is not None

    def test_remove(self):
        store = InMemoryPostStore([make_post("a1"), make_post("a2")])

        assert store.remove("a1") is True
        assert store.remove("a1") is False
        assert [p.id for p in store.list_all()] == ["a2"]

    def test_returned_records_are_copies(self):
        store = InMemoryPostStore([make_post("a1", title="Stored")])

        fetched = store.get("a1")
        fetched.title = "Changed outside"

        assert store.get("a1").title == "Stored"


class TestLoadSeedPosts:
    """Tests for reading the seed list."""

    def test_packaged_seed_contains_a1(self):
        posts = load_seed_posts(DEFAULT_SEED_FILE)

        assert "a1" in [p.id for p in posts]
        assert len({p.id for p in posts}) == len(posts)

    def test_reads_camel_case_keys(self, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps([{
            "id": "x1", "title": "T", "content": "C", "author": "A",
            "createdAt": "2024-01-01T00:00:00.000Z",
            "updatedAt": "2024-01-02T00:00:00.000Z",
        }]))

        posts = load_seed_posts(seed)

        assert posts[0].id == "x1"
        assert posts[0].updated_at.day == 2

    def test_duplicate_ids_rejected(self, tmp_path):
        record = {
            "id": "dup", "title": "T", "content": "C", "author": "A",
            "createdAt": "2024-01-01T00:00:00Z", "updatedAt": "2024-01-01T00:00:00Z",
        }
        seed = tmp_path / "seed.json"
        seed.write_text(json.dumps([record, record]))

        with pytest.raises(ValueError, match="repeats"):
            load_seed_posts(seed)
