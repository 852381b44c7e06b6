"""Tests for the subscriber store."""

from __future__ import annotations

import uuid

import pytest
import pytest_asyncio
from bson import ObjectId
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from app.services.subscriber_store import StoreError, SubscriberStore, SubscriberValidationError

pytest_plugins = ("pytest_asyncio",)


class _FailingCursor:
    async def to_list(self, length=None):
        raise ServerSelectionTimeoutError("no servers available")


class _FailingCollection:
    """Collection stub whose every call fails like an unreachable server."""

    def find(self, *args, **kwargs):
        return _FailingCursor()

    async def find_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")

    async def insert_one(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("no servers available")


@pytest_asyncio.fixture
async def store() -> SubscriberStore:
    client = AsyncMongoMockClient()
    collection = client[f"subscribers_{uuid.uuid4().hex}"]["subscribers"]
    yield SubscriberStore(collection)


@pytest.mark.asyncio
async def test_create_assigns_identifier_and_get_by_id_returns_it(store: SubscriberStore) -> None:
    created = await store.create("John", "Tech")

    assert created["name"] == "John"
    assert created["subscribedChannel"] == "Tech"
    assert ObjectId.is_valid(created["_id"])

    fetched = await store.get_by_id(created["_id"])
    assert fetched == created


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("name", "channel"),
    [(None, "Tech"), ("John", None), (None, None), ("", "Tech"), ("John", "")],
)
async def test_create_requires_both_fields(store: SubscriberStore, name, channel) -> None:
    with pytest.raises(SubscriberValidationError, match="Name and subscribedChannel are required."):
        await store.create(name, channel)

    assert await store.list_all() == []


@pytest.mark.asyncio
async def test_get_by_id_unknown_or_malformed_returns_none(store: SubscriberStore) -> None:
    await store.create("John", "Tech")

    assert await store.get_by_id(str(ObjectId())) is None
    assert await store.get_by_id("not-an-object-id") is None
    assert await store.get_by_id("name") is None


@pytest.mark.asyncio
async def test_list_names_omits_identifier(store: SubscriberStore) -> None:
    await store.create("a", "c1")
    await store.create("b", "c2")

    names = await store.list_names()

    assert names == [{"name": "a", "subscribedChannel": "c1"}, {"name": "b", "subscribedChannel": "c2"}]
    assert all("_id" not in row for row in names)


@pytest.mark.asyncio
async def test_clear_all_and_insert_many(store: SubscriberStore) -> None:
    await store.create("old", "gone")

    deleted = await store.clear_all()
    inserted = await store.insert_many(
        [{"name": "a", "subscribedChannel": "c1"}, {"name": "b", "subscribedChannel": "c2", "extra": True}]
    )

    assert deleted == 1
    assert len(inserted) == 2
    subscribers = await store.list_all()
    assert [(s["name"], s["subscribedChannel"]) for s in subscribers] == [("a", "c1"), ("b", "c2")]
    assert all("extra" not in s for s in subscribers)


@pytest.mark.asyncio
async def test_insert_many_with_no_records(store: SubscriberStore) -> None:
    assert await store.insert_many([]) == []


@pytest.mark.asyncio
async def test_store_failures_are_wrapped() -> None:
    store = SubscriberStore(_FailingCollection())

    with pytest.raises(StoreError, match="no servers available"):
        await store.list_all()
    with pytest.raises(StoreError):
        await store.list_names()
    with pytest.raises(StoreError):
        await store.get_by_id(str(ObjectId()))
    with pytest.raises(StoreError):
        await store.create("John", "Tech")


@pytest.mark.asyncio
async def test_create_stores_non_string_values_as_text(store: SubscriberStore) -> None:
    created = await store.create(42, "Tech")

    assert created["name"] == "42"
    with pytest.raises(SubscriberValidationError):
        await store.create(0, "Tech")
