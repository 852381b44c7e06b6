"""Persistence operations for the subscribers collection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from bson import ObjectId
from pymongo.errors import PyMongoError

NAME_PROJECTION = {"name": 1, "subscribedChannel": 1, "_id": 0}


class StoreError(RuntimeError):
    """Raised when the document store cannot complete an operation."""


class SubscriberValidationError(ValueError):
    """Raised when a subscriber is missing a required field."""


def serialize(document: Mapping[str, Any]) -> dict[str, Any]:
    """Return a JSON-friendly copy of a stored document."""

    data = dict(document)
    if isinstance(data.get("_id"), ObjectId):
        data["_id"] = str(data["_id"])
    return data


class SubscriberStore:
    """Collection-level operations used by the API and the seeding job."""

    def __init__(self, collection) -> None:
        self._collection = collection

    async def list_all(self) -> list[dict[str, Any]]:
        """Return every subscriber with all stored fields."""

        try:
            documents = await self._collection.find({}).to_list(length=None)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return [serialize(doc) for doc in documents]

    async def list_names(self) -> list[dict[str, Any]]:
        """Return name and channel for every subscriber, without identifiers."""

        try:
            documents = await self._collection.find({}, NAME_PROJECTION).to_list(length=None)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return [serialize(doc) for doc in documents]

    async def get_by_id(self, subscriber_id: str) -> dict[str, Any] | None:
        """Fetch one subscriber; malformed identifiers are treated as missing."""

        if not ObjectId.is_valid(subscriber_id):
            return None
        try:
            document = await self._collection.find_one({"_id": ObjectId(subscriber_id)})
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        return serialize(document) if document is not None else None

    async def create(self, name: Any, subscribed_channel: Any) -> dict[str, Any]:
        """Insert a subscriber and return it with its assigned identifier.

        Any falsy value counts as missing; other values are stored as text.
        """

        if not name or not subscribed_channel:
            raise SubscriberValidationError("Name and subscribedChannel are required.")

        document = {"name": str(name), "subscribedChannel": str(subscribed_channel)}
        try:
            result = await self._collection.insert_one(document)
        except PyMongoError as exc:
            raise StoreError(str(exc)) from exc
        document["_id"] = result.inserted_id
        return serialize(document)

    async def clear_all(self, *, session=None) -> int:
        """Delete every subscriber and return how many were removed."""

        result = await self._collection.delete_many({}, session=session)
        return result.deleted_count

    async def insert_many(self, records: Iterable[Mapping[str, Any]], *, session=None) -> list[str]:
        """Bulk insert records in order; stops at the first failing document."""

        documents = [
            {"name": record["name"], "subscribedChannel": record["subscribedChannel"]} for record in records
        ]
        if not documents:
            return []
        result = await self._collection.insert_many(documents, ordered=True, session=session)
        return [str(inserted_id) for inserted_id in result.inserted_ids]
