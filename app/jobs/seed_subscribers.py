"""Reset the subscribers collection to a fixed dataset.

Usage: python -m app.jobs.seed_subscribers [path/to/subscribers.json]

Clearing and inserting are two separate writes unless APP_SEED_USE_TRANSACTION
is enabled (requires a replica set). Without a transaction a failed insert
leaves the collection holding only the records written before the failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from app.core.config import settings
from app.db.seed_data import SEED_SUBSCRIBERS
from app.db.session import connect, create_client, disconnect, get_collection
from app.services.subscriber_store import SubscriberStore

logger = logging.getLogger(__name__)


def load_dataset(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON array of {name, subscribedChannel} objects."""

    records = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(records, list):
        raise ValueError(f"Seed file {path} must contain a JSON array")
    for index, record in enumerate(records):
        if not isinstance(record, dict) or not record.get("name") or not record.get("subscribedChannel"):
            raise ValueError(f"Seed record {index} needs name and subscribedChannel")
    return records


async def refresh_all(
    store: SubscriberStore,
    records: Sequence[Mapping[str, Any]],
    *,
    session=None,
) -> list[str]:
    """Clear the collection then insert records; returns the new identifiers."""

    deleted = await store.clear_all(session=session)
    logger.info("Cleared %s subscribers", deleted)
    inserted = await store.insert_many(records, session=session)
    logger.info("Inserted %s subscribers", len(inserted))
    return inserted


async def seed(records: Sequence[Mapping[str, Any]] = SEED_SUBSCRIBERS) -> list[str]:
    client = create_client()
    try:
        await connect(client)
        store = SubscriberStore(get_collection(client))
        if not settings.seed_use_transaction:
            logger.warning("Seeding without a transaction; a failed insert leaves a partial collection")
            return await refresh_all(store, records)

        async with await client.start_session() as session:
            async with session.start_transaction():
                return await refresh_all(store, records, session=session)
    finally:
        disconnect(client)


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=settings.log_level)

    if len(sys.argv) > 2:
        print("Usage: python -m app.jobs.seed_subscribers [path/to/subscribers.json]")
        sys.exit(1)

    dataset = load_dataset(sys.argv[1]) if len(sys.argv) == 2 else SEED_SUBSCRIBERS
    asyncio.run(seed(dataset))
