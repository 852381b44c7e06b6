"""Subscriber CRUD endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, status

from app.core.openapi import route_docs
from app.schema.subscriber import SubscriberChannel, SubscriberCreateRequest, SubscriberResponse
from app.services.subscriber_store import StoreError, SubscriberStore, SubscriberValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscribers", tags=["subscribers"])

NOT_FOUND_MESSAGE = "Subscriber not found"


def get_store(request: Request) -> SubscriberStore:
    """FastAPI dependency returning the store bound to the running app."""

    store = request.app.state.store
    if store is None:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Store is not initialised")
    return store


@router.get("", response_model=list[SubscriberResponse], **route_docs("list_subscribers"))
async def list_subscribers(store: SubscriberStore = Depends(get_store)) -> list[dict[str, Any]]:
    try:
        return await store.list_all()
    except StoreError as exc:
        logger.exception("Failed to list subscribers")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


# Registered ahead of "/{subscriber_id}" so "name" is never read as an identifier.
@router.get("/name", response_model=list[SubscriberChannel], **route_docs("list_subscriber_names"))
async def list_subscriber_names(store: SubscriberStore = Depends(get_store)) -> list[dict[str, Any]]:
    try:
        return await store.list_names()
    except StoreError as exc:
        logger.exception("Failed to list subscriber names")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


@router.get("/{subscriber_id}", response_model=SubscriberResponse, **route_docs("get_subscriber"))
async def get_subscriber(subscriber_id: str, store: SubscriberStore = Depends(get_store)) -> dict[str, Any]:
    """Look up one subscriber; every failure is reported as a 400 not-found."""

    try:
        subscriber = await store.get_by_id(subscriber_id)
    except StoreError as exc:
        logger.exception("Failed to fetch subscriber %s", subscriber_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NOT_FOUND_MESSAGE) from exc
    if subscriber is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NOT_FOUND_MESSAGE)
    return subscriber


@router.post(
    "",
    response_model=SubscriberResponse,
    status_code=status.HTTP_201_CREATED,
    **route_docs("create_subscriber"),
)
async def create_subscriber(
    payload: Any = Body(default=None),
    store: SubscriberStore = Depends(get_store),
) -> dict[str, Any]:
    """Create a subscriber; any body that is not an object counts as empty."""

    fields = SubscriberCreateRequest.model_validate(payload if isinstance(payload, dict) else {})
    try:
        subscriber = await store.create(fields.name, fields.subscribed_channel)
    except SubscriberValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except StoreError as exc:
        logger.exception("Failed to create subscriber")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc

    logger.info("Created subscriber %s", subscriber["_id"])
    return subscriber
