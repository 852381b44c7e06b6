"""Pydantic schemas for the subscriber API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SubscriberCreateRequest(BaseModel):
    """Inbound payload for creating a subscriber; presence is checked by the store."""

    model_config = ConfigDict(populate_by_name=True)

    name: Any = None
    subscribed_channel: Any = Field(default=None, alias="subscribedChannel")


class SubscriberChannel(BaseModel):
    """Name and channel pair without the identifier."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    subscribed_channel: str = Field(alias="subscribedChannel")


class SubscriberResponse(SubscriberChannel):
    """Stored subscriber including its document identifier."""

    id: str = Field(alias="_id")


class MessageResponse(BaseModel):
    """Error body returned for every failed request."""

    message: str
