"""Declarative route descriptions used to build the OpenAPI document."""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from app.core.config import Settings
from app.schema.subscriber import MessageResponse

API_TITLE = "Subscriber API"
API_VERSION = "1.0.0"
API_DESCRIPTION = "API for managing subscribers"
DOCS_URL = "/api-docs"

_EXAMPLE_SUBSCRIBER = {"_id": "64b7f0c2a1d3e45f6a7b8c9d", "name": "John Doe", "subscribedChannel": "Channel A"}


def _json_example(example: Any) -> dict[str, Any]:
    return {"application/json": {"example": example}}


ROUTE_DOCS: dict[str, dict[str, Any]] = {
    "list_subscribers": {
        "summary": "Get all subscribers",
        "description": "Retrieve a list of all subscribers.",
        "responses": {
            200: {"description": "Successful response", "content": _json_example([_EXAMPLE_SUBSCRIBER])},
            500: {"model": MessageResponse, "description": "Internal Server Error"},
        },
    },
    "list_subscriber_names": {
        "summary": "Get subscribers' names and subscribed channels.",
        "description": "Retrieve a list of subscribers' names and their subscribed channels.",
        "responses": {
            200: {
                "description": "Successful response",
                "content": _json_example([{"name": "John Doe", "subscribedChannel": "Channel A"}]),
            },
            500: {"model": MessageResponse, "description": "Internal Server Error"},
        },
    },
    "get_subscriber": {
        "summary": "Get a subscriber by their ID.",
        "description": "Retrieve a subscriber's information by their ID.",
        "responses": {
            200: {"description": "Successful response", "content": _json_example(_EXAMPLE_SUBSCRIBER)},
            400: {
                "model": MessageResponse,
                "description": "Subscriber not found",
                "content": _json_example({"message": "Subscriber not found"}),
            },
        },
    },
    "create_subscriber": {
        "summary": "Create a new subscriber.",
        "description": "Create a new subscriber.",
        "openapi_extra": {
            "requestBody": {
                "required": True,
                "content": {
                    "application/json": {
                        "schema": {
                            "type": "object",
                            "properties": {
                                "name": {"type": "string"},
                                "subscribedChannel": {"type": "string"},
                            },
                        },
                        "example": {"name": "John Doe", "subscribedChannel": "Channel A"},
                    }
                },
            }
        },
        "responses": {
            201: {"description": "Subscriber created successfully", "content": _json_example(_EXAMPLE_SUBSCRIBER)},
            400: {
                "model": MessageResponse,
                "description": "Bad Request",
                "content": _json_example({"message": "Name and subscribedChannel are required."}),
            },
            500: {"model": MessageResponse, "description": "Internal Server Error"},
        },
    },
}


def route_docs(name: str) -> dict[str, Any]:
    """Return decorator keyword arguments describing the named route."""

    return dict(ROUTE_DOCS[name])


def configure_openapi(app: FastAPI, settings: Settings) -> None:
    """Attach title, version and server metadata to the generated document."""

    app.title = API_TITLE
    app.version = API_VERSION
    app.description = API_DESCRIPTION
    if settings.public_url:
        app.servers = [{"url": settings.public_url}]
    app.openapi_schema = None
