"""Shared pytest fixtures for openapi-gateway tests."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any

import pytest

from openapi_gateway.options import Integration, OpenApiOptions


@dataclass(frozen=True)
class StubFunction:
    """Stand-in for a deployed lambda function."""

    name: str

    @property
    def function_arn(self) -> str:
        return f"arn:aws:lambda:us-east-1:123456789012:function:{self.name}"


PETS_DOCUMENT: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Pets", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "responses": {
                    "200": {
                        "description": "Pets",
                        "headers": {"X-Total": {"schema": {"type": "integer"}}},
                    },
                },
            },
            "post": {
                "operationId": "createPet",
                "responses": {"201": {"description": "Created"}},
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {
                    "name": "petId",
                    "in": "path",
                    "required": True,
                    "schema": {"type": "string"},
                }
            ],
            "get": {
                "operationId": "getPet",
                "responses": {"200": {"description": "A pet"}},
            },
        },
    },
    "components": {
        "schemas": {"Pet": {"type": "object"}},
    },
}

PETS_LOOKUP: dict[str, dict[str, str]] = {
    "listPets": {"method": "get", "path": "/pets"},
    "createPet": {"method": "post", "path": "/pets"},
    "getPet": {"method": "get", "path": "/pets/{petId}"},
}


@pytest.fixture
def make_function() -> Any:
    """Factory for stub lambda functions."""

    def _make(name: str = "handler") -> StubFunction:
        return StubFunction(name=name)

    return _make


@pytest.fixture
def pets_document() -> dict[str, Any]:
    """A small three operation document."""
    return copy.deepcopy(PETS_DOCUMENT)


@pytest.fixture
def pets_integrations(make_function: Any) -> dict[str, Integration]:
    return {
        operation_id: Integration(function=make_function(operation_id))
        for operation_id in PETS_LOOKUP
    }


@pytest.fixture
def make_options(pets_integrations: dict[str, Integration]) -> Any:
    """Factory for options over the pets document."""

    def _make(**overrides: Any) -> OpenApiOptions:
        kwargs: dict[str, Any] = {
            "integrations": pets_integrations,
            "operation_lookup": PETS_LOOKUP,
        }
        kwargs.update(overrides)
        return OpenApiOptions(**kwargs)

    return _make
