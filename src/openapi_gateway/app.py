"""FastAPI bridge — prepares an application's own OpenAPI schema for the gateway."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from fastapi import FastAPI

from openapi_gateway.authorizers import Authorizer
from openapi_gateway.cors import CorsPolicy
from openapi_gateway.functions import lambda_invocation_uri
from openapi_gateway.operations import operation_lookup_from_spec
from openapi_gateway.options import Integration, OpenApiOptions
from openapi_gateway.spec import ComposedSpec, compose_api_spec


def _compose_schema(
    schema: dict[str, Any],
    integrations: Mapping[str, Integration],
    default_authorizer: Authorizer | None,
    cors_options: CorsPolicy | None,
    invocation_uri: Callable[[Any], str],
) -> ComposedSpec:
    options = OpenApiOptions(
        integrations=integrations,
        operation_lookup=operation_lookup_from_spec(schema),
        default_authorizer=default_authorizer,
        cors_options=cors_options,
        invocation_uri=invocation_uri,
    )
    return compose_api_spec(schema, options)


def prepare_app_spec(
    app: FastAPI,
    integrations: Mapping[str, Integration],
    *,
    default_authorizer: Authorizer | None = None,
    cors_options: CorsPolicy | None = None,
    invocation_uri: Callable[[Any], str] = lambda_invocation_uri,
) -> ComposedSpec:
    """Compose the app's OpenAPI schema, keyed by the operationIds FastAPI generated."""
    return _compose_schema(
        app.openapi(), integrations, default_authorizer, cors_options, invocation_uri
    )


def install_gateway_openapi(
    app: FastAPI,
    integrations: Mapping[str, Integration],
    *,
    default_authorizer: Authorizer | None = None,
    cors_options: CorsPolicy | None = None,
    invocation_uri: Callable[[Any], str] = lambda_invocation_uri,
) -> None:
    """Serve the gateway document from the app's openapi endpoint.

    Call this after all routes are registered. The document is composed on
    first use, so configuration errors surface then.
    """
    original_schema = app.openapi
    composed: dict[str, Any] = {}

    def gateway_openapi() -> dict[str, Any]:
        if not composed:
            composed.update(
                _compose_schema(
                    original_schema(),
                    integrations,
                    default_authorizer,
                    cors_options,
                    invocation_uri,
                ).document
            )
        return composed

    app.openapi = gateway_openapi  # type: ignore[method-assign]
