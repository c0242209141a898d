"""Method integration — binds one operation to its backend, auth and CORS headers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from openapi_gateway.authorizers import apply_method_authorizer, resolve_authorizer
from openapi_gateway.context import CompositionContext
from openapi_gateway.cors import cors_header_definitions, merge_headers
from openapi_gateway.exceptions import MissingIntegration
from openapi_gateway.options import MethodAndPath

logger = logging.getLogger(__name__)

INTEGRATION_EXTENSION = "x-amazon-apigateway-integration"


def _with_cors_headers(responses: Mapping[str, Any]) -> dict[str, Any]:
    headers = cors_header_definitions()
    prepared: dict[str, Any] = {}
    for status_code, response in responses.items():
        # TODO: follow $ref responses into components.responses and add headers there
        if not isinstance(response, Mapping) or "$ref" in response:
            prepared[status_code] = response
            continue
        prepared[status_code] = {
            **response,
            "headers": merge_headers(response.get("headers"), headers),
        }
    return prepared


def apply_method_integration(
    ctx: CompositionContext,
    path: str,
    method: str,
    operation: Mapping[str, Any],
) -> dict[str, Any]:
    """Add the lambda integration and auth to an operation.

    Raises MissingIntegration if the operation cannot be matched to an
    integration.
    """
    options = ctx.options
    location = MethodAndPath(method=method, path=path)
    operation_name = ctx.resolve_operation_name(location)
    if operation_name is None:
        raise MissingIntegration(method, path)
    if operation_name not in options.integrations:
        raise MissingIntegration(method, path, operation_id=operation_name)

    integration = options.integrations[operation_name]
    authorizer = resolve_authorizer(integration.authorizer, options.default_authorizer)

    uri = options.invocation_uri(integration.function)
    ctx.register_function(operation_name, integration.function)
    ctx.composed_operations.add(operation_name)

    prepared = dict(operation)
    if options.cors_options is not None and "responses" in operation:
        prepared["responses"] = _with_cors_headers(operation["responses"])

    # Gateway to lambda proxy calls are always POST
    prepared[INTEGRATION_EXTENSION] = {
        "type": "AWS_PROXY",
        "httpMethod": "POST",
        "uri": uri,
        "passthroughBehavior": "WHEN_NO_MATCH",
    }
    prepared.update(apply_method_authorizer(ctx, authorizer))

    logger.debug(
        "Composed %s %s as %s with %s authorizer",
        method,
        path,
        operation_name,
        authorizer.type.value,
    )
    return prepared
