"""Api spec preparation — turns an OpenAPI document into a gateway document."""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from openapi_gateway.authorizers import Authorizer
from openapi_gateway.context import CompositionContext
from openapi_gateway.cors import GATEWAY_RESPONSE_PREFIX, cors_response_parameters
from openapi_gateway.options import LabelledFunction, OpenApiOptions
from openapi_gateway.operations import build_operation_name_resolver
from openapi_gateway.paths import prepare_path_spec

logger = logging.getLogger(__name__)

REQUEST_VALIDATORS_EXTENSION = "x-amazon-apigateway-request-validators"
REQUEST_VALIDATOR_EXTENSION = "x-amazon-apigateway-request-validator"
GATEWAY_RESPONSES_EXTENSION = "x-amazon-apigateway-gateway-responses"
BAD_REQUEST_BODY = "BAD_REQUEST_BODY"


@dataclass(frozen=True)
class ComposedSpec:
    """A prepared document and the functions the gateway must be allowed to invoke."""

    document: dict[str, Any]
    functions: tuple[LabelledFunction, ...]


def _bad_request_body_response(options: OpenApiOptions) -> dict[str, Any]:
    response: dict[str, Any] = {
        "statusCode": 400,
        "responseTemplates": {
            "application/json": '{"message": "$context.error.validationErrorString"}',
        },
    }
    if options.cors_options is not None:
        response["responseParameters"] = cors_response_parameters(
            options.cors_options, GATEWAY_RESPONSE_PREFIX
        )
    return response


def _prepare_security_schemes(
    ctx: CompositionContext, existing: Mapping[str, Any] | None
) -> dict[str, Any]:
    schemes = dict(existing or {})
    for name, scheme in ctx.security_schemes.items():
        if name in schemes and schemes[name] != scheme:
            logger.warning("Replacing security scheme %s with its authorizer", name)
        schemes[name] = scheme
    return schemes


def compose_api_spec(
    spec: Mapping[str, Any], options: OpenApiOptions
) -> ComposedSpec:
    """Prepare the api spec for deployment with integrations, auth, validation and CORS.

    The input document is never modified. Any configuration error aborts the
    whole composition.
    """
    ctx = CompositionContext(
        options=options,
        resolve_operation_name=build_operation_name_resolver(
            options.operation_lookup, strict=options.strict_operation_lookup
        ),
    )
    document = copy.deepcopy(dict(spec))

    document[REQUEST_VALIDATORS_EXTENSION] = {
        **(document.get(REQUEST_VALIDATORS_EXTENSION) or {}),
        "all": {
            "validateRequestBody": True,
            "validateRequestParameters": True,
        },
    }
    document[REQUEST_VALIDATOR_EXTENSION] = "all"
    document[GATEWAY_RESPONSES_EXTENSION] = {
        **(document.get(GATEWAY_RESPONSES_EXTENSION) or {}),
        BAD_REQUEST_BODY: _bad_request_body_response(options),
    }

    document["paths"] = {
        path: prepare_path_spec(ctx, path, path_item)
        for path, path_item in (document.get("paths") or {}).items()
    }

    components = dict(document.get("components") or {})
    components["securitySchemes"] = _prepare_security_schemes(
        ctx, components.get("securitySchemes")
    )
    document["components"] = components

    unused = [
        operation_id
        for operation_id in options.integrations
        if operation_id not in ctx.composed_operations
    ]
    if unused:
        logger.warning(
            "Integrations not referenced by any operation: %s", ", ".join(unused)
        )

    return ComposedSpec(document=document, functions=tuple(ctx.functions))


def prepare_api_spec(
    spec: Mapping[str, Any], options: OpenApiOptions
) -> dict[str, Any]:
    """Return only the prepared document of compose_api_spec."""
    return compose_api_spec(spec, options).document


def _all_authorizers(options: OpenApiOptions) -> list[Authorizer]:
    authorizers: dict[str, Authorizer] = {}
    candidates = [options.default_authorizer] + [
        integration.authorizer for integration in options.integrations.values()
    ]
    for authorizer in candidates:
        if authorizer is not None:
            authorizers.setdefault(authorizer.authorizer_id, authorizer)
    return list(authorizers.values())


def get_labelled_functions(options: OpenApiOptions) -> list[LabelledFunction]:
    """Return every lambda function the gateway may invoke.

    Custom authorizer functions are labelled by authorizer id and come first,
    followed by integration functions labelled by operation id. A function
    shared by several labels is listed once, under its first label.
    """
    labelled = [
        LabelledFunction(label=authorizer.authorizer_id, function=authorizer.function)
        for authorizer in _all_authorizers(options)
        if authorizer.is_custom
    ] + [
        LabelledFunction(label=operation_id, function=integration.function)
        for operation_id, integration in options.integrations.items()
    ]

    distinct: list[LabelledFunction] = []
    for candidate in labelled:
        if not any(
            known.function is candidate.function or known.function == candidate.function
            for known in distinct
        ):
            distinct.append(candidate)
    return distinct
