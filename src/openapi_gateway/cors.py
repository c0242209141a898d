"""CORS fragments — response headers, response parameters and the preflight method."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from openapi_gateway.exceptions import InvalidCorsPolicy

DEFAULT_HEADERS: tuple[str, ...] = (
    "Content-Type",
    "X-Amz-Date",
    "Authorization",
    "X-Api-Key",
    "X-Amz-Security-Token",
    "X-Amz-User-Agent",
)
ALL_METHODS: tuple[str, ...] = (
    "OPTIONS",
    "GET",
    "PUT",
    "POST",
    "DELETE",
    "PATCH",
    "HEAD",
)
DEFAULT_STATUS_CODE = 204

METHOD_RESPONSE_PREFIX = "method.response.header"
GATEWAY_RESPONSE_PREFIX = "gatewayresponse.header"

ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ALLOW_METHODS = "Access-Control-Allow-Methods"
ALLOW_HEADERS = "Access-Control-Allow-Headers"


@dataclass(frozen=True)
class CorsPolicy:
    """Cross origin resource sharing settings applied to the whole api."""

    allowed_origins: Sequence[str]
    allowed_headers: Sequence[str] | None = None
    allowed_methods: Sequence[str] | None = None
    status_code: int = DEFAULT_STATUS_CODE

    def __post_init__(self) -> None:
        if isinstance(self.allowed_origins, str):
            raise InvalidCorsPolicy("allowed_origins must be a sequence of origins")
        object.__setattr__(self, "allowed_origins", tuple(self.allowed_origins))
        if not self.allowed_origins:
            raise InvalidCorsPolicy("CORS policy requires at least one allowed origin")
        for name in ("allowed_headers", "allowed_methods"):
            values = getattr(self, name)
            if values is None:
                continue
            if isinstance(values, str):
                raise InvalidCorsPolicy(f"{name} must be a sequence of names")
            object.__setattr__(self, name, tuple(values))
        if not 100 <= self.status_code <= 599:
            raise InvalidCorsPolicy(
                f"CORS preflight status code {self.status_code} is not an HTTP status"
            )


def cors_header_definitions() -> dict[str, dict[str, Any]]:
    """Header objects to attach to a response."""
    return {
        ALLOW_ORIGIN: {"schema": {"type": "string"}},
        ALLOW_METHODS: {"schema": {"type": "string"}},
        ALLOW_HEADERS: {"schema": {"type": "string"}},
    }


def _quoted(values: Sequence[str]) -> str:
    # Literal values must be single quoted in gateway mappings
    return f"'{','.join(values)}'"


def cors_response_headers(policy: CorsPolicy) -> dict[str, str]:
    # An explicitly empty list is kept, only None falls back to the defaults
    headers = policy.allowed_headers
    methods = policy.allowed_methods
    return {
        ALLOW_HEADERS: _quoted(DEFAULT_HEADERS if headers is None else headers),
        ALLOW_METHODS: _quoted(ALL_METHODS if methods is None else methods),
        ALLOW_ORIGIN: _quoted(policy.allowed_origins),
    }


def cors_response_parameters(
    policy: CorsPolicy, prefix: str = METHOD_RESPONSE_PREFIX
) -> dict[str, str]:
    """Response header values keyed for a gateway response parameter mapping."""
    return {
        f"{prefix}.{header}": value
        for header, value in cors_response_headers(policy).items()
    }


def merge_headers(
    existing: Mapping[str, Any] | None, additions: Mapping[str, Any]
) -> dict[str, Any]:
    """Merge header definitions where existing headers always win.

    Header names are compared case-insensitively. Existing headers keep their
    position and missing additions are appended, so merging the same
    additions twice gives the same result.
    """
    merged = dict(existing or {})
    present = {name.lower() for name in merged}
    for name, definition in additions.items():
        if name.lower() not in present:
            merged[name] = definition
            present.add(name.lower())
    return merged


def cors_options_method(
    path_item: Mapping[str, Any], policy: CorsPolicy | None
) -> dict[str, Any]:
    """Generate an unauthenticated "options" method answering CORS preflight requests.

    Returns an empty mapping when CORS is disabled or the path already
    defines its own options method.
    """
    if policy is None or "options" in path_item:
        return {}

    status_code = policy.status_code
    return {
        "options": {
            "summary": "CORS Support",
            "description": "Enable CORS by returning the correct headers",
            "responses": {
                f"{status_code}": {
                    "description": "Default response for CORS method",
                    "headers": cors_header_definitions(),
                    "content": {},
                },
            },
            "x-amazon-apigateway-integration": {
                "type": "mock",
                "requestTemplates": {
                    "application/json": f'{{"statusCode": {status_code}}}',
                },
                "responses": {
                    "default": {
                        "statusCode": f"{status_code}",
                        "responseParameters": cors_response_parameters(policy),
                        "responseTemplates": {"application/json": "{}"},
                    },
                },
            },
        },
    }
