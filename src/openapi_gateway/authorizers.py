"""Authorizers — the None, IAM and Custom variants and their security fragments."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from openapi_gateway.exceptions import AuthorizerConflict, InvalidAuthorizer

if TYPE_CHECKING:
    from openapi_gateway.context import CompositionContext

NONE_AUTHORIZER_ID = "none"
IAM_AUTHORIZER_ID = "aws.auth.sigv4"
DEFAULT_IDENTITY_SOURCE = "method.request.header.Authorization"
DEFAULT_CACHE_TTL = 300
MAX_CACHE_TTL = 3600

_HEADER_IDENTITY_PREFIX = "method.request.header."


class AuthorizerType(Enum):
    """Authorizer variants supported by the gateway."""

    NONE = "none"
    IAM = "iam"
    CUSTOM = "custom"


class CustomAuthorizerType(Enum):
    """How a custom authorizer receives the caller's identity."""

    TOKEN = "token"
    REQUEST = "request"


@dataclass(frozen=True)
class Authorizer:
    """Tagged authorizer value. ``function`` and friends only apply to CUSTOM."""

    type: AuthorizerType
    authorizer_id: str
    function: Any = None
    custom_type: CustomAuthorizerType = CustomAuthorizerType.TOKEN
    identity_source: str = DEFAULT_IDENTITY_SOURCE
    cache_ttl: int = DEFAULT_CACHE_TTL

    @property
    def is_custom(self) -> bool:
        return self.type is AuthorizerType.CUSTOM


class Authorizers:
    """Factories for the supported authorizer variants."""

    @staticmethod
    def none() -> Authorizer:
        return Authorizer(type=AuthorizerType.NONE, authorizer_id=NONE_AUTHORIZER_ID)

    @staticmethod
    def iam() -> Authorizer:
        return Authorizer(type=AuthorizerType.IAM, authorizer_id=IAM_AUTHORIZER_ID)

    @staticmethod
    def custom(
        authorizer_id: str,
        function: Any,
        *,
        custom_type: CustomAuthorizerType = CustomAuthorizerType.TOKEN,
        identity_source: str = DEFAULT_IDENTITY_SOURCE,
        cache_ttl: int = DEFAULT_CACHE_TTL,
    ) -> Authorizer:
        if not authorizer_id:
            raise InvalidAuthorizer("Custom authorizers require an authorizer id")
        if authorizer_id in (NONE_AUTHORIZER_ID, IAM_AUTHORIZER_ID):
            raise InvalidAuthorizer(f"Authorizer id {authorizer_id} is reserved")
        if function is None:
            raise InvalidAuthorizer(
                f"Custom authorizer {authorizer_id} requires a function"
            )
        if not 0 <= cache_ttl <= MAX_CACHE_TTL:
            raise InvalidAuthorizer(
                f"Custom authorizer {authorizer_id} cache ttl must be between "
                f"0 and {MAX_CACHE_TTL} seconds, got {cache_ttl}"
            )
        return Authorizer(
            type=AuthorizerType.CUSTOM,
            authorizer_id=authorizer_id,
            function=function,
            custom_type=custom_type,
            identity_source=identity_source,
            cache_ttl=cache_ttl,
        )


def resolve_authorizer(
    integration_authorizer: Authorizer | None,
    default_authorizer: Authorizer | None,
) -> Authorizer:
    """Prefer the integration's authorizer, then the default, then none."""
    if integration_authorizer is not None:
        return integration_authorizer
    if default_authorizer is not None:
        return default_authorizer
    return Authorizers.none()


def authorizer_security(authorizer: Authorizer) -> list[dict[str, list[str]]]:
    """Security requirement for an operation. An empty list means no auth."""
    if authorizer.type is AuthorizerType.NONE:
        return []
    return [{authorizer.authorizer_id: []}]


def _identity_header(identity_source: str) -> str:
    first = identity_source.split(",")[0].strip()
    if first.startswith(_HEADER_IDENTITY_PREFIX):
        return first[len(_HEADER_IDENTITY_PREFIX) :]
    return "Unused"


def authorizer_security_scheme(
    authorizer: Authorizer, uri: str | None = None
) -> dict[str, Any] | None:
    """Security scheme definition for an authorizer, or None when it needs none.

    ``uri`` is the invocation uri of a custom authorizer's function.
    """
    if authorizer.type is AuthorizerType.IAM:
        return {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "x-amazon-apigateway-authtype": "awsSigv4",
        }
    if authorizer.type is AuthorizerType.CUSTOM:
        return {
            "type": "apiKey",
            "name": _identity_header(authorizer.identity_source),
            "in": "header",
            "x-amazon-apigateway-authtype": "custom",
            "x-amazon-apigateway-authorizer": {
                "type": authorizer.custom_type.value,
                "authorizerUri": uri,
                "identitySource": authorizer.identity_source,
                "authorizerResultTtlInSeconds": authorizer.cache_ttl,
            },
        }
    return None


def apply_method_authorizer(
    ctx: CompositionContext, authorizer: Authorizer
) -> dict[str, Any]:
    """Return the operation's security fragment, registering its scheme on ctx.

    Each custom authorizer's scheme and function are registered once per
    composition, however many operations use it.
    """
    if authorizer.type is not AuthorizerType.NONE:
        known = ctx.authorizers.get(authorizer.authorizer_id)
        if known is None:
            uri = None
            if authorizer.is_custom:
                uri = ctx.options.invocation_uri(authorizer.function)
                ctx.register_function(authorizer.authorizer_id, authorizer.function)
            ctx.authorizers[authorizer.authorizer_id] = authorizer
            ctx.security_schemes[authorizer.authorizer_id] = (
                authorizer_security_scheme(authorizer, uri)
            )
        elif known != authorizer:
            raise AuthorizerConflict(authorizer.authorizer_id)

    return {"security": authorizer_security(authorizer)}
