"""GatewaySpecException hierarchy for configuration errors raised during composition."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from openapi_gateway.options import MethodAndPath


class GatewaySpecException(Exception):
    """Base for all gateway spec exceptions."""


class ConfigurationError(GatewaySpecException):
    """Static misconfiguration detected while composing a document."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MissingIntegration(ConfigurationError):
    """An operation in the document has no integration to back it."""

    def __init__(
        self, method: str, path: str, *, operation_id: str | None = None
    ) -> None:
        if operation_id is None:
            detail = f"No operation in the operation lookup matches {method} {path}"
        else:
            detail = (
                f"Missing required integration for operation {operation_id} "
                f"({method} {path})"
            )
        super().__init__(detail)
        self.method = method
        self.path = path
        self.operation_id = operation_id


class AmbiguousOperationName(ConfigurationError):
    """More than one operation id claims the same method and path."""

    def __init__(
        self,
        method_and_path: MethodAndPath,
        operation_ids: Sequence[str],
        *,
        detail: str | None = None,
    ) -> None:
        super().__init__(
            detail
            or f"Operations {', '.join(operation_ids)} all map to "
            f"{method_and_path.method} {method_and_path.path}"
        )
        self.method_and_path = method_and_path
        self.operation_ids = tuple(operation_ids)


class InvalidCorsPolicy(ConfigurationError):
    """CORS policy cannot produce usable headers."""


class InvalidAuthorizer(ConfigurationError):
    """Authorizer was constructed with unusable settings."""


class AuthorizerConflict(ConfigurationError):
    """Two different custom authorizers share an authorizer id."""

    def __init__(self, authorizer_id: str) -> None:
        super().__init__(
            f"Authorizer id {authorizer_id} is used by more than one "
            "distinct authorizer"
        )
        self.authorizer_id = authorizer_id


class InvalidFunctionHandle(ConfigurationError):
    """Backend handle cannot be turned into an invocation uri."""
