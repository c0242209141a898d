"""Options describing how an api document maps onto backend integrations."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from openapi_gateway.authorizers import Authorizer
from openapi_gateway.cors import CorsPolicy
from openapi_gateway.functions import lambda_invocation_uri


@dataclass(frozen=True)
class MethodAndPath:
    """Location of an operation in the api. Methods are stored lower case."""

    method: str
    path: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", self.method.lower())

    @classmethod
    def coerce(cls, value: Any) -> MethodAndPath:
        """Accept a MethodAndPath, a method/path mapping or a (method, path) pair."""
        if isinstance(value, MethodAndPath):
            return value
        if isinstance(value, Mapping):
            return cls(method=value["method"], path=value["path"])
        method, path = value
        return cls(method=method, path=path)


@dataclass(frozen=True)
class Integration:
    """Binds one operation to the backend function serving it."""

    function: Any
    authorizer: Authorizer | None = None


@dataclass(frozen=True)
class LabelledFunction:
    """A backend function with a label identifying it."""

    label: str
    function: Any


@dataclass(frozen=True)
class OpenApiOptions:
    """Everything required alongside an api document to prepare it for the gateway."""

    integrations: Mapping[str, Integration]
    operation_lookup: Mapping[str, Any]
    default_authorizer: Authorizer | None = None
    cors_options: CorsPolicy | None = None
    invocation_uri: Callable[[Any], str] = field(default=lambda_invocation_uri)
    strict_operation_lookup: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "operation_lookup",
            {
                operation_id: MethodAndPath.coerce(location)
                for operation_id, location in self.operation_lookup.items()
            },
        )
