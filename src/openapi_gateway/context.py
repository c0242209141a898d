"""CompositionContext — per-invocation state for a document transform."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from openapi_gateway.authorizers import Authorizer
from openapi_gateway.options import LabelledFunction, MethodAndPath, OpenApiOptions


@dataclass
class CompositionContext:
    """State container threaded through a single composition.

    Built fresh for every document and mutated as operations are composed.
    """

    options: OpenApiOptions
    resolve_operation_name: Callable[[MethodAndPath], str | None]
    authorizers: dict[str, Authorizer] = field(default_factory=dict)
    security_schemes: dict[str, dict[str, Any]] = field(default_factory=dict)
    functions: list[LabelledFunction] = field(default_factory=list)
    composed_operations: set[str] = field(default_factory=set)

    def register_function(self, label: str, function: Any) -> None:
        """Record a backend function the gateway invokes, once per distinct function."""
        for known in self.functions:
            if known.function is function or known.function == function:
                return
        self.functions.append(LabelledFunction(label=label, function=function))
