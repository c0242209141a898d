"""Backend handles and the default lambda invocation uri resolver."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from openapi_gateway.exceptions import InvalidFunctionHandle


@runtime_checkable
class FunctionHandle(Protocol):
    """Anything exposing the ARN of a deployed lambda function."""

    @property
    def function_arn(self) -> str: ...


def function_arn(function: Any) -> str:
    """Return the ARN of a handle, accepting plain ARN strings too."""
    if isinstance(function, str):
        return function
    if isinstance(function, FunctionHandle):
        return function.function_arn
    raise InvalidFunctionHandle(
        f"Cannot determine a function ARN for {type(function).__name__}"
    )


def lambda_invocation_uri(function: Any) -> str:
    """Build the API Gateway integration uri that invokes the given lambda.

    Partition and region are read from the function ARN, e.g.
    ``arn:aws:lambda:us-east-1:123456789012:function:my-fn``.
    """
    arn = function_arn(function)
    parts = arn.split(":")
    if len(parts) < 7 or parts[0] != "arn" or parts[2] != "lambda":
        raise InvalidFunctionHandle(f"{arn} is not a lambda function ARN")

    partition, region = parts[1], parts[3]
    return (
        f"arn:{partition}:apigateway:{region}:lambda:path/2015-03-31"
        f"/functions/{arn}/invocations"
    )
