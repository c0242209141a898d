"""Operation name resolution — reverse lookup from method and path to operation id."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from openapi_gateway.exceptions import AmbiguousOperationName
from openapi_gateway.options import MethodAndPath

logger = logging.getLogger(__name__)

HTTP_METHODS: tuple[str, ...] = (
    "get",
    "put",
    "post",
    "delete",
    "options",
    "head",
    "patch",
    "trace",
)


def concat_method_and_path(method_and_path: MethodAndPath) -> str:
    return f"{method_and_path.method}||{method_and_path.path}"


def build_operation_name_resolver(
    operation_lookup: Mapping[str, MethodAndPath], *, strict: bool = False
) -> Callable[[MethodAndPath], str | None]:
    """Build the reverse lookup used while walking a document.

    When two operation ids map to the same method and path the one inserted
    last wins, unless ``strict`` is set in which case the lookup is rejected.
    """
    operation_name_by_path: dict[str, str] = {}
    claimed_by: dict[str, list[str]] = {}

    for operation_name, method_and_path in operation_lookup.items():
        key = concat_method_and_path(method_and_path)
        claimed_by.setdefault(key, []).append(operation_name)
        operation_name_by_path[key] = operation_name

    for operation_names in claimed_by.values():
        if len(operation_names) < 2:
            continue
        location = operation_lookup[operation_names[0]]
        if strict:
            raise AmbiguousOperationName(location, operation_names)
        logger.warning(
            "Operations %s all map to %s %s, using %s",
            ", ".join(operation_names),
            location.method,
            location.path,
            operation_names[-1],
        )

    def resolve(method_and_path: MethodAndPath) -> str | None:
        return operation_name_by_path.get(concat_method_and_path(method_and_path))

    return resolve


def operation_lookup_from_spec(document: Mapping[str, Any]) -> dict[str, MethodAndPath]:
    """Derive an operation lookup from the operationId of every operation in a document.

    Raises AmbiguousOperationName if an operationId is used twice, and skips
    operations without one.
    """
    lookup: dict[str, MethodAndPath] = {}
    for path, path_item in (document.get("paths") or {}).items():
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, Mapping):
                continue
            operation_id = operation.get("operationId")
            if not operation_id:
                logger.debug("Skipping %s %s without an operationId", method, path)
                continue
            location = MethodAndPath(method=method, path=path)
            if operation_id in lookup:
                raise AmbiguousOperationName(
                    location,
                    [operation_id],
                    detail=(
                        f"operationId {operation_id} is used by more than one operation"
                    ),
                )
            lookup[operation_id] = location
    return lookup
