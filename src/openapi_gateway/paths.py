"""Path preparation — composes every method of a path item."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from openapi_gateway.context import CompositionContext
from openapi_gateway.cors import cors_options_method
from openapi_gateway.integration import apply_method_integration
from openapi_gateway.operations import HTTP_METHODS

logger = logging.getLogger(__name__)


def prepare_path_spec(
    ctx: CompositionContext, path: str, path_item: Mapping[str, Any]
) -> dict[str, Any]:
    """Add integrations to every method of a path, plus a CORS preflight method.

    Non-method fields such as shared parameters are kept as they are.
    """
    prepared = dict(path_item)
    for method in HTTP_METHODS:
        operation = path_item.get(method)
        if operation is None:
            continue
        prepared[method] = apply_method_integration(ctx, path, method, operation)

    preflight = cors_options_method(path_item, ctx.options.cors_options)
    if preflight:
        logger.debug("Generated CORS preflight method for %s", path)
        prepared.update(preflight)

    return prepared
