"""OpenAPI Gateway - prepares OpenAPI documents for deployment behind API Gateway."""

from openapi_gateway.app import install_gateway_openapi, prepare_app_spec
from openapi_gateway.authorizers import (
    Authorizer,
    Authorizers,
    AuthorizerType,
    CustomAuthorizerType,
    resolve_authorizer,
)
from openapi_gateway.cors import (
    ALL_METHODS,
    DEFAULT_HEADERS,
    CorsPolicy,
    merge_headers,
)
from openapi_gateway.exceptions import (
    AmbiguousOperationName,
    AuthorizerConflict,
    ConfigurationError,
    GatewaySpecException,
    InvalidAuthorizer,
    InvalidCorsPolicy,
    InvalidFunctionHandle,
    MissingIntegration,
)
from openapi_gateway.functions import FunctionHandle, lambda_invocation_uri
from openapi_gateway.operations import (
    build_operation_name_resolver,
    operation_lookup_from_spec,
)
from openapi_gateway.options import (
    Integration,
    LabelledFunction,
    MethodAndPath,
    OpenApiOptions,
)
from openapi_gateway.spec import (
    ComposedSpec,
    compose_api_spec,
    get_labelled_functions,
    prepare_api_spec,
)

__all__ = [
    "ALL_METHODS",
    "AmbiguousOperationName",
    "Authorizer",
    "AuthorizerConflict",
    "AuthorizerType",
    "Authorizers",
    "ComposedSpec",
    "ConfigurationError",
    "CorsPolicy",
    "CustomAuthorizerType",
    "DEFAULT_HEADERS",
    "FunctionHandle",
    "GatewaySpecException",
    "Integration",
    "InvalidAuthorizer",
    "InvalidCorsPolicy",
    "InvalidFunctionHandle",
    "LabelledFunction",
    "MethodAndPath",
    "MissingIntegration",
    "OpenApiOptions",
    "build_operation_name_resolver",
    "compose_api_spec",
    "get_labelled_functions",
    "install_gateway_openapi",
    "lambda_invocation_uri",
    "merge_headers",
    "operation_lookup_from_spec",
    "prepare_api_spec",
    "prepare_app_spec",
    "resolve_authorizer",
]
