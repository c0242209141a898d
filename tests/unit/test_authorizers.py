"""Tests for authorizer variants and resolution."""

from __future__ import annotations

from typing import Any

import pytest

from openapi_gateway.authorizers import (
    DEFAULT_CACHE_TTL,
    IAM_AUTHORIZER_ID,
    NONE_AUTHORIZER_ID,
    Authorizers,
    AuthorizerType,
    CustomAuthorizerType,
    apply_method_authorizer,
    authorizer_security,
    authorizer_security_scheme,
    resolve_authorizer,
)
from openapi_gateway.context import CompositionContext
from openapi_gateway.exceptions import AuthorizerConflict, InvalidAuthorizer
from openapi_gateway.options import OpenApiOptions


def _make_ctx() -> CompositionContext:
    options = OpenApiOptions(
        integrations={},
        operation_lookup={},
        invocation_uri=lambda fn: f"uri:{fn.name}",
    )
    return CompositionContext(options=options, resolve_operation_name=lambda _: None)


class TestAuthorizers:
    def test_none(self) -> None:
        authorizer = Authorizers.none()
        assert authorizer.type is AuthorizerType.NONE
        assert authorizer.authorizer_id == NONE_AUTHORIZER_ID
        assert not authorizer.is_custom

    def test_iam(self) -> None:
        authorizer = Authorizers.iam()
        assert authorizer.type is AuthorizerType.IAM
        assert authorizer.authorizer_id == IAM_AUTHORIZER_ID

    def test_custom_defaults(self, make_function: Any) -> None:
        fn = make_function("auth")
        authorizer = Authorizers.custom("jwt", fn)
        assert authorizer.is_custom
        assert authorizer.function is fn
        assert authorizer.custom_type is CustomAuthorizerType.TOKEN
        assert authorizer.cache_ttl == DEFAULT_CACHE_TTL
        assert authorizer.identity_source == "method.request.header.Authorization"

    def test_custom_requires_id(self, make_function: Any) -> None:
        with pytest.raises(InvalidAuthorizer):
            Authorizers.custom("", make_function())

    def test_custom_rejects_reserved_id(self, make_function: Any) -> None:
        with pytest.raises(InvalidAuthorizer, match="reserved"):
            Authorizers.custom(IAM_AUTHORIZER_ID, make_function())

    def test_custom_requires_function(self) -> None:
        with pytest.raises(InvalidAuthorizer, match="function"):
            Authorizers.custom("jwt", None)

    def test_custom_rejects_cache_ttl_out_of_range(self, make_function: Any) -> None:
        with pytest.raises(InvalidAuthorizer, match="3600"):
            Authorizers.custom("jwt", make_function(), cache_ttl=3601)

    def test_equal_when_same_settings(self, make_function: Any) -> None:
        fn = make_function("auth")
        assert Authorizers.custom("jwt", fn) == Authorizers.custom("jwt", fn)
        assert Authorizers.iam() == Authorizers.iam()


class TestResolveAuthorizer:
    def test_integration_authorizer_wins(self, make_function: Any) -> None:
        custom = Authorizers.custom("jwt", make_function())
        assert resolve_authorizer(custom, Authorizers.iam()) is custom

    def test_falls_back_to_default(self) -> None:
        default = Authorizers.iam()
        assert resolve_authorizer(None, default) is default

    def test_falls_back_to_none(self) -> None:
        assert resolve_authorizer(None, None).type is AuthorizerType.NONE


class TestAuthorizerSecurity:
    def test_none_is_empty_requirement(self) -> None:
        assert authorizer_security(Authorizers.none()) == []

    def test_iam_is_sigv4(self) -> None:
        assert authorizer_security(Authorizers.iam()) == [{IAM_AUTHORIZER_ID: []}]

    def test_custom_references_scheme(self, make_function: Any) -> None:
        authorizer = Authorizers.custom("jwt", make_function())
        assert authorizer_security(authorizer) == [{"jwt": []}]


class TestAuthorizerSecurityScheme:
    def test_none_has_no_scheme(self) -> None:
        assert authorizer_security_scheme(Authorizers.none()) is None

    def test_iam_scheme(self) -> None:
        scheme = authorizer_security_scheme(Authorizers.iam())
        assert scheme is not None
        assert scheme["x-amazon-apigateway-authtype"] == "awsSigv4"

    def test_token_authorizer_scheme(self, make_function: Any) -> None:
        authorizer = Authorizers.custom("jwt", make_function(), cache_ttl=60)
        scheme = authorizer_security_scheme(authorizer, "uri:auth")
        assert scheme == {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "x-amazon-apigateway-authtype": "custom",
            "x-amazon-apigateway-authorizer": {
                "type": "token",
                "authorizerUri": "uri:auth",
                "identitySource": "method.request.header.Authorization",
                "authorizerResultTtlInSeconds": 60,
            },
        }

    def test_request_authorizer_scheme(self, make_function: Any) -> None:
        authorizer = Authorizers.custom(
            "session",
            make_function(),
            custom_type=CustomAuthorizerType.REQUEST,
            identity_source=(
                "method.request.header.X-Session, method.request.querystring.v"
            ),
        )
        scheme = authorizer_security_scheme(authorizer, "uri:auth")
        assert scheme is not None
        assert scheme["name"] == "X-Session"
        assert scheme["x-amazon-apigateway-authorizer"]["type"] == "request"

    def test_non_header_identity_source(self, make_function: Any) -> None:
        authorizer = Authorizers.custom(
            "query",
            make_function(),
            custom_type=CustomAuthorizerType.REQUEST,
            identity_source="method.request.querystring.token",
        )
        scheme = authorizer_security_scheme(authorizer, "uri:auth")
        assert scheme is not None
        assert scheme["name"] == "Unused"


class TestApplyMethodAuthorizer:
    def test_none_registers_nothing(self) -> None:
        ctx = _make_ctx()
        assert apply_method_authorizer(ctx, Authorizers.none()) == {"security": []}
        assert ctx.security_schemes == {}
        assert ctx.functions == []

    def test_iam_registers_scheme_without_function(self) -> None:
        ctx = _make_ctx()
        fragment = apply_method_authorizer(ctx, Authorizers.iam())
        assert fragment == {"security": [{IAM_AUTHORIZER_ID: []}]}
        assert list(ctx.security_schemes) == [IAM_AUTHORIZER_ID]
        assert ctx.functions == []

    def test_custom_registered_once(self, make_function: Any) -> None:
        ctx = _make_ctx()
        fn = make_function("auth")
        authorizer = Authorizers.custom("jwt", fn)
        apply_method_authorizer(ctx, authorizer)
        apply_method_authorizer(ctx, authorizer)
        assert list(ctx.security_schemes) == ["jwt"]
        scheme = ctx.security_schemes["jwt"]
        assert scheme["x-amazon-apigateway-authorizer"]["authorizerUri"] == "uri:auth"
        assert [(f.label, f.function) for f in ctx.functions] == [("jwt", fn)]

    def test_conflicting_authorizers_rejected(self, make_function: Any) -> None:
        ctx = _make_ctx()
        apply_method_authorizer(ctx, Authorizers.custom("jwt", make_function("a")))
        with pytest.raises(AuthorizerConflict) as exc_info:
            apply_method_authorizer(ctx, Authorizers.custom("jwt", make_function("b")))
        assert exc_info.value.authorizer_id == "jwt"
