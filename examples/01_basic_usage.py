"""
Basic usage example of openapi-gateway.

Demonstrates:
- Binding operations to lambda functions
- Protecting the api with a custom token authorizer
- Enabling CORS
- Printing the prepared document and the functions to grant invoke access to
"""

import json

from openapi_gateway import (
    Authorizers,
    CorsPolicy,
    Integration,
    OpenApiOptions,
    compose_api_spec,
)

ACCOUNT = "arn:aws:lambda:us-east-1:123456789012:function"

spec = {
    "openapi": "3.0.3",
    "info": {"title": "Pets", "version": "1.0.0"},
    "paths": {
        "/pets": {
            "get": {
                "operationId": "listPets",
                "responses": {"200": {"description": "All pets"}},
            },
            "post": {
                "operationId": "createPet",
                "responses": {"201": {"description": "Created"}},
            },
        },
    },
}

# Usually generated from the same contract as the spec
operation_lookup = {
    "listPets": {"method": "get", "path": "/pets"},
    "createPet": {"method": "post", "path": "/pets"},
}

jwt = Authorizers.custom("jwt", f"{ACCOUNT}:jwt-authorizer", cache_ttl=60)

options = OpenApiOptions(
    integrations={
        "listPets": Integration(function=f"{ACCOUNT}:list-pets"),
        "createPet": Integration(function=f"{ACCOUNT}:create-pet", authorizer=jwt),
    },
    operation_lookup=operation_lookup,
    default_authorizer=Authorizers.iam(),
    cors_options=CorsPolicy(allowed_origins=["https://pets.example.com"]),
)


if __name__ == "__main__":
    composed = compose_api_spec(spec, options)
    print(json.dumps(composed.document, indent=2))
    for labelled in composed.functions:
        print(f"grant invoke: {labelled.label} -> {labelled.function}")
