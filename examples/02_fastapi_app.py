"""
FastAPI example of openapi-gateway.

Demonstrates:
- Deriving the operation lookup from FastAPI's generated operationIds
- Serving the gateway document from /openapi.json
"""

from fastapi import FastAPI

from openapi_gateway import CorsPolicy, Integration, install_gateway_openapi

ACCOUNT = "arn:aws:lambda:us-east-1:123456789012:function"

app = FastAPI(title="Pets")


@app.get("/pets", operation_id="listPets")
async def list_pets():
    """List all pets."""
    return []


@app.get("/pets/{pet_id}", operation_id="getPet")
async def get_pet(pet_id: int):
    """Get a pet by id."""
    return {"id": pet_id}


# Serve the gateway ready document instead of the plain schema
install_gateway_openapi(
    app,
    {
        "listPets": Integration(function=f"{ACCOUNT}:pets"),
        "getPet": Integration(function=f"{ACCOUNT}:pets"),
    },
    cors_options=CorsPolicy(allowed_origins=["*"]),
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
