from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Ridebook Identifier API",
            version="0.1.0",
            summary="Sequential identifiers for bookings, drivers, passengers, admins and operators",
            routes=app.routes,
        )

        # Both 503 types are transient; document the retry hint once for every operation
        for path_item in openapi_schema["paths"].values():
            for operation in path_item.values():
                response = operation.get("responses", {}).get("503")
                if response is not None:
                    response["headers"] = {
                        "Retry-After": {
                            "description": "Seconds to wait before retrying (conflict_exhausted only)",
                            "schema": {"type": "integer"},
                        }
                    }

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Scope code is required for booking identifiers", "type": "validation_error"},
                {"message": "Counter 'bookingId_OP001' is under contention, gave up after 5 attempts", "type": "conflict_exhausted"},
                {"message": "Counter store is unavailable", "type": "store_unavailable"},
            ]
        }
    }
