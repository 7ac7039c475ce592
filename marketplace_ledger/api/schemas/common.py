# This file defines shared schema pieces reused by multiple API endpoints.
# It exists so error payloads and wire naming stay consistent.
# Response fields use snake_case in Python and keep the legacy camelCase names on the wire.

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, PlainSerializer

# Money stays Decimal in Python and is written to JSON as a number.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class WireModel(BaseModel):
    """Base for response models serialized under legacy field names."""

    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(BaseModel):
    error: str
    error_code: str
    message: str
    details: Any | None = None
    request_id: str
    timestamp: datetime


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Malformed input."},
    401: {"model": ErrorResponse, "description": "Missing profile or rejected payment."},
    404: {"model": ErrorResponse, "description": "Nothing matched the request."},
    500: {"model": ErrorResponse, "description": "Unexpected server error."},
}
