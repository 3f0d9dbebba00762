"""Common Pydantic schemas shared across the API."""

from typing import Any

from pydantic import BaseModel, ConfigDict, RootModel


class ErrorResponse(BaseModel):
    """Standardized error envelope."""

    error_code: str
    message: str
    details: Any | None = None


class ValidationErrorResponse(RootModel[dict[str, str]]):
    """Flat map of field name to validation message."""

    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "value is not a valid email address"}}
    )
