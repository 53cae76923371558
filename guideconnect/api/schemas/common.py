"""
Shared request/response building blocks.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error payload returned by every route."""

    error: str = Field(description="Short error message")
    details: Optional[List[Dict[str, Any]]] = Field(
        None, description="Field-level validation errors"
    )


class SuccessResponse(BaseModel):
    success: bool = True


class CountResponse(BaseModel):
    count: int


def provided_fields(model: BaseModel) -> Dict[str, Any]:
    """Fields explicitly sent by the client (including explicit nulls), for partial updates."""
    return {name: getattr(model, name) for name in model.model_fields_set}
