"""Shared response body for every failed request."""

from typing import Literal

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body: no stack traces or internal identifiers."""

    status: Literal["error"] = Field(default="error")
    error: str = Field(..., description="Human-readable error message")
