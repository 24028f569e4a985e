"""
Common API schemas.

Dependencies: pydantic
System role: Shared response contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Structured error body with a stable tag."""

    error: str = Field(description="Stable error tag, e.g. ValidationError")
    message: str = Field(description="Human-readable message")
    details: Any | None = Field(default=None, description="Optional diagnostic details")
