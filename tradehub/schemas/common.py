"""
Common schemas used across the API.
"""
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response schema for health check endpoint."""
    status: str = Field(..., description="Application health status")
    stores: str = Field(..., description="In-memory store status")
    payment_mode: str = Field(..., description="demo or production")
    timestamp: str = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")


class RootResponse(BaseModel):
    """Response schema for root endpoint."""
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="API version")
    docs: str = Field(..., description="Documentation URL")
    health: str = Field(..., description="Health check URL")
    status: str = Field(..., description="Application status")
    timestamp: str = Field(..., description="Response timestamp")


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""
    status: str = Field("error", description="Always 'error'")
    message: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")

