from typing import Any

from pydantic import BaseModel


class AudienceSizeRequest(BaseModel):
    """Request body; `rules` stays raw so the rule validator reports its problems"""
    rules: Any = None


class AudienceSizeResponse(BaseModel):
    """Response model for a successful audience size query"""
    size: int


class ErrorResponse(BaseModel):
    error: str
