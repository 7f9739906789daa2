"""Pydantic models for authentication."""
from pydantic import BaseModel, Field


class AdminLogin(BaseModel):
    """Admin login request."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response."""

    token: str
    expires_in: int


class MessageResponse(BaseModel):
    """Simple message response."""

    message: str
