"""Auth schema module."""

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=320)
    password: str = Field(min_length=6, max_length=256)


class SessionClaims(BaseModel):
    sub: str
    email: str
    exp: int
    iat: int
    jti: str
