"""Authentication payloads and decoded token claims."""

from __future__ import annotations

from enum import Enum

from pydantic import Field

from research_connect.schemas.base import RequestModel, ResponseModel


class UserType(str, Enum):
    STUDENT = "stu"
    FACULTY = "fac"


# ── Request models ──────────────────────────────────────────────────────────


class RegisterUserIn(RequestModel):
    name: str
    email: str
    password: str
    type: UserType


class LoginIn(RequestModel):
    email: str
    password: str


class ResetPasswordIn(RequestModel):
    token: str
    new_password: str


class VerifyCodeIn(RequestModel):
    email: str
    code: str


# ── Response models ─────────────────────────────────────────────────────────


class TokenClaims(ResponseModel):
    """Claims the backend signs into every access token."""

    user_id: str | None = Field(default=None, alias="userId")
    name: str | None = None
    email: str | None = None
    type: UserType | None = None
    exp: float | None = None
    iat: float | None = None
    nbf: float | None = None
    sub: str | None = None
    iss: str | None = None


class TokenOut(ResponseModel):
    token: str
    message: str | None = None
