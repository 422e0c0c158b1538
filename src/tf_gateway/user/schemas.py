"""Pydantic request/response schemas for tf_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class UserInfo(BaseModel):
    """Minimal user info embedded in responses."""

    id: str
    name: str
    email: str


class AuthResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: UserInfo


class ProfileResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: str
