"""
Pydantic models for registration and login.

Only shape is validated here; email format and password policy are checked by
the user service so that failures come back with specific feedback.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    email: str = Field("", max_length=320, examples=["jane@example.com"])
    password: str = Field("", max_length=128, examples=["Sup3rSecret"])
    name: str | None = Field(None, max_length=255, examples=["Jane"])


class LoginRequest(BaseModel):
    email: str = Field("", max_length=320, examples=["jane@example.com"])
    password: str = Field("", max_length=128)


class UserPydModel(BaseModel):
    """Public view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str | None = None


class AuthResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    user: UserPydModel
