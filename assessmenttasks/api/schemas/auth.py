"""Pydantic schemas for authentication endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Request schema for user registration.

    Neither the email format nor password strength is checked, and a user
    registered without an email simply cannot log in.
    """

    username: str | None = Field(None, description="Display name")
    password: str = Field(..., description="Plaintext password, hashed before storage")
    email: str | None = Field(None, description="Login email address")


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: str = Field(..., description="User email address")
    password: str = Field(..., description="User password")


class RegisterResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str = Field(default="User registered successfully")
    user_id: str = Field(..., alias="userId")


class LoginResponse(BaseModel):
    message: str = Field(default="Login successful")
    token: str = Field(..., description="Signed bearer token")
