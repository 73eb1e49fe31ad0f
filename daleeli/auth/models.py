from __future__ import annotations

from pydantic import BaseModel, Field


class SignupRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)
    confirm_password: str = Field(..., min_length=1, max_length=128)
    accept_terms: bool = Field(..., description="Terms & Conditions must be accepted")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=1, max_length=128)


class UserProfile(BaseModel):
    name: str
    email: str
    avatar: str | None = None
    preferences: list[str] = Field(default_factory=list)


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=80)
    avatar: str | None = Field(default=None, max_length=2048)
    preferences: list[str] | None = None
