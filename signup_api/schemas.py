"""
Pydantic schemas for the signup API.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SignupRequest(BaseModel):
    model_config = ConfigDict(strict=True)

    name: str
    email: str
    password: str


class PublicUser(BaseModel):
    id: str
    email: str
    name: str


class SignupResponse(BaseModel):
    message: str
    user: PublicUser


class ProfileResponse(BaseModel):
    message: str
    authHeader: str
