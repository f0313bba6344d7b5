"""
Pydantic models for account data.

The same credentials payload is used for signup and login.  Passwords
only ever travel inbound; no response model contains one.
"""

from pydantic import BaseModel, Field


class UserCredentials(BaseModel):
    email: str = Field(..., min_length=1, examples=["user@example.com"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])


class UserCreate(UserCredentials):
    """Schema for registering a user."""
    pass


class UserLogin(UserCredentials):
    """Schema for logging in."""
    pass


class StoredCredentials(BaseModel):
    """Account id and password hash looked up by e-mail."""

    id: int
    password_hash: str


class LoginResponse(BaseModel):
    message: str
    token: str
