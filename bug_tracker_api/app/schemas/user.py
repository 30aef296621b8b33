"""
Pydantic models for user data.

Passwords are only ever accepted, never returned.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    """Schema for registering a user."""

    login: str = Field(..., min_length=1, max_length=50, example="jdoe")
    password: str = Field(..., min_length=4, example="strongpassword")
    email: Optional[str] = Field(None, example="jdoe@example.com")
    full_name: Optional[str] = Field(None, example="John Doe")


class UserLogin(BaseModel):
    login: str
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserSummary(BaseModel):
    """The part of a user embedded in tickets."""

    id: str
    login: Optional[str] = None

    model_config = {
        "from_attributes": True,
    }


class UserRead(UserSummary):
    """Schema for reading a user from the API."""

    email: Optional[str] = None
    full_name: Optional[str] = None
    role_id: Optional[int] = None
    disabled: bool = False
