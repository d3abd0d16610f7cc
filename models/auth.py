"""
Auth schemas for the Supabase Auth pass-through.
"""

from pydantic import Field
from typing import Any, Generic, Optional, TypeVar

from models.base import BaseSchema

T = TypeVar("T")


class SignInRequest(BaseSchema):
    """Email/password sign-in body."""

    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=1)


class SessionUser(BaseSchema):
    """Subset of the provider's user object we expose."""

    id: str
    email: Optional[str] = None


class SessionInfo(BaseSchema):
    """Active session as returned to the client."""

    user: SessionUser
    access_token: Optional[str] = Field(None, exclude=True)
    expires_in: Optional[int] = None


class AuthResult(BaseSchema, Generic[T]):
    """
    {data, error} pair mirroring the provider contract.

    Exactly one of data / error is set.
    """

    data: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any) -> "AuthResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: str) -> "AuthResult":
        return cls(error=error)
