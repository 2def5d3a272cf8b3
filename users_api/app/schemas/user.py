"""
Pydantic models for user data.

``User`` is both the API representation and the record the repositories
store.  Business rules (non‑empty name, ``@`` in the email, positive
age) are deliberately not declared here: they are checked by
``UserService`` in a fixed order, so a request violating several of them
is always rejected for the first one.

The request models only reject payloads that could never be stored:
values of the wrong JSON type (strict mode, so ``"30"``, ``true`` and
``30.0`` are not ages), strings that cannot be encoded as UTF‑8, and
ages outside the signed 64‑bit range of a SQLite ``INTEGER``.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest value a SQLite INTEGER column can hold.
MAX_AGE = 2**63 - 1


def ensure_utf8(value: Optional[str]) -> Optional[str]:
    """Reject strings with lone surrogates, which cannot be stored or returned."""
    if value is not None:
        try:
            value.encode("utf-8")
        except UnicodeEncodeError:
            raise ValueError("must be valid UTF-8 text")
    return value


class UserBase(BaseModel):
    name: str = Field(..., examples=["Juan Pérez"])
    email: str = Field(..., examples=["juan@example.com"])
    age: int = Field(..., le=MAX_AGE, examples=[30])


class UserCreate(UserBase):
    """Schema for creating a user.  All fields are required."""

    model_config = ConfigDict(strict=True)

    @field_validator("name", "email")
    @classmethod
    def check_utf8(cls, value: Optional[str]) -> Optional[str]:
        return ensure_utf8(value)


class UserUpdate(BaseModel):
    """Schema for a partial update.

    Every field is optional.  A field left out of the body (or sent as
    ``null``) keeps its stored value; a field that is present is
    validated and overwrites the stored value, even when it is empty.
    """

    model_config = ConfigDict(strict=True)

    name: Optional[str] = Field(None, examples=["Juan Pérez"])
    email: Optional[str] = Field(None, examples=["juan@example.com"])
    age: Optional[int] = Field(None, le=MAX_AGE, examples=[31])

    @field_validator("name", "email")
    @classmethod
    def check_utf8(cls, value: Optional[str]) -> Optional[str]:
        return ensure_utf8(value)


class User(UserBase):
    """A stored user."""

    id: str = Field(..., examples=["550e8400-e29b-41d4-a716-446655440000"])

    model_config = ConfigDict(from_attributes=True)


class Message(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., examples=["user deleted successfully"])
