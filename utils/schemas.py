"""
Pydantic schemas for the User resource.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from config.settings import config


# ═══════════════════════════════════════════════════════════════════════════════
# Request bodies
# ═══════════════════════════════════════════════════════════════════════════════


def _reject_null(value: Any) -> Any:
    # absent keys are fine, explicit nulls are not
    if value is None:
        raise ValueError("Input should be a valid string")
    return value


class SocialLinks(BaseModel):
    model_config = ConfigDict(extra="forbid")

    linkedIn: Optional[str] = None
    twitter: Optional[str] = None
    instagram: Optional[str] = None
    facebook: Optional[str] = None
    github: Optional[str] = None

    _no_nulls = field_validator("*", mode="before")(_reject_null)


class PersonalInfo(BaseModel):
    model_config = ConfigDict(extra="forbid")

    location: Optional[str] = Field(None, max_length=60)
    company: Optional[str] = Field(None, max_length=60)
    bio: Optional[str] = Field(None, max_length=600)

    _no_nulls = field_validator("*", mode="before")(_reject_null)


class UserInput(BaseModel):
    """
    Body accepted by PUT.

    ``password`` may be omitted here, in which case the stored hash is kept.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=4, max_length=60)
    email: EmailStr
    password: Optional[str] = Field(None, min_length=8, max_length=100)
    image: str = Field(default_factory=lambda: config.default_image_url, min_length=1)
    socials: List[SocialLinks] = Field(default_factory=list)
    personal_info: List[PersonalInfo] = Field(default_factory=list, alias="personalInfo")
    role: str = Field(default_factory=lambda: config.default_role, min_length=1)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    def to_record(self) -> Dict[str, Any]:
        """Column values for the store, without the plaintext secret."""
        return {
            "name": self.name,
            "email": self.email,
            "image": self.image,
            "socials": [s.model_dump(exclude_none=True) for s in self.socials],
            "personal_info": [p.model_dump(exclude_none=True) for p in self.personal_info],
            "role": self.role,
        }


class UserCreate(UserInput):
    """Body accepted by POST — a new account always carries a secret."""

    password: str = Field(..., min_length=8, max_length=100)


# ═══════════════════════════════════════════════════════════════════════════════
# Responses
# ═══════════════════════════════════════════════════════════════════════════════


class UserOut(BaseModel):
    """Public view of a stored user. Never carries the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(..., validation_alias="user_id")
    name: str
    email: str
    image: str
    socials: List[Dict[str, str]] = Field(default_factory=list)
    personal_info: List[Dict[str, str]] = Field(
        default_factory=list, serialization_alias="personalInfo"
    )
    role: str
    created_at: Optional[datetime] = Field(None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")


def serialize_user(user: Any) -> Dict[str, Any]:
    """Dump an ORM ``User`` into its JSON-ready public shape."""
    return UserOut.model_validate(user).model_dump(mode="json", by_alias=True)
