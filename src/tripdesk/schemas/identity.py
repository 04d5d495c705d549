"""Pydantic schemas for account forms.

Learn: One input schema per operation. Registration, profile update,
password change and login each accept exactly the fields they act on —
ids are assigned by the database and never read from a form.

Form fields arrive as strings; blank optional fields become None.
Email syntax is checked by email-validator (EmailStr), then lowercased
so uniqueness ignores case.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


def blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def required_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Name is required")
    return value


# ─── Agent ────────────────────────────────────────────────


class AgentRegistration(BaseModel):
    username: str = Field(max_length=100)
    email: EmailStr
    password: str = Field(min_length=1)
    agent_id: Optional[str] = Field(None, max_length=50)
    agency: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return required_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return strip_text(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("agent_id", "agency", "phone", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)


class AgentProfileUpdate(BaseModel):
    """Full replacement of the editable profile fields."""

    username: str = Field(max_length=100)
    email: EmailStr
    agent_id: Optional[str] = Field(None, max_length=50)
    phone: Optional[str] = Field(None, max_length=30)
    agency: Optional[str] = Field(None, max_length=200)
    bio: Optional[str] = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        return required_name(v)

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v):
        return strip_text(v)

    @field_validator("email")
    @classmethod
    def lowercase_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("agent_id", "phone", "agency", "bio", mode="before")
    @classmethod
    def blank_optional(cls, v):
        return blank_to_none(v)


class PasswordChange(BaseModel):
    current_password: str
    new_password: str = Field(min_length=1)


# ─── Session ──────────────────────────────────────────────


class LoginForm(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        return v.strip().lower()
