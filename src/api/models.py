"""Pydantic models for API request/response."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from adapter.storage.local_avatar_storage import ALLOWED_EXTENSIONS, is_allowed_filename
from domain.model.lifecycle import DeleteMode

PASSWORD_MIN_LENGTH = 6


def _check_avatar_filename(value: Optional[str]) -> Optional[str]:
    if value is not None and not is_allowed_filename(value):
        allowed = ', '.join(sorted(ext.lstrip('.') for ext in ALLOWED_EXTENSIONS))
        raise ValueError(f"file extension must be one of: {allowed}")
    return value


# ── responses ────────────────────────────────────────────────


class UserResponse(BaseModel):
    """User as returned by the API. The password hash is never part of it."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="User ID")
    name: str
    email: str
    avatar: Optional[str] = Field(None, description="Avatar path relative to the storage root")
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(None, description="Set while the user is trashed")


class CompanyResponse(BaseModel):
    """Company as returned by the API."""
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., description="Company ID")
    name: str
    since: date = Field(..., description="Date the company was founded")
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = Field(None, description="Set while the company is trashed")


class EmploymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: str
    company_id: str
    position: Optional[str] = None
    since: Optional[date] = None
    created_at: datetime


# ── requests ─────────────────────────────────────────────────


class UserCreateForm(BaseModel):
    """Multipart fields of POST /users. avatar holds the uploaded file name."""
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    password_confirmation: str
    avatar: str = Field(..., description="Original file name of the uploaded avatar")

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('avatar')
    @classmethod
    def check_avatar(cls, v):
        return _check_avatar_filename(v)

    @model_validator(mode='after')
    def passwords_match(self):
        if self.password_confirmation != self.password:
            raise ValueError("password_confirmation must match password")
        return self


class UserUpdateForm(BaseModel):
    """Multipart fields of PATCH/PUT /users/{id}; at least one is required."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=PASSWORD_MIN_LENGTH)
    password_confirmation: Optional[str] = None
    avatar: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('avatar')
    @classmethod
    def check_avatar(cls, v):
        return _check_avatar_filename(v)

    @model_validator(mode='after')
    def check_fields(self):
        if not any((self.name, self.email, self.password, self.avatar)):
            raise ValueError("at least one of name, email, password, avatar is required")
        if self.password is not None and self.password_confirmation != self.password:
            raise ValueError("password_confirmation must match password")
        return self


class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    since: date

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    since: Optional[date] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @model_validator(mode='after')
    def at_least_one(self):
        if self.name is None and self.since is None:
            raise ValueError("at least one of name, since is required")
        return self


class DeleteRequest(BaseModel):
    mode: DeleteMode = Field(..., description="erase, trash or restore")


class EmploymentRequest(BaseModel):
    company_id: str = Field(..., min_length=1)
    position: Optional[str] = None
    since: Optional[date] = None
