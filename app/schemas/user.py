import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfileResponse(BaseModel):
    """Response schema for the signed-in user's profile."""

    model_config = ConfigDict(from_attributes=True)

    uid: str
    email: str
    first_name: str
    last_name: str
    display_name: str
    phone_number: Optional[str] = None
    email_verified: bool
    role: str
    account_status: str
    last_login: Optional[datetime] = None
    password_changed_at: Optional[datetime] = None


class UserProfileCreate(BaseModel):
    """Request schema for the first sign-in of an authenticated user."""

    model_config = ConfigDict(str_strip_whitespace=True)

    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)
    display_name: Optional[str] = Field(default=None, max_length=200)
    phone_number: Optional[str] = Field(default=None, max_length=20)
    email_verified: bool = False


class UserProfileUpdate(BaseModel):
    """Request schema for profile edits; omitted fields are left unchanged."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    display_name: Optional[str] = Field(default=None, max_length=200)
    phone_number: Optional[str] = Field(default=None, max_length=20)


class PasswordChange(BaseModel):
    new_password: str = Field(..., max_length=128)


class PasswordChangeResponse(BaseModel):
    changed_at: datetime
    notification_sent: bool


class OrderResponse(BaseModel):
    """Response schema for one past order."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    items: list[dict[str, Any]] = Field(default_factory=list)
    total_amount: float
    status: str
    payment_method: str
    special_instructions: Optional[str] = None
    order_date: datetime
