# gymdesk/application/dtos/client_dto.py

"""
Schemas for gym client data.

Incoming values are normalised before validation: names are trimmed, the
national id keeps only its digits, the phone number loses its punctuation.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from gymdesk.application.dtos.base_dto import CustomBaseModel, blank_to_none
from gymdesk.domain.models.client_domain_model import ClientStatus

NATIONAL_ID_DIGITS = 9
PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{7,14}$")
PHONE_NOISE = re.compile(r"[\s\-().]")


def normalize_national_id(value: Optional[str]) -> Optional[str]:
    value = blank_to_none(value)
    if value is None:
        return None
    digits = re.sub(r"\D", "", value)
    if len(digits) != NATIONAL_ID_DIGITS:
        raise ValueError(f"national_id must have exactly {NATIONAL_ID_DIGITS} digits")
    return digits


def normalize_phone(value: Optional[str]) -> Optional[str]:
    value = blank_to_none(value)
    if value is None:
        return None
    phone = PHONE_NOISE.sub("", value)
    if not PHONE_PATTERN.match(phone):
        raise ValueError("phone must have 8 to 15 digits, optionally prefixed with '+'")
    return phone


class ClientFields(CustomBaseModel):
    """Identity and contact fields shared by create and update."""
    last_name: Optional[str] = Field(None, max_length=120, description="Family name")
    national_id: Optional[str] = Field(None, description="National id, 9 digits")
    phone: Optional[str] = Field(None, description="Phone number")
    email: Optional[EmailStr] = Field(None, description="Contact email")
    notes: Optional[str] = Field(None, max_length=500, description="Free-text notes")

    @field_validator("last_name", "notes", mode="before")
    def strip_text(cls, v):
        return blank_to_none(v)

    @field_validator("email", mode="before")
    def blank_email(cls, v):
        return blank_to_none(v)

    @field_validator("national_id", mode="before")
    def validate_national_id(cls, v):
        return normalize_national_id(v)

    @field_validator("phone", mode="before")
    def validate_phone(cls, v):
        return normalize_phone(v)


class ClientCreate(ClientFields):
    """
    Schema for registering a client.

    New clients start INACTIVE with no membership; a membership payment
    activates them.
    """
    first_name: str = Field(..., max_length=120, description="Given name")

    @field_validator("first_name", mode="before")
    def require_first_name(cls, v):
        v = blank_to_none(v)
        if v is None:
            raise ValueError("first_name is required")
        return v


class ClientUpdate(ClientFields):
    """
    Schema for updating a client.

    Besides identity fields, staff may override the membership dates and the
    status. The override is stored as sent; reads recompute the status from
    the dates again.
    """
    first_name: Optional[str] = Field(None, max_length=120, description="Given name")
    membership_start: Optional[date] = Field(None, description="First day of the membership")
    membership_expiry: Optional[date] = Field(None, description="Last day of the membership")
    status: Optional[ClientStatus] = Field(None, description="Administrative status override")

    @field_validator("first_name", mode="before")
    def strip_first_name(cls, v):
        v = blank_to_none(v)
        if v is None:
            raise ValueError("first_name cannot be blank")
        return v

    def changes(self) -> Dict[str, Any]:
        """
        Fields the caller sent, explicit nulls included so optional values
        (e.g. ``membership_expiry``) can be cleared. A null ``status`` means
        "no override" and is left out.
        """
        data = self.model_dump(exclude_unset=True)
        if data.get("status") is None:
            data.pop("status", None)
        return data


class ClientOutput(BaseModel):
    """
    Schema for returning client data.
    """
    id: int
    gym_id: int
    first_name: str
    last_name: Optional[str] = None
    national_id: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None
    status: ClientStatus
    registered_at: datetime
    membership_start: Optional[date] = None
    membership_expiry: Optional[date] = None

    model_config = ConfigDict(from_attributes=True)
