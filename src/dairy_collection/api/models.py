"""Pydantic models for HTTP request and response payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class SignupRequest(BaseModel):
    """Member registration payload."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    name: str
    account_no: str
    email: str | None = None
    password: str


class LoginRequest(BaseModel):
    """Member login payload."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    account_no: str
    password: str


class MilkEntryRequest(BaseModel):
    """Milk delivery payload."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    account_no: str
    entry_date: date
    session: str
    quantity: float
    fat: float | None = None
    snf: float | None = None
    amount: float | None = None


class MemberPayload(BaseModel):
    """Public member fields returned after login."""

    id: UUID
    name: str
    account_no: str
    email: str | None = None


class LoginResponse(BaseModel):
    """Successful login response."""

    success: bool = True
    user: MemberPayload


class MessageResponse(BaseModel):
    """Generic success or failure message."""

    success: bool
    message: str


class MilkEntryResponse(MessageResponse):
    """Response for a stored milk entry."""

    id: UUID


class SummaryRowPayload(BaseModel):
    """One day and session of the milk summary."""

    date: str
    session: str
    total_quantity: float
    avg_fat: float
    avg_snf: float
    total_amount: float
