"""Pydantic models for API request/response.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DonationStatusValue = Literal["pending", "completed", "failed"]

# Browsers post "" for an untouched date input
DateOrBlank = Union[datetime, Literal[""]]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── auth / profile ──────────────────────────────────────────


class RegisterRequest(CamelModel):
    """Request model for user registration. Required fields are checked by the service."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[DateOrBlank] = None
    gender: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


class RegisterResponse(CamelModel):
    id: str
    first_name: str
    last_name: str
    email: str
    message: str


class LoginRequest(CamelModel):
    email: Optional[str] = None
    password: Optional[str] = None


class LoginUser(CamelModel):
    id: str
    first_name: str
    email: str


class LoginResponse(CamelModel):
    token: str
    user: LoginUser
    message: str


class UserResponse(CamelModel):
    """A user's profile. The password hash is never part of it."""
    id: str = Field(..., description="User ID (MongoDB _id)")
    first_name: str
    last_name: str
    full_name: Optional[str] = Field(None, description="First and last name, or whichever is set")
    email: str
    phone: Optional[str] = None
    date_of_birth: Optional[datetime] = None
    gender: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdateRequest(CamelModel):
    """Partial profile update.

    Omitted and empty fields are left unchanged; explicit null clears an
    optional field.
    """
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    date_of_birth: Optional[DateOrBlank] = None
    gender: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserResponse


class MessageResponse(BaseModel):
    msg: str


# ── donations ───────────────────────────────────────────────


class DonorResponse(CamelModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    full_name: Optional[str] = None
    email: Optional[str] = None


class DonationCreateRequest(CamelModel):
    amount: float = Field(..., allow_inf_nan=False, description="Donation amount (at least 1)")
    currency: str = Field(..., description="Currency code, e.g. USD")
    payment_intent_id: Optional[str] = Field(None, description="Payment gateway reference")
    status: Optional[DonationStatusValue] = None


class DonationUpdateRequest(CamelModel):
    amount: Optional[float] = Field(None, allow_inf_nan=False)
    currency: Optional[str] = None
    payment_intent_id: Optional[str] = None
    status: Optional[DonationStatusValue] = None


class DonationResponse(CamelModel):
    id: str
    user_id: Optional[str] = Field(None, description="Owner reference; null for anonymous donations")
    user: Optional[DonorResponse] = Field(None, description="Owner display fields (populated on reads)")
    amount: float
    currency: str
    payment_intent_id: Optional[str] = None
    status: DonationStatusValue
    donated_at: datetime


# ── opportunities / signups ─────────────────────────────────


class OpportunitySummary(CamelModel):
    id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    duration: Optional[Union[str, int, float]] = None
    volunteers_needed: Optional[int] = None


class OpportunityResponse(OpportunitySummary):
    date_created: Optional[datetime] = None


class SignupRequest(CamelModel):
    opportunity_id: Optional[str] = None


class SignupResponse(CamelModel):
    id: str
    user: str
    opportunity: str
    signed_up_at: datetime


class SignupCreatedResponse(CamelModel):
    msg: str
    user_opportunity: SignupResponse


class SignupDetailResponse(CamelModel):
    id: str
    user: str
    opportunity: Optional[OpportunitySummary] = Field(None, description="Null if the opportunity was removed")
    signed_up_at: datetime
