"""Listing data models — submission payloads and public display shapes."""
from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.services.validation import validate_email


class ModerationStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Species(str, Enum):
    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"
    OTHER = "other"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class PetSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class CampaignType(str, Enum):
    MEDICAL = "medical"
    FOOD = "food"
    SHELTER = "shelter"
    SPAY_NEUTER = "spay_neuter"
    EMERGENCY = "emergency"
    OTHER = "other"
    INFRASTRUCTURE = "infrastructure"


# ── Submissions ──────────────────────────────────────────────────────────

class Submission(BaseModel):
    """Base for form payloads: strings arrive trimmed, blank optionals become None."""
    model_config = ConfigDict(str_strip_whitespace=True, use_enum_values=True)

    @field_validator("*", mode="after")
    @classmethod
    def _blank_to_none(cls, value, info):
        field = cls.model_fields[info.field_name]
        if value == "" and not field.is_required():
            return None
        return value

    def to_row_values(self) -> dict:
        return self.model_dump()


class _ContactEmailMixin(BaseModel):
    contact_email: Optional[str] = Field(None, max_length=254)

    @field_validator("contact_email", mode="after")
    @classmethod
    def _check_email(cls, value: Optional[str]) -> Optional[str]:
        if value:
            error = validate_email(value)
            if error:
                raise ValueError(error)
        return value or None


class LostPetSubmission(_ContactEmailMixin, Submission):
    pet_name: str = Field(..., min_length=1, max_length=100)
    species: Species
    breed: str = Field(..., min_length=1, max_length=100)
    gender: Gender
    age: Optional[str] = Field(None, max_length=50)
    size: PetSize
    color: str = Field(..., min_length=1, max_length=100)
    distinctive_features: Optional[str] = Field(None, max_length=2000)
    last_seen_date: date
    last_seen_location: str = Field(..., min_length=1, max_length=300)
    additional_info: Optional[str] = Field(None, max_length=2000)
    urgency: bool = False
    has_reward: bool = False
    reward_amount: Optional[str] = Field(None, max_length=50)
    contact_name: str = Field(..., min_length=1, max_length=100)
    contact_phone: str = Field(..., min_length=1, max_length=50)


class AdoptionPetSubmission(_ContactEmailMixin, Submission):
    pet_name: str = Field(..., min_length=1, max_length=100)
    species: Species
    breed: str = Field(..., min_length=1, max_length=100)
    gender: Gender
    age: Optional[str] = Field(None, max_length=50)
    size: PetSize
    color: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=4000)
    location: str = Field(..., min_length=1, max_length=300)
    med_status: list[str] = []
    adoption_requirements: Optional[str] = Field(None, max_length=2000)
    contact_name: str = Field(..., min_length=1, max_length=100)
    contact_phone: str = Field(..., min_length=1, max_length=50)

    @field_validator("med_status", mode="after")
    @classmethod
    def _clean_med_status(cls, value: list[str]) -> list[str]:
        return [item.strip() for item in value if item and item.strip()]

    def to_row_values(self) -> dict:
        values = self.model_dump()
        values["med_status"] = values["med_status"] or None
        return values


class DonationCampaignSubmission(Submission):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=4000)
    goal: float = Field(..., gt=0)
    urgency: bool = False
    type: CampaignType
    pet_name: str = Field(..., min_length=1, max_length=100)
    cbu: str = Field(..., min_length=1, max_length=30)
    alias: str = Field(..., min_length=1, max_length=60)
    account_holder: str = Field(..., min_length=1, max_length=150)
    responsible_name: str = Field(..., min_length=1, max_length=150)
    whatsapp_number: str = Field(..., min_length=1, max_length=50)
    contact_email: str = Field(..., min_length=1, max_length=254)
    deadline: str = Field(..., min_length=1, max_length=50)

    @field_validator("contact_email", mode="after")
    @classmethod
    def _check_email(cls, value: str) -> str:
        error = validate_email(value)
        if error:
            raise ValueError(error)
        return value

    def to_row_values(self) -> dict:
        from src.services.presentation import build_contact_info

        values = self.model_dump(exclude={"whatsapp_number", "contact_email"})
        values["contact_info"] = build_contact_info(self.whatsapp_number, self.contact_email)
        return values


# ── Public display shapes ────────────────────────────────────────────────

class PetListing(BaseModel):
    """Card shown on the public lost-pet and adoption feeds."""
    id: str
    name: str
    breed: str
    species: Species
    gender: Gender
    age: Optional[str] = None
    size: Optional[PetSize] = None
    color: Optional[str] = None
    status: str  # "lost" or "adoption"
    location: str
    image: str
    description: Optional[str] = None
    contact_name: str
    contact_phone: str
    contact_email: Optional[str] = None

    # Lost pets
    urgency: Optional[bool] = None
    time_label: Optional[str] = None
    distinctive_features: Optional[str] = None
    additional_info: Optional[str] = None
    last_seen_date: Optional[date] = None
    last_seen_location: Optional[str] = None
    reward: Optional[str] = None

    # Adoption
    med_status: Optional[list[str]] = None
    requirements: Optional[str] = None


class DonationCampaignListing(BaseModel):
    id: str
    title: str
    description: str
    goal: float
    image: str
    urgency: bool
    type: CampaignType
    pet_name: str
    cbu: str
    alias: str
    account_holder: str
    responsible_name: str
    contact_info: str
    whatsapp_number: Optional[str] = None
    contact_email: Optional[str] = None
    deadline: str


# ── Moderation requests ──────────────────────────────────────────────────

class ReviewRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=1000)
