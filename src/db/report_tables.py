"""Listing tables — one per content domain, all sharing the moderation lifecycle."""
from __future__ import annotations

from sqlalchemy import Column, String, Text, Date, Boolean, Float, JSON

from src.db.tables import Base, ModeratedMixin


class LostPetReportRow(ModeratedMixin, Base):
    """Lost-pet report submitted by a user."""
    __tablename__ = "lost_pet_reports"

    pet_name = Column(String(100), nullable=False)
    species = Column(String(20), nullable=False)  # dog, cat, bird, other
    breed = Column(String(100), nullable=False)
    gender = Column(String(10), nullable=False)  # male, female
    age = Column(String(50), nullable=True)
    size = Column(String(10), nullable=False)  # small, medium, large
    color = Column(String(100), nullable=False)
    distinctive_features = Column(Text, nullable=True)
    last_seen_date = Column(Date, nullable=False)
    last_seen_location = Column(String(300), nullable=False)
    additional_info = Column(Text, nullable=True)
    urgency = Column(Boolean, default=False, nullable=False)
    has_reward = Column(Boolean, default=False, nullable=False)
    reward_amount = Column(String(50), nullable=True)
    contact_name = Column(String(100), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(254), nullable=True)


class AdoptionPetReportRow(ModeratedMixin, Base):
    """Pet offered for adoption."""
    __tablename__ = "adoption_pet_reports"

    pet_name = Column(String(100), nullable=False)
    species = Column(String(20), nullable=False)
    breed = Column(String(100), nullable=False)
    gender = Column(String(10), nullable=False)
    age = Column(String(50), nullable=True)
    size = Column(String(10), nullable=False)
    color = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(300), nullable=False)
    med_status = Column(JSON, nullable=True)  # e.g. ["vacunado", "castrado"]
    adoption_requirements = Column(Text, nullable=True)
    contact_name = Column(String(100), nullable=False)
    contact_phone = Column(String(50), nullable=False)
    contact_email = Column(String(254), nullable=True)


class DonationCampaignReportRow(ModeratedMixin, Base):
    """Fund-raising campaign for an animal or a shelter."""
    __tablename__ = "donation_campaign_reports"

    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    goal = Column(Float, nullable=False)
    urgency = Column(Boolean, default=False, nullable=False)
    type = Column(String(20), nullable=False)  # medical, food, shelter, spay_neuter, emergency, other, infrastructure
    pet_name = Column(String(100), nullable=False)
    cbu = Column(String(30), nullable=False)
    alias = Column(String(60), nullable=False)
    account_holder = Column(String(150), nullable=False)
    responsible_name = Column(String(150), nullable=False)
    contact_info = Column(String(400), nullable=False)  # "whatsapp:<n>;email:<e>"
    deadline = Column(String(50), nullable=False)
