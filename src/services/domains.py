"""The three content domains and their row -> public card mappers."""
from __future__ import annotations

from src.db.report_tables import AdoptionPetReportRow, DonationCampaignReportRow, LostPetReportRow
from src.models.listing import DonationCampaignListing, PetListing
from src.services.moderation import ListingDomain
from src.services.presentation import format_reward, full_location, parse_contact_info, time_since_label


def lost_pet_to_listing(r: LostPetReportRow) -> PetListing:
    # distinctive_features / additional_info are shown separately, not merged into description
    return PetListing(
        id=r.id,
        name=r.pet_name,
        breed=r.breed,
        species=r.species,
        gender=r.gender,
        age=r.age,
        size=r.size,
        color=r.color,
        status="lost",
        urgency=r.urgency,
        time_label=time_since_label(r.last_seen_date),
        location=full_location(r.last_seen_location),
        image=r.image_url,
        description=None,
        distinctive_features=r.distinctive_features,
        additional_info=r.additional_info,
        contact_name=r.contact_name,
        contact_phone=r.contact_phone,
        contact_email=r.contact_email,
        last_seen_date=r.last_seen_date,
        last_seen_location=r.last_seen_location,
        reward=format_reward(r.has_reward, r.reward_amount),
    )


def adoption_pet_to_listing(r: AdoptionPetReportRow) -> PetListing:
    return PetListing(
        id=r.id,
        name=r.pet_name,
        breed=r.breed,
        species=r.species,
        gender=r.gender,
        age=r.age,
        size=r.size,
        color=r.color,
        status="adoption",
        location=full_location(r.location),
        image=r.image_url,
        description=r.description or None,
        med_status=r.med_status or None,
        contact_name=r.contact_name,
        contact_phone=r.contact_phone,
        contact_email=r.contact_email,
        requirements=r.adoption_requirements,
    )


def donation_campaign_to_listing(r: DonationCampaignReportRow) -> DonationCampaignListing:
    contact = parse_contact_info(r.contact_info)
    return DonationCampaignListing(
        id=r.id,
        title=r.title,
        description=r.description,
        goal=r.goal,
        image=r.image_url,
        urgency=r.urgency,
        type=r.type,
        pet_name=r.pet_name,
        cbu=r.cbu,
        alias=r.alias,
        account_holder=r.account_holder,
        responsible_name=r.responsible_name,
        contact_info=r.contact_info,
        whatsapp_number=contact["whatsapp_number"],
        contact_email=contact["contact_email"],
        deadline=r.deadline,
    )


LOST_PETS = ListingDomain(
    name="lost-pets",
    label="lost-pet report",
    row_cls=LostPetReportRow,
    bucket="lost-pet-images",
    to_display=lost_pet_to_listing,
)

ADOPTION_PETS = ListingDomain(
    name="adoption-pets",
    label="adoption listing",
    row_cls=AdoptionPetReportRow,
    bucket="adoption-pet-images",
    to_display=adoption_pet_to_listing,
)

DONATION_CAMPAIGNS = ListingDomain(
    name="donation-campaigns",
    label="donation campaign",
    row_cls=DonationCampaignReportRow,
    bucket="donation-campaign-images",
    to_display=donation_campaign_to_listing,
)

ALL_DOMAINS = [LOST_PETS, ADOPTION_PETS, DONATION_CAMPAIGNS]
