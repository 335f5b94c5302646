"""Campaign service for recruitment campaign management."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from camp_api.db.enums import CampaignChannel
from camp_api.db.models import Campaign
from camp_api.schemas.campaign import CampaignCreate, CampaignUpdate

logger = logging.getLogger(__name__)


class CampaignError(Exception):
    """Base exception for campaign service errors."""

    pass


class CampaignValidationError(CampaignError):
    """Campaign payload is missing or has invalid fields."""

    pass


class CampaignNotFoundError(CampaignError):
    """Campaign not found."""

    pass


# =============================================================================
# Lookups
# =============================================================================

def get_campaign(db: Session, campaign_id: UUID) -> Campaign | None:
    """Get a campaign by ID."""
    return db.query(Campaign).filter(Campaign.id == campaign_id).first()


def get_campaign_by_case_ref(db: Session, case_ref: str) -> Campaign | None:
    """Exact, case-sensitive match on the public case reference."""
    return db.query(Campaign).filter(Campaign.case_ref == case_ref).first()


def list_case_refs(db: Session) -> list[str]:
    return [ref for (ref,) in db.query(Campaign.case_ref).all()]


# =============================================================================
# Campaign CRUD
# =============================================================================

def create_campaign(db: Session, data: CampaignCreate) -> Campaign:
    """Create a campaign. The case reference must be unused."""
    name = (data.name or "").strip()
    case_ref = (data.case_ref or "").strip()
    channel = (data.channel or "").strip().lower()

    if not name or not case_ref or not channel:
        raise CampaignValidationError("Name, case ref, and channel required")
    if not CampaignChannel.has_value(channel):
        raise CampaignValidationError(f"Unknown channel '{channel}'")
    if get_campaign_by_case_ref(db, case_ref):
        raise CampaignValidationError("Case ref already exists")

    campaign = Campaign(
        name=name,
        case_ref=case_ref,
        channel=channel,
        notes=data.notes or None,
        launched_at=datetime.now(timezone.utc) if data.launched else None,
    )
    db.add(campaign)
    db.commit()
    db.refresh(campaign)

    logger.info("Created campaign %s (%s)", campaign.id, channel)
    return campaign


def update_campaign(db: Session, data: CampaignUpdate) -> Campaign:
    """
    Update campaign fields.

    The case reference never changes once created: clicks and recruits
    already point at it.
    """
    campaign = get_campaign(db, data.id)
    if not campaign:
        raise CampaignNotFoundError("Campaign not found")

    update_data = data.model_dump(exclude_unset=True, exclude={"id"})

    if "name" in update_data:
        name = (update_data["name"] or "").strip()
        if not name:
            raise CampaignValidationError("Name cannot be empty")
        campaign.name = name
    if "channel" in update_data:
        channel = (update_data["channel"] or "").strip().lower()
        if not CampaignChannel.has_value(channel):
            raise CampaignValidationError(f"Unknown channel '{channel}'")
        campaign.channel = channel
    if "notes" in update_data:
        campaign.notes = update_data["notes"] or None
    if update_data.get("active") is not None:
        campaign.active = update_data["active"]
    if update_data.get("launched"):
        campaign.launched_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(campaign)
    return campaign


def delete_campaign(db: Session, campaign_id: UUID) -> None:
    """Delete a campaign and its clicks. Recruits keep their reference string."""
    campaign = get_campaign(db, campaign_id)
    if not campaign:
        raise CampaignNotFoundError("Campaign not found")

    db.delete(campaign)
    db.commit()
    logger.info("Deleted campaign %s", campaign_id)
