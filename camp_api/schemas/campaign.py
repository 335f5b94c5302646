"""Campaign schemas for request/response validation."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from camp_api.schemas.common import CamelModel


# =============================================================================
# Campaign CRUD
# =============================================================================

class CampaignCreate(CamelModel):
    """
    Create a new campaign.

    Required fields are checked by the service so missing ones come back
    as a 400 with a readable message.
    """
    name: str | None = Field(None, max_length=200)
    case_ref: str | None = Field(None, max_length=64)
    channel: str | None = Field(None, max_length=20)
    notes: str | None = None
    launched: bool = False


class CampaignUpdate(CamelModel):
    """Partial update. The case reference is deliberately absent."""
    id: UUID
    name: str | None = Field(None, max_length=200)
    channel: str | None = Field(None, max_length=20)
    notes: str | None = None
    active: bool | None = None
    launched: bool | None = None


class CampaignRead(CamelModel):
    """Campaign response."""
    id: UUID
    name: str
    case_ref: str
    channel: str
    notes: str | None
    active: bool
    launched_at: datetime | None
    created_at: datetime
    updated_at: datetime


class CampaignEnvelope(CamelModel):
    campaign: CampaignRead


# =============================================================================
# Funnel
# =============================================================================

class FunnelStats(CamelModel):
    """Recruits attributed to one campaign, counted per stage."""
    total: int = 0
    by_stage: dict[str, int] = Field(default_factory=dict)


class CampaignFunnel(CampaignRead):
    """Campaign with click count and recruit funnel."""
    clicks: int = 0
    funnel: FunnelStats = Field(default_factory=FunnelStats)


class FunnelSummary(CamelModel):
    """Dashboard totals across all campaigns."""
    campaigns: int = 0
    active_campaigns: int = 0
    total_clicks: int = 0
    total_recruits: int = 0
    committed_plus: int = 0


class CampaignListResponse(CamelModel):
    campaigns: list[CampaignFunnel]
    summary: FunnelSummary
