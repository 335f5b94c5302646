"""Campaigns router - admin CRUD and funnel analytics for recruitment campaigns."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from camp_api.core.deps import get_db, require_admin, require_csrf_header
from camp_api.schemas.campaign import (
    CampaignCreate,
    CampaignEnvelope,
    CampaignListResponse,
    CampaignRead,
    CampaignUpdate,
)
from camp_api.schemas.common import OkResponse
from camp_api.services import campaign_service, funnel_service
from camp_api.services.campaign_service import (
    CampaignNotFoundError,
    CampaignValidationError,
)


router = APIRouter(
    tags=["campaigns"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=CampaignListResponse)
def list_campaigns(db: Session = Depends(get_db)):
    """Campaigns with click counts and recruit funnels, newest first."""
    funnels = funnel_service.compute_funnels(db)
    return CampaignListResponse(
        campaigns=funnels,
        summary=funnel_service.summarize_funnels(funnels),
    )


@router.post("", response_model=CampaignEnvelope)
def create_campaign(
    data: CampaignCreate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Create a campaign with a new, unique case reference."""
    try:
        campaign = campaign_service.create_campaign(db, data)
    except CampaignValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CampaignEnvelope(campaign=CampaignRead.model_validate(campaign))


@router.put("", response_model=CampaignEnvelope)
def update_campaign(
    data: CampaignUpdate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Update name, channel, notes, active flag, or mark launched."""
    try:
        campaign = campaign_service.update_campaign(db, data)
    except CampaignNotFoundError:
        raise HTTPException(status_code=404, detail="Campaign not found")
    except CampaignValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return CampaignEnvelope(campaign=CampaignRead.model_validate(campaign))


@router.delete("", response_model=OkResponse)
def delete_campaign(
    id: UUID | None = Query(None, description="Campaign ID"),
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Delete a campaign and its click history."""
    if id is None:
        raise HTTPException(status_code=400, detail="Missing id")
    try:
        campaign_service.delete_campaign(db, id)
    except CampaignNotFoundError:
        raise HTTPException(status_code=404, detail="Campaign not found")
    return OkResponse()
