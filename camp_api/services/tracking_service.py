"""
Campaign Click Tracking Service.

Records anonymous clicks on shared campaign links. Nothing identifying the
visitor is stored; the source key is only used for rate limiting.
"""

import logging
from enum import Enum
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from camp_api.core.rate_limit import RateLimiter
from camp_api.db.models import CampaignClick
from camp_api.services import campaign_service


logger = logging.getLogger(__name__)


class ClickOutcome(str, Enum):
    """Result of a click tracking attempt."""

    RECORDED = "recorded"
    RATE_LIMITED = "rate_limited"
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    FAILED = "failed"


# =============================================================================
# Event Recording
# =============================================================================


def record_click(
    db: Session,
    case_ref: object,
    source_key: str,
    rate_limiter: RateLimiter,
) -> ClickOutcome:
    """
    Record a click against the campaign with this case reference.

    The rate limit is consumed before the reference is looked at, so
    probing with junk references still counts against the source.
    Unknown references write nothing.
    """
    if not rate_limiter.check_and_consume(source_key):
        return ClickOutcome.RATE_LIMITED

    if not isinstance(case_ref, str) or not case_ref:
        return ClickOutcome.INVALID

    try:
        campaign = campaign_service.get_campaign_by_case_ref(db, case_ref)
        if not campaign:
            return ClickOutcome.NOT_FOUND

        db.add(CampaignClick(campaign_id=campaign.id))
        db.commit()
    except Exception:
        db.rollback()
        logger.exception("Failed to record campaign click")
        return ClickOutcome.FAILED

    return ClickOutcome.RECORDED


# =============================================================================
# Analytics
# =============================================================================


def count_clicks_by_campaign(db: Session) -> dict[UUID, int]:
    """Click totals keyed by campaign id (campaigns without clicks are absent)."""
    rows = (
        db.query(CampaignClick.campaign_id, func.count(CampaignClick.id))
        .group_by(CampaignClick.campaign_id)
        .all()
    )
    return {campaign_id: count for campaign_id, count in rows}
