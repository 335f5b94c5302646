"""
Campaign funnel analytics.

Attributes recruits to campaigns and counts them per pipeline stage. Totals
are recomputed from scratch on every call; campaign and recruit counts are
in the tens to low hundreds.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Iterable

from sqlalchemy.orm import Session

from camp_api.db.enums import CONVERTED_STAGES
from camp_api.db.models import Campaign, Recruit
from camp_api.schemas.campaign import (
    CampaignFunnel,
    CampaignRead,
    FunnelStats,
    FunnelSummary,
)
from camp_api.services import campaign_service, tracking_service

logger = logging.getLogger(__name__)


def referral_marker(case_ref: str) -> str:
    """Text older records carry in notes instead of referred_by_id."""
    return f"ref: {case_ref}"


def recruit_matches_campaign(
    referred_by_id: str | None,
    notes: str | None,
    case_ref: str,
) -> bool:
    """
    A recruit belongs to a campaign when it carries the case reference,
    either in referred_by_id or (legacy records) inside its notes.
    """
    if referred_by_id == case_ref:
        return True
    return bool(notes) and referral_marker(case_ref) in notes


def compute_funnels(db: Session) -> list[CampaignFunnel]:
    """
    Per-campaign click counts and recruit funnels, newest campaign first.

    Declined recruits count toward the total and appear under "declined".
    """
    campaigns = (
        db.query(Campaign)
        .order_by(Campaign.created_at.desc(), Campaign.id)
        .all()
    )
    click_counts = tracking_service.count_clicks_by_campaign(db)
    recruits = db.query(Recruit.referred_by_id, Recruit.notes, Recruit.stage).all()

    funnels: list[CampaignFunnel] = []
    for campaign in campaigns:
        by_stage = Counter(
            stage
            for referred_by_id, notes, stage in recruits
            if recruit_matches_campaign(referred_by_id, notes, campaign.case_ref)
        )
        base = CampaignRead.model_validate(campaign)
        funnels.append(
            CampaignFunnel(
                **base.model_dump(),
                clicks=click_counts.get(campaign.id, 0),
                funnel=FunnelStats(
                    total=sum(by_stage.values()),
                    by_stage=dict(by_stage),
                ),
            )
        )
    return funnels


def summarize_funnels(funnels: Iterable[CampaignFunnel]) -> FunnelSummary:
    """Dashboard totals: campaigns, clicks, recruits, committed or beyond."""
    summary = FunnelSummary()
    for item in funnels:
        summary.campaigns += 1
        if item.active:
            summary.active_campaigns += 1
        summary.total_clicks += item.clicks
        summary.total_recruits += item.funnel.total
        summary.committed_plus += sum(
            item.funnel.by_stage.get(stage.value, 0) for stage in CONVERTED_STAGES
        )
    return summary


def backfill_referral_refs(db: Session) -> int:
    """
    Copy notes-encoded references into referred_by_id.

    Only touches recruits with no referred_by_id whose notes name exactly
    one known case reference ("ref: CF-12" also contains "ref: CF-1"; the
    longer reference wins). Returns the number of recruits updated.
    """
    case_refs = campaign_service.list_case_refs(db)
    if not case_refs:
        return 0

    candidates = (
        db.query(Recruit)
        .filter(Recruit.referred_by_id.is_(None), Recruit.notes.isnot(None))
        .all()
    )

    updated = 0
    for recruit in candidates:
        matches = [ref for ref in case_refs if referral_marker(ref) in recruit.notes]
        matches = [
            ref for ref in matches
            if not any(ref != other and referral_marker(ref) in referral_marker(other) for other in matches)
        ]
        if len(matches) != 1:
            continue
        recruit.referred_by_id = matches[0]
        updated += 1

    if updated:
        db.commit()
    logger.info("Backfilled campaign reference on %s recruits", updated)
    return updated
