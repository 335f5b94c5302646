"""
Campaign Click Tracking Router.

Public endpoint called by the landing page when a visitor arrives through a
campaign link. Unauthenticated, so responses never say why a click was
refused: the body is always just {"ok": bool}.
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from camp_api.core.deps import get_click_limiter, get_client_ip, get_db
from camp_api.core.rate_limit import RateLimiter
from camp_api.services import tracking_service
from camp_api.services.tracking_service import ClickOutcome


logger = logging.getLogger(__name__)

router = APIRouter(tags=["tracking"])


OUTCOME_STATUS = {
    ClickOutcome.RECORDED: 200,
    ClickOutcome.RATE_LIMITED: 429,
    ClickOutcome.INVALID: 400,
    ClickOutcome.NOT_FOUND: 404,
    ClickOutcome.FAILED: 500,
}


@router.post("/clicks")
async def track_click(
    request: Request,
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_click_limiter),
) -> JSONResponse:
    """
    Record a click for the campaign named by {"ref": "<case ref>"}.

    The reference cookie is set by the frontend, not here.
    """
    source_key = get_client_ip(request)

    try:
        body = await request.json()
    except ValueError:
        body = None
    case_ref = body.get("ref") if isinstance(body, dict) else None

    try:
        outcome = await run_in_threadpool(
            tracking_service.record_click,
            db,
            case_ref,
            source_key,
            rate_limiter,
        )
    except Exception:
        logger.exception("Click tracking failed")
        outcome = ClickOutcome.FAILED

    if outcome is ClickOutcome.NOT_FOUND:
        logger.info("Click for unknown campaign reference")

    return JSONResponse(
        {"ok": outcome is ClickOutcome.RECORDED},
        status_code=OUTCOME_STATUS[outcome],
    )
