"""Public application endpoint for prospective members."""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from camp_api.core.deps import get_application_limiter, get_client_ip, get_db
from camp_api.core.rate_limit import RateLimiter
from camp_api.schemas.application import ApplicationSubmit
from camp_api.services import application_service
from camp_api.services.application_service import (
    ApplicationError,
    ApplicationRateLimitedError,
    ApplicationValidationError,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["applications"])

GENERIC_ERROR = "Something went wrong. Please try again later."


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


@router.post("/applications")
async def submit_application(
    request: Request,
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_application_limiter),
) -> JSONResponse:
    """
    Submit the public application form.

    Body uses the form's camelCase keys (namePronouns, email, ...) plus an
    optional caseRef from the campaign cookie. Rate limited per client IP.
    """
    source_key = get_client_ip(request)

    try:
        body = await request.json()
    except ValueError:
        body = None

    try:
        data = ApplicationSubmit.model_validate(body if isinstance(body, dict) else {})
    except ValidationError:
        data = None

    try:
        if data is None:
            # Still counts against the source, like any other submission
            if not await run_in_threadpool(rate_limiter.check_and_consume, source_key):
                raise ApplicationRateLimitedError("Too many applications. Please try again later.")
            raise ApplicationValidationError("Invalid application")

        await run_in_threadpool(
            application_service.submit_application,
            db,
            data,
            source_key,
            rate_limiter,
        )
    except ApplicationRateLimitedError as e:
        return _error(str(e), 429)
    except ApplicationValidationError as e:
        return _error(str(e), 400)
    except ApplicationError:
        return _error(GENERIC_ERROR, 500)
    except Exception:
        logger.exception("Application submission failed")
        return _error(GENERIC_ERROR, 500)

    return JSONResponse({"ok": True})
