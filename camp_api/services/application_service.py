"""
Public application intake.

Turns one submitted application into an intake record (the raw answers)
plus a recruit at the start of the pipeline, in a single transaction.
"""

from __future__ import annotations

import logging
import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from camp_api.core.rate_limit import RateLimiter
from camp_api.db.enums import DEFAULT_RECRUIT_CONFIDENCE, RecruitStage
from camp_api.db.models import Recruit, RecruitIntake
from camp_api.schemas.application import INTAKE_ANSWER_FIELDS, ApplicationSubmit

logger = logging.getLogger(__name__)

INTAKE_NOTE = "Applied via intake form"

# "Name / they/them" or "Name, she/her"
_NAME_SEPARATOR = re.compile(r"[/,]")


class ApplicationError(Exception):
    """Base exception for application intake errors."""

    pass


class ApplicationRateLimitedError(ApplicationError):
    """Too many applications from this source in the current window."""

    pass


class ApplicationValidationError(ApplicationError):
    """Submission is missing a required answer."""

    pass


def _clean(value: str | None) -> str | None:
    """Blank answers are stored as NULL."""
    if value is None:
        return None
    if not value.strip():
        return None
    return value


def derive_display_name(name_pronouns: str) -> str:
    """
    Short display name from the combined name/pronouns answer.

    Takes everything before the first "/" or ",". If that leaves nothing
    (e.g. "/they"), the whole trimmed answer is used instead.
    """
    head = _NAME_SEPARATOR.split(name_pronouns, maxsplit=1)[0].strip()
    return head or name_pronouns.strip()


def build_intake_note(case_ref: str | None) -> str:
    if case_ref:
        return f"{INTAKE_NOTE} [ref: {case_ref}]"
    return INTAKE_NOTE


def _build_intake(data: ApplicationSubmit) -> RecruitIntake:
    answers = {field: _clean(getattr(data, field)) for field in INTAKE_ANSWER_FIELDS}
    return RecruitIntake(name_pronouns=data.name_pronouns, **answers)


def _build_recruit(intake: RecruitIntake, case_ref: str | None) -> Recruit:
    return Recruit(
        name=derive_display_name(intake.name_pronouns),
        email=intake.email,
        social_handle=intake.social_handle,
        stage=RecruitStage.PROSPECT.value,
        confidence=DEFAULT_RECRUIT_CONFIDENCE,
        intake_id=intake.id,
        notes=build_intake_note(case_ref),
        referred_by_id=case_ref,
    )


def submit_application(
    db: Session,
    data: ApplicationSubmit,
    source_key: str,
    rate_limiter: RateLimiter,
) -> Recruit:
    """
    Store a public application and open a pipeline entry for it.

    Raises:
        ApplicationRateLimitedError: source is over its window limit
        ApplicationValidationError: name is missing (nothing is written)
        ApplicationError: storage failed (nothing is written)
    """
    if not rate_limiter.check_and_consume(source_key):
        raise ApplicationRateLimitedError("Too many applications. Please try again later.")

    if not data.name_pronouns or not data.name_pronouns.strip():
        raise ApplicationValidationError("Name is required")

    case_ref = (data.case_ref or "").strip() or None

    try:
        intake = _build_intake(data)
        db.add(intake)
        db.flush()

        recruit = _build_recruit(intake, case_ref)
        db.add(recruit)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to store application")
        raise ApplicationError("Could not save application") from e

    db.refresh(recruit)
    logger.info(
        "Application stored as recruit %s%s",
        recruit.id,
        " (campaign referral)" if case_ref else "",
    )
    return recruit
