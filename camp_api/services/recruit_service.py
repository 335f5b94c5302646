"""Recruit service - pipeline CRUD and stage moves."""

import logging
from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session, joinedload

from camp_api.db.enums import (
    DEFAULT_RECRUIT_CONFIDENCE,
    DEFAULT_RECRUIT_STAGE,
    RecruitStage,
)
from camp_api.db.models import Recruit, User
from camp_api.schemas.recruit import RecruitCreate, RecruitUpdate

logger = logging.getLogger(__name__)


# Fields an admin update may touch; everything else is dropped
RECRUIT_UPDATABLE_FIELDS = (
    "name",
    "email",
    "phone",
    "social_handle",
    "stage",
    "confidence",
    "notes",
    "last_contact_date",
    "assigned_to_id",
    "referred_by_id",
)

# Columns that cannot be cleared to NULL
NON_NULLABLE_FIELDS = {"name", "stage", "confidence"}


class RecruitError(Exception):
    """Base exception for recruit service errors."""

    pass


class RecruitValidationError(RecruitError):
    """Recruit payload has a missing or invalid field."""

    pass


class RecruitNotFoundError(RecruitError):
    """Recruit not found."""

    pass


def _validate_stage(stage: str) -> str:
    if not RecruitStage.has_value(stage):
        raise RecruitValidationError(f"Unknown stage '{stage}'")
    return stage


def _validate_assignee(db: Session, user_id: UUID | None) -> None:
    if user_id is None:
        return
    exists = db.query(User.id).filter(User.id == user_id).first()
    if not exists:
        raise RecruitValidationError("Assignee not found")


# =============================================================================
# CRUD Operations
# =============================================================================

def list_recruits(db: Session) -> list[Recruit]:
    """All recruits with intake answers and assignee, most recently touched first."""
    return (
        db.query(Recruit)
        .options(joinedload(Recruit.intake), joinedload(Recruit.assigned_to))
        .order_by(Recruit.updated_at.desc())
        .all()
    )


def get_recruit(db: Session, recruit_id: UUID) -> Recruit | None:
    return db.query(Recruit).filter(Recruit.id == recruit_id).first()


def create_recruit(db: Session, data: RecruitCreate) -> Recruit:
    """Create a recruit from the admin board. Starts as a prospect unless told otherwise."""
    name = (data.name or "").strip()
    if not name:
        raise RecruitValidationError("Name is required")

    stage = _validate_stage(data.stage) if data.stage else DEFAULT_RECRUIT_STAGE.value
    confidence = (
        data.confidence if data.confidence is not None else DEFAULT_RECRUIT_CONFIDENCE
    )

    recruit = Recruit(
        name=name,
        email=data.email,
        phone=data.phone,
        social_handle=data.social_handle,
        stage=stage,
        confidence=confidence,
        notes=data.notes,
        last_contact_date=data.last_contact_date,
    )
    db.add(recruit)
    db.commit()
    db.refresh(recruit)
    return recruit


def update_recruit(db: Session, data: RecruitUpdate) -> Recruit:
    """
    Apply a partial update restricted to RECRUIT_UPDATABLE_FIELDS.

    Uses exclude_unset=True so only explicitly provided fields are updated.
    None clears optional fields. Stage order is not enforced.
    """
    recruit = get_recruit(db, data.id)
    if not recruit:
        raise RecruitNotFoundError("Recruit not found")

    provided = data.model_dump(exclude_unset=True)
    update_data = {k: v for k, v in provided.items() if k in RECRUIT_UPDATABLE_FIELDS}

    for field in NON_NULLABLE_FIELDS & update_data.keys():
        if update_data[field] is None:
            raise RecruitValidationError(f"{field} cannot be empty")

    if "name" in update_data:
        update_data["name"] = update_data["name"].strip()
        if not update_data["name"]:
            raise RecruitValidationError("name cannot be empty")
    if "stage" in update_data:
        _validate_stage(update_data["stage"])
    if "assigned_to_id" in update_data:
        _validate_assignee(db, update_data["assigned_to_id"])

    for field, value in update_data.items():
        setattr(recruit, field, value)
    recruit.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(recruit)
    return recruit


def move_recruit_stage(
    db: Session,
    recruit_id: UUID,
    stage: str,
    today: date | None = None,
) -> Recruit:
    """
    Move a recruit to a stage from the board.

    Counts as a contact: last_contact_date is set to today.
    """
    recruit = get_recruit(db, recruit_id)
    if not recruit:
        raise RecruitNotFoundError("Recruit not found")

    old_stage = recruit.stage
    recruit.stage = _validate_stage(stage)
    recruit.last_contact_date = today or date.today()
    recruit.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(recruit)
    logger.info("Recruit %s moved %s -> %s", recruit.id, old_stage, recruit.stage)
    return recruit


def delete_recruit(db: Session, recruit_id: UUID) -> None:
    """Hard delete. The intake answers are kept."""
    recruit = get_recruit(db, recruit_id)
    if not recruit:
        raise RecruitNotFoundError("Recruit not found")
    db.delete(recruit)
    db.commit()
