"""Recruit pipeline schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field

from camp_api.schemas.common import CamelModel


class RecruitCreate(CamelModel):
    """Create a recruit directly from the admin board."""
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    social_handle: str | None = Field(None, max_length=255)
    stage: str | None = Field(None, max_length=20)
    confidence: int | None = Field(None, ge=0, le=100)
    notes: str | None = None
    last_contact_date: date | None = None


class RecruitUpdate(CamelModel):
    """
    Partial recruit update.

    Declares exactly the updatable fields; anything else in the payload is
    dropped during validation. Only explicitly provided fields are applied.
    """
    id: UUID
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    social_handle: str | None = Field(None, max_length=255)
    stage: str | None = Field(None, max_length=20)
    confidence: int | None = Field(None, ge=0, le=100)
    notes: str | None = None
    last_contact_date: date | None = None
    assigned_to_id: UUID | None = None
    referred_by_id: str | None = Field(None, max_length=64)


class RecruitMoveStage(CamelModel):
    """Move a recruit to another stage from the board."""
    id: UUID
    stage: str


class RecruitIntakeRead(CamelModel):
    id: UUID
    name_pronouns: str
    email: str | None
    social_handle: str | None
    project_description: str | None
    enthusiasm: str | None
    camp_scenario: str | None
    gentle_reminder: str | None
    approach_strangers: str | None
    theatrical: str | None
    straight_face: str | None
    being_approached: str | None
    ideal_balance: str | None
    burn_experience: str | None
    camping_setup: str | None
    skills_resources: str | None
    dues_questions: str | None
    anything_else: str | None
    created_at: datetime


class AssigneeRead(CamelModel):
    id: UUID
    display_name: str
    email: str


class RecruitRead(CamelModel):
    id: UUID
    name: str
    email: str | None
    phone: str | None
    social_handle: str | None
    stage: str
    confidence: int
    notes: str | None
    last_contact_date: date | None
    intake_id: UUID | None
    assigned_to_id: UUID | None
    referred_by_id: str | None
    created_at: datetime
    updated_at: datetime


class RecruitDetail(RecruitRead):
    intake: RecruitIntakeRead | None = None
    assigned_to: AssigneeRead | None = None


class RecruitEnvelope(CamelModel):
    recruit: RecruitRead


class RecruitListResponse(CamelModel):
    recruits: list[RecruitDetail]


class StageDefinition(CamelModel):
    slug: str
    label: str
    color: str
    order: int
    is_terminal: bool
    moves: list[str] = Field(default_factory=list)


class StageListResponse(CamelModel):
    stages: list[StageDefinition]
