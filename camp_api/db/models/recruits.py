"""SQLAlchemy ORM models."""

from __future__ import annotations

from typing import TYPE_CHECKING

import uuid
from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from camp_api.db.base import Base, utcnow
from camp_api.db.enums import DEFAULT_RECRUIT_CONFIDENCE, DEFAULT_RECRUIT_STAGE

if TYPE_CHECKING:
    from camp_api.db.models import User


class RecruitIntake(Base):
    """
    Raw answers from the public application form.

    Written once per submission and never edited.
    """

    __tablename__ = "recruit_intakes"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Identity
    name_pronouns: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    social_handle: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Narrative answers
    project_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    enthusiasm: Mapped[str | None] = mapped_column(Text, nullable=True)
    camp_scenario: Mapped[str | None] = mapped_column(Text, nullable=True)
    gentle_reminder: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Comfort ratings (1-5, stored as submitted)
    approach_strangers: Mapped[str | None] = mapped_column(Text, nullable=True)
    theatrical: Mapped[str | None] = mapped_column(Text, nullable=True)
    straight_face: Mapped[str | None] = mapped_column(Text, nullable=True)
    being_approached: Mapped[str | None] = mapped_column(Text, nullable=True)
    ideal_balance: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Logistics
    burn_experience: Mapped[str | None] = mapped_column(Text, nullable=True)
    camping_setup: Mapped[str | None] = mapped_column(Text, nullable=True)
    skills_resources: Mapped[str | None] = mapped_column(Text, nullable=True)
    dues_questions: Mapped[str | None] = mapped_column(Text, nullable=True)
    anything_else: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    recruit: Mapped["Recruit | None"] = relationship(back_populates="intake")


class Recruit(Base):
    """
    One prospective member moving through the recruit pipeline.

    referred_by_id holds a campaign case reference string, not a foreign key.
    Older records carry the reference only inside notes as "ref: <caseRef>".
    """

    __tablename__ = "recruits"
    __table_args__ = (
        Index("idx_recruits_stage", "stage"),
        Index("idx_recruits_referred_by", "referred_by_id"),
        Index("idx_recruits_updated", "updated_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    social_handle: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Pipeline
    stage: Mapped[str] = mapped_column(
        String(20), default=DEFAULT_RECRUIT_STAGE.value, nullable=False
    )  # see RecruitStage
    confidence: Mapped[int] = mapped_column(
        Integer, default=DEFAULT_RECRUIT_CONFIDENCE, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_contact_date: Mapped[date | None] = mapped_column(Date, nullable=True)

    intake_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("recruit_intakes.id", ondelete="SET NULL"),
        unique=True,
        nullable=True,
    )
    assigned_to_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )
    referred_by_id: Mapped[str | None] = mapped_column(String(64), nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    intake: Mapped["RecruitIntake | None"] = relationship(back_populates="recruit")
    assigned_to: Mapped["User | None"] = relationship()
