"""SQLAlchemy ORM models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from camp_api.db.base import Base, utcnow


class Campaign(Base):
    """
    Recruitment campaign (a shared link on one channel).

    The case reference is the public attribution key: it is embedded in
    shared links, carried by cookie to the application form and stored on
    recruits as a plain string. It cannot be changed after creation.
    """

    __tablename__ = "campaigns"
    __table_args__ = (
        Index("idx_campaigns_created", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    case_ref: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    channel: Mapped[str] = mapped_column(
        String(20), nullable=False
    )  # see CampaignChannel
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    launched_at: Mapped[datetime | None] = mapped_column(nullable=True)

    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        default=utcnow, onupdate=utcnow, nullable=False
    )

    # Relationships
    clicks: Mapped[list["CampaignClick"]] = relationship(
        back_populates="campaign",
        cascade="all, delete-orphan",
    )


class CampaignClick(Base):
    """
    Anonymous click on a campaign link.

    Holds no personal data: no IP, no user agent. Only aggregated.
    """

    __tablename__ = "campaign_clicks"
    __table_args__ = (
        Index("idx_campaign_clicks_campaign", "campaign_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    campaign_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("campaigns.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(default=utcnow, nullable=False)

    # Relationships
    campaign: Mapped["Campaign"] = relationship(back_populates="clicks")
