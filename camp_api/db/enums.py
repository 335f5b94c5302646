"""Enum definitions for application constants."""

from enum import Enum


class RecruitStage(str, Enum):
    """
    Recruit pipeline stages.

    PROSPECT is the only initial stage. DECLINED is terminal in practice,
    but any stage may be written by an admin.
    """

    PROSPECT = "prospect"
    CONTACTED = "contacted"
    INTERESTED = "interested"
    COMMITTED = "committed"
    REGISTERED = "registered"
    READY = "ready"
    DECLINED = "declined"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid stage."""
        return value in cls._value2member_map_


class CampaignChannel(str, Enum):
    """Where a recruitment campaign link is shared."""

    FACEBOOK = "facebook"
    INSTAGRAM = "instagram"
    REDDIT = "reddit"
    FRIEND = "friend"
    TWITTER = "twitter"
    EMAIL = "email"
    FLYER = "flyer"
    OTHER = "other"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid channel."""
        return value in cls._value2member_map_


# Stages that count as a conversion on the campaign dashboard
CONVERTED_STAGES = frozenset(
    {RecruitStage.COMMITTED, RecruitStage.REGISTERED, RecruitStage.READY}
)

DEFAULT_RECRUIT_STAGE = RecruitStage.PROSPECT
DEFAULT_RECRUIT_CONFIDENCE = 50
