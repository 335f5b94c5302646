"""SQLAlchemy ORM models."""

from camp_api.db.models.users import User
from camp_api.db.models.campaigns import Campaign, CampaignClick
from camp_api.db.models.recruits import Recruit, RecruitIntake

__all__ = [
    "Campaign",
    "CampaignClick",
    "Recruit",
    "RecruitIntake",
    "User",
]
