"""Authentication-related Pydantic schemas."""

from uuid import UUID

from camp_api.schemas.common import CamelModel


class MeResponse(CamelModel):
    """Response schema for GET /auth/me endpoint."""
    id: UUID
    email: str
    display_name: str
    is_admin: bool
