"""Public application form schemas."""

from pydantic import Field, field_validator

from camp_api.schemas.common import CamelModel


# Intake answers in the order the form asks them
INTAKE_ANSWER_FIELDS = (
    "email",
    "social_handle",
    "project_description",
    "enthusiasm",
    "camp_scenario",
    "gentle_reminder",
    "approach_strangers",
    "theatrical",
    "straight_face",
    "being_approached",
    "ideal_balance",
    "burn_experience",
    "camping_setup",
    "skills_resources",
    "dues_questions",
    "anything_else",
)


class ApplicationSubmit(CamelModel):
    """
    Public application form body.

    Everything is optional at the schema level; the name is checked by the
    service so a blank submission gets a plain 400 instead of a schema dump.
    Short answers are capped at their column widths.
    """
    name_pronouns: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    social_handle: str | None = Field(None, max_length=255)
    project_description: str | None = None
    enthusiasm: str | None = None
    camp_scenario: str | None = None
    gentle_reminder: str | None = None
    approach_strangers: str | None = None
    theatrical: str | None = None
    straight_face: str | None = None
    being_approached: str | None = None
    ideal_balance: str | None = None
    burn_experience: str | None = None
    camping_setup: str | None = None
    skills_resources: str | None = None
    dues_questions: str | None = None
    anything_else: str | None = None

    # Referring campaign, carried from the click-tracking cookie
    case_ref: str | None = Field(None, max_length=64)

    @field_validator("*", mode="before")
    @classmethod
    def stringify_numbers(cls, v):
        # Comfort ratings arrive as numbers from some clients
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v
