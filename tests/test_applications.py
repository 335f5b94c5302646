"""
Tests for the public application intake.

Covers POST /applications: intake + recruit creation, campaign referral
tagging, validation, rate limiting, and that a failed write leaves nothing
behind.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from camp_api.db.models import Recruit, RecruitIntake
from camp_api.services import application_service
from camp_api.services.application_service import (
    build_intake_note,
    derive_display_name,
)


def _counts(db: Session) -> tuple[int, int]:
    return db.query(RecruitIntake).count(), db.query(Recruit).count()


# =============================================================================
# Submission
# =============================================================================


@pytest.mark.asyncio
async def test_application_creates_intake_and_recruit(client: AsyncClient, db: Session):
    response = await client.post(
        "/applications",
        json={
            "namePronouns": "Jazz Hands / she/her",
            "email": "j@x.io",
            "socialHandle": "@jazz",
            "enthusiasm": "Very",
            "approachStrangers": 4,
            "caseRef": "CF-221",
        },
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True}

    intake = db.query(RecruitIntake).one()
    assert intake.name_pronouns == "Jazz Hands / she/her"
    assert intake.email == "j@x.io"
    assert intake.enthusiasm == "Very"
    assert intake.approach_strangers == "4"

    recruit = db.query(Recruit).one()
    assert recruit.name == "Jazz Hands"
    assert recruit.email == "j@x.io"
    assert recruit.social_handle == "@jazz"
    assert recruit.stage == "prospect"
    assert recruit.confidence == 50
    assert recruit.intake_id == intake.id
    assert recruit.referred_by_id == "CF-221"
    assert recruit.notes == "Applied via intake form [ref: CF-221]"


@pytest.mark.asyncio
async def test_application_without_case_ref(client: AsyncClient, db: Session):
    response = await client.post(
        "/applications",
        json={"namePronouns": "Sam, they/them", "caseRef": "   "},
    )

    assert response.status_code == 200
    recruit = db.query(Recruit).one()
    assert recruit.name == "Sam"
    assert recruit.referred_by_id is None
    assert recruit.notes == "Applied via intake form"


@pytest.mark.asyncio
async def test_blank_answers_stored_as_null(client: AsyncClient, db: Session):
    response = await client.post(
        "/applications",
        json={"namePronouns": "Robin", "email": "", "anythingElse": "  "},
    )

    assert response.status_code == 200
    intake = db.query(RecruitIntake).one()
    assert intake.email is None
    assert intake.anything_else is None


@pytest.mark.asyncio
async def test_unknown_fields_are_ignored(client: AsyncClient, db: Session):
    response = await client.post(
        "/applications",
        json={"namePronouns": "Robin", "stage": "ready", "confidence": 100},
    )

    assert response.status_code == 200
    recruit = db.query(Recruit).one()
    assert recruit.stage == "prospect"
    assert recruit.confidence == 50


# =============================================================================
# Validation and errors
# =============================================================================


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   "])
async def test_missing_name_returns_400_and_writes_nothing(
    client: AsyncClient, db: Session, name
):
    response = await client.post(
        "/applications", json={"namePronouns": name, "email": "a@b.c"}
    )

    assert response.status_code == 400
    assert "error" in response.json()
    assert _counts(db) == (0, 0)


@pytest.mark.asyncio
async def test_non_object_body_returns_400(client: AsyncClient, db: Session):
    response = await client.post("/applications", json=["namePronouns"])

    assert response.status_code == 400
    assert _counts(db) == (0, 0)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"namePronouns": "A" * 300},
        {"namePronouns": "Jazz Hands", "email": "x" * 250 + "@b.com"},
        {"namePronouns": "Jazz Hands", "caseRef": "C" * 65},
    ],
    ids=["name", "email", "case-ref"],
)
async def test_overlong_short_answers_return_400_and_write_nothing(
    client: AsyncClient, db: Session, payload
):
    response = await client.post("/applications", json=payload)

    assert response.status_code == 400
    assert "error" in response.json()
    assert _counts(db) == (0, 0)


@pytest.mark.asyncio
async def test_long_free_text_answers_are_accepted(client: AsyncClient, db: Session):
    response = await client.post(
        "/applications",
        json={
            "namePronouns": "N" * 255,
            "caseRef": "C" * 64,
            "anythingElse": "word " * 2000,
        },
    )

    assert response.status_code == 200
    assert _counts(db) == (1, 1)


@pytest.mark.asyncio
async def test_unexpected_failure_returns_generic_500(
    client: AsyncClient, db: Session, application_limiter, monkeypatch
):
    def boom(*_args, **_kwargs):
        raise RuntimeError("limiter exploded: internal detail")

    monkeypatch.setattr(application_limiter, "check_and_consume", boom)

    response = await client.post("/applications", json={"namePronouns": "Jazz Hands"})

    assert response.status_code == 500
    body = response.json()
    assert set(body) == {"error"}
    assert "internal detail" not in body["error"]
    assert _counts(db) == (0, 0)


@pytest.mark.asyncio
async def test_unexpected_failure_on_invalid_body_returns_generic_500(
    client: AsyncClient, application_limiter, monkeypatch
):
    def boom(*_args, **_kwargs):
        raise RuntimeError("internal detail")

    monkeypatch.setattr(application_limiter, "check_and_consume", boom)

    response = await client.post("/applications", content=b"{not json")

    assert response.status_code == 500
    assert "internal detail" not in response.json()["error"]


@pytest.mark.asyncio
async def test_rate_limit_blocks_sixth_application(client: AsyncClient, db: Session):
    for i in range(5):
        response = await client.post("/applications", json={"namePronouns": f"Person {i}"})
        assert response.status_code == 200

    response = await client.post("/applications", json={"namePronouns": "Person 6"})

    assert response.status_code == 429
    assert "error" in response.json()
    assert _counts(db) == (5, 5)


@pytest.mark.asyncio
async def test_invalid_submissions_count_toward_rate_limit(client: AsyncClient, db: Session):
    for _ in range(5):
        await client.post("/applications", json={"namePronouns": ""})

    response = await client.post("/applications", json={"namePronouns": "Valid Name"})

    assert response.status_code == 429
    assert _counts(db) == (0, 0)


@pytest.mark.asyncio
async def test_failed_recruit_write_rolls_back_intake(
    client: AsyncClient, db: Session, monkeypatch
):
    def fail_build(*_args, **_kwargs):
        raise SQLAlchemyError("insert failed: internal detail")

    monkeypatch.setattr(application_service, "_build_recruit", fail_build)

    response = await client.post("/applications", json={"namePronouns": "Jazz Hands"})

    assert response.status_code == 500
    body = response.json()
    assert "internal detail" not in body["error"]
    assert _counts(db) == (0, 0)


# =============================================================================
# Helpers
# =============================================================================


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("Jazz Hands / she/her", "Jazz Hands"),
        ("Sam, they/them", "Sam"),
        ("  Robin  ", "Robin"),
        ("/they", "/they"),
        ("Alex/he", "Alex"),
    ],
)
def test_derive_display_name(raw, expected):
    assert derive_display_name(raw) == expected


def test_build_intake_note():
    assert build_intake_note("CF-9") == "Applied via intake form [ref: CF-9]"
    assert build_intake_note(None) == "Applied via intake form"
