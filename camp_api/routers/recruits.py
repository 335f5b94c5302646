"""Recruits router - admin pipeline board."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from camp_api.core.deps import get_db, require_admin, require_csrf_header
from camp_api.core.stage_definitions import adjacent_stages, get_default_stage_defs
from camp_api.schemas.common import OkResponse
from camp_api.schemas.recruit import (
    RecruitCreate,
    RecruitDetail,
    RecruitEnvelope,
    RecruitListResponse,
    RecruitMoveStage,
    RecruitRead,
    RecruitUpdate,
    StageDefinition,
    StageListResponse,
)
from camp_api.services import recruit_service
from camp_api.services.recruit_service import (
    RecruitNotFoundError,
    RecruitValidationError,
)


router = APIRouter(
    tags=["recruits"],
    dependencies=[Depends(require_admin)],
)


@router.get("", response_model=RecruitListResponse)
def list_recruits(db: Session = Depends(get_db)):
    """All recruits with their intake answers and assignee."""
    recruits = recruit_service.list_recruits(db)
    return RecruitListResponse(
        recruits=[RecruitDetail.model_validate(r) for r in recruits]
    )


@router.get("/stages", response_model=StageListResponse)
def list_stages():
    """Pipeline stages in board order, with the one-click moves from each."""
    stages = [
        StageDefinition(**stage, moves=adjacent_stages(stage["slug"]))
        for stage in get_default_stage_defs()
    ]
    return StageListResponse(stages=stages)


@router.post("", response_model=RecruitEnvelope)
def create_recruit(
    data: RecruitCreate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Add a recruit by hand."""
    try:
        recruit = recruit_service.create_recruit(db, data)
    except RecruitValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecruitEnvelope(recruit=RecruitRead.model_validate(recruit))


@router.put("", response_model=RecruitEnvelope)
def update_recruit(
    data: RecruitUpdate,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Update whitelisted recruit fields. Unknown fields are ignored."""
    try:
        recruit = recruit_service.update_recruit(db, data)
    except RecruitNotFoundError:
        raise HTTPException(status_code=404, detail="Recruit not found")
    except RecruitValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecruitEnvelope(recruit=RecruitRead.model_validate(recruit))


@router.post("/move-stage", response_model=RecruitEnvelope)
def move_recruit_stage(
    data: RecruitMoveStage,
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Move a recruit to another stage and stamp today's contact date."""
    try:
        recruit = recruit_service.move_recruit_stage(db, data.id, data.stage)
    except RecruitNotFoundError:
        raise HTTPException(status_code=404, detail="Recruit not found")
    except RecruitValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return RecruitEnvelope(recruit=RecruitRead.model_validate(recruit))


@router.delete("", response_model=OkResponse)
def delete_recruit(
    id: UUID | None = Query(None, description="Recruit ID"),
    db: Session = Depends(get_db),
    _csrf=Depends(require_csrf_header),
):
    """Permanently delete a recruit."""
    if id is None:
        raise HTTPException(status_code=400, detail="Missing id")
    try:
        recruit_service.delete_recruit(db, id)
    except RecruitNotFoundError:
        raise HTTPException(status_code=404, detail="Recruit not found")
    return OkResponse()
