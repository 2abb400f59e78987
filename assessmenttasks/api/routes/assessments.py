from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from assessmenttasks.api.deps import Caller, get_db_session, require_access
from assessmenttasks.api.errors import ApiError, persistence_failure
from assessmenttasks.api.schemas.assessments import (
    AssessmentCreatedResponse,
    AssessmentItem,
    AssessmentPayload,
    MessageResponse,
)
from assessmenttasks.core.config import Settings, get_settings
from assessmenttasks.domain.services.assessments import (
    AssessmentNotFoundError,
    AssessmentService,
)
from assessmenttasks.domain.services.errors import PersistenceError

router = APIRouter(prefix="/assessments", tags=["Assessments"])


@router.post(
    "",
    response_model=AssessmentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_assessment(
    payload: AssessmentPayload,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(require_access("POST", "/assessments")),
    settings: Settings = Depends(get_settings),
) -> AssessmentCreatedResponse:
    """Create an assessment. No owner is recorded unless owner recording is enabled."""
    owner_id = None
    if settings.record_assessment_owner and caller.user is not None:
        owner_id = caller.user.user_id

    service = AssessmentService(session)
    try:
        assessment_id = await service.create(
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
            owner_id=owner_id,
        )
    except PersistenceError as exc:
        raise persistence_failure("Error creating assessment") from exc

    return AssessmentCreatedResponse(assessment_id=assessment_id)


@router.get("", response_model=list[AssessmentItem])
async def list_assessments(
    session: AsyncSession = Depends(get_db_session),
    _: Caller = Depends(require_access("GET", "/assessments")),
) -> list[AssessmentItem]:
    service = AssessmentService(session)
    try:
        assessments = await service.list_all()
    except PersistenceError as exc:
        raise persistence_failure("Error fetching assessments") from exc

    return [
        AssessmentItem(
            id=item.id,
            title=item.title,
            description=item.description,
            due_date=item.due_date,
            owner_id=item.owner_id,
        )
        for item in assessments
    ]


@router.put("/{assessment_id}", response_model=MessageResponse)
async def update_assessment(
    assessment_id: str,
    payload: AssessmentPayload,
    session: AsyncSession = Depends(get_db_session),
    caller: Caller = Depends(require_access("PUT", "/assessments/{assessment_id}")),
) -> MessageResponse:
    service = AssessmentService(session)
    try:
        await service.update(
            assessment_id=assessment_id,
            requester_id=caller.owner_scope,
            title=payload.title,
            description=payload.description,
            due_date=payload.due_date,
        )
    except AssessmentNotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Assessment not found") from exc
    except PersistenceError as exc:
        raise persistence_failure("Error updating assessment") from exc

    return MessageResponse(message="Assessment updated successfully")


@router.delete("/{assessment_id}", response_model=MessageResponse)
async def delete_assessment(
    assessment_id: str,
    session: AsyncSession = Depends(get_db_session),
    _: Caller = Depends(require_access("DELETE", "/assessments/{assessment_id}")),
) -> MessageResponse:
    service = AssessmentService(session)
    try:
        await service.delete(assessment_id=assessment_id)
    except AssessmentNotFoundError as exc:
        raise ApiError(status.HTTP_404_NOT_FOUND, "Assessment not found") from exc
    except PersistenceError as exc:
        raise persistence_failure("Error deleting assessment") from exc

    return MessageResponse(message="Assessment deleted successfully")
