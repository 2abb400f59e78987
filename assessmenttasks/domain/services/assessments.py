from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from assessmenttasks.domain import Assessment
from assessmenttasks.domain.services.errors import PersistenceError
from assessmenttasks.infrastructure.db.models import AssessmentModel

if TYPE_CHECKING:
    from sqlalchemy import Select

logger = structlog.get_logger()


class AssessmentNotFoundError(Exception):
    """Raised when no assessment matches the requested id (and owner, for updates)."""


class AssessmentService:
    """Create, list, update and delete assessment records.

    Fields are stored exactly as received; nothing is validated here.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(
        self,
        *,
        title: Any,
        description: Any,
        due_date: Any,
        owner_id: str | None = None,
    ) -> str:
        record = AssessmentModel(
            title=title,
            description=description,
            due_date=due_date,
            owner_id=owner_id,
        )
        try:
            self.session.add(record)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            await logger.aerror("assessment_create_failed", exc_info=exc)
            raise PersistenceError("Could not store assessment") from exc

        await logger.ainfo("assessment_created", assessment_id=record.id, owner_id=owner_id)
        return record.id

    async def list_all(self) -> list[Assessment]:
        stmt: Select[tuple[AssessmentModel]] = select(AssessmentModel).order_by(
            AssessmentModel.created_at, AssessmentModel.id
        )
        try:
            records = (await self.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as exc:
            await logger.aerror("assessment_list_failed", exc_info=exc)
            raise PersistenceError("Could not read assessments") from exc

        return [_to_domain(record) for record in records]

    async def update(
        self,
        *,
        assessment_id: str,
        requester_id: str | None,
        title: Any,
        description: Any,
        due_date: Any,
    ) -> None:
        """Overwrite the record with ``assessment_id``.

        With a ``requester_id`` only a record owned by that user matches, so
        records without an owner never match.
        """
        stmt = update(AssessmentModel).where(AssessmentModel.id == assessment_id)
        if requester_id is not None:
            stmt = stmt.where(AssessmentModel.owner_id == requester_id)
        stmt = stmt.values(title=title, description=description, due_date=due_date)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            await logger.aerror(
                "assessment_update_failed", assessment_id=assessment_id, exc_info=exc
            )
            raise PersistenceError("Could not update assessment") from exc

        if result.rowcount == 0:
            await logger.awarning(
                "assessment_update_no_match",
                assessment_id=assessment_id,
                requester_id=requester_id,
            )
            raise AssessmentNotFoundError(f"Assessment {assessment_id} not found")

        await logger.ainfo(
            "assessment_updated", assessment_id=assessment_id, requester_id=requester_id
        )

    async def delete(self, *, assessment_id: str) -> None:
        stmt = delete(AssessmentModel).where(AssessmentModel.id == assessment_id)
        try:
            result = await self.session.execute(stmt)
            await self.session.commit()
        except SQLAlchemyError as exc:
            await self.session.rollback()
            await logger.aerror(
                "assessment_delete_failed", assessment_id=assessment_id, exc_info=exc
            )
            raise PersistenceError("Could not delete assessment") from exc

        if result.rowcount == 0:
            raise AssessmentNotFoundError(f"Assessment {assessment_id} not found")

        await logger.ainfo("assessment_deleted", assessment_id=assessment_id)


def _to_domain(record: AssessmentModel) -> Assessment:
    return Assessment(
        id=record.id,
        title=record.title,
        description=record.description,
        due_date=record.due_date,
        owner_id=record.owner_id,
    )
