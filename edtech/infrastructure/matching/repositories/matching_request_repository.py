"""Repository for MatchingRequest domain entities."""

import logging
from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import MatchingRequestId, UserId
from edtech.domain.matching.entities.matching_request import MatchingRequest
from edtech.domain.matching.value_objects import MatchingRequestStatus
from edtech.infrastructure.matching.mappers.matching_request_mapper import MatchingRequestMapper
from edtech.models import MatchingRequest as MatchingRequestORM

logger = logging.getLogger(__name__)


class MatchingRequestRepository:
    """SQLAlchemy repository for MatchingRequest aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = MatchingRequestMapper()

    def find_by_id(
        self, request_id: MatchingRequestId, for_update: bool = False
    ) -> MatchingRequest | None:
        stmt = select(MatchingRequestORM).where(MatchingRequestORM.id == request_id.value)
        if for_update:
            stmt = stmt.with_for_update()
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_student(self, student_id: UserId) -> list[MatchingRequest]:
        """Requests opened by a student, newest first."""
        stmt = (
            select(MatchingRequestORM)
            .where(MatchingRequestORM.student_id == student_id.value)
            .order_by(MatchingRequestORM.created_at.desc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_pending_expired(self, now: datetime) -> list[MatchingRequest]:
        stmt = (
            select(MatchingRequestORM)
            .where(
                MatchingRequestORM.status == MatchingRequestStatus.PENDING.value,
                MatchingRequestORM.expires_at < now,
            )
            .order_by(MatchingRequestORM.expires_at)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_all(self, offset: int, limit: int) -> Page[MatchingRequest]:
        total = (
            self.db.execute(select(func.count()).select_from(MatchingRequestORM)).scalar() or 0
        )
        stmt = (
            select(MatchingRequestORM)
            .order_by(MatchingRequestORM.created_at, MatchingRequestORM.id)
            .offset(offset)
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return Page(items=[self.mapper.to_domain(orm) for orm in orm_models], total=total)

    def save(self, request: MatchingRequest) -> MatchingRequest:
        orm_model = self.db.get(MatchingRequestORM, request.id.value)
        is_new = orm_model is None
        orm_model = self.mapper.to_orm(request, orm_model)
        if is_new:
            self.db.add(orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        logger.info(f"{'Created' if is_new else 'Updated'} matching request {request.id}")
        return self.mapper.to_domain(orm_model)

    def delete(self, request_id: MatchingRequestId) -> bool:
        orm_model = self.db.get(MatchingRequestORM, request_id.value)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
