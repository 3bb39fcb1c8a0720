"""Repository for Tutor domain entities."""

import logging

from sqlalchemy import String, cast, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from edtech.application.common.pagination import Page
from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.exceptions import TutorAlreadyExistsError
from edtech.domain.matching.value_objects import Subject
from edtech.infrastructure.matching.mappers.tutor_mapper import TutorMapper
from edtech.models import Tutor as TutorORM

logger = logging.getLogger(__name__)


class TutorRepository:
    """SQLAlchemy repository for Tutor aggregates."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = TutorMapper()

    def find_by_id(self, tutor_id: TutorId, for_update: bool = False) -> Tutor | None:
        stmt = select(TutorORM).where(TutorORM.id == tutor_id.value)
        if for_update:
            stmt = stmt.with_for_update()
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_user_id(self, user_id: UserId) -> Tutor | None:
        stmt = select(TutorORM).where(TutorORM.user_id == user_id.value)
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def find_by_subject(self, subject: Subject) -> list[Tutor]:
        """
        Tutors whose subject list contains ``subject``.

        Subjects are stored as a JSON array of quoted enum values, so a
        quoted substring match cannot hit a longer subject name.
        """
        stmt = (
            select(TutorORM)
            .where(cast(TutorORM.subjects, String).like(f'%"{subject.value}"%'))
            .order_by(TutorORM.rating.desc(), TutorORM.created_at)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        tutors = [self.mapper.to_domain(orm) for orm in orm_models]
        return [tutor for tutor in tutors if tutor.teaches(subject)]

    def find_all(self, offset: int, limit: int) -> Page[Tutor]:
        total = self.db.execute(select(func.count()).select_from(TutorORM)).scalar() or 0
        stmt = (
            select(TutorORM)
            .order_by(TutorORM.created_at, TutorORM.id)
            .offset(offset)
            .limit(limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return Page(items=[self.mapper.to_domain(orm) for orm in orm_models], total=total)

    def save(self, tutor: Tutor) -> Tutor:
        """
        Insert or update a tutor keyed by its id.

        Raises:
            TutorAlreadyExistsError: If the user already has another tutor profile
        """
        orm_model = self.db.get(TutorORM, tutor.id.value)
        is_new = orm_model is None
        orm_model = self.mapper.to_orm(tutor, orm_model)
        if is_new:
            self.db.add(orm_model)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            message = str(e.orig).lower()
            if "unique" in message and "user_id" in message:
                raise TutorAlreadyExistsError(tutor.user_id) from e
            raise
        self.db.refresh(orm_model)
        logger.info(f"{'Created' if is_new else 'Updated'} tutor {tutor.id}")
        return self.mapper.to_domain(orm_model)

    def delete(self, tutor_id: TutorId) -> bool:
        orm_model = self.db.get(TutorORM, tutor_id.value)
        if not orm_model:
            return False
        self.db.delete(orm_model)
        self.db.commit()
        return True
