"""Mapper for Tutor ORM ↔ Domain conversion."""

from decimal import Decimal

from edtech.domain.common.value_objects import TutorId, UserId
from edtech.domain.matching.entities.tutor import Tutor
from edtech.domain.matching.value_objects import ExperienceLevel, Subject, TutorStatus
from edtech.infrastructure.common.timestamps import ensure_utc
from edtech.models import Tutor as TutorORM


class TutorMapper:
    """Mapper for Tutor ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: TutorORM) -> Tutor:
        return Tutor.create_with_id(
            id=TutorId(orm_model.id),
            user_id=UserId(orm_model.user_id),
            bio=orm_model.bio,
            subjects=tuple(Subject(value) for value in orm_model.subjects),
            experience_level=ExperienceLevel(orm_model.experience_level),
            hourly_rate=Decimal(orm_model.hourly_rate),
            currency=orm_model.currency,
            languages=tuple(orm_model.languages),
            education=orm_model.education,
            status=TutorStatus(orm_model.status),
            created_at=ensure_utc(orm_model.created_at),
            updated_at=ensure_utc(orm_model.updated_at),
            rating=Decimal(orm_model.rating),
            total_reviews=orm_model.total_reviews,
            completed_sessions=orm_model.completed_sessions,
            cancelled_sessions=orm_model.cancelled_sessions,
        )

    def to_orm(self, domain_entity: Tutor, orm_model: TutorORM | None = None) -> TutorORM:
        if orm_model is None:
            orm_model = TutorORM(id=domain_entity.id.value)
        orm_model.user_id = domain_entity.user_id.value
        orm_model.bio = domain_entity.bio
        orm_model.subjects = [subject.value for subject in domain_entity.subjects]
        orm_model.experience_level = domain_entity.experience_level.value
        orm_model.hourly_rate = domain_entity.hourly_rate
        orm_model.currency = domain_entity.currency
        orm_model.languages = list(domain_entity.languages)
        orm_model.education = domain_entity.education
        orm_model.status = domain_entity.status.value
        orm_model.rating = domain_entity.rating
        orm_model.total_reviews = domain_entity.total_reviews
        orm_model.completed_sessions = domain_entity.completed_sessions
        orm_model.cancelled_sessions = domain_entity.cancelled_sessions
        orm_model.created_at = domain_entity.created_at
        orm_model.updated_at = domain_entity.updated_at
        return orm_model
