from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from edtech.application.common.event_dispatcher import EventDispatcher
from edtech.application.identity.use_cases.change_user_role_use_case import (
    ChangeUserRoleUseCase,
)
from edtech.application.identity.use_cases.change_user_status_use_case import (
    ChangeUserStatusUseCase,
)
from edtech.application.identity.use_cases.create_user_use_case import CreateUserUseCase
from edtech.application.identity.use_cases.login_attempt_use_case import LoginAttemptUseCase
from edtech.application.identity.use_cases.update_user_profile_use_case import (
    UpdateUserProfileUseCase,
)
from edtech.application.identity.use_cases.user_query_use_case import UserQueryUseCase
from edtech.application.matching.use_cases.change_tutor_status_use_case import (
    ChangeTutorStatusUseCase,
)
from edtech.application.matching.use_cases.create_matching_request_use_case import (
    CreateMatchingRequestUseCase,
)
from edtech.application.matching.use_cases.create_tutor_use_case import CreateTutorUseCase
from edtech.application.matching.use_cases.matching_request_query_use_case import (
    MatchingRequestQueryUseCase,
)
from edtech.application.matching.use_cases.matching_request_use_case import (
    MatchingRequestUseCase,
)
from edtech.application.matching.use_cases.tutor_activity_use_case import TutorActivityUseCase
from edtech.application.matching.use_cases.tutor_query_use_case import TutorQueryUseCase
from edtech.application.matching.use_cases.update_tutor_profile_use_case import (
    UpdateTutorProfileUseCase,
)
from edtech.config import get_settings
from edtech.infrastructure.events.dead_letter_stores import SqlDeadLetterStore
from edtech.infrastructure.events.event_sinks import LoggingEventSink, OutboxEventSink
from edtech.infrastructure.identity.repositories.user_repository import UserRepository
from edtech.infrastructure.matching.repositories.matching_request_repository import (
    MatchingRequestRepository,
)
from edtech.infrastructure.matching.repositories.tutor_repository import TutorRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Policies built from settings
    user_policy = settings.provided.user_policy.call()
    matching_policy = settings.provided.matching_policy.call()
    retry_policy = settings.provided.retry_policy.call()

    # Repositories
    user_repository = providers.Factory(UserRepository, db=db)
    tutor_repository = providers.Factory(TutorRepository, db=db)
    matching_request_repository = providers.Factory(MatchingRequestRepository, db=db)

    # Domain event delivery
    event_sink = providers.Selector(
        settings.provided.EVENT_SINK,
        log=providers.Factory(LoggingEventSink),
        outbox=providers.Factory(OutboxEventSink, db=db),
    )
    dead_letter_store = providers.Factory(SqlDeadLetterStore, db=db)
    event_dispatcher = providers.Factory(
        EventDispatcher,
        sink=event_sink,
        dead_letter_store=dead_letter_store,
        retry_policy=retry_policy,
    )

    # Identity module, application use cases
    create_user_use_case = providers.Factory(
        CreateUserUseCase,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
    )
    update_user_profile_use_case = providers.Factory(
        UpdateUserProfileUseCase,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
        policy=user_policy,
    )
    change_user_status_use_case = providers.Factory(
        ChangeUserStatusUseCase,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
    )
    change_user_role_use_case = providers.Factory(
        ChangeUserRoleUseCase,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
        policy=user_policy,
    )
    login_attempt_use_case = providers.Factory(
        LoginAttemptUseCase,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
        policy=user_policy,
    )
    user_query_use_case = providers.Factory(
        UserQueryUseCase,
        user_repository=user_repository,
        policy=user_policy,
    )

    # Matching module, tutor use cases
    create_tutor_use_case = providers.Factory(
        CreateTutorUseCase,
        tutor_repository=tutor_repository,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
    )
    update_tutor_profile_use_case = providers.Factory(
        UpdateTutorProfileUseCase,
        tutor_repository=tutor_repository,
        event_dispatcher=event_dispatcher,
    )
    change_tutor_status_use_case = providers.Factory(
        ChangeTutorStatusUseCase,
        tutor_repository=tutor_repository,
        event_dispatcher=event_dispatcher,
    )
    tutor_activity_use_case = providers.Factory(
        TutorActivityUseCase,
        tutor_repository=tutor_repository,
        event_dispatcher=event_dispatcher,
    )
    tutor_query_use_case = providers.Factory(
        TutorQueryUseCase,
        tutor_repository=tutor_repository,
        user_repository=user_repository,
        policy=user_policy,
    )

    # Matching module, matching request use cases
    create_matching_request_use_case = providers.Factory(
        CreateMatchingRequestUseCase,
        matching_request_repository=matching_request_repository,
        user_repository=user_repository,
        event_dispatcher=event_dispatcher,
        policy=matching_policy,
    )
    matching_request_use_case = providers.Factory(
        MatchingRequestUseCase,
        matching_request_repository=matching_request_repository,
        tutor_repository=tutor_repository,
        event_dispatcher=event_dispatcher,
    )
    matching_request_query_use_case = providers.Factory(
        MatchingRequestQueryUseCase,
        matching_request_repository=matching_request_repository,
        tutor_repository=tutor_repository,
    )


container = Container()
