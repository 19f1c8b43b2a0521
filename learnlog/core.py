from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from learnlog.application.journal.use_cases import LogUseCase, NoteUseCase, ThemeUseCase
from learnlog.config import get_settings
from learnlog.infrastructure.journal.repositories import (
    LogRepository,
    NoteRepository,
    ThemeRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    theme_repository = providers.Factory(ThemeRepository, db=db)
    log_repository = providers.Factory(LogRepository, db=db)
    note_repository = providers.Factory(NoteRepository, db=db)

    # Journal module, application use cases
    theme_use_case = providers.Factory(
        ThemeUseCase,
        theme_repository=theme_repository,
    )
    log_use_case = providers.Factory(
        LogUseCase,
        log_repository=log_repository,
        theme_repository=theme_repository,
    )
    note_use_case = providers.Factory(
        NoteUseCase,
        note_repository=note_repository,
        theme_repository=theme_repository,
        log_repository=log_repository,
        note_zone=settings.provided.note_zone,
    )


# Initialize container
container = Container()
