import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette import status

from learnlog.application.journal.dtos import ThemeListFilters
from learnlog.application.journal.use_cases import ThemeUseCase
from learnlog.core import container
from learnlog.domain.common.exceptions import DomainError
from learnlog.exceptions import InternalServerError, LearnlogError
from learnlog.infrastructure.common.di import inject_use_case
from learnlog.infrastructure.common.error_logging import log_database_error
from learnlog.infrastructure.common.schemas import CursorPageResponse
from learnlog.infrastructure.common.storage_errors import translate_storage_error
from learnlog.infrastructure.identity import CurrentOwnerId
from learnlog.infrastructure.journal.schemas import ThemeResponse
from learnlog.infrastructure.journal.validation import (
    parse_flag,
    validate_limit,
    validate_theme_create,
    validate_theme_patch,
    validate_uuid_param,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/themes", tags=["themes"])


@router.get(
    "",
    response_model=CursorPageResponse[ThemeResponse],
    status_code=status.HTTP_200_OK,
)
def list_themes(
    owner_id: CurrentOwnerId,
    include_completed: Annotated[str | None, Query(alias="includeCompleted")] = None,
    include_archived: Annotated[str | None, Query(alias="includeArchived")] = None,
    limit: Annotated[str | None, Query()] = None,
    cursor: Annotated[str | None, Query()] = None,
    use_case: ThemeUseCase = Depends(inject_use_case(container.theme_use_case)),
) -> CursorPageResponse[ThemeResponse]:
    """
    List the current user's themes, oldest first.

    Completed and archived themes are hidden unless ``includeCompleted=true``
    or ``includeArchived=true`` is passed. Deleted themes are never listed.

    Args:
        include_completed: ``"true"`` to include completed themes
        include_archived: ``"true"`` to include archived themes
        limit: Page size between 1 and 200 (default 50)
        cursor: Opaque cursor returned by the previous page

    Returns:
        ``{items, nextCursor}``
    """
    filters = ThemeListFilters(
        include_completed=parse_flag(include_completed),
        include_archived=parse_flag(include_archived),
    )
    page_size = validate_limit(limit).unwrap()
    try:
        page = use_case.list_themes(owner_id, filters, page_size, cursor)
        return CursorPageResponse[ThemeResponse](
            items=[ThemeResponse.from_domain(theme) for theme in page.items],
            next_cursor=page.next_cursor,
        )
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "GET /themes",
            e,
            filters={
                "include_completed": filters.include_completed,
                "include_archived": filters.include_archived,
            },
            limit=page_size,
            has_cursor=cursor is not None,
        )
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to list themes: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.post(
    "",
    response_model=ThemeResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_theme(
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: ThemeUseCase = Depends(inject_use_case(container.theme_use_case)),
) -> ThemeResponse:
    """
    Create a theme.

    Body: ``{name, goal, shortName?, isCompleted?}``. A blank ``shortName`` is
    stored as null.
    """
    data = validate_theme_create(payload).unwrap()
    try:
        theme = use_case.create_theme(owner_id, data)
        return ThemeResponse.from_domain(theme)
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "POST /themes",
            e,
            has_short_name=data.short_name is not None,
            is_completed=data.is_completed,
        )
        raise translate_storage_error(e, fallback_message="Failed to create theme") from e
    except Exception as e:
        logger.error(f"Failed to create theme: {e!s}", exc_info=True)
        raise InternalServerError("Failed to create theme") from e


@router.get(
    "/{theme_id}",
    response_model=ThemeResponse,
    status_code=status.HTTP_200_OK,
)
def get_theme(
    theme_id: str,
    owner_id: CurrentOwnerId,
    use_case: ThemeUseCase = Depends(inject_use_case(container.theme_use_case)),
) -> ThemeResponse:
    """
    Get a theme by id.

    Missing, foreign and deleted themes all answer 404.
    """
    theme_uuid = validate_uuid_param(theme_id).unwrap()
    try:
        return ThemeResponse.from_domain(use_case.get_theme(owner_id, theme_uuid))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("GET /themes/{id}", e, theme_id=str(theme_uuid))
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to get theme {theme_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.patch(
    "/{theme_id}",
    response_model=ThemeResponse,
    status_code=status.HTTP_200_OK,
)
def update_theme(
    theme_id: str,
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: ThemeUseCase = Depends(inject_use_case(container.theme_use_case)),
) -> ThemeResponse:
    """
    Partially update a theme.

    Body: any of ``{name, goal, shortName, isCompleted}``. Omitted fields are
    kept; ``shortName: null`` clears the short name.
    """
    theme_uuid = validate_uuid_param(theme_id).unwrap()
    patch = validate_theme_patch(payload).unwrap()
    try:
        return ThemeResponse.from_domain(use_case.update_theme(owner_id, theme_uuid, patch))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "PATCH /themes/{id}",
            e,
            theme_id=str(theme_uuid),
            updates={f"has_{name}": True for name in patch.changes()},
        )
        raise translate_storage_error(e, fallback_message="Failed to update theme") from e
    except Exception as e:
        logger.error(f"Failed to update theme {theme_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to update theme") from e


@router.delete(
    "/{theme_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_theme(
    theme_id: str,
    owner_id: CurrentOwnerId,
    use_case: ThemeUseCase = Depends(inject_use_case(container.theme_use_case)),
) -> Response:
    """
    Logically delete a theme.

    Its logs and every note linked to it are deleted in the same transaction.
    Deleting an already deleted theme answers 404.
    """
    theme_uuid = validate_uuid_param(theme_id).unwrap()
    try:
        use_case.delete_theme(owner_id, theme_uuid)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("DELETE /themes/{id}", e, theme_id=str(theme_uuid))
        raise translate_storage_error(e, fallback_message="Failed to delete theme") from e
    except Exception as e:
        logger.error(f"Failed to delete theme {theme_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to delete theme") from e
