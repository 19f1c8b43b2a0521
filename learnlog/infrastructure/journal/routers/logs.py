import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette import status

from learnlog.application.journal.dtos import LogListFilters
from learnlog.application.journal.use_cases import LogUseCase
from learnlog.core import container
from learnlog.domain.common.exceptions import DomainError
from learnlog.domain.common.value_objects.ids import ThemeId
from learnlog.exceptions import DuplicateLogError, InternalServerError, LearnlogError
from learnlog.infrastructure.common.di import inject_use_case
from learnlog.infrastructure.common.error_logging import log_database_error
from learnlog.infrastructure.common.schemas import CursorPageResponse
from learnlog.infrastructure.common.storage_errors import translate_storage_error
from learnlog.infrastructure.identity import CurrentOwnerId
from learnlog.infrastructure.journal.schemas import LogDetailResponse, LogResponse
from learnlog.infrastructure.journal.validation import (
    validate_date_param,
    validate_limit,
    validate_log_create,
    validate_log_patch,
    validate_uuid_param,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/logs", tags=["logs"])


@router.get(
    "",
    response_model=CursorPageResponse[LogResponse],
    status_code=status.HTTP_200_OK,
)
def list_logs(
    owner_id: CurrentOwnerId,
    theme_id: Annotated[str | None, Query(alias="themeId")] = None,
    start: Annotated[str | None, Query()] = None,
    end: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    cursor: Annotated[str | None, Query()] = None,
    use_case: LogUseCase = Depends(inject_use_case(container.log_use_case)),
) -> CursorPageResponse[LogResponse]:
    """
    List the current user's logs, newest date first.

    Args:
        theme_id: Only logs of this theme
        start: Earliest date, inclusive (YYYY-MM-DD)
        end: Latest date, inclusive (YYYY-MM-DD)
        limit: Page size between 1 and 200 (default 50)
        cursor: Opaque cursor returned by the previous page
    """
    filters = LogListFilters(
        theme_id=(
            ThemeId(validate_uuid_param(theme_id, "themeId").unwrap())
            if theme_id is not None
            else None
        ),
        start=validate_date_param(start, "start").unwrap() if start is not None else None,
        end=validate_date_param(end, "end").unwrap() if end is not None else None,
    )
    page_size = validate_limit(limit).unwrap()
    try:
        page = use_case.list_logs(owner_id, filters, page_size, cursor)
        return CursorPageResponse[LogResponse](
            items=[LogResponse.from_domain(log) for log in page.items],
            next_cursor=page.next_cursor,
        )
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "GET /logs",
            e,
            filters={
                "has_theme_id": filters.theme_id is not None,
                "has_start": filters.start is not None,
                "has_end": filters.end is not None,
            },
            limit=page_size,
            has_cursor=cursor is not None,
        )
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to list logs: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.post(
    "",
    response_model=LogResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_log(
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: LogUseCase = Depends(inject_use_case(container.log_use_case)),
) -> LogResponse:
    """
    Create a log for one of the user's themes.

    Body: ``{themeId, date, summary, details?, tags?}``. Only one live log may
    exist per theme and date; a second one answers 409.
    """
    data = validate_log_create(payload).unwrap()
    try:
        return LogResponse.from_domain(use_case.create_log(owner_id, data))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "POST /logs",
            e,
            theme_id=str(data.theme_id),
            date=data.date.isoformat(),
            has_details=data.details is not None,
            tag_count=len(data.tags),
        )
        raise translate_storage_error(
            e,
            fallback_message="Failed to create log",
            conflict=DuplicateLogError(),
            reference_message="Referenced theme not found",
        ) from e
    except Exception as e:
        logger.error(f"Failed to create log: {e!s}", exc_info=True)
        raise InternalServerError("Failed to create log") from e


@router.get(
    "/{log_id}",
    response_model=LogDetailResponse,
    status_code=status.HTTP_200_OK,
)
def get_log(
    log_id: str,
    owner_id: CurrentOwnerId,
    use_case: LogUseCase = Depends(inject_use_case(container.log_use_case)),
) -> LogDetailResponse:
    """Get a log by id, with the id and name of its theme."""
    log_uuid = validate_uuid_param(log_id).unwrap()
    try:
        return LogDetailResponse.from_details(use_case.get_log(owner_id, log_uuid))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("GET /logs/{id}", e, log_id=str(log_uuid))
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to get log {log_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.patch(
    "/{log_id}",
    response_model=LogResponse,
    status_code=status.HTTP_200_OK,
)
def update_log(
    log_id: str,
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: LogUseCase = Depends(inject_use_case(container.log_use_case)),
) -> LogResponse:
    """
    Partially update a log.

    Body: any of ``{summary, details, tags}``. ``details: null`` clears the
    details; ``tags`` replaces the whole list.
    """
    log_uuid = validate_uuid_param(log_id).unwrap()
    patch = validate_log_patch(payload).unwrap()
    try:
        return LogResponse.from_domain(use_case.update_log(owner_id, log_uuid, patch))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "PATCH /logs/{id}",
            e,
            log_id=str(log_uuid),
            updates={f"has_{name}": True for name in patch.changes()},
        )
        raise translate_storage_error(e, fallback_message="Failed to update log") from e
    except Exception as e:
        logger.error(f"Failed to update log {log_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to update log") from e


@router.delete(
    "/{log_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_log(
    log_id: str,
    owner_id: CurrentOwnerId,
    use_case: LogUseCase = Depends(inject_use_case(container.log_use_case)),
) -> Response:
    """Logically delete a log. Notes referring to it keep their reference."""
    log_uuid = validate_uuid_param(log_id).unwrap()
    try:
        use_case.delete_log(owner_id, log_uuid)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("DELETE /logs/{id}", e, log_id=str(log_uuid))
        raise translate_storage_error(e, fallback_message="Failed to delete log") from e
    except Exception as e:
        logger.error(f"Failed to delete log {log_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to delete log") from e
