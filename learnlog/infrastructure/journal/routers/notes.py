import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette import status

from learnlog.application.journal.dtos import NoteListFilters
from learnlog.application.journal.use_cases import NoteUseCase
from learnlog.application.journal.use_cases.note_use_case import REFERENCE_NOT_FOUND_MESSAGE
from learnlog.core import container
from learnlog.domain.common.exceptions import DomainError
from learnlog.domain.common.value_objects.ids import ThemeId
from learnlog.exceptions import InternalServerError, LearnlogError
from learnlog.infrastructure.common.di import inject_use_case
from learnlog.infrastructure.common.error_logging import log_database_error
from learnlog.infrastructure.common.schemas import CursorPageResponse
from learnlog.infrastructure.common.storage_errors import translate_storage_error
from learnlog.infrastructure.identity import CurrentOwnerId
from learnlog.infrastructure.journal.schemas import NoteDetailResponse, NoteResponse
from learnlog.infrastructure.journal.validation import (
    validate_category_param,
    validate_date_param,
    validate_limit,
    validate_note_create,
    validate_note_patch,
    validate_uuid_param,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["notes"])


@router.get(
    "",
    response_model=CursorPageResponse[NoteResponse],
    status_code=status.HTTP_200_OK,
)
def list_notes(
    owner_id: CurrentOwnerId,
    category: Annotated[str | None, Query()] = None,
    theme_id: Annotated[str | None, Query(alias="themeId")] = None,
    start: Annotated[str | None, Query()] = None,
    end: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    cursor: Annotated[str | None, Query()] = None,
    use_case: NoteUseCase = Depends(inject_use_case(container.note_use_case)),
) -> CursorPageResponse[NoteResponse]:
    """
    List the current user's notes, newest note date first.

    Args:
        category: INSIGHT, QUESTION or EMOTION
        theme_id: Only notes linked to this theme
        start: Earliest note date, inclusive (YYYY-MM-DD)
        end: Latest note date, inclusive (YYYY-MM-DD)
        limit: Page size between 1 and 200 (default 50)
        cursor: Opaque cursor returned by the previous page
    """
    filters = NoteListFilters(
        category=validate_category_param(category).unwrap() if category is not None else None,
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
        page = use_case.list_notes(owner_id, filters, page_size, cursor)
        return CursorPageResponse[NoteResponse](
            items=[NoteResponse.from_domain(note) for note in page.items],
            next_cursor=page.next_cursor,
        )
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "GET /notes",
            e,
            filters={
                "category": filters.category.value if filters.category else None,
                "has_theme_id": filters.theme_id is not None,
                "has_start": filters.start is not None,
                "has_end": filters.end is not None,
            },
            limit=page_size,
            has_cursor=cursor is not None,
        )
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to list notes: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_note(
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: NoteUseCase = Depends(inject_use_case(container.note_use_case)),
) -> NoteResponse:
    """
    Create a note dated today in the server's reference timezone.

    Body: ``{category, body, themeIds?, relatedLogId?}``. Every theme and the
    related log must belong to the user.
    """
    data = validate_note_create(payload).unwrap()
    try:
        return NoteResponse.from_domain(use_case.create_note(owner_id, data))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error(
            "POST /notes",
            e,
            data={
                "category": data.category.value,
                "has_body": bool(data.body),
                "theme_ids_count": len(data.theme_ids),
                "has_related_log_id": data.related_log_id is not None,
            },
        )
        raise translate_storage_error(
            e,
            fallback_message="Failed to create note",
            reference_message=REFERENCE_NOT_FOUND_MESSAGE,
        ) from e
    except Exception as e:
        logger.error(f"Failed to create note: {e!s}", exc_info=True)
        raise InternalServerError("Failed to create note") from e


@router.get(
    "/{note_id}",
    response_model=NoteDetailResponse,
    status_code=status.HTTP_200_OK,
)
def get_note(
    note_id: str,
    owner_id: CurrentOwnerId,
    use_case: NoteUseCase = Depends(inject_use_case(container.note_use_case)),
) -> NoteDetailResponse:
    """Get a note by id, with its related log and linked themes."""
    note_uuid = validate_uuid_param(note_id).unwrap()
    try:
        return NoteDetailResponse.from_details(use_case.get_note(owner_id, note_uuid))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("GET /notes/{id}", e, note_id=str(note_uuid))
        raise translate_storage_error(e, fallback_message="Database query failed") from e
    except Exception as e:
        logger.error(f"Failed to get note {note_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Database query failed") from e


@router.patch(
    "/{note_id}",
    response_model=NoteResponse,
    status_code=status.HTTP_200_OK,
)
def update_note(
    note_id: str,
    owner_id: CurrentOwnerId,
    payload: Annotated[Any, Body()] = None,
    use_case: NoteUseCase = Depends(inject_use_case(container.note_use_case)),
) -> NoteResponse:
    """
    Partially update a note.

    Body: any of ``{category, body, themeIds, relatedLogId}``. ``themeIds``
    replaces every theme link. The note date cannot be changed.
    """
    note_uuid = validate_uuid_param(note_id).unwrap()
    patch = validate_note_patch(payload).unwrap()
    try:
        return NoteResponse.from_domain(use_case.update_note(owner_id, note_uuid, patch))
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        changes = patch.changes()
        theme_ids = changes.get("theme_ids")
        log_database_error(
            "PATCH /notes/{id}",
            e,
            note_id=str(note_uuid),
            updates={
                "has_category": "category" in changes,
                "has_body": "body" in changes,
                "has_theme_ids": theme_ids is not None,
                "theme_ids_count": len(theme_ids) if isinstance(theme_ids, list) else 0,
                "has_related_log_id": "related_log_id" in changes,
            },
        )
        raise translate_storage_error(
            e,
            fallback_message="Failed to update note",
            reference_message=REFERENCE_NOT_FOUND_MESSAGE,
        ) from e
    except Exception as e:
        logger.error(f"Failed to update note {note_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to update note") from e


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_note(
    note_id: str,
    owner_id: CurrentOwnerId,
    use_case: NoteUseCase = Depends(inject_use_case(container.note_use_case)),
) -> Response:
    """Logically delete a note."""
    note_uuid = validate_uuid_param(note_id).unwrap()
    try:
        use_case.delete_note(owner_id, note_uuid)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (LearnlogError, DomainError):
        raise
    except SQLAlchemyError as e:
        log_database_error("DELETE /notes/{id}", e, note_id=str(note_uuid))
        raise translate_storage_error(e, fallback_message="Failed to delete note") from e
    except Exception as e:
        logger.error(f"Failed to delete note {note_uuid}: {e!s}", exc_info=True)
        raise InternalServerError("Failed to delete note") from e
