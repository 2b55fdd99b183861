"""Notes API endpoints."""

from typing import Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..core.models import Note, User
from ..core.repositories import ContextRepository, TagRepository
from ..core.schemas.common import PageRequest
from ..core.schemas.notes import NoteCreate, NoteListResponse, NoteResponse
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user

router = APIRouter(prefix="/notes", tags=["notes"])


async def _to_response(service: NoteService, note: Note, current_user: User) -> NoteResponse:
    tags = await service.tags_for_note(note)
    mentions = await service.mentions_for_note(note)
    return NoteResponse(
        id=note.id,
        content=note.content,
        author_id=note.author_id,
        author_username=note.author.username if note.author else None,
        context_id=note.context_id,
        fragment_tag=note.fragment_tag.name if note.fragment_tag else None,
        parent_note_id=note.parent_note_id,
        tags=[tag.name for tag in tags],
        mentions=[user.username for user in mentions],
        is_owned=note.is_authored_by(current_user),
        created_at=note.created_at,
        updated_at=note.updated_at,
    )


async def _get_note_or_404(service: NoteService, note_id: UUID) -> Note:
    note = await service.get_note(note_id)
    if note is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Note not found")
    return note


@router.post("/", response_model=NoteResponse, status_code=201)
async def add_note(
    request: NoteCreate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Add a note, optionally in a context and as a reply."""
    note_service = NoteService(session)

    context = None
    if request.context_id is not None:
        context = await ContextRepository(session).get_by_id(request.context_id)
        if context is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Context not found")

    fragment_tag = None
    if request.fragment_tag:
        fragment_tag = await TagRepository(session).find_or_save(request.fragment_tag)

    parent_note = None
    if request.parent_note_id is not None:
        parent_note = await _get_note_or_404(note_service, request.parent_note_id)

    note = await note_service.add_note(
        current_user, request.content, context, fragment_tag, parent_note
    )
    return await _to_response(note_service, note, current_user)


@router.get("/", response_model=NoteListResponse)
async def find_all_notes(
    user_notes: bool = Query(True),
    user_favorites: bool = Query(False),
    all_notes: bool = Query(False, alias="all", description="Every note of the context"),
    context_id: Optional[UUID] = Query(None),
    fragment_tag: Optional[str] = Query(None),
    sort: str = Query("created_at"),
    order: Literal["asc", "desc"] = Query("desc"),
    page_size: Optional[int] = Query(None, ge=1, alias="max"),
    offset: int = Query(0, ge=0),
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Search notes written, bookmarked, or in a context."""
    settings = get_settings()
    note_service = NoteService(session)

    try:
        page = PageRequest(
            sort=sort,
            order=order,
            max=min(page_size or settings.default_page_size, settings.max_page_size),
            offset=offset,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    context = None
    if context_id is not None:
        context = await ContextRepository(session).get_by_id(context_id)
        if context is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Context not found")
    tag = None
    fragment_name = (fragment_tag or "").strip().lstrip("#")
    if fragment_name:
        tag = await TagRepository(session).get_by_name(fragment_name)
        if tag is None and context is not None:
            # no note can carry a tag that does not exist
            return NoteListResponse.create(items=[], total=0, offset=page.offset, max=page.max)

    result = await note_service.find_all_notes(
        current_user, user_notes, user_favorites, all_notes, context, tag, page
    )
    items = [await _to_response(note_service, note, current_user) for note in result.items]
    return NoteListResponse.create(
        items=items, total=result.total_count, offset=page.offset, max=page.max
    )


@router.delete("/{note_id}", status_code=204)
async def delete_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Delete a note written by the current user."""
    note_service = NoteService(session)
    note = await _get_note_or_404(note_service, note_id)
    await note_service.delete_note_by_author(note, current_user)


@router.post("/{note_id}/bookmark", status_code=201)
async def bookmark_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Bookmark a note."""
    note_service = NoteService(session)
    note = await _get_note_or_404(note_service, note_id)
    bookmark = await note_service.bookmark_note_by_user(note, current_user)
    return {"id": str(bookmark.id), "note_id": str(note.id)}


@router.delete("/{note_id}/bookmark", status_code=204)
async def unbookmark_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session)
):
    """Remove the current user's bookmark on a note."""
    note_service = NoteService(session)
    note = await _get_note_or_404(note_service, note_id)
    await note_service.unbookmark_note_by_user(note, current_user)
