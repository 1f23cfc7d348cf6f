import asyncio
import logging

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request, status

from linkup.schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    BookmarkUpdate,
    DuplicateAssessmentResponse,
    DuplicateCheckRequest,
    StatusResponse,
)
from linkup.services.bookmark_service import BookmarkNotFound, DuplicateBookmark

logger = logging.getLogger(__name__)

router = APIRouter()


def _not_found(exc: BookmarkNotFound) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.post("/bookmarks/check-duplicate", response_model=DuplicateAssessmentResponse)
async def check_duplicate(payload: DuplicateCheckRequest, request: Request) -> DuplicateAssessmentResponse:
    service = request.app.state.bookmark_service
    assessment = await asyncio.to_thread(service.check_duplicate, payload.owner_id, payload.url)
    return DuplicateAssessmentResponse.from_assessment(assessment)


@router.post("/bookmarks", response_model=BookmarkResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    payload: BookmarkCreate,
    request: Request,
    background_tasks: BackgroundTasks,
) -> BookmarkResponse:
    service = request.app.state.bookmark_service
    try:
        bookmark = await asyncio.to_thread(service.create, payload)
    except DuplicateBookmark as exc:
        logger.info("[bookmarks] duplicate blocked | url=%s | %s", payload.url, exc)
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": "Bookmark looks like a duplicate",
                "duplicate": DuplicateAssessmentResponse.from_assessment(exc.assessment).model_dump(),
            },
        )

    background_tasks.add_task(request.app.state.enrichment_service.enrich, bookmark.id, bookmark.url)
    return BookmarkResponse.from_bookmark(bookmark)


@router.get("/bookmarks", response_model=list[BookmarkResponse])
async def list_bookmarks(
    owner_id: str,
    request: Request,
    content_type: str | None = None,
    keyword: str | None = None,
    favorite: bool | None = None,
) -> list[BookmarkResponse]:
    service = request.app.state.bookmark_service
    bookmarks = await asyncio.to_thread(
        service.list_for_owner, owner_id, content_type=content_type, keyword=keyword, favorite=favorite
    )
    return [BookmarkResponse.from_bookmark(b) for b in bookmarks]


@router.get("/bookmarks/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(bookmark_id: int, owner_id: str, request: Request) -> BookmarkResponse:
    try:
        bookmark = await asyncio.to_thread(request.app.state.bookmark_service.get, bookmark_id, owner_id)
    except BookmarkNotFound as exc:
        raise _not_found(exc)
    return BookmarkResponse.from_bookmark(bookmark)


@router.put("/bookmarks/{bookmark_id}", response_model=BookmarkResponse)
async def update_bookmark(
    bookmark_id: int,
    owner_id: str,
    payload: BookmarkUpdate,
    request: Request,
    background_tasks: BackgroundTasks,
) -> BookmarkResponse:
    try:
        bookmark, url_changed = await asyncio.to_thread(
            request.app.state.bookmark_service.update, bookmark_id, owner_id, payload
        )
    except BookmarkNotFound as exc:
        raise _not_found(exc)

    if url_changed:
        background_tasks.add_task(request.app.state.enrichment_service.enrich, bookmark.id, bookmark.url)
    return BookmarkResponse.from_bookmark(bookmark)


@router.patch("/bookmarks/{bookmark_id}/favorite", response_model=BookmarkResponse)
async def toggle_favorite(bookmark_id: int, owner_id: str, request: Request) -> BookmarkResponse:
    try:
        bookmark = await asyncio.to_thread(
            request.app.state.bookmark_service.toggle_favorite, bookmark_id, owner_id
        )
    except BookmarkNotFound as exc:
        raise _not_found(exc)
    return BookmarkResponse.from_bookmark(bookmark)


@router.post(
    "/bookmarks/{bookmark_id}/reanalyze",
    response_model=BookmarkResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def reanalyze_bookmark(
    bookmark_id: int,
    owner_id: str,
    request: Request,
    background_tasks: BackgroundTasks,
) -> BookmarkResponse:
    try:
        bookmark = await asyncio.to_thread(
            request.app.state.bookmark_service.reanalyze, bookmark_id, owner_id
        )
    except BookmarkNotFound as exc:
        raise _not_found(exc)

    background_tasks.add_task(request.app.state.enrichment_service.enrich, bookmark.id, bookmark.url)
    return BookmarkResponse.from_bookmark(bookmark)


@router.delete("/bookmarks/{bookmark_id}", response_model=StatusResponse)
async def delete_bookmark(bookmark_id: int, owner_id: str, request: Request) -> StatusResponse:
    try:
        await asyncio.to_thread(request.app.state.bookmark_service.delete, bookmark_id, owner_id)
    except BookmarkNotFound as exc:
        raise _not_found(exc)
    return StatusResponse(status="deleted", message="Bookmark deleted")
