import logging

from linkup.config import settings
from linkup.models.analysis import AnalysisResult, DuplicateAssessment, utcnow
from linkup.models.bookmark import Bookmark
from linkup.repositories.base import AbstractBookmarkRepository
from linkup.schemas.bookmark import BookmarkCreate, BookmarkUpdate
from linkup.services.similarity import check_duplicates

logger = logging.getLogger(__name__)


class BookmarkNotFound(Exception):
    pass


class DuplicateBookmark(Exception):
    def __init__(self, assessment: DuplicateAssessment) -> None:
        super().__init__(
            f"similar to bookmark {assessment.matched_bookmark_id} "
            f"(score={assessment.similarity_score:.3f})"
        )
        self.assessment = assessment


class BookmarkService:
    """
    Bookmark writes that fire enrichment. Callers schedule
    EnrichmentService.enrich for any bookmark this service leaves pending.
    """

    def __init__(
        self, repository: AbstractBookmarkRepository, duplicate_threshold: float | None = None
    ) -> None:
        self._repository = repository
        self._threshold = (
            duplicate_threshold if duplicate_threshold is not None else settings.DUPLICATE_THRESHOLD
        )

    def get(self, bookmark_id: int, owner_id: str) -> Bookmark:
        """Another owner's bookmark is reported as missing."""
        bookmark = self._repository.find_by_id(bookmark_id)
        if bookmark is None or bookmark.owner_id != owner_id:
            raise BookmarkNotFound(f"bookmark {bookmark_id} not found")
        return bookmark

    def list_for_owner(
        self,
        owner_id: str,
        content_type: str | None = None,
        keyword: str | None = None,
        favorite: bool | None = None,
    ) -> list[Bookmark]:
        bookmarks = self._repository.find_many(owner_id)
        if content_type:
            bookmarks = [b for b in bookmarks if b.analysis.content_type == content_type]
        if keyword:
            needle = keyword.lower()
            bookmarks = [
                b for b in bookmarks
                if needle in b.analysis.keywords
                or needle in b.name.lower()
                or needle in b.description.lower()
                or any(needle in tag.lower() for tag in b.tags)
            ]
        if favorite is not None:
            bookmarks = [b for b in bookmarks if b.is_favorite == favorite]
        return bookmarks

    def check_duplicate(self, owner_id: str, url: str) -> DuplicateAssessment:
        existing = self._repository.find_many(owner_id)
        assessment = check_duplicates(url, existing, threshold=self._threshold)
        logger.info(
            "[duplicates] checked | owner=%s | url=%s | candidates=%d | score=%.3f | duplicate=%s",
            owner_id, url, len(existing), assessment.similarity_score, assessment.is_duplicate,
        )
        return assessment

    def create(self, payload: BookmarkCreate) -> Bookmark:
        """
        Store a new bookmark with a pending analysis.
        Raises DuplicateBookmark when it looks like an existing one, unless
        payload.allow_duplicate is set.
        """
        assessment = self.check_duplicate(payload.owner_id, payload.url)
        if assessment.is_duplicate and not payload.allow_duplicate:
            raise DuplicateBookmark(assessment)

        bookmark = self._repository.insert(
            Bookmark(
                owner_id=payload.owner_id,
                name=payload.name,
                url=payload.url,
                description=payload.description,
                category=payload.category,
                color_tag=payload.color_tag,
                tags=payload.tags,
                is_favorite=payload.is_favorite,
                analysis=AnalysisResult.pending(),
                duplicate_info=assessment,
            )
        )
        logger.info("[bookmarks] created | id=%s | url=%s", bookmark.id, bookmark.url)
        return bookmark

    def update(
        self, bookmark_id: int, owner_id: str, payload: BookmarkUpdate
    ) -> tuple[Bookmark, bool]:
        """Returns (bookmark, url_changed). A changed URL leaves the analysis pending."""
        bookmark = self.get(bookmark_id, owner_id)
        url_changed = bookmark.url != payload.url

        bookmark.name = payload.name
        bookmark.url = payload.url
        bookmark.description = payload.description
        bookmark.category = payload.category
        bookmark.color_tag = payload.color_tag
        bookmark.tags = payload.tags
        bookmark.is_favorite = payload.is_favorite
        self._repository.update(bookmark)

        if url_changed:
            logger.info("[bookmarks] url changed | id=%s | url=%s", bookmark_id, bookmark.url)
            return self.reanalyze(bookmark_id, owner_id), True
        return bookmark, False

    def reanalyze(self, bookmark_id: int, owner_id: str) -> Bookmark:
        """Mark the analysis pending. Previously derived fields stay until the new run lands."""
        self.get(bookmark_id, owner_id)
        self._repository.set_analysis_status(bookmark_id, "pending", utcnow())
        return self.get(bookmark_id, owner_id)

    def toggle_favorite(self, bookmark_id: int, owner_id: str) -> Bookmark:
        bookmark = self.get(bookmark_id, owner_id)
        bookmark.is_favorite = not bookmark.is_favorite
        self._repository.update(bookmark)
        return bookmark

    def delete(self, bookmark_id: int, owner_id: str) -> None:
        self.get(bookmark_id, owner_id)
        if not self._repository.delete(bookmark_id):
            raise BookmarkNotFound(f"bookmark {bookmark_id} not found")
        logger.info("[bookmarks] deleted | id=%s", bookmark_id)
