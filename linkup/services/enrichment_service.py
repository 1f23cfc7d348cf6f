import asyncio
import logging
from weakref import WeakValueDictionary

from linkup.config import settings
from linkup.models.analysis import AnalysisResult, utcnow
from linkup.repositories.base import AbstractBookmarkRepository
from linkup.services.content_fetcher import ContentFetcher
from linkup.services.insights import degraded_analysis, generate_insights

logger = logging.getLogger(__name__)


class EnrichmentService:
    """
    Runs fetch -> extract -> analyze -> classify -> summarize for one bookmark
    and writes the outcome through the repository.

    Runs for the same bookmark are serialised by a per-bookmark lock, so a
    reanalysis started while another is in flight waits and then overwrites it.
    """

    def __init__(
        self,
        repository: AbstractBookmarkRepository,
        fetcher: ContentFetcher | None = None,
        timeout: float | None = None,
    ) -> None:
        self._repository = repository
        self._fetcher = fetcher or ContentFetcher()
        self._timeout = timeout if timeout is not None else settings.ENRICHMENT_TIMEOUT_SECONDS
        self._locks: WeakValueDictionary[int, asyncio.Lock] = WeakValueDictionary()

    def _lock_for(self, bookmark_id: int) -> asyncio.Lock:
        lock = self._locks.get(bookmark_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[bookmark_id] = lock
        return lock

    async def analyze(self, url: str) -> AnalysisResult:
        extracted = await self._fetcher.fetch(url)
        if extracted.fetch_error is not None:
            logger.info("[enrich] fetch degraded | url=%s | reason=%s", url, extracted.fetch_error)
        return await asyncio.to_thread(generate_insights, extracted)

    async def enrich(self, bookmark_id: int, url: str) -> AnalysisResult:
        """Background task: analyze url and record the result for bookmark_id. Never raises."""
        async with self._lock_for(bookmark_id):
            try:
                result = await asyncio.wait_for(self.analyze(url), timeout=self._timeout)
            except asyncio.TimeoutError:
                logger.error(
                    "[enrich] timed out | bookmark_id=%s | url=%s | timeout=%ss",
                    bookmark_id, url, self._timeout,
                )
                result = degraded_analysis()
            except Exception:
                logger.exception("[enrich] analysis crashed | bookmark_id=%s | url=%s", bookmark_id, url)
                result = degraded_analysis()

            try:
                if result.analysis_status == "completed":
                    await asyncio.to_thread(self._repository.update_analysis, bookmark_id, result)
                else:
                    await asyncio.to_thread(
                        self._repository.set_analysis_status, bookmark_id, "failed", utcnow()
                    )
            except Exception:
                logger.exception("[enrich] failed to persist analysis | bookmark_id=%s", bookmark_id)
                return result

        logger.info(
            "[enrich] %s | bookmark_id=%s | type=%s | words=%d",
            result.analysis_status, bookmark_id, result.content_type, result.word_count,
        )
        return result
