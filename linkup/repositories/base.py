from abc import ABC, abstractmethod
from datetime import datetime

from linkup.models.analysis import AnalysisResult
from linkup.models.bookmark import Bookmark


class AbstractBookmarkRepository(ABC):
    @abstractmethod
    def insert(self, bookmark: Bookmark) -> Bookmark:
        """Persist a new bookmark. Returns it with its assigned id."""

    @abstractmethod
    def find_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with the given id, or None."""

    @abstractmethod
    def find_many(self, owner_id: str) -> list[Bookmark]:
        """Return every bookmark owned by owner_id, newest first."""

    @abstractmethod
    def update(self, bookmark: Bookmark) -> None:
        """Overwrite the user-editable fields of an existing bookmark."""

    @abstractmethod
    def update_analysis(self, bookmark_id: int, analysis: AnalysisResult) -> None:
        """Replace the stored analysis record wholesale."""

    @abstractmethod
    def set_analysis_status(self, bookmark_id: int, status: str, at: datetime) -> None:
        """Change only the analysis status and timestamp; other analysis fields are kept."""

    @abstractmethod
    def delete(self, bookmark_id: int) -> bool:
        """Delete a bookmark. Returns True if a row was removed."""
