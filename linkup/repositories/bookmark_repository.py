import json
import logging
import sqlite3
from datetime import datetime

from linkup.db.connection import get_connection
from linkup.models.analysis import AnalysisResult, DuplicateAssessment, utcnow
from linkup.models.bookmark import Bookmark
from linkup.repositories.base import AbstractBookmarkRepository

logger = logging.getLogger(__name__)


def _row_to_bookmark(row: sqlite3.Row) -> Bookmark:
    return Bookmark(
        id=row["id"],
        owner_id=row["owner_id"],
        name=row["name"],
        url=row["url"],
        description=row["description"],
        category=row["category"],
        color_tag=row["color_tag"],
        tags=json.loads(row["tags"]),
        is_favorite=bool(row["is_favorite"]),
        analysis=AnalysisResult.from_dict(json.loads(row["analysis"])),
        duplicate_info=DuplicateAssessment.from_dict(json.loads(row["duplicate_info"])),
        created_at=datetime.fromisoformat(row["created_at"]),
        updated_at=datetime.fromisoformat(row["updated_at"]),
    )


class BookmarkRepository(AbstractBookmarkRepository):
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def insert(self, bookmark: Bookmark) -> Bookmark:
        with get_connection(self._db_path) as conn:
            cursor = conn.execute(
                """
                INSERT INTO bookmarks
                    (owner_id, name, url, description, category, color_tag, tags,
                     is_favorite, analysis, duplicate_info, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    bookmark.owner_id,
                    bookmark.name,
                    bookmark.url,
                    bookmark.description,
                    bookmark.category,
                    bookmark.color_tag,
                    json.dumps(bookmark.tags),
                    int(bookmark.is_favorite),
                    json.dumps(bookmark.analysis.to_dict()),
                    json.dumps(bookmark.duplicate_info.to_dict()),
                    bookmark.created_at.isoformat(),
                    bookmark.updated_at.isoformat(),
                ),
            )
            conn.commit()
            bookmark.id = cursor.lastrowid
        return bookmark

    def find_by_id(self, bookmark_id: int) -> Bookmark | None:
        with get_connection(self._db_path) as conn:
            row = conn.execute(
                "SELECT * FROM bookmarks WHERE id = ?", (bookmark_id,)
            ).fetchone()
        return _row_to_bookmark(row) if row else None

    def find_many(self, owner_id: str) -> list[Bookmark]:
        with get_connection(self._db_path) as conn:
            rows = conn.execute(
                "SELECT * FROM bookmarks WHERE owner_id = ? ORDER BY created_at DESC, id DESC",
                (owner_id,),
            ).fetchall()
        return [_row_to_bookmark(row) for row in rows]

    def update(self, bookmark: Bookmark) -> None:
        bookmark.updated_at = utcnow()
        with get_connection(self._db_path) as conn:
            conn.execute(
                """
                UPDATE bookmarks
                SET name = ?, url = ?, description = ?, category = ?, color_tag = ?,
                    tags = ?, is_favorite = ?, updated_at = ?
                WHERE id = ?
                """,
                (
                    bookmark.name,
                    bookmark.url,
                    bookmark.description,
                    bookmark.category,
                    bookmark.color_tag,
                    json.dumps(bookmark.tags),
                    int(bookmark.is_favorite),
                    bookmark.updated_at.isoformat(),
                    bookmark.id,
                ),
            )
            conn.commit()

    def update_analysis(self, bookmark_id: int, analysis: AnalysisResult) -> None:
        with get_connection(self._db_path) as conn:
            conn.execute(
                "UPDATE bookmarks SET analysis = ?, updated_at = ? WHERE id = ?",
                (json.dumps(analysis.to_dict()), utcnow().isoformat(), bookmark_id),
            )
            conn.commit()

    def set_analysis_status(self, bookmark_id: int, status: str, at: datetime) -> None:
        # json_set keeps the rest of the stored analysis intact
        with get_connection(self._db_path) as conn:
            conn.execute(
                """
                UPDATE bookmarks
                SET analysis = json_set(analysis,
                                        '$.analysis_status', ?,
                                        '$.last_analyzed_at', ?),
                    updated_at = ?
                WHERE id = ?
                """,
                (status, at.isoformat(), utcnow().isoformat(), bookmark_id),
            )
            conn.commit()

    def delete(self, bookmark_id: int) -> bool:
        with get_connection(self._db_path) as conn:
            cursor = conn.execute("DELETE FROM bookmarks WHERE id = ?", (bookmark_id,))
            conn.commit()
        return cursor.rowcount > 0
