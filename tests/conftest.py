import pytest

from linkup.db.connection import run_migrations
from linkup.models.analysis import ExtractedContent, Heading
from linkup.repositories.bookmark_repository import BookmarkRepository

ARTICLE_TEXT = (
    "Python tutorial: learn python testing with pytest. "
    "Python makes testing simple and fun."
)


@pytest.fixture
def db_path(tmp_path):
    path = str(tmp_path / "linkup.db")
    run_migrations(path)
    return path


@pytest.fixture
def repository(db_path):
    return BookmarkRepository(db_path)


@pytest.fixture
def extracted_page():
    return ExtractedContent(
        title="Pytest Guide",
        description="Learn pytest",
        hero_image_url="https://example.com/hero.png",
        main_text=ARTICLE_TEXT,
        headings=[Heading(level=1, text="Pytest Guide")],
        word_count=len(ARTICLE_TEXT.split()),
    )
