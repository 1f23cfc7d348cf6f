"""Integration tests for the bookmark endpoints and their enrichment triggers."""
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from linkup.config import settings
from linkup.main import create_app
from linkup.models.analysis import ExtractedContent


@pytest.fixture
def client(db_path, monkeypatch):
    monkeypatch.setattr(settings, "DB_PATH", db_path)
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


def _mock_fetch(result: ExtractedContent):
    """Patch ContentFetcher.fetch to return a fixed extraction."""
    return patch(
        "linkup.services.content_fetcher.ContentFetcher.fetch",
        AsyncMock(return_value=result),
    )


OWNER = {"owner_id": "u1"}


def _create(client, **overrides):
    body = {"owner_id": "u1", "name": "Pytest docs", "url": "https://docs.pytest.org"}
    body.update(overrides)
    return client.post("/bookmarks", json=body)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_create_runs_enrichment(client, extracted_page):
    with _mock_fetch(extracted_page) as fetch:
        response = _create(client)
    assert response.status_code == 201
    created = response.json()
    assert created["analysis"]["analysis_status"] == "pending"
    fetch.assert_awaited_once_with("https://docs.pytest.org")

    analysis = client.get(f"/bookmarks/{created['id']}", params=OWNER).json()["analysis"]
    assert analysis["analysis_status"] == "completed"
    assert analysis["content_type"] == "tutorial"
    assert analysis["content_type_icon"] == "📚"
    assert analysis["keywords"][0] == "python"
    assert analysis["read_time_display"] == "1 min read"
    assert analysis["complexity_display"] in {"Easy", "Medium", "Complex"}
    assert analysis["headings"] == [{"level": 1, "text": "Pytest Guide"}]


def test_create_with_unreachable_page_records_failed(client):
    with _mock_fetch(ExtractedContent(fetch_error="timeout")):
        created = _create(client).json()

    analysis = client.get(f"/bookmarks/{created['id']}", params=OWNER).json()["analysis"]
    assert analysis["analysis_status"] == "failed"


def test_duplicate_is_blocked(client, extracted_page):
    with _mock_fetch(extracted_page):
        first = _create(client, name="https://github.com", url="https://github.com").json()
        response = _create(client, name="https://github.com", url="https://github.com")

    assert response.status_code == 409
    duplicate = response.json()["detail"]["duplicate"]
    assert duplicate["is_duplicate"] is True
    assert duplicate["matched_bookmark_id"] == first["id"]
    assert len(client.get("/bookmarks", params={"owner_id": "u1"}).json()) == 1


def test_duplicate_allowed_when_requested(client, extracted_page):
    with _mock_fetch(extracted_page):
        _create(client, name="https://github.com", url="https://github.com")
        response = _create(
            client, name="https://github.com", url="https://github.com", allow_duplicate=True
        )
    assert response.status_code == 201
    assert response.json()["duplicate_info"]["is_duplicate"] is True


def test_check_duplicate_endpoint(client, extracted_page):
    with _mock_fetch(extracted_page):
        first = _create(client, name="GitHub", url="https://github.com").json()

    response = client.post(
        "/bookmarks/check-duplicate", json={"owner_id": "u1", "url": "https://github.com"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["is_duplicate"] is False
    assert data["matched_bookmark_id"] == first["id"]
    assert data["similarity_score"] == pytest.approx(0.6 + 0.4 * (6 / 18))


def test_reanalyze_failure_keeps_previous_fields(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()
    completed = client.get(f"/bookmarks/{created['id']}", params=OWNER).json()["analysis"]

    with _mock_fetch(ExtractedContent(fetch_error="HTTP 503")):
        response = client.post(f"/bookmarks/{created['id']}/reanalyze", params=OWNER)
    assert response.status_code == 202
    assert response.json()["analysis"]["analysis_status"] == "pending"

    analysis = client.get(f"/bookmarks/{created['id']}", params=OWNER).json()["analysis"]
    assert analysis["analysis_status"] == "failed"
    assert analysis["keywords"] == completed["keywords"]


def test_update_with_new_url_reanalyzes(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()

    with _mock_fetch(extracted_page) as fetch:
        response = client.put(
            f"/bookmarks/{created['id']}",
            params=OWNER,
            json={"name": "Pytest", "url": "https://pytest.org/en/latest"},
        )
    assert response.status_code == 200
    fetch.assert_awaited_once_with("https://pytest.org/en/latest")


def test_update_without_url_change_does_not_reanalyze(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()

    with _mock_fetch(extracted_page) as fetch:
        response = client.put(
            f"/bookmarks/{created['id']}",
            params=OWNER,
            json={"name": "Renamed", "url": "https://docs.pytest.org", "category": "study"},
        )
    assert response.status_code == 200
    assert response.json()["category"] == "study"
    fetch.assert_not_awaited()


def test_list_filters_by_content_type(client, extracted_page):
    with _mock_fetch(extracted_page):
        _create(client)
    with _mock_fetch(ExtractedContent(fetch_error="timeout")):
        _create(client, name="Elsewhere", url="https://example.org")

    tutorials = client.get("/bookmarks", params={"owner_id": "u1", "content_type": "tutorial"}).json()
    assert [b["url"] for b in tutorials] == ["https://docs.pytest.org"]


def test_toggle_favorite_and_delete(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()

    path = f"/bookmarks/{created['id']}"
    assert client.patch(f"{path}/favorite", params=OWNER).json()["is_favorite"] is True
    assert client.delete(path, params=OWNER).json()["status"] == "deleted"
    assert client.get(path, params=OWNER).status_code == 404


def test_missing_bookmark_returns_404(client):
    assert client.get("/bookmarks/999", params=OWNER).status_code == 404
    assert client.post("/bookmarks/999/reanalyze", params=OWNER).status_code == 404
    assert client.delete("/bookmarks/999", params=OWNER).status_code == 404


def test_other_owner_cannot_reach_bookmark(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()

    path = f"/bookmarks/{created['id']}"
    stranger = {"owner_id": "u2"}
    with _mock_fetch(extracted_page) as fetch:
        assert client.get(path, params=stranger).status_code == 404
        assert client.put(
            path, params=stranger, json={"name": "Mine", "url": "https://evil.example"}
        ).status_code == 404
        assert client.patch(f"{path}/favorite", params=stranger).status_code == 404
        assert client.post(f"{path}/reanalyze", params=stranger).status_code == 404
        assert client.delete(path, params=stranger).status_code == 404
    fetch.assert_not_awaited()

    kept = client.get(path, params=OWNER).json()
    assert kept["name"] == "Pytest docs"
    assert kept["is_favorite"] is False


def test_owner_is_required_for_bookmark_routes(client, extracted_page):
    with _mock_fetch(extracted_page):
        created = _create(client).json()
    assert client.get(f"/bookmarks/{created['id']}").status_code == 422


def test_rejects_invalid_payload(client):
    assert _create(client, url="not-a-url").status_code == 422
    assert _create(client, name="   ").status_code == 422
    assert _create(client, category="unknown").status_code == 422
