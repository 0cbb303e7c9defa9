"""
Tests for the FastAPI endpoints.
"""

import os
import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient

from app.api.app import app
from app.api.routes import get_metadata_fetcher, get_quiz_generator, get_summarizer
from app.api.schems import ErrorResponse
from app.config import config
from app.core.quiz_generator import QuizGenerator
from app.core.summarizer import VideoSummarizer
from app.db.database import get_db
from app.models.schemas import QuizCard, SummaryResult, VideoMetadata
from app.utils.error_handling import MetadataFetchError, SummaryGenerationError

VIDEO_ID = "V3TUEeB0kW0"
SUMMARY = (
    "1. Gradient descent minimizes a loss function step by step.\n"
    "2. The learning rate controls how large each step is.\n"
    "3. Too large a learning rate makes training diverge."
)


@pytest.fixture
def metadata_fetcher():
    fetcher = MagicMock()
    metadata = VideoMetadata(
        video_id=VIDEO_ID,
        title="Gradient Descent",
        thumbnail=f"https://img.youtube.com/vi/{VIDEO_ID}/maxresdefault.jpg",
        description="An intro to optimization",
    )
    fetcher.get_metadata.return_value = metadata
    fetcher.get_metadata_with_fallback.return_value = metadata
    return fetcher


@pytest.fixture
def summarizer():
    summarizer = MagicMock()
    result = SummaryResult(summary=SUMMARY, transcript_available=True)
    summarizer.generate_summary.return_value = result
    summarizer.summarize_with_fallback.return_value = result
    return summarizer


@pytest.fixture
def quiz_generator():
    generator = MagicMock()
    cards = [
        QuizCard(question="What does gradient descent minimize?", options=["Loss", "Data"], correct_answer=0),
        QuizCard(question="What controls step size?", options=["Batch", "Learning rate"], correct_answer=1),
    ]
    generator.generate.return_value = cards
    generator.generate_with_fallback.return_value = cards
    return generator


@pytest.fixture
def client(db_session, metadata_fetcher, summarizer, quiz_generator):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_metadata_fetcher] = lambda: metadata_fetcher
    app.dependency_overrides[get_summarizer] = lambda: summarizer
    app.dependency_overrides[get_quiz_generator] = lambda: quiz_generator
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def project(client):
    response = client.post("/api/projects", json={"youtubeUrl": f"https://youtu.be/{VIDEO_ID}"})
    assert response.status_code == 201
    return response.json()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "Absorbey"


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["firebase_auth"] is False


def test_generate_summary(client, summarizer):
    response = client.post(
        "/api/generate-summary",
        json={"videoTitle": "Gradient Descent", "videoDescription": "An intro", "videoId": VIDEO_ID},
    )

    assert response.status_code == 200
    assert response.json() == {"summary": SUMMARY, "transcriptAvailable": True}
    summarizer.generate_summary.assert_called_once_with("Gradient Descent", "An intro", VIDEO_ID)


def test_generate_summary_error(client, summarizer):
    summarizer.generate_summary.side_effect = SummaryGenerationError("Anthropic API error: overloaded")

    response = client.post("/api/generate-summary", json={"videoTitle": "Gradient Descent"})

    assert response.status_code == 500
    assert response.json() == {"error": "Anthropic API error: overloaded"}


def test_generate_summary_requires_title(client):
    response = client.post("/api/generate-summary", json={"videoDescription": "no title"})
    assert response.status_code == 422


def test_generate_quiz(client, quiz_generator):
    response = client.post("/api/generate-quiz", json={"videoTitle": "Gradient Descent", "summary": SUMMARY})

    assert response.status_code == 200
    cards = response.json()["quizCards"]
    assert len(cards) == 2
    assert cards[1]["correctAnswer"] == 1
    quiz_generator.generate.assert_called_once_with("Gradient Descent", SUMMARY)


def test_video_metadata(client):
    response = client.get(f"/api/video-metadata/{VIDEO_ID}")

    assert response.status_code == 200
    assert response.json()["title"] == "Gradient Descent"


def test_video_metadata_error(client, metadata_fetcher):
    metadata_fetcher.get_metadata.side_effect = MetadataFetchError("oEmbed fetch failed")

    response = client.get(f"/api/video-metadata/{VIDEO_ID}")

    assert response.status_code == 500
    assert response.json() == {"error": "oEmbed fetch failed"}


def test_create_project(project):
    assert project["title"] == "Gradient Descent"
    assert project["videoId"] == VIDEO_ID
    assert project["url"] == f"https://youtu.be/{VIDEO_ID}"
    assert project["userId"] == "anonymous"
    assert [card["id"] for card in project["quizCards"]] == [1, 2]
    assert project["studyProgress"]["quizzesCompleted"] == 0


def test_create_project_invalid_url(client):
    response = client.post("/api/projects", json={"youtubeUrl": "https://vimeo.com/12345"})

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid YouTube URL"}


def test_list_and_get_projects(client, project):
    listed = client.get("/api/projects").json()
    assert [p["id"] for p in listed] == [project["id"]]

    response = client.get(f"/api/projects/{project['id']}")
    assert response.status_code == 200
    assert response.json()["summary"] == SUMMARY


def test_get_missing_project(client):
    response = client.get("/api/projects/missing")
    assert response.status_code == 404
    assert response.json()["detail"] == "Project not found"


def test_update_project(client, project):
    response = client.patch(f"/api/projects/{project['id']}", json={"title": "Renamed"})

    assert response.status_code == 200
    assert response.json()["title"] == "Renamed"
    assert response.json()["summary"] == SUMMARY


def test_delete_project(client, project):
    assert client.delete(f"/api/projects/{project['id']}").status_code == 204
    assert client.get(f"/api/projects/{project['id']}").status_code == 404
    assert client.delete(f"/api/projects/{project['id']}").status_code == 404


def test_save_quiz_attempt(client, project):
    response = client.post(
        f"/api/projects/{project['id']}/quiz-attempts",
        json={"score": 1, "totalQuestions": 2, "answers": [], "timeSpent": 12},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["quizAttempts"][0]["percentage"] == 50
    assert data["studyProgress"]["quizzesCompleted"] == 1
    assert data["studyProgress"]["averageScore"] == 50


def test_save_quiz_attempt_rejects_bad_score(client, project):
    response = client.post(
        f"/api/projects/{project['id']}/quiz-attempts",
        json={"score": 3, "totalQuestions": 2},
    )
    assert response.status_code == 422


def test_flashcard_note_and_summary_cards(client, project):
    response = client.put(f"/api/projects/{project['id']}/flashcard-notes/1", json={"note": "remember this"})
    assert response.json()["flashcardNotes"] == {"1": "remember this"}

    client.post(f"/api/projects/{project['id']}/summary-cards/0/viewed")
    cards = client.get(f"/api/projects/{project['id']}/summary-cards").json()

    assert [card["id"] for card in cards["cards"]] == [0, 1]
    assert cards["cards"][0]["points"][0] == "Gradient descent minimizes a loss function step by step."
    assert cards["viewed"] == [0]


@patch.dict(os.environ, {"ANTHROPIC_API_KEY": "", "VITE_ANTHROPIC_API_KEY": ""})
def test_create_project_without_api_key_uses_fallbacks(client):
    transcript_fetcher = MagicMock()
    transcript_fetcher.get_transcript_text.return_value = None
    app.dependency_overrides[get_summarizer] = lambda: VideoSummarizer(transcript_fetcher=transcript_fetcher)
    app.dependency_overrides[get_quiz_generator] = lambda: QuizGenerator()

    response = client.post("/api/projects", json={"youtubeUrl": f"https://youtu.be/{VIDEO_ID}"})

    assert response.status_code == 201
    data = response.json()
    assert data["summary"].startswith('Key Points about "Gradient Descent":')
    assert "requires a configured Anthropic API key" in data["summary"]
    assert [card["id"] for card in data["quizCards"]] == [1, 2, 3, 4, 5]


@patch.dict(os.environ, {"ANTHROPIC_API_KEY": "", "VITE_ANTHROPIC_API_KEY": ""})
def test_proxy_endpoints_without_api_key_return_error_body(client):
    app.dependency_overrides[get_summarizer] = lambda: VideoSummarizer(transcript_fetcher=MagicMock())
    app.dependency_overrides[get_quiz_generator] = lambda: QuizGenerator()

    summary = client.post("/api/generate-summary", json={"videoTitle": "Gradient Descent"})
    quiz = client.post("/api/generate-quiz", json={"videoTitle": "Gradient Descent", "summary": SUMMARY})

    for response in (summary, quiz):
        assert response.status_code == 500
        body = ErrorResponse.model_validate(response.json())
        assert body.error == "Anthropic API key is not configured"
        assert set(response.json()) == {"error"}


@pytest.fixture
def firebase_enabled(monkeypatch):
    """Configure Firebase without touching the real Admin SDK app."""
    monkeypatch.setattr(config, "FIREBASE_SERVICE_ACCOUNT_JSON", '{"type": "service_account"}')
    with patch("app.api.auth.init_firebase_admin", return_value=True):
        yield


def test_auth_missing_header(client, firebase_enabled):
    response = client.get("/api/projects")

    assert response.status_code == 401
    assert response.json()["detail"] == "Missing Authorization header"


def test_auth_rejects_non_bearer_header(client, firebase_enabled):
    response = client.get("/api/projects", headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


def test_auth_rejects_invalid_token(client, firebase_enabled):
    with patch("app.api.auth.fb_auth.verify_id_token", side_effect=ValueError("bad token")):
        response = client.get("/api/projects", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid authentication token"


def test_auth_scopes_projects_to_token_uid(client, firebase_enabled):
    def verify(token):
        return {"uid": {"token-u1": "u1", "token-u2": "u2"}[token]}

    with patch("app.api.auth.fb_auth.verify_id_token", side_effect=verify):
        created = client.post(
            "/api/projects",
            json={"youtubeUrl": f"https://youtu.be/{VIDEO_ID}"},
            headers={"Authorization": "Bearer token-u1"},
        ).json()
        own = client.get("/api/projects", headers={"Authorization": "Bearer token-u1"}).json()
        other = client.get("/api/projects", headers={"Authorization": "Bearer token-u2"}).json()
        other_get = client.get(f"/api/projects/{created['id']}", headers={"Authorization": "Bearer token-u2"})

    assert created["userId"] == "u1"
    assert [p["id"] for p in own] == [created["id"]]
    assert other == []
    assert other_get.status_code == 404
