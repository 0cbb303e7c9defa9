"""
API client for communicating with the Absorbey backend.
"""

import requests
from typing import Dict, List, Any, Optional
from urllib.parse import urljoin

from app.config import config
from app.utils.helpers import extract_video_id

FIREBASE_SIGN_UP_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signUp"


class ApiClient:
    """Client for interacting with the Absorbey API."""

    def __init__(self, base_url: str = config.PUBLIC_URL, id_token: Optional[str] = None, timeout: int = 300):
        """
        Initialize the API client.

        Args:
            base_url: Base URL of the API
            id_token: Firebase ID token sent as a bearer token
            timeout: Request timeout in seconds; project creation waits on the LLM
        """
        self.base_url = base_url
        self.api_base = urljoin(base_url, "/api/")
        self.id_token = id_token
        self.timeout = timeout

    def _url(self, endpoint: str) -> str:
        """Get the full URL for an endpoint."""
        return urljoin(self.api_base, endpoint)

    def _headers(self) -> Dict[str, str]:
        if self.id_token:
            return {"Authorization": f"Bearer {self.id_token}"}
        return {}

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        response = requests.request(
            method,
            self._url(endpoint),
            headers=self._headers(),
            timeout=self.timeout,
            **kwargs,
        )
        response.raise_for_status()
        return response

    # Authentication
    def sign_in_anonymously(self, firebase_api_key: str = config.FIREBASE_WEB_API_KEY) -> Dict[str, Any]:
        """
        Create an anonymous Firebase user and keep its ID token.

        Returns:
            Firebase response with idToken, refreshToken and localId
        """
        response = requests.post(
            FIREBASE_SIGN_UP_URL,
            params={"key": firebase_api_key},
            json={"returnSecureToken": True},
            timeout=30,
        )
        response.raise_for_status()
        data = response.json()
        self.id_token = data["idToken"]
        return data

    def sign_out(self):
        self.id_token = None

    # Proxy endpoints
    def get_video_metadata(self, video_id: str) -> Dict[str, Any]:
        """Fetch title, thumbnail and description for a video."""
        return self._request("GET", f"video-metadata/{video_id}").json()

    def generate_summary(self, video_title: str, video_description: str = "", video_id: Optional[str] = None) -> str:
        """Generate a summary for a video."""
        response = self._request(
            "POST",
            "generate-summary",
            json={"videoTitle": video_title, "videoDescription": video_description, "videoId": video_id},
        )
        return response.json()["summary"]

    def generate_quiz(self, video_title: str, summary: str) -> List[Dict[str, Any]]:
        """Generate quiz cards for a summary."""
        response = self._request("POST", "generate-quiz", json={"videoTitle": video_title, "summary": summary})
        return response.json()["quizCards"]

    # Projects
    def list_projects(self) -> List[Dict[str, Any]]:
        return self._request("GET", "projects").json()

    def get_project(self, project_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a project by ID.

        Returns:
            Project dictionary or None if it does not exist
        """
        try:
            return self._request("GET", f"projects/{project_id}").json()
        except requests.HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                return None
            raise

    def create_project(self, youtube_url: str) -> Dict[str, Any]:
        """
        Create a project from a YouTube link.

        Raises:
            ValueError: If the URL is not a YouTube video link
        """
        if not extract_video_id(youtube_url):
            raise ValueError("Invalid YouTube URL")
        return self._request("POST", "projects", json={"youtubeUrl": youtube_url}).json()

    def update_project(self, project_id: str, updates: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PATCH", f"projects/{project_id}", json=updates).json()

    def delete_project(self, project_id: str) -> None:
        self._request("DELETE", f"projects/{project_id}")

    def save_quiz_attempt(
        self,
        project_id: str,
        score: int,
        total_questions: int,
        answers: List[Dict[str, Any]],
        time_spent: Optional[int] = None,
    ) -> Dict[str, Any]:
        """Record a finished quiz run."""
        payload = {"score": score, "totalQuestions": total_questions, "answers": answers}
        if time_spent is not None:
            payload["timeSpent"] = time_spent
        return self._request("POST", f"projects/{project_id}/quiz-attempts", json=payload).json()

    def save_flashcard_note(self, project_id: str, card_index: int, note: str) -> Dict[str, Any]:
        return self._request("PUT", f"projects/{project_id}/flashcard-notes/{card_index}", json={"note": note}).json()

    def mark_summary_card_viewed(self, project_id: str, card_index: int) -> Dict[str, Any]:
        return self._request("POST", f"projects/{project_id}/summary-cards/{card_index}/viewed").json()

    def get_summary_cards(self, project_id: str) -> Dict[str, Any]:
        return self._request("GET", f"projects/{project_id}/summary-cards").json()
