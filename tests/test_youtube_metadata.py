"""
Tests for the YouTube metadata module.
"""

import pytest
import requests
from unittest.mock import MagicMock

from app.core.youtube_metadata import VideoMetadataFetcher
from app.utils.error_handling import MetadataFetchError

WATCH_PAGE = (
    '<html><head><meta name="description" content="Learn how &quot;gradients&quot; work &amp; why.">'
    "</head></html>"
)


def make_response(json_data=None, text="", status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.json.return_value = json_data
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error")
    return response


@pytest.fixture
def mock_session():
    """Fixture for a requests session serving oEmbed and the watch page."""
    session = MagicMock()

    def get(url, params=None, headers=None, timeout=None):
        if "oembed" in url:
            return make_response({"title": "Gradient Descent", "thumbnail_url": "https://i.ytimg.com/vi/x/hq.jpg"})
        return make_response(text=WATCH_PAGE)

    session.get.side_effect = get
    return session


def test_get_metadata(mock_session, test_video_id):
    fetcher = VideoMetadataFetcher(session=mock_session)
    metadata = fetcher.get_metadata(test_video_id)

    assert metadata.video_id == test_video_id
    assert metadata.title == "Gradient Descent"
    assert metadata.thumbnail == "https://i.ytimg.com/vi/x/hq.jpg"
    assert metadata.description == 'Learn how "gradients" work & why.'

    oembed_call = mock_session.get.call_args_list[0]
    assert oembed_call.kwargs["params"] == {
        "url": f"https://www.youtube.com/watch?v={test_video_id}",
        "format": "json",
    }


def test_get_metadata_is_cached(mock_session, test_video_id):
    fetcher = VideoMetadataFetcher(session=mock_session)
    fetcher.get_metadata(test_video_id)
    fetcher.get_metadata(test_video_id)

    assert mock_session.get.call_count == 2


def test_missing_description_uses_title(test_video_id):
    session = MagicMock()
    session.get.side_effect = lambda url, **kwargs: (
        make_response({"title": "Gradient Descent"}) if "oembed" in url else make_response(text="<html></html>")
    )

    metadata = VideoMetadataFetcher(session=session).get_metadata(test_video_id)

    assert metadata.description.startswith('A video titled "Gradient Descent".')
    assert metadata.thumbnail == f"https://img.youtube.com/vi/{test_video_id}/maxresdefault.jpg"


def test_description_request_failure_uses_basic_info(test_video_id):
    def get(url, **kwargs):
        if "oembed" in url:
            return make_response({"title": "Gradient Descent"})
        raise requests.ConnectionError("watch page unreachable")

    session = MagicMock()
    session.get.side_effect = get

    metadata = VideoMetadataFetcher(session=session).get_metadata(test_video_id)

    assert metadata.title == "Gradient Descent"
    assert metadata.description.startswith('A YouTube video titled "Gradient Descent".')


def test_oembed_failure_raises(test_video_id):
    session = MagicMock()
    session.get.return_value = make_response(status_code=404)

    with pytest.raises(MetadataFetchError, match="oEmbed fetch failed"):
        VideoMetadataFetcher(session=session).get_metadata(test_video_id)


def test_get_metadata_with_fallback(test_video_id):
    session = MagicMock()
    session.get.return_value = make_response(status_code=500)

    metadata = VideoMetadataFetcher(session=session).get_metadata_with_fallback(test_video_id)

    assert metadata.title == f"YouTube Video {test_video_id}"
    assert metadata.thumbnail == f"https://img.youtube.com/vi/{test_video_id}/maxresdefault.jpg"
    assert metadata.description == "Unable to fetch video details. The summary will be based on the title only."
