"""Shared test fixtures for SeerrIssue."""

import os
import tempfile

# Must be set before seerr_issue.config is imported
os.environ.setdefault("LOG_FILE", os.path.join(tempfile.gettempdir(), "seerrissue-tests.log"))
os.environ.setdefault("OVERSEERR_BASE", "http://overseerr.local")
os.environ.setdefault("OVERSEERR_API_KEY", "test-api-key")

from unittest.mock import MagicMock

import pytest

from seerr_issue.constants import MediaStatus
from seerr_issue.models import CreatedIssue, SeasonAvailability


def make_season(number, status=MediaStatus.UNKNOWN, status4k=MediaStatus.UNKNOWN, episodes=10):
    return SeasonAvailability(
        season_number=number, status=status, status4k=status4k, episode_count=episodes
    )


def make_response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    return response


@pytest.fixture
def tv_details() -> dict:
    """Overseerr /tv/{id} response with extras, one available and one 4K-only season."""
    return {
        "id": 1399,
        "name": "Game of Thrones",
        "seasons": [
            {"seasonNumber": 0, "episodeCount": 3},
            {"seasonNumber": 1, "episodeCount": 10},
            {"seasonNumber": 2, "episodeCount": 8},
        ],
        "mediaInfo": {
            "id": 42,
            "tmdbId": 1399,
            "status": MediaStatus.PARTIALLY_AVAILABLE,
            "seasons": [
                {"seasonNumber": 0, "status": MediaStatus.AVAILABLE, "status4k": MediaStatus.UNKNOWN},
                {"seasonNumber": 1, "status": MediaStatus.PARTIALLY_AVAILABLE, "status4k": MediaStatus.UNKNOWN},
                {"seasonNumber": 2, "status": MediaStatus.PENDING, "status4k": MediaStatus.AVAILABLE},
            ],
        },
    }


@pytest.fixture
def movie_details() -> dict:
    return {
        "id": 603,
        "title": "The Matrix",
        "mediaInfo": {"id": 7, "tmdbId": 603, "status": MediaStatus.AVAILABLE, "seasons": []},
    }


@pytest.fixture
def created_issue() -> CreatedIssue:
    return CreatedIssue(id=15, issue_type=4, message="No sound", media_id=42)
