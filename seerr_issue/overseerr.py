"""
Overseerr integration module
Handles interaction with the Overseerr API
"""
import json
import requests
from typing import Dict, Optional
from loguru import logger
from pydantic import ValidationError

from seerr_issue import config
from seerr_issue.exceptions import DataUnavailableError, SubmissionError
from seerr_issue.models import CreatedIssue, IssueCreationPayload, MediaAvailability

MEDIA_TYPES = ('movie', 'tv')


def _headers(user_id: Optional[int] = None) -> Dict[str, str]:
    headers = {
        "X-Api-Key": config.OVERSEERR_API_KEY,
        "Content-Type": "application/json"
    }
    if user_id is not None:
        headers["X-Api-User"] = str(user_id)
    return headers


def _get_json(path: str, user_id: Optional[int] = None) -> dict:
    """
    GET an Overseerr API path and return the decoded body

    Raises:
        DataUnavailableError: On network errors, non-200 responses or invalid JSON
    """
    url = f"{config.OVERSEERR_API_BASE_URL}{path}"

    try:
        response = requests.get(url, headers=_headers(user_id), timeout=config.REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.error(f"Error fetching {path} from Overseerr: {e}")
        raise DataUnavailableError(f"Could not reach Overseerr: {e}") from e

    if response.status_code != 200:
        logger.error(f"Failed to fetch {path} from Overseerr: {response.status_code}")
        raise DataUnavailableError(f"Overseerr returned {response.status_code} for {path}")

    try:
        return response.json()
    except (json.JSONDecodeError, ValueError) as e:
        logger.error(f"Failed to decode JSON response for {path}: {e}")
        raise DataUnavailableError(f"Overseerr returned invalid JSON for {path}") from e


def get_media_availability(media_type: str, tmdb_id: int, user_id: Optional[int] = None) -> MediaAvailability:
    """
    Fetch a movie or TV show from Overseerr with its per-season availability

    Args:
        media_type (str): 'movie' or 'tv'
        tmdb_id (int): TMDb ID of the title
        user_id (Optional[int]): Overseerr user to act as

    Returns:
        MediaAvailability: Media ID, title and seasons of the title

    Raises:
        DataUnavailableError: If the title cannot be fetched or has no media record yet
    """
    if media_type not in MEDIA_TYPES:
        raise ValueError(f"Unsupported media type: {media_type}")

    try:
        details = _get_json(f"/{media_type}/{tmdb_id}", user_id)
    except DataUnavailableError as e:
        e.media_type, e.tmdb_id = media_type, tmdb_id
        raise

    try:
        media = MediaAvailability.from_details(media_type, details)
    except (KeyError, TypeError, ValidationError) as e:
        logger.error(f"Unexpected {media_type} details for TMDB ID {tmdb_id}: {e}")
        raise DataUnavailableError(f"Unexpected {media_type} details from Overseerr", media_type, tmdb_id) from e

    if media.media_id is None:
        # Titles nobody requested yet have no media record to attach an issue to
        logger.error(f"No media record found for {media_type} with TMDB ID {tmdb_id}")
        raise DataUnavailableError(f"No media record for {media_type} {tmdb_id}", media_type, tmdb_id)

    logger.info(f"Fetched {media_type} '{media.title}' (media_id {media.media_id}) with {len(media.seasons)} season(s)")
    return media


def get_user_permissions(user_id: Optional[int] = None) -> int:
    """
    Fetch the permission bitmask of a user, or of the API key owner when no user is given
    """
    path = f"/user/{user_id}" if user_id is not None else "/auth/me"
    data = _get_json(path)

    permissions = data.get('permissions')
    if not isinstance(permissions, int):
        logger.error(f"No permissions found in {path} response")
        raise DataUnavailableError(f"No permissions in {path} response")
    return permissions


def get_series_4k_enabled() -> bool:
    """Read the series4kEnabled flag from Overseerr's public settings"""
    data = _get_json("/settings/public")
    return bool(data.get('series4kEnabled', False))


def create_issue(payload: IssueCreationPayload, user_id: Optional[int] = None) -> CreatedIssue:
    """
    Create an issue in Overseerr

    Args:
        payload (IssueCreationPayload): Validated issue payload
        user_id (Optional[int]): Overseerr user the issue is reported by

    Returns:
        CreatedIssue: The created issue, including its ID

    Raises:
        SubmissionError: If the request fails or Overseerr rejects it
    """
    url = f"{config.OVERSEERR_API_BASE_URL}/issue"

    try:
        response = requests.post(url, headers=_headers(user_id), json=payload.to_wire(), timeout=config.REQUEST_TIMEOUT)
    except requests.exceptions.RequestException as e:
        logger.error(f"Failed to create issue for media {payload.media_id}: {str(e)}")
        raise SubmissionError(f"Could not reach Overseerr: {e}") from e

    if response.status_code not in (200, 201):
        logger.error(f"Failed to create issue for media {payload.media_id}: Status code {response.status_code}, Response: {response.text}")
        raise SubmissionError(f"Overseerr returned {response.status_code}", status_code=response.status_code)

    try:
        issue = CreatedIssue.model_validate(response.json())
    except (json.JSONDecodeError, ValueError) as e:
        # pydantic's ValidationError is a ValueError
        logger.error(f"Failed to decode issue response for media {payload.media_id}: {str(e)}")
        raise SubmissionError("Overseerr returned an unexpected response", status_code=response.status_code) from e

    logger.info(f"Created issue {issue.id} ({issue.issue_type.name}) for media {payload.media_id}")
    return issue


def issue_url(issue_id: int) -> str:
    """Link to the issue detail page in Overseerr"""
    return f"{config.OVERSEERR_BASE}/issues/{issue_id}"
