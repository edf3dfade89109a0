"""
Pydantic models for SeerrIssue
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List, Dict, Any

from seerr_issue.constants import IssueType, IssueStatus, MediaStatus, VideoQuality


class SeasonAvailability(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    season_number: int = Field(alias='seasonNumber', ge=0)
    status: MediaStatus = MediaStatus.UNKNOWN
    status4k: MediaStatus = MediaStatus.UNKNOWN
    episode_count: int = Field(default=0, alias='episodeCount', ge=0)

    @field_validator('status', 'status4k', mode='before')
    @classmethod
    def unknown_status(cls, value):
        # Jellyseerr adds statuses Overseerr does not have
        if value is None:
            return MediaStatus.UNKNOWN
        try:
            return MediaStatus(value)
        except ValueError:
            return MediaStatus.UNKNOWN


class MediaAvailability(BaseModel):
    media_id: Optional[int] = None
    media_type: str
    tmdb_id: int
    title: str = ""
    seasons: List[SeasonAvailability] = []

    @classmethod
    def from_details(cls, media_type: str, details: Dict[str, Any]) -> "MediaAvailability":
        """
        Build availability from an Overseerr /movie or /tv details response.

        Season statuses come from mediaInfo.seasons, episode counts from the
        top-level TMDb seasons list.
        """
        media_info = details.get('mediaInfo') or {}
        episode_counts = {
            season.get('seasonNumber'): season.get('episodeCount') or 0
            for season in details.get('seasons') or []
        }
        seasons = [
            SeasonAvailability(
                seasonNumber=season['seasonNumber'],
                status=season.get('status'),
                status4k=season.get('status4k'),
                episodeCount=episode_counts.get(season['seasonNumber'], 0),
            )
            for season in media_info.get('seasons') or []
        ]
        return cls(
            media_id=media_info.get('id'),
            media_type=media_type,
            tmdb_id=details.get('id'),
            title=details.get('title') or details.get('name') or "",
            seasons=seasons,
        )


class IssueTypeOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    issue_type: IssueType
    label: str


class SubmissionState(BaseModel):
    """Values of one report dialog. Field aliases match the form field names."""
    model_config = ConfigDict(populate_by_name=True)

    selected_issue_type: IssueType = Field(default=IssueType.VIDEO, alias='issueType')
    freeform_message: str = Field(default="", alias='message')
    problem_season: int = Field(default=0, alias='problemSeason', ge=0)
    problem_episode: int = Field(default=0, alias='problemEpisode', ge=0)
    requested_video_quality: VideoQuality = Field(default=VideoQuality.NONE, alias='requestedVideoQuality')
    upgrade_audio_requested: bool = Field(default=False, alias='upgradeAudio')

    @field_validator('requested_video_quality', mode='before')
    @classmethod
    def empty_quality(cls, value):
        if value is None:
            return VideoQuality.NONE
        return value


class IssueCreationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    issue_type: IssueType = Field(alias='issueType')
    message: str
    media_id: int = Field(alias='mediaId')
    problem_season: int = Field(default=0, alias='problemSeason')
    problem_episode: int = Field(default=0, alias='problemEpisode')

    def to_wire(self) -> Dict[str, Any]:
        """Request body for POST /api/v1/issue."""
        return self.model_dump(mode='json', by_alias=True)

    @classmethod
    def from_wire(cls, data: Dict[str, Any]) -> "IssueCreationPayload":
        return cls.model_validate(data)


class CreatedIssue(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    issue_type: IssueType = Field(alias='issueType')
    status: IssueStatus = IssueStatus.OPEN
    message: Optional[str] = None
    media_id: Optional[int] = Field(default=None, alias='mediaId')
    problem_season: int = Field(default=0, alias='problemSeason')
    problem_episode: int = Field(default=0, alias='problemEpisode')

    @model_validator(mode='before')
    @classmethod
    def media_from_relation(cls, data):
        # Overseerr returns the media relation instead of a flat mediaId
        if isinstance(data, dict) and data.get('mediaId') is None and isinstance(data.get('media'), dict):
            data = {**data, 'mediaId': data['media'].get('id')}
        return data
