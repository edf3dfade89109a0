"""
Issue submission form
Holds the values of one report dialog, validates them and builds the issue payload
"""
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple
from loguru import logger
from pydantic import BaseModel

from seerr_issue import overseerr
from seerr_issue.availability import episode_count, initial_season, resolve_seasons
from seerr_issue.catalog import default_option, issue_options, requires_structured_fields
from seerr_issue.constants import IssueType, VideoQuality, MESSAGE_REQUIRED, UPGRADE_REQUIRED
from seerr_issue.exceptions import DataUnavailableError, IssueReportError, SubmissionError, SubmissionInProgressError
from seerr_issue.models import CreatedIssue, IssueCreationPayload, MediaAvailability, SeasonAvailability, SubmissionState
from seerr_issue.utils import episode_label, season_label

ValidationResult = Dict[str, str]
Gateway = Callable[[IssueCreationPayload, Optional[int]], CreatedIssue]


def _validate_freeform(state: SubmissionState) -> ValidationResult:
    if not state.freeform_message.strip():
        return {"message": MESSAGE_REQUIRED}
    return {}


def _validate_upgrade(state: SubmissionState) -> ValidationResult:
    if state.requested_video_quality == VideoQuality.NONE and not state.upgrade_audio_requested:
        return {"requestedVideoQuality": UPGRADE_REQUIRED}
    return {}


def _freeform_message(state: SubmissionState) -> str:
    return state.freeform_message


def _upgrade_message(state: SubmissionState) -> str:
    message = ""
    if state.requested_video_quality != VideoQuality.NONE:
        message += f"Requested Quality: {state.requested_video_quality.value}"
    if state.upgrade_audio_requested:
        if message:
            message += "; "
        message += "Audio upgrade requested"
    return message


# Keyed by requires_structured_fields()
_VALIDATORS = {False: _validate_freeform, True: _validate_upgrade}
_MESSAGE_BUILDERS = {False: _freeform_message, True: _upgrade_message}


def validate(state: SubmissionState) -> ValidationResult:
    """
    Validate form values. Returns a mapping of field name to error message,
    empty when the values can be submitted. Never raises.
    """
    return _VALIDATORS[requires_structured_fields(state.selected_issue_type)](state)


def build_payload(state: SubmissionState, media_id: int) -> IssueCreationPayload:
    """
    Build the issue payload from validated form values.

    The episode only applies to a specific season; with 'all seasons' (0)
    it is always sent as 0, whatever the form still holds.
    """
    structured = requires_structured_fields(state.selected_issue_type)
    return IssueCreationPayload(
        issue_type=state.selected_issue_type,
        message=_MESSAGE_BUILDERS[structured](state),
        media_id=media_id,
        problem_season=state.problem_season,
        problem_episode=state.problem_episode if state.problem_season > 0 else 0,
    )


def season_choices(eligible: Sequence[int]) -> List[Tuple[int, str]]:
    choices = [(0, "All Seasons")] if len(eligible) > 1 else []
    choices.extend((season, season_label(season)) for season in eligible)
    return choices


def episode_choices(seasons: Sequence[SeasonAvailability], problem_season: int) -> List[Tuple[int, str]]:
    if problem_season <= 0:
        return []
    count = episode_count(seasons, problem_season)
    return [(0, "All Episodes")] + [(number, episode_label(number)) for number in range(1, count + 1)]


class FormPhase(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    CLOSED = "closed"


class SubmissionResult(BaseModel):
    success: bool
    issue: Optional[CreatedIssue] = None
    errors: ValidationResult = {}
    error: Optional[str] = None


class SubmissionForm:
    """
    Form state of one report dialog.

    Setters write a single field and nothing else; the season/episode
    constraint and the issue type branch are applied by validate() and
    build_payload() when submitting.
    """

    def __init__(self, media_id: int, eligible_seasons: Sequence[int] = (), state: Optional[SubmissionState] = None):
        self.media_id = media_id
        self.eligible_seasons = list(eligible_seasons)
        if state is None:
            state = SubmissionState(
                selected_issue_type=default_option().issue_type,
                problem_season=initial_season(self.eligible_seasons),
            )
        self.state = state
        self.phase = FormPhase.EDITING

    @property
    def season_locked(self) -> bool:
        return len(self.eligible_seasons) == 1

    def set_issue_type(self, issue_type: IssueType):
        self.state.selected_issue_type = IssueType(issue_type)

    def set_season(self, season_number: int):
        self.state.problem_season = season_number

    def set_episode(self, episode_number: int):
        self.state.problem_episode = episode_number

    def set_message(self, message: str):
        self.state.freeform_message = message

    def set_video_quality(self, quality: VideoQuality):
        self.state.requested_video_quality = VideoQuality(quality)

    def set_upgrade_audio(self, requested: bool):
        self.state.upgrade_audio_requested = requested

    def update(self, values: SubmissionState):
        """Copy submitted field values onto the form. A locked season keeps its preselection."""
        self.set_issue_type(values.selected_issue_type)
        self.set_message(values.freeform_message)
        if not self.season_locked:
            self.set_season(values.problem_season)
        self.set_episode(values.problem_episode)
        self.set_video_quality(values.requested_video_quality)
        self.set_upgrade_audio(values.upgrade_audio_requested)

    def validate(self) -> ValidationResult:
        return validate(self.state)

    def submit(self, gateway: Optional[Gateway] = None, user_id: Optional[int] = None) -> SubmissionResult:
        """
        Validate and send the current values.

        Invalid values never reach the gateway. A failed submission returns
        the form to editing with its values intact; a successful one closes it.
        """
        if self.phase is FormPhase.SUBMITTING:
            raise SubmissionInProgressError()
        if self.phase is FormPhase.CLOSED:
            raise IssueReportError("This form has already been submitted")

        snapshot = self.state.model_copy()
        errors = validate(snapshot)
        if errors:
            logger.warning(f"Issue form for media {self.media_id} has errors: {errors}")
            return SubmissionResult(success=False, errors=errors)

        payload = build_payload(snapshot, self.media_id)
        self.phase = FormPhase.SUBMITTING
        try:
            issue = (gateway or overseerr.create_issue)(payload, user_id)
        except SubmissionError as e:
            self.phase = FormPhase.EDITING
            logger.error(f"Something went wrong while submitting the issue for media {self.media_id}: {e.message}")
            return SubmissionResult(success=False, error=e.message)
        except Exception:
            self.phase = FormPhase.EDITING
            raise

        self.phase = FormPhase.CLOSED
        logger.success(f"Issue report {issue.id} for media {self.media_id} submitted successfully")
        return SubmissionResult(success=True, issue=issue)


class ReportDialog:
    """
    One "report an issue" dialog for a movie or TV show.

    Until load() succeeds the dialog is loading: it has no form and all
    controls are disabled.
    """

    def __init__(self, media_type: str, tmdb_id: int, user_id: Optional[int] = None):
        self.media_type = media_type
        self.tmdb_id = tmdb_id
        self.user_id = user_id
        self.media: Optional[MediaAvailability] = None
        self.form: Optional[SubmissionForm] = None
        self.error: Optional[str] = None
        self.closed = False

    @property
    def loading(self) -> bool:
        return self.form is None and not self.closed

    @property
    def controls_enabled(self) -> bool:
        return self.form is not None and not self.closed and self.form.phase is FormPhase.EDITING

    def load(self) -> bool:
        """
        Fetch the title, the viewer's permissions and the 4K setting, then
        start a fresh form. Returns False and stays loading when any of them
        cannot be fetched.
        """
        try:
            media = overseerr.get_media_availability(self.media_type, self.tmdb_id, self.user_id)
            permissions = overseerr.get_user_permissions(self.user_id)
            series_4k_enabled = overseerr.get_series_4k_enabled()
        except DataUnavailableError as e:
            logger.warning(f"Report dialog for {self.media_type} {self.tmdb_id} unavailable: {e.message}")
            self.error = e.message
            return False

        eligible = resolve_seasons(media.seasons, permissions, series_4k_enabled) if self.media_type == 'tv' else []
        self.media = media
        self.form = SubmissionForm(media.media_id, eligible)
        self.error = None
        return True

    def season_choices(self) -> List[Tuple[int, str]]:
        if self.form is None or self.media_type != 'tv':
            return []
        return season_choices(self.form.eligible_seasons)

    def episode_choices(self) -> List[Tuple[int, str]]:
        if self.form is None or self.media_type != 'tv':
            return []
        return episode_choices(self.media.seasons, self.form.state.problem_season)

    def check_selection(self, values: SubmissionState) -> ValidationResult:
        """
        Check a submitted season and episode against the choices this dialog
        offers. A locked season is not checked because the posted value is
        ignored in favour of the preselected one.
        """
        errors = {}
        season = self.form.state.problem_season if self.form.season_locked else values.problem_season
        if not self.form.season_locked and season != 0 and season not in self.form.eligible_seasons:
            errors["problemSeason"] = f"{season_label(season)} is not available to report against"
        elif season > 0 and values.problem_episode > episode_count(self.media.seasons, season):
            errors["problemEpisode"] = f"{episode_label(values.problem_episode)} is not part of {season_label(season)}"
        return errors

    def apply(self, values: SubmissionState) -> ValidationResult:
        """Copy submitted values onto the form unless the season or episode was never offered."""
        if self.form is None:
            raise DataUnavailableError("Media data is not loaded", self.media_type, self.tmdb_id)
        errors = self.check_selection(values)
        if errors:
            logger.warning(f"Rejected selection for {self.media_type} {self.tmdb_id}: {errors}")
            return errors
        self.form.update(values)
        return {}

    def options(self) -> dict:
        """Everything needed to render the dialog."""
        if self.form is None:
            return {"loading": self.loading, "closed": self.closed, "controlsEnabled": False, "error": self.error}
        return {
            "loading": False,
            "closed": self.closed,
            "controlsEnabled": self.controls_enabled,
            "mediaId": self.media.media_id,
            "title": self.media.title,
            "issueOptions": [
                {"issueType": int(option.issue_type), "label": option.label,
                 "structured": requires_structured_fields(option.issue_type)}
                for option in issue_options()
            ],
            "seasons": [{"value": value, "label": label} for value, label in self.season_choices()],
            "episodes": [{"value": value, "label": label} for value, label in self.episode_choices()],
            "seasonLocked": self.form.season_locked,
            "videoQualities": [quality.value for quality in VideoQuality if quality != VideoQuality.NONE],
            "values": self.form.state.model_dump(mode='json', by_alias=True),
        }

    def submit(self, gateway: Optional[Gateway] = None) -> SubmissionResult:
        if self.closed:
            raise IssueReportError("This dialog is closed")
        if self.form is None:
            raise DataUnavailableError("Media data is not loaded", self.media_type, self.tmdb_id)
        result = self.form.submit(gateway, self.user_id)
        if result.success:
            self.form = None
            self.closed = True
        return result

    def cancel(self):
        self.form = None
        self.closed = True
