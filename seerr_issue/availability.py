"""
Availability resolver
Works out which seasons of a title a viewer may report an issue against
"""
from typing import Iterable, List, Sequence

from seerr_issue.constants import MediaStatus, Permission, REPORTABLE_STATUSES, REPORT_4K_PERMISSIONS
from seerr_issue.models import SeasonAvailability


def has_any_permission(permissions: int, required: Iterable[Permission]) -> bool:
    """
    Check a viewer's permission bitmask against any of the required permissions.
    Admins hold every permission.
    """
    granted = int(permissions)
    if granted & Permission.ADMIN:
        return True
    return any(granted & permission for permission in required)


def is_status_available(status: MediaStatus) -> bool:
    return status in REPORTABLE_STATUSES


def can_report_4k(permissions: int, series_4k_enabled: bool) -> bool:
    return bool(series_4k_enabled) and has_any_permission(permissions, REPORT_4K_PERMISSIONS)


def is_season_eligible(season: SeasonAvailability, report_4k: bool) -> bool:
    return is_status_available(season.status) or (report_4k and is_status_available(season.status4k))


def resolve_seasons(seasons: Sequence[SeasonAvailability], permissions: int, series_4k_enabled: bool) -> List[int]:
    """
    Return the season numbers a viewer may report against, in the order given.

    Args:
        seasons: Per-season availability of the title
        permissions: Viewer's Overseerr permission bitmask
        series_4k_enabled: Whether 4K series requests are enabled globally

    Returns:
        List[int]: Eligible season numbers, empty when none qualify
    """
    report_4k = can_report_4k(permissions, series_4k_enabled)
    return [season.season_number for season in seasons if is_season_eligible(season, report_4k)]


def episode_count(seasons: Sequence[SeasonAvailability], season_number: int) -> int:
    for season in seasons:
        if season.season_number == season_number:
            return season.episode_count
    return 0


def initial_season(eligible: Sequence[int]) -> int:
    """A single eligible season is preselected, otherwise 'all seasons' (0)."""
    return eligible[0] if len(eligible) == 1 else 0
