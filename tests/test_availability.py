"""Tests for the season availability resolver."""

import itertools

import pytest

from conftest import make_season
from seerr_issue.availability import (
    can_report_4k,
    episode_count,
    has_any_permission,
    initial_season,
    is_season_eligible,
    is_status_available,
    resolve_seasons,
)
from seerr_issue.constants import MediaStatus, Permission

AVAILABLE = MediaStatus.AVAILABLE
PARTIAL = MediaStatus.PARTIALLY_AVAILABLE
PENDING = MediaStatus.PENDING
UNKNOWN = MediaStatus.UNKNOWN

REQUEST_4K_TV = int(Permission.REQUEST_4K_TV)


class TestPredicates:
    @pytest.mark.parametrize("status", [AVAILABLE, PARTIAL])
    def test_available_statuses(self, status) -> None:
        assert is_status_available(status) is True

    @pytest.mark.parametrize(
        "status",
        [MediaStatus.UNKNOWN, MediaStatus.PENDING, MediaStatus.PROCESSING, MediaStatus.DELETED],
    )
    def test_unavailable_statuses(self, status) -> None:
        assert is_status_available(status) is False

    def test_any_permission_matches_single_bit(self) -> None:
        perms = Permission.REQUEST_4K_TV | Permission.REQUEST_4K_MOVIE
        assert has_any_permission(perms, [Permission.REQUEST_4K, Permission.REQUEST_4K_TV])

    def test_any_permission_without_match(self) -> None:
        assert not has_any_permission(Permission.REQUEST_4K_MOVIE, [Permission.REQUEST_4K, Permission.REQUEST_4K_TV])

    def test_admin_holds_every_permission(self) -> None:
        assert has_any_permission(Permission.ADMIN, [Permission.REQUEST_4K_TV])

    def test_raw_bitmask_with_unrelated_bits(self) -> None:
        # 32 (REQUEST) + 4096 (REQUEST_4K_TV)
        assert has_any_permission(4128, [Permission.REQUEST_4K_TV])

    def test_can_report_4k_needs_setting_and_permission(self) -> None:
        assert can_report_4k(REQUEST_4K_TV, True) is True
        assert can_report_4k(REQUEST_4K_TV, False) is False
        assert can_report_4k(0, True) is False

    def test_season_eligible_on_4k_only_when_allowed(self) -> None:
        season = make_season(1, status=PENDING, status4k=AVAILABLE)
        assert is_season_eligible(season, report_4k=True)
        assert not is_season_eligible(season, report_4k=False)


class TestResolveSeasons:
    def test_keeps_input_order(self) -> None:
        seasons = [make_season(3, AVAILABLE), make_season(1, PARTIAL), make_season(2, AVAILABLE)]
        assert resolve_seasons(seasons, 0, False) == [3, 1, 2]

    def test_extras_season_is_included(self) -> None:
        seasons = [make_season(0, AVAILABLE), make_season(1, PENDING)]
        assert resolve_seasons(seasons, 0, False) == [0]

    def test_empty_when_nothing_available(self) -> None:
        seasons = [make_season(1, PENDING), make_season(2, UNKNOWN)]
        assert resolve_seasons(seasons, REQUEST_4K_TV, True) == []

    def test_empty_input(self) -> None:
        assert resolve_seasons([], REQUEST_4K_TV, True) == []

    def test_4k_season_with_permission(self) -> None:
        seasons = [make_season(1, AVAILABLE), make_season(2, PENDING, status4k=PARTIAL)]
        assert resolve_seasons(seasons, REQUEST_4K_TV, True) == [1, 2]

    def test_4k_season_without_permission(self) -> None:
        seasons = [make_season(1, AVAILABLE), make_season(2, PENDING, status4k=PARTIAL)]
        assert resolve_seasons(seasons, int(Permission.REQUEST_4K_MOVIE), True) == [1]

    def test_4k_season_with_series_4k_disabled(self) -> None:
        seasons = [make_season(2, PENDING, status4k=AVAILABLE)]
        assert resolve_seasons(seasons, int(Permission.ADMIN), False) == []

    def test_does_not_mutate_input(self) -> None:
        seasons = [make_season(1, PENDING), make_season(2, AVAILABLE)]
        before = [season.model_copy() for season in seasons]
        resolve_seasons(seasons, 0, False)
        assert seasons == before

    def test_never_returns_ineligible_season(self) -> None:
        """No combination of statuses and permissions lets an ineligible season through."""
        permission_sets = [0, int(Permission.REQUEST_4K), REQUEST_4K_TV, int(Permission.REQUEST_4K_MOVIE), int(Permission.ADMIN)]
        for status, status4k, perms, enabled in itertools.product(
            MediaStatus, MediaStatus, permission_sets, (True, False)
        ):
            season = make_season(1, status, status4k)
            result = resolve_seasons([season], perms, enabled)
            regular = status in (AVAILABLE, PARTIAL)
            via_4k = status4k in (AVAILABLE, PARTIAL) and enabled and has_any_permission(
                perms, [Permission.REQUEST_4K, Permission.REQUEST_4K_TV]
            )
            assert result == ([1] if regular or via_4k else [])


class TestSeasonHelpers:
    def test_episode_count(self) -> None:
        seasons = [make_season(1, episodes=10), make_season(2, episodes=8)]
        assert episode_count(seasons, 2) == 8

    def test_episode_count_unknown_season(self) -> None:
        assert episode_count([make_season(1, episodes=10)], 5) == 0

    def test_single_season_is_preselected(self) -> None:
        assert initial_season([4]) == 4

    def test_single_extras_season_is_preselected(self) -> None:
        assert initial_season([0]) == 0

    @pytest.mark.parametrize("eligible", [[], [1, 2], [0, 1, 2]])
    def test_all_seasons_otherwise(self, eligible) -> None:
        assert initial_season(eligible) == 0
