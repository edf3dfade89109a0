"""Tests for the issue type catalog."""

import pytest

from seerr_issue.catalog import default_option, get_option, issue_options, requires_structured_fields
from seerr_issue.constants import IssueType


def test_display_order() -> None:
    assert [option.issue_type for option in issue_options()] == [
        IssueType.VIDEO,
        IssueType.AUDIO,
        IssueType.SUBTITLES,
        IssueType.OTHER,
        IssueType.UPGRADE_QUALITY,
    ]


def test_labels() -> None:
    assert [option.label for option in issue_options()] == [
        "Video", "Audio", "Subtitle", "Other", "Upgrade Quality",
    ]


def test_wire_values() -> None:
    assert [int(option.issue_type) for option in issue_options()] == [1, 2, 3, 4, 5]


def test_default_is_first_option() -> None:
    assert default_option() == issue_options()[0]
    assert default_option().issue_type == IssueType.VIDEO


def test_options_list_is_a_copy() -> None:
    options = issue_options()
    options.pop()
    assert len(issue_options()) == 5


def test_get_option() -> None:
    assert get_option(IssueType.SUBTITLES).label == "Subtitle"


def test_get_option_unknown() -> None:
    with pytest.raises(KeyError):
        get_option(99)


@pytest.mark.parametrize(
    "issue_type, structured",
    [
        (IssueType.VIDEO, False),
        (IssueType.AUDIO, False),
        (IssueType.SUBTITLES, False),
        (IssueType.OTHER, False),
        (IssueType.UPGRADE_QUALITY, True),
    ],
)
def test_requires_structured_fields(issue_type, structured) -> None:
    assert requires_structured_fields(issue_type) is structured
