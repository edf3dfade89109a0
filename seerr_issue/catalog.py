"""
Issue type catalog
Every branch on the selected issue type goes through this module
"""
from typing import List

from seerr_issue.constants import IssueType, ISSUE_TYPE_NAMES
from seerr_issue.models import IssueTypeOption

# Display order; new kinds are appended so existing positions never move
ISSUE_OPTIONS = (
    IssueTypeOption(issue_type=IssueType.VIDEO, label=ISSUE_TYPE_NAMES[IssueType.VIDEO]),
    IssueTypeOption(issue_type=IssueType.AUDIO, label=ISSUE_TYPE_NAMES[IssueType.AUDIO]),
    IssueTypeOption(issue_type=IssueType.SUBTITLES, label=ISSUE_TYPE_NAMES[IssueType.SUBTITLES]),
    IssueTypeOption(issue_type=IssueType.OTHER, label=ISSUE_TYPE_NAMES[IssueType.OTHER]),
    IssueTypeOption(issue_type=IssueType.UPGRADE_QUALITY, label=ISSUE_TYPE_NAMES[IssueType.UPGRADE_QUALITY]),
)

STRUCTURED_ISSUE_TYPES = frozenset({IssueType.UPGRADE_QUALITY})


def issue_options() -> List[IssueTypeOption]:
    return list(ISSUE_OPTIONS)


def default_option() -> IssueTypeOption:
    return ISSUE_OPTIONS[0]


def get_option(issue_type: IssueType) -> IssueTypeOption:
    """Return the catalog entry for an issue type."""
    for option in ISSUE_OPTIONS:
        if option.issue_type == issue_type:
            return option
    raise KeyError(f"Unknown issue type: {issue_type}")


def requires_structured_fields(issue_type: IssueType) -> bool:
    """
    True when the issue type is described by the upgrade fields
    (requested quality, audio upgrade) instead of a freeform message.
    """
    return issue_type in STRUCTURED_ISSUE_TYPES
