"""
Shared constants for Overseerr issues, media status and permissions.
"""
from enum import Enum, IntEnum, IntFlag


class IssueType(IntEnum):
    VIDEO = 1
    AUDIO = 2
    SUBTITLES = 3
    OTHER = 4
    UPGRADE_QUALITY = 5


class IssueStatus(IntEnum):
    OPEN = 1
    RESOLVED = 2


class MediaStatus(IntEnum):
    UNKNOWN = 1
    PENDING = 2
    PROCESSING = 3
    PARTIALLY_AVAILABLE = 4
    AVAILABLE = 5
    DELETED = 6


class Permission(IntFlag):
    """Overseerr user permission bits (only the ones this workflow reads)."""
    NONE = 0
    ADMIN = 2
    REQUEST_4K = 1024
    REQUEST_4K_MOVIE = 2048
    REQUEST_4K_TV = 4096


class VideoQuality(str, Enum):
    NONE = ""
    HD = "HD"
    UHD = "UHD"
    AI_UPSCALE = "AI Upscale"


ISSUE_TYPE_NAMES = {
    IssueType.VIDEO: "Video",
    IssueType.AUDIO: "Audio",
    IssueType.SUBTITLES: "Subtitle",
    IssueType.OTHER: "Other",
    IssueType.UPGRADE_QUALITY: "Upgrade Quality",
}

REPORTABLE_STATUSES = frozenset({MediaStatus.AVAILABLE, MediaStatus.PARTIALLY_AVAILABLE})
REPORT_4K_PERMISSIONS = (Permission.REQUEST_4K, Permission.REQUEST_4K_TV)

MESSAGE_REQUIRED = "You must provide a description"
UPGRADE_REQUIRED = "You must select a video quality or request an audio upgrade"

__all__ = [
    "IssueType",
    "IssueStatus",
    "MediaStatus",
    "Permission",
    "VideoQuality",
    "ISSUE_TYPE_NAMES",
    "REPORTABLE_STATUSES",
    "REPORT_4K_PERMISSIONS",
    "MESSAGE_REQUIRED",
    "UPGRADE_REQUIRED",
]
