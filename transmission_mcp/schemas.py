"""
Input models for the MCP tools.

The torrent id field accepts a positive id, an info hash, a list mixing both,
"all", or "recently_active". Numeric strings are coerced to integers before
validation so "5" and 5 select the same torrent.
"""

from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from .constants import DEFAULT_LIMIT, MAX_LIMIT, QueueDirection, ResponseFormat
from .ids import is_numeric_id


NonEmptyStr = Annotated[str, Field(min_length=1)]
TorrentIds = Union[PositiveInt, NonEmptyStr, List[Union[PositiveInt, NonEmptyStr]]]

IDS_DESCRIPTION = (
    "Torrent ID(s) to operate on - can be a single ID, hash string, array of IDs, "
    "'all', or 'recently_active'"
)
RESPONSE_FORMAT_DESCRIPTION = "Output format: 'markdown' for human-readable or 'json' for machine-readable"


def coerce_torrent_ids(value):
    if is_numeric_id(value):
        return int(value)
    if isinstance(value, (list, tuple)):
        return [int(item) if is_numeric_id(item) else item for item in value]
    return value


class ToolInput(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    response_format: ResponseFormat = Field(
        default=ResponseFormat.MARKDOWN,
        description=RESPONSE_FORMAT_DESCRIPTION
    )


class TorrentSelectorInput(ToolInput):
    ids: TorrentIds = Field(description=IDS_DESCRIPTION)

    @field_validator("ids", mode="before")
    @classmethod
    def coerce_ids(cls, value):
        return coerce_torrent_ids(value)


class AddTorrentInput(ToolInput):
    torrent: str = Field(
        min_length=1,
        description="Magnet URI, URL to .torrent file, or base64-encoded .torrent file content"
    )
    download_dir: Optional[str] = Field(default=None, description="Destination path for downloaded files")
    paused: Optional[bool] = Field(default=None, description="If true, torrent will be added in paused state")
    labels: Optional[List[str]] = Field(default=None, description="Labels to apply to the torrent")


class ListTorrentsInput(ToolInput):
    limit: int = Field(
        default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT,
        description=f"Maximum results to return (1-{MAX_LIMIT})"
    )
    offset: int = Field(default=0, ge=0, description="Number of results to skip for pagination")


class GetTorrentInput(TorrentSelectorInput):
    pass


class RemoveTorrentInput(TorrentSelectorInput):
    delete_local_data: bool = Field(
        default=False,
        description="If true, downloaded files will be deleted from disk"
    )


class PauseTorrentInput(TorrentSelectorInput):
    pass


class ResumeTorrentInput(TorrentSelectorInput):
    pass


class VerifyTorrentInput(TorrentSelectorInput):
    pass


class ReannounceTorrentInput(TorrentSelectorInput):
    pass


class MoveTorrentInput(TorrentSelectorInput):
    location: str = Field(min_length=1, description="New location path for the torrent data")
    move: bool = Field(
        default=True,
        description="If true, move from previous location; if false, search new location for files"
    )


class SetTorrentInput(TorrentSelectorInput):
    # Per-torrent settings keep the daemon's own camelCase names
    labels: Optional[List[str]] = Field(default=None, description="Labels for the torrent")
    bandwidthPriority: Optional[int] = Field(
        default=None, ge=-1, le=1,
        description="Priority: -1 (low), 0 (normal), 1 (high)"
    )
    downloadLimit: Optional[int] = Field(default=None, ge=0, description="Maximum download speed in KB/s")
    downloadLimited: Optional[bool] = Field(default=None, description="Enable download speed limit")
    uploadLimit: Optional[int] = Field(default=None, ge=0, description="Maximum upload speed in KB/s")
    uploadLimited: Optional[bool] = Field(default=None, description="Enable upload speed limit")
    seedRatioLimit: Optional[float] = Field(default=None, ge=0, description="Torrent-specific seed ratio limit")
    seedRatioMode: Optional[int] = Field(
        default=None, ge=0, le=2,
        description="Seed ratio mode: 0 (global), 1 (torrent), 2 (unlimited)"
    )


class QueueMoveInput(TorrentSelectorInput):
    direction: QueueDirection = Field(description="Direction to move: 'top', 'up', 'down', or 'bottom'")


class GetSessionInput(ToolInput):
    pass


class SetSessionInput(ToolInput):
    alt_speed_down: Optional[int] = Field(default=None, ge=0, description="Alternative download speed limit in KB/s")
    alt_speed_up: Optional[int] = Field(default=None, ge=0, description="Alternative upload speed limit in KB/s")
    alt_speed_enabled: Optional[bool] = Field(default=None, description="Enable alternative speed limits")
    download_dir: Optional[str] = Field(default=None, description="Default download directory")
    speed_limit_down: Optional[int] = Field(default=None, ge=0, description="Regular download speed limit in KB/s")
    speed_limit_down_enabled: Optional[bool] = Field(default=None, description="Enable download speed limit")
    speed_limit_up: Optional[int] = Field(default=None, ge=0, description="Regular upload speed limit in KB/s")
    speed_limit_up_enabled: Optional[bool] = Field(default=None, description="Enable upload speed limit")
    seedRatioLimit: Optional[float] = Field(default=None, ge=0, description="Global seed ratio limit")
    seedRatioLimited: Optional[bool] = Field(default=None, description="Enable global seed ratio limit")


class GetStatsInput(ToolInput):
    pass


class FreeSpaceInput(ToolInput):
    path: Optional[str] = Field(
        default=None,
        description="Path to check free space for (defaults to download directory)"
    )
