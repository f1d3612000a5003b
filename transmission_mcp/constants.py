"""
Constants shared by the RPC client, the tool operations and the formatters.
"""

from enum import Enum


DEFAULT_TRANSMISSION_URL = "http://localhost:9091"
RPC_PATH = "/transmission/rpc"
SESSION_ID_HEADER = "X-Transmission-Session-Id"

# Pagination defaults
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

# Selectors understood by torrent-scoped operations
ALL_TORRENTS = "all"
RECENTLY_ACTIVE = "recently-active"
RECENTLY_ACTIVE_ALIASES = ("recently_active", "recently-active")


class ResponseFormat(str, Enum):
    MARKDOWN = "markdown"
    JSON = "json"


class QueueDirection(str, Enum):
    TOP = "top"
    UP = "up"
    DOWN = "down"
    BOTTOM = "bottom"


class TorrentStatus:
    STOPPED = 0
    CHECK_WAIT = 1
    CHECK = 2
    DOWNLOAD_WAIT = 3
    DOWNLOAD = 4
    SEED_WAIT = 5
    SEED = 6


TORRENT_STATUS_LABELS = {
    TorrentStatus.STOPPED: "Stopped",
    TorrentStatus.CHECK_WAIT: "Waiting to verify",
    TorrentStatus.CHECK: "Verifying",
    TorrentStatus.DOWNLOAD_WAIT: "Waiting to download",
    TorrentStatus.DOWNLOAD: "Downloading",
    TorrentStatus.SEED_WAIT: "Waiting to seed",
    TorrentStatus.SEED: "Seeding",
}

# Canonical names of the torrent attributes requested for display
TORRENT_FIELDS = [
    "id",
    "name",
    "hash_string",
    "status",
    "percent_done",
    "size_when_done",
    "downloaded_ever",
    "uploaded_ever",
    "upload_ratio",
    "rate_download",
    "rate_upload",
    "eta",
    "peers_connected",
    "added_date",
    "done_date",
    "labels",
    "error",
    "error_string",
    "comment",
]

# ETAs beyond a year are treated as unknown
MAX_DISPLAY_ETA = 31536000
