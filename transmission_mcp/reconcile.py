"""
Normalization of Transmission responses into canonical records.

Depending on the daemon version and dialect, the same attribute may come back
as ``downloaded_bytes``, ``downloadedBytes`` or ``downloaded-bytes``. Each
record type below resolves those spellings once, when it is built from a
response, so display code only ever sees the underscore names.

When a response carries more than one spelling of an attribute the first
non-null one wins, in the order underscore, camelCase, hyphen.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .translator import to_camel_case, to_hyphen_case


def spellings(name: str) -> Tuple[str, ...]:
    """All known spellings of a canonical name, in priority order."""
    candidates = (name, to_camel_case(name), to_hyphen_case(name))
    return tuple(dict.fromkeys(candidates))


def pick(record: Optional[Mapping[str, Any]], name: str, default=None):
    if not record:
        return default
    for key in spellings(name):
        value = record.get(key)
        if value is not None:
            return value
    return default


def pick_mapping(record: Optional[Mapping[str, Any]], name: str) -> Optional[Mapping[str, Any]]:
    value = pick(record, name)
    return value if isinstance(value, Mapping) else None


@dataclass
class TransferTotals:
    uploaded_bytes: int = 0
    downloaded_bytes: int = 0
    files_added: int = 0
    session_count: int = 0
    seconds_active: int = 0

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]) -> Optional["TransferTotals"]:
        if data is None:
            return None
        return cls(
            uploaded_bytes=pick(data, "uploaded_bytes", 0),
            downloaded_bytes=pick(data, "downloaded_bytes", 0),
            files_added=pick(data, "files_added", 0),
            session_count=pick(data, "session_count", 0),
            seconds_active=pick(data, "seconds_active", 0),
        )


@dataclass
class SessionStats:
    active_torrent_count: int = 0
    paused_torrent_count: int = 0
    torrent_count: int = 0
    download_speed: int = 0
    upload_speed: int = 0
    current_stats: Optional[TransferTotals] = None
    cumulative_stats: Optional[TransferTotals] = None

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]) -> "SessionStats":
        return cls(
            active_torrent_count=pick(data, "active_torrent_count", 0),
            paused_torrent_count=pick(data, "paused_torrent_count", 0),
            torrent_count=pick(data, "torrent_count", 0),
            download_speed=pick(data, "download_speed", 0),
            upload_speed=pick(data, "upload_speed", 0),
            current_stats=TransferTotals.from_response(pick_mapping(data, "current_stats")),
            cumulative_stats=TransferTotals.from_response(pick_mapping(data, "cumulative_stats")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TorrentRecord:
    id: Optional[int] = None
    name: str = ""
    hash_string: Optional[str] = None
    status: Optional[int] = None
    percent_done: float = 0.0
    size_when_done: int = 0
    downloaded_ever: int = 0
    uploaded_ever: int = 0
    upload_ratio: float = 0.0
    rate_download: int = 0
    rate_upload: int = 0
    eta: int = -1
    peers_connected: int = 0
    added_date: int = 0
    done_date: int = 0
    labels: List[str] = field(default_factory=list)
    error: int = 0
    error_string: Optional[str] = None
    comment: Optional[str] = None

    @classmethod
    def from_response(cls, data: Mapping[str, Any]) -> "TorrentRecord":
        return cls(
            id=pick(data, "id"),
            name=pick(data, "name", ""),
            hash_string=pick(data, "hash_string"),
            status=pick(data, "status"),
            percent_done=pick(data, "percent_done", 0.0),
            size_when_done=pick(data, "size_when_done", 0),
            downloaded_ever=pick(data, "downloaded_ever", 0),
            uploaded_ever=pick(data, "uploaded_ever", 0),
            upload_ratio=pick(data, "upload_ratio", 0.0),
            rate_download=pick(data, "rate_download", 0),
            rate_upload=pick(data, "rate_upload", 0),
            eta=pick(data, "eta", -1),
            peers_connected=pick(data, "peers_connected", 0),
            added_date=pick(data, "added_date", 0),
            done_date=pick(data, "done_date", 0),
            labels=list(pick(data, "labels", [])),
            error=pick(data, "error", 0),
            error_string=pick(data, "error_string") or None,
            comment=pick(data, "comment") or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def torrents_from_response(data: Optional[Mapping[str, Any]]) -> List[TorrentRecord]:
    return [TorrentRecord.from_response(item) for item in pick(data, "torrents", [])]


@dataclass
class SessionSettings:
    version: Optional[str] = None
    download_dir: Optional[str] = None
    speed_limit_down: Optional[int] = None
    speed_limit_down_enabled: bool = False
    speed_limit_up: Optional[int] = None
    speed_limit_up_enabled: bool = False
    alt_speed_down: Optional[int] = None
    alt_speed_up: Optional[int] = None
    alt_speed_enabled: bool = False
    seed_ratio_limit: Optional[float] = None
    seed_ratio_limited: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]) -> "SessionSettings":
        return cls(
            version=pick(data, "version"),
            download_dir=pick(data, "download_dir"),
            speed_limit_down=pick(data, "speed_limit_down"),
            speed_limit_down_enabled=bool(pick(data, "speed_limit_down_enabled", False)),
            speed_limit_up=pick(data, "speed_limit_up"),
            speed_limit_up_enabled=bool(pick(data, "speed_limit_up_enabled", False)),
            alt_speed_down=pick(data, "alt_speed_down"),
            alt_speed_up=pick(data, "alt_speed_up"),
            alt_speed_enabled=bool(pick(data, "alt_speed_enabled", False)),
            seed_ratio_limit=pick(data, "seed_ratio_limit"),
            seed_ratio_limited=bool(pick(data, "seed_ratio_limited", False)),
            raw=dict(data or {}),
        )


@dataclass
class FreeSpace:
    path: Optional[str] = None
    size_bytes: Optional[int] = None
    total_size: Optional[int] = None

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]], path: Optional[str] = None) -> "FreeSpace":
        return cls(
            path=pick(data, "path", path),
            size_bytes=pick(data, "size_bytes"),
            total_size=pick(data, "total_size"),
        )


@dataclass
class AddedTorrent:
    id: Optional[int] = None
    name: Optional[str] = None
    hash_string: Optional[str] = None
    duplicate: bool = False

    @classmethod
    def from_response(cls, data: Optional[Mapping[str, Any]]) -> Optional["AddedTorrent"]:
        """
        Build from a torrent_add result.

        Newer daemons list the torrent under ``torrents``; older ones use
        ``torrent-added`` or ``torrent-duplicate``.
        """
        duplicate = False
        torrents = pick(data, "torrents")
        item = torrents[0] if torrents else pick_mapping(data, "torrent_added")
        if item is None:
            item = pick_mapping(data, "torrent_duplicate")
            duplicate = item is not None
        if item is None:
            return None
        return cls(
            id=pick(item, "id"),
            name=pick(item, "name"),
            hash_string=pick(item, "hash_string"),
            duplicate=duplicate,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
