"""
Tool operations backed by the Transmission RPC client.

Each method takes a validated input model, calls the daemon with canonical
method and argument names, and returns the text shown to the caller. Errors
never propagate out of a tool: they are logged and rendered as an
"Error: ..." message instead.
"""

import functools
import json
import re
from typing import Any, Dict, Optional

from .config import Config
from .constants import TORRENT_FIELDS, ResponseFormat
from .formatting import (
    check_and_truncate,
    describe_error,
    describe_ids,
    format_bytes,
    format_session_markdown,
    format_stats_markdown,
    format_torrents_markdown,
    torrent_to_json,
)
from .ids import normalize_torrent_ids
from .logger import logger
from .reconcile import AddedTorrent, FreeSpace, SessionSettings, SessionStats, torrents_from_response
from .rpc_client import TransmissionRpcClient
from .schemas import (
    AddTorrentInput,
    FreeSpaceInput,
    GetSessionInput,
    GetStatsInput,
    GetTorrentInput,
    ListTorrentsInput,
    MoveTorrentInput,
    PauseTorrentInput,
    QueueMoveInput,
    ReannounceTorrentInput,
    RemoveTorrentInput,
    ResumeTorrentInput,
    SetSessionInput,
    SetTorrentInput,
    TorrentSelectorInput,
    VerifyTorrentInput,
)


URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)

SET_TORRENT_OPTIONS = (
    "labels", "bandwidthPriority", "downloadLimit", "downloadLimited",
    "uploadLimit", "uploadLimited", "seedRatioLimit", "seedRatioMode",
)
SET_SESSION_OPTIONS = (
    "alt_speed_down", "alt_speed_up", "alt_speed_enabled", "download_dir",
    "speed_limit_down", "speed_limit_down_enabled", "speed_limit_up",
    "speed_limit_up_enabled", "seedRatioLimit", "seedRatioLimited",
)


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)


def tool_errors(method):
    """Render any exception raised by a tool as an error message."""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except Exception as e:
            logger.warning(f"{method.__name__} failed: {e}")
            return describe_error(e)
    return wrapper


class TransmissionTools:
    def __init__(
        self,
        client: TransmissionRpcClient,
        default_download_dir: Optional[str] = None,
        character_limit: int = Config.CHARACTER_LIMIT
    ):
        self.client = client
        self.default_download_dir = default_download_dir or None
        self.character_limit = character_limit

    def _truncate(self, content: str, item_type: str) -> str:
        return check_and_truncate(content, self.character_limit, item_type)

    def _selected_options(self, params, names) -> Dict[str, Any]:
        return {name: getattr(params, name) for name in names if getattr(params, name) is not None}

    def _simple_action(self, method: str, params: TorrentSelectorInput, verb: str) -> str:
        """Run an ids-only action and confirm it."""
        self.client.call(method, {"ids": normalize_torrent_ids(params.ids)})
        message = f"{verb} {describe_ids(params.ids)}"

        if params.response_format == ResponseFormat.JSON:
            return to_json({"success": True, "message": message})
        return f"Successfully {verb.lower()} {describe_ids(params.ids)}."

    # -------------------------------------------------------------------------
    # Torrent Tools
    # -------------------------------------------------------------------------

    @tool_errors
    def add_torrent(self, params: AddTorrentInput) -> str:
        arguments = {
            "download_dir": params.download_dir or self.default_download_dir,
            "paused": params.paused,
            "labels": params.labels or None,
        }
        if params.torrent.startswith("magnet:") or URL_PATTERN.match(params.torrent):
            arguments["filename"] = params.torrent
        else:
            arguments["metainfo"] = params.torrent

        result = self.client.call("torrent_add", arguments)
        torrent = AddedTorrent.from_response(result)

        if torrent is None:
            return "Error: Failed to add torrent. No response from Transmission."

        if params.response_format == ResponseFormat.JSON:
            return to_json(torrent.to_dict())

        title = "Torrent Already Present" if torrent.duplicate else "Torrent Added Successfully"
        lines = [
            f"# {title}",
            "",
            f"- **Name**: {torrent.name}",
            f"- **ID**: {torrent.id}",
            f"- **Hash**: {torrent.hash_string}",
            "",
        ]
        return "\n".join(lines)

    @tool_errors
    def list_torrents(self, params: ListTorrentsInput) -> str:
        result = self.client.call("torrent_get", {"fields": TORRENT_FIELDS})
        all_torrents = torrents_from_response(result)
        total = len(all_torrents)

        end = params.offset + params.limit
        torrents = all_torrents[params.offset:end]
        has_more = end < total

        if params.response_format == ResponseFormat.JSON:
            data = {
                "total": total,
                "count": len(torrents),
                "offset": params.offset,
                "torrents": [torrent_to_json(torrent) for torrent in torrents],
                "has_more": has_more,
            }
            if has_more:
                data["next_offset"] = end
            return self._truncate(to_json(data), "torrents")

        markdown = format_torrents_markdown(torrents, total)
        if has_more:
            markdown += (f"\n\n---\n**Showing {len(torrents)} of {total} torrents.** "
                         f"Use offset={end} to see the next page.")
        return self._truncate(markdown, "torrents")

    @tool_errors
    def get_torrent(self, params: GetTorrentInput) -> str:
        result = self.client.call("torrent_get", {
            "ids": normalize_torrent_ids(params.ids),
            "fields": TORRENT_FIELDS,
        })
        torrents = torrents_from_response(result)

        if not torrents:
            return "No torrents found matching the specified IDs."

        if params.response_format == ResponseFormat.JSON:
            data = {
                "count": len(torrents),
                "torrents": [torrent_to_json(torrent) for torrent in torrents],
            }
            return self._truncate(to_json(data), "torrents")

        return self._truncate(format_torrents_markdown(torrents), "torrents")

    @tool_errors
    def remove_torrent(self, params: RemoveTorrentInput) -> str:
        self.client.call("torrent_remove", {
            "ids": normalize_torrent_ids(params.ids),
            "delete_local_data": params.delete_local_data,
        })

        if params.delete_local_data:
            data_note = " (including downloaded files)"
        else:
            data_note = " (downloaded files kept on disk)"
        message = f"Removed {describe_ids(params.ids)}{data_note}"

        if params.response_format == ResponseFormat.JSON:
            return to_json({
                "success": True,
                "message": message,
                "delete_local_data": params.delete_local_data,
            })
        return f"Successfully removed {describe_ids(params.ids)}{data_note}."

    @tool_errors
    def pause_torrent(self, params: PauseTorrentInput) -> str:
        return self._simple_action("torrent_stop", params, "Paused")

    @tool_errors
    def resume_torrent(self, params: ResumeTorrentInput) -> str:
        return self._simple_action("torrent_start", params, "Resumed")

    @tool_errors
    def verify_torrent(self, params: VerifyTorrentInput) -> str:
        return self._simple_action("torrent_verify", params, "Started verification for")

    @tool_errors
    def reannounce_torrent(self, params: ReannounceTorrentInput) -> str:
        self.client.call("torrent_reannounce", {"ids": normalize_torrent_ids(params.ids)})
        message = f"Reannounced {describe_ids(params.ids)} to trackers"

        if params.response_format == ResponseFormat.JSON:
            return to_json({"success": True, "message": message})
        return f"Successfully reannounced {describe_ids(params.ids)} to trackers."

    @tool_errors
    def move_torrent(self, params: MoveTorrentInput) -> str:
        self.client.call("torrent_set_location", {
            "ids": normalize_torrent_ids(params.ids),
            "location": params.location,
            "move": params.move,
        })

        action = "moved" if params.move else "updated location for"
        message = f"Successfully {action} {describe_ids(params.ids)} to {params.location}"

        if params.response_format == ResponseFormat.JSON:
            return to_json({
                "success": True,
                "message": message,
                "location": params.location,
                "move": params.move,
            })
        return f"{message}."

    @tool_errors
    def set_torrent(self, params: SetTorrentInput) -> str:
        options = self._selected_options(params, SET_TORRENT_OPTIONS)
        self.client.call("torrent_set", {"ids": normalize_torrent_ids(params.ids), **options})

        if params.response_format == ResponseFormat.JSON:
            return to_json({
                "success": True,
                "message": f"Updated settings for {describe_ids(params.ids)}",
                "settings": options,
            })
        return f"Successfully updated settings for {describe_ids(params.ids)}."

    @tool_errors
    def queue_move(self, params: QueueMoveInput) -> str:
        direction = params.direction.value
        self.client.call(f"queue_move_{direction}", {"ids": normalize_torrent_ids(params.ids)})
        message = f"Moved {describe_ids(params.ids)} to {direction} of queue"

        if params.response_format == ResponseFormat.JSON:
            return to_json({"success": True, "message": message, "direction": direction})
        return f"Successfully moved {describe_ids(params.ids)} to {direction} of queue."

    # -------------------------------------------------------------------------
    # Session Tools
    # -------------------------------------------------------------------------

    @tool_errors
    def get_session(self, params: GetSessionInput) -> str:
        result = self.client.call("session_get")
        session = SessionSettings.from_response(result)

        if params.response_format == ResponseFormat.JSON:
            return self._truncate(to_json(session.raw), "session")
        return self._truncate(format_session_markdown(session), "session")

    @tool_errors
    def set_session(self, params: SetSessionInput) -> str:
        settings = self._selected_options(params, SET_SESSION_OPTIONS)
        self.client.call("session_set", settings)

        if params.response_format == ResponseFormat.JSON:
            return to_json({
                "success": True,
                "message": "Session settings updated successfully",
                "settings": settings,
            })
        return "Session settings updated successfully."

    @tool_errors
    def get_stats(self, params: GetStatsInput) -> str:
        result = self.client.call("session_stats")
        stats = SessionStats.from_response(result)

        if params.response_format == ResponseFormat.JSON:
            return self._truncate(to_json(stats.to_dict()), "stats")
        return self._truncate(format_stats_markdown(stats), "stats")

    @tool_errors
    def free_space(self, params: FreeSpaceInput) -> str:
        path = params.path
        if not path:
            path = SessionSettings.from_response(self.client.call("session_get")).download_dir

        result = self.client.call("free_space", {"path": path})
        space = FreeSpace.from_response(result, path=path)

        if params.response_format == ResponseFormat.JSON:
            return to_json({
                "path": space.path,
                "free_bytes": space.size_bytes,
                "free_space": format_bytes(space.size_bytes),
                "total_size": space.total_size,
            })

        lines = [
            "# Free Disk Space",
            "",
            f"- **Path**: {space.path}",
        ]
        if space.size_bytes is None:
            lines.append("- **Free Space**: Unknown")
        else:
            lines.append(f"- **Free Space**: {format_bytes(space.size_bytes)} ({space.size_bytes:,} bytes)")
        if space.total_size is not None:
            lines.append(f"- **Total Size**: {format_bytes(space.total_size)}")
        lines.append("")
        return "\n".join(lines)
