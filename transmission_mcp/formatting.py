"""
Rendering of reconciled Transmission records for tool responses.

Provides human-readable markdown for torrents, session settings and session
statistics, byte/speed/duration helpers, response truncation, and the mapping
from client errors to user-facing guidance.
"""

import datetime
from typing import List, Optional

from .constants import ALL_TORRENTS, MAX_DISPLAY_ETA, TORRENT_STATUS_LABELS
from .ids import is_recently_active
from .reconcile import SessionSettings, SessionStats, TorrentRecord, TransferTotals


def format_bytes(size):
    """Format bytes as human-readable string."""
    if size is None:
        return "N/A"
    if size == 0:
        return "0 B"
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if abs(size) < 1024:
            return f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def format_speed(bytes_per_second):
    return f"{format_bytes(bytes_per_second)}/s"


def format_duration(seconds):
    """Format a duration in seconds as e.g. "1d 2h 3m"; seconds are dropped past a day."""
    if seconds is None or seconds < 0:
        return "Unknown"
    if seconds == 0:
        return "0s"

    seconds = int(seconds)
    days, remainder = divmod(seconds, 86400)
    hours, remainder = divmod(remainder, 3600)
    minutes, secs = divmod(remainder, 60)

    parts = []
    if days:
        parts.append(f"{days}d")
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if secs and not days:
        parts.append(f"{secs}s")
    return " ".join(parts)


def format_date(timestamp):
    if not timestamp:
        return "Never"
    moment = datetime.datetime.fromtimestamp(timestamp, tz=datetime.timezone.utc)
    return moment.strftime("%Y-%m-%d %H:%M:%S UTC")


def status_label(status):
    return TORRENT_STATUS_LABELS.get(status, "Unknown")


def describe_ids(ids):
    if ids == ALL_TORRENTS:
        return "all torrents"
    if is_recently_active(ids):
        return "recently active torrents"
    if isinstance(ids, (list, tuple)):
        return f"torrents {', '.join(str(item) for item in ids)}"
    return f"torrent {ids}"


def torrent_to_json(torrent: TorrentRecord) -> dict:
    data = torrent.to_dict()
    data["status_code"] = torrent.status
    data["status"] = status_label(torrent.status)
    return data


def format_torrent_markdown(torrent: TorrentRecord) -> str:
    lines = [
        f"## {torrent.name}",
        "",
        f"- **ID**: {torrent.id}",
        f"- **Status**: {status_label(torrent.status)}",
        f"- **Progress**: {torrent.percent_done * 100:.2f}%",
        f"- **Size**: {format_bytes(torrent.size_when_done)}",
        f"- **Downloaded**: {format_bytes(torrent.downloaded_ever)}",
        f"- **Uploaded**: {format_bytes(torrent.uploaded_ever)}",
        f"- **Ratio**: {torrent.upload_ratio:.2f}",
        f"- **Download Speed**: {format_speed(torrent.rate_download)}",
        f"- **Upload Speed**: {format_speed(torrent.rate_upload)}",
    ]

    if 0 < torrent.eta < MAX_DISPLAY_ETA:
        lines.append(f"- **ETA**: {format_duration(torrent.eta)}")

    lines.append(f"- **Peers**: {torrent.peers_connected}")
    lines.append(f"- **Added**: {format_date(torrent.added_date)}")

    if torrent.done_date:
        lines.append(f"- **Completed**: {format_date(torrent.done_date)}")
    if torrent.labels:
        lines.append(f"- **Labels**: {', '.join(torrent.labels)}")
    if torrent.comment:
        lines.append(f"- **Comment**: {torrent.comment}")
    if torrent.error and torrent.error_string:
        lines.append(f"- **Error**: {torrent.error_string}")

    lines.append("")
    return "\n".join(lines)


def format_torrents_markdown(torrents: List[TorrentRecord], total: Optional[int] = None) -> str:
    lines = ["# Torrents", ""]

    if total is not None:
        lines.append(f"Total: {total} torrent(s)")
        lines.append("")

    if not torrents:
        lines.append("No torrents found.")
        return "\n".join(lines)

    for torrent in torrents:
        lines.append(format_torrent_markdown(torrent).strip())
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _limit(enabled, value):
    return f"{value} KB/s" if enabled else "Unlimited"


def format_session_markdown(session: SessionSettings) -> str:
    lines = [
        "# Session Configuration",
        "",
        "## General",
        f"- **Version**: {session.version or 'Unknown'}",
        f"- **Download Directory**: {session.download_dir or 'Not set'}",
        "",
        "## Speed Limits",
        f"- **Download Limit**: {_limit(session.speed_limit_down_enabled, session.speed_limit_down)}",
        f"- **Upload Limit**: {_limit(session.speed_limit_up_enabled, session.speed_limit_up)}",
        f"- **Alt Speed Enabled**: {'Yes' if session.alt_speed_enabled else 'No'}",
    ]

    if session.alt_speed_enabled:
        lines.append(f"- **Alt Download Limit**: {session.alt_speed_down} KB/s")
        lines.append(f"- **Alt Upload Limit**: {session.alt_speed_up} KB/s")
    lines.append("")

    ratio = session.seed_ratio_limit if session.seed_ratio_limited else "Unlimited"
    lines.extend(["## Seeding", f"- **Seed Ratio Limit**: {ratio}", ""])

    return "\n".join(lines)


def _totals_lines(totals: TransferTotals, duration_label: str, with_sessions: bool) -> List[str]:
    lines = [
        f"- **Downloaded**: {format_bytes(totals.downloaded_bytes)}",
        f"- **Uploaded**: {format_bytes(totals.uploaded_bytes)}",
        f"- **Files Added**: {totals.files_added}",
        f"- **{duration_label}**: {format_duration(totals.seconds_active)}",
    ]
    if with_sessions:
        lines.append(f"- **Sessions**: {totals.session_count}")
    lines.append("")
    return lines


def format_stats_markdown(stats: SessionStats) -> str:
    lines = [
        "# Session Statistics",
        "",
        "## Current Session",
        f"- **Active Torrents**: {stats.active_torrent_count}",
        f"- **Paused Torrents**: {stats.paused_torrent_count}",
        f"- **Total Torrents**: {stats.torrent_count}",
        f"- **Download Speed**: {format_speed(stats.download_speed)}",
        f"- **Upload Speed**: {format_speed(stats.upload_speed)}",
        "",
    ]

    if stats.current_stats:
        lines.append("## Current Session Totals")
        lines.extend(_totals_lines(stats.current_stats, "Session Duration", with_sessions=False))

    if stats.cumulative_stats:
        lines.append("## All-Time Totals")
        lines.extend(_totals_lines(stats.cumulative_stats, "Total Active Time", with_sessions=True))

    return "\n".join(lines)


def check_and_truncate(content: str, limit: int, item_type: str = "items") -> str:
    """Cut responses longer than ``limit`` characters and say how to get the rest."""
    if len(content) <= limit:
        return content

    return (
        content[:limit]
        + f"\n\n---\n**Response truncated** (exceeded {limit} character limit). "
        + f"Try using pagination with 'offset' parameter or filtering to see more {item_type}."
    )


def describe_error(error: Exception) -> str:
    """
    Turn a client error into guidance for the person driving the tools.

    Transport errors carry no structured codes, so the message text decides.
    """
    message = str(error)
    lowered = message.lower()

    if "connection refused" in lowered or "econnrefused" in lowered or "failed to establish" in lowered:
        return ("Error: Could not connect to Transmission daemon. "
                "Please check that Transmission is running and the URL is correct. "
                "Verify TRANSMISSION_URL environment variable.")

    if "401" in lowered or "unauthorized" in lowered:
        return ("Error: Authentication failed. "
                "Please check TRANSMISSION_USERNAME and TRANSMISSION_PASSWORD environment variables.")

    if "timed out" in lowered or "timeout" in lowered:
        return ("Error: Request timed out. "
                "The Transmission daemon may be unresponsive or overloaded.")

    if message:
        return f"Error: {message}"
    return f"Error: An unexpected error occurred: {error!r}"
