"""
Transmission MCP Server

Model Context Protocol server exposing a Transmission daemon as tools:
adding and removing torrents, pausing/resuming, verifying, relocating,
queue ordering, and reading or changing the daemon's session settings.

Usage:
    transmission-mcp                                   # stdio transport
    transmission-mcp --url http://nas:9091 --verbose
    transmission-mcp --transport streamable-http --port 8000
"""

import argparse

from mcp.server.fastmcp import FastMCP
from mcp.types import ToolAnnotations

from .config import Config
from .logger import logger, set_console_level
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
    VerifyTorrentInput,
)
from .tools import TransmissionTools


SERVER_NAME = "transmission_mcp"
TRANSPORTS = ["stdio", "sse", "streamable-http"]


def _hints(title, read_only=False, destructive=False, idempotent=True):
    return ToolAnnotations(
        title=title,
        readOnlyHint=read_only,
        destructiveHint=destructive,
        idempotentHint=idempotent,
        openWorldHint=True,
    )


def create_client(
    url=Config.TRANSMISSION_URL,
    username=Config.TRANSMISSION_USERNAME,
    password=Config.TRANSMISSION_PASSWORD,
    timeout=Config.TRANSMISSION_TIMEOUT
) -> TransmissionRpcClient:
    """Build a client; empty credentials mean no auth and a zero timeout means none."""
    return TransmissionRpcClient(
        base_url=url,
        username=username or None,
        password=password or None,
        timeout=timeout or None,
    )


def create_server(client: TransmissionRpcClient, default_download_dir=None, **settings) -> FastMCP:
    """
    Build the MCP server with every Transmission tool registered.

    Args:
        client: RPC client used by all tools
        default_download_dir: Download directory for added torrents when the
            caller does not name one (the daemon default when None)
        settings: Extra FastMCP settings such as host and port
    """
    tools = TransmissionTools(client, default_download_dir=default_download_dir)
    mcp = FastMCP(SERVER_NAME, **settings)

    @mcp.tool(
        name="transmission_add_torrent",
        annotations=_hints("Add Torrent to Transmission", idempotent=False),
    )
    def transmission_add_torrent(params: AddTorrentInput) -> str:
        """Add a new torrent from a magnet URI, an HTTP(S) URL to a .torrent file, or
        base64-encoded .torrent content.

        Optionally sets the download directory, adds it paused, and applies labels.
        Returns the new torrent's name, ID and info hash. Does not search for torrents.
        """
        return tools.add_torrent(params)

    @mcp.tool(
        name="transmission_list_torrents",
        annotations=_hints("List All Torrents", read_only=True),
    )
    def transmission_list_torrents(params: ListTorrentsInput) -> str:
        """List torrents with status, progress, sizes, speeds, ratio and peers.

        Paginated with limit (1-100, default 20) and offset. JSON output includes
        total, count, has_more and next_offset.
        """
        return tools.list_torrents(params)

    @mcp.tool(
        name="transmission_get_torrent",
        annotations=_hints("Get Torrent Details", read_only=True),
    )
    def transmission_get_torrent(params: GetTorrentInput) -> str:
        """Get detailed information about specific torrents.

        ids may be a single ID, a hash string, an array of IDs and hashes, 'all',
        or 'recently_active'.
        """
        return tools.get_torrent(params)

    @mcp.tool(
        name="transmission_remove_torrent",
        annotations=_hints("Remove Torrent", destructive=True),
    )
    def transmission_remove_torrent(params: RemoveTorrentInput) -> str:
        """Remove torrents from Transmission.

        Downloaded files stay on disk unless delete_local_data is true.
        Use transmission_pause_torrent to stop a torrent without removing it.
        """
        return tools.remove_torrent(params)

    @mcp.tool(
        name="transmission_pause_torrent",
        annotations=_hints("Pause Torrent"),
    )
    def transmission_pause_torrent(params: PauseTorrentInput) -> str:
        """Pause torrents, stopping all download and upload activity without losing progress."""
        return tools.pause_torrent(params)

    @mcp.tool(
        name="transmission_resume_torrent",
        annotations=_hints("Resume Torrent"),
    )
    def transmission_resume_torrent(params: ResumeTorrentInput) -> str:
        """Resume paused torrents from where they left off."""
        return tools.resume_torrent(params)

    @mcp.tool(
        name="transmission_verify_torrent",
        annotations=_hints("Verify Torrent Data"),
    )
    def transmission_verify_torrent(params: VerifyTorrentInput) -> str:
        """Recheck downloaded data against the torrent's piece hashes."""
        return tools.verify_torrent(params)

    @mcp.tool(
        name="transmission_reannounce_torrent",
        annotations=_hints("Reannounce Torrent to Trackers", idempotent=False),
    )
    def transmission_reannounce_torrent(params: ReannounceTorrentInput) -> str:
        """Force torrents to announce to their trackers now, e.g. to refresh peer lists."""
        return tools.reannounce_torrent(params)

    @mcp.tool(
        name="transmission_move_torrent",
        annotations=_hints("Move Torrent to New Location", idempotent=False),
    )
    def transmission_move_torrent(params: MoveTorrentInput) -> str:
        """Relocate torrent data to another directory.

        With move=false only the stored path changes, for data already at the new location.
        """
        return tools.move_torrent(params)

    @mcp.tool(
        name="transmission_set_torrent",
        annotations=_hints("Update Torrent Settings"),
    )
    def transmission_set_torrent(params: SetTorrentInput) -> str:
        """Update per-torrent labels, bandwidth priority, speed limits and seed ratio settings."""
        return tools.set_torrent(params)

    @mcp.tool(
        name="transmission_queue_move",
        annotations=_hints("Move Torrent in Queue", idempotent=False),
    )
    def transmission_queue_move(params: QueueMoveInput) -> str:
        """Move torrents to the top or bottom of the download queue, or one step up or down."""
        return tools.queue_move(params)

    @mcp.tool(
        name="transmission_get_session",
        annotations=_hints("Get Session Configuration", read_only=True),
    )
    def transmission_get_session(params: GetSessionInput) -> str:
        """Get the daemon configuration: version, download directory, speed limits and seeding."""
        return tools.get_session(params)

    @mcp.tool(
        name="transmission_set_session",
        annotations=_hints("Update Session Configuration"),
    )
    def transmission_set_session(params: SetSessionInput) -> str:
        """Update daemon settings: speed limits, alternative speeds, download directory and seed ratio."""
        return tools.set_session(params)

    @mcp.tool(
        name="transmission_get_stats",
        annotations=_hints("Get Session Statistics", read_only=True),
    )
    def transmission_get_stats(params: GetStatsInput) -> str:
        """Get torrent counts, current speeds, and current-session and all-time transfer totals."""
        return tools.get_stats(params)

    @mcp.tool(
        name="transmission_free_space",
        annotations=_hints("Check Free Disk Space", read_only=True),
    )
    def transmission_free_space(params: FreeSpaceInput) -> str:
        """Check free disk space at a path, or at the default download directory when none is given."""
        return tools.free_space(params)

    return mcp


def main():
    parser = argparse.ArgumentParser(
        description="Transmission MCP Server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  transmission-mcp                                   Serve over stdio
  transmission-mcp --url http://nas:9091             Use a remote daemon
  transmission-mcp --transport streamable-http       Serve over HTTP on port 8000

Environment:
  TRANSMISSION_URL, TRANSMISSION_USERNAME, TRANSMISSION_PASSWORD,
  TRANSMISSION_TIMEOUT, TRANSMISSION_DOWNLOAD_DIR, MCP_TRANSPORT,
  VERBOSE, LOG_LEVEL, LOG_PATH (a .env file is read if present)
        """
    )
    parser.add_argument("--url", default=Config.TRANSMISSION_URL, help="Transmission base URL")
    parser.add_argument("--username", default=Config.TRANSMISSION_USERNAME, help="RPC username")
    parser.add_argument("--password", default=Config.TRANSMISSION_PASSWORD, help="RPC password")
    parser.add_argument(
        "--timeout",
        type=float,
        default=Config.TRANSMISSION_TIMEOUT,
        help="HTTP timeout in seconds, 0 to wait indefinitely"
    )
    parser.add_argument(
        "--download-dir",
        default=Config.TRANSMISSION_DOWNLOAD_DIR,
        help="Download directory for added torrents (default: daemon setting)"
    )
    parser.add_argument("--transport", choices=TRANSPORTS, default=Config.MCP_TRANSPORT, help="MCP transport")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind for HTTP transports")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind for HTTP transports")
    parser.add_argument("--verbose", action="store_true", help="Log to stderr at LOG_LEVEL")

    args = parser.parse_args()

    if args.verbose:
        set_console_level(Config.LOG_LEVEL)

    client = create_client(args.url, args.username, args.password, args.timeout)

    logger.info(f"Transmission MCP server starting, connecting to {client.base_url}")
    if not args.username:
        logger.info("No TRANSMISSION_USERNAME set (using unauthenticated connection)")

    server = create_server(client, default_download_dir=args.download_dir, host=args.host, port=args.port)
    server.run(transport=args.transport)


if __name__ == "__main__":
    main()
