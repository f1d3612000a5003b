"""
Transmission MCP - Control a Transmission daemon through Model Context Protocol tools.

Provides an RPC client that works with both the JSON-RPC and the legacy
Transmission protocol, and an MCP server exposing torrent and session
management as tools.
"""

from .config import Config
from .exceptions import RpcError, TransmissionError, TransportError
from .rpc_client import Dialect, TransmissionRpcClient

__version__ = "0.1.0"
__all__ = [
    "Config",
    "Dialect",
    "RpcError",
    "TransmissionError",
    "TransmissionRpcClient",
    "TransportError",
]
