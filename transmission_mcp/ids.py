"""
Torrent identifier normalization.

Torrent-scoped RPC methods take an ``ids`` argument that may be a single id,
an info hash, a list mixing both, or the "recently-active" selector. Leaving
``ids`` out entirely means every torrent.
"""

import re
from typing import List, Optional, Union

from .constants import ALL_TORRENTS, RECENTLY_ACTIVE, RECENTLY_ACTIVE_ALIASES


TorrentId = Union[int, str]
TorrentIdInput = Union[TorrentId, List[TorrentId], None]

_DIGITS = re.compile(r"[0-9]+")


def is_numeric_id(value) -> bool:
    return isinstance(value, str) and _DIGITS.fullmatch(value) is not None


def is_recently_active(value) -> bool:
    return isinstance(value, str) and value in RECENTLY_ACTIVE_ALIASES


def _normalize_item(item):
    if is_numeric_id(item):
        return int(item)
    if is_recently_active(item):
        return RECENTLY_ACTIVE
    return item


def normalize_torrent_ids(ids: TorrentIdInput) -> Optional[Union[str, List[TorrentId]]]:
    """
    Convert a torrent selector into the value sent as the ``ids`` argument.

    Args:
        ids: A torrent id, numeric string, hash string, list of ids and hashes,
            "all", or "recently_active"/"recently-active"

    Returns:
        None for "all" (omit ``ids``), "recently-active" for that selector,
        otherwise a list of integer ids and hash strings
    """
    if ids is None or ids == ALL_TORRENTS:
        return None
    if is_recently_active(ids):
        return RECENTLY_ACTIVE
    if isinstance(ids, (list, tuple)):
        return [_normalize_item(item) for item in ids]
    return [_normalize_item(ids)]
