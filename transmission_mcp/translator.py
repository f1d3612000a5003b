"""
Translation between canonical (underscore) names and the legacy wire dialect.

Older Transmission daemons name RPC methods and arguments with hyphens
("torrent-set-location", "download-dir") and report torrent fields in
camelCase ("percentDone"). Callers always use the underscore spelling; this
module rewrites requests for the legacy dialect only.
"""

from typing import Any, Dict, Iterable, List, Mapping


LEGACY_METHODS = {
    "session_get": "session-get",
    "session_set": "session-set",
    "session_stats": "session-stats",
    "session_close": "session-close",
    "torrent_add": "torrent-add",
    "torrent_get": "torrent-get",
    "torrent_set": "torrent-set",
    "torrent_remove": "torrent-remove",
    "torrent_set_location": "torrent-set-location",
    "torrent_rename_path": "torrent-rename-path",
    "torrent_start": "torrent-start",
    "torrent_start_now": "torrent-start-now",
    "torrent_stop": "torrent-stop",
    "torrent_verify": "torrent-verify",
    "torrent_reannounce": "torrent-reannounce",
    "queue_move_top": "queue-move-top",
    "queue_move_up": "queue-move-up",
    "queue_move_down": "queue-move-down",
    "queue_move_bottom": "queue-move-bottom",
    "free_space": "free-space",
    "port_test": "port-test",
    "blocklist_update": "blocklist-update",
}


def to_camel_case(name: str) -> str:
    """percent_done -> percentDone. Names without separators are returned as-is."""
    parts = name.replace("-", "_").split("_")
    head, tail = parts[0], parts[1:]
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def to_hyphen_case(name: str) -> str:
    return name.replace("_", "-")


def legacy_method_name(method: str) -> str:
    return LEGACY_METHODS.get(method, to_hyphen_case(method))


def legacy_fields(fields: Iterable[str]) -> List[str]:
    """
    Request every field under both its given and its camelCase spelling.

    Order follows first occurrence so translating an already translated
    list adds nothing.
    """
    result = []
    seen = set()
    for field in fields:
        for name in (field, to_camel_case(field)):
            if name not in seen:
                seen.add(name)
                result.append(name)
    return result


def drop_absent(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in params.items() if value is not None}


def legacy_params(params: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Rewrite canonical request arguments for the legacy dialect.

    Keys without an underscore are camelCase settings (seedRatioLimit,
    bandwidthPriority) that the daemon expects verbatim.
    """
    result = {}
    for key, value in drop_absent(params).items():
        if key == "fields":
            result[key] = legacy_fields(value)
        elif "_" in key:
            result[to_hyphen_case(key)] = value
        else:
            result[key] = value
    return result
