"""
Transmission RPC client that speaks both wire dialects of the daemon.

Newer daemons accept JSON-RPC 2.0 requests with snake_case method names.
Older daemons only understand the legacy protocol: hyphenated method names,
an ``arguments`` envelope and a ``result`` string that reads "success" when
the call worked. The client tries the JSON-RPC form first and, the first time
the daemon answers that the method is not recognized, switches to the legacy
form for the rest of its lifetime.

Both dialects share the CSRF protection scheme: the daemon answers 409 with
an ``X-Transmission-Session-Id`` header, and the request is sent again once
with that token.
"""

import threading
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional

import requests
from requests.auth import HTTPBasicAuth

from .constants import DEFAULT_TRANSMISSION_URL, RPC_PATH, SESSION_ID_HEADER
from .exceptions import DialectMismatch, RpcError, TransportError
from .logger import logger
from .translator import drop_absent, legacy_method_name, legacy_params


METHOD_NOT_RECOGNIZED = "not recognized"
LEGACY_SUCCESS = "success"


def is_method_not_recognized(text) -> bool:
    """Whether a daemon message says the requested method name is unknown."""
    return isinstance(text, str) and METHOD_NOT_RECOGNIZED in text.lower()


class Dialect(Enum):
    MODERN = "modern"
    LEGACY = "legacy"


@dataclass(frozen=True)
class ConnectionState:
    session_id: Optional[str] = None
    dialect: Dialect = Dialect.MODERN


class TransmissionRpcClient:
    def __init__(
        self,
        base_url: str = DEFAULT_TRANSMISSION_URL,
        username: Optional[str] = None,
        password: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip('/')
        self.url = self.base_url + RPC_PATH
        self.timeout = timeout
        self.session = session or requests.Session()
        if username or password:
            self.auth = HTTPBasicAuth(username or "", password or "")
        else:
            self.auth = None
        self._state = ConnectionState()
        self._state_lock = threading.Lock()

    @property
    def session_id(self) -> Optional[str]:
        return self._state.session_id

    @property
    def dialect(self) -> Dialect:
        return self._state.dialect

    def _update_state(self, **changes):
        with self._state_lock:
            self._state = replace(self._state, **changes)

    def call(self, method: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """
        Invoke an RPC method by its canonical name.

        Args:
            method: Canonical method name, e.g. "torrent_get"
            params: Canonical arguments; None values are not sent

        Returns:
            The result payload, usually a dict

        Raises:
            RpcError: The daemon rejected the request
            TransportError: The daemon could not be reached or the reply was unusable
        """
        params = dict(params or {})

        if self.dialect is Dialect.LEGACY:
            return self._call_legacy(method, params)

        try:
            return self._call_modern(method, params)
        except DialectMismatch as e:
            logger.info(f"Transmission at {self.base_url} does not support JSON-RPC ({e}), "
                        f"switching to the legacy protocol")
            self._update_state(dialect=Dialect.LEGACY)
            return self._call_legacy(method, params)

    def _call_modern(self, method: str, params: Dict[str, Any]) -> Any:
        query = {
            "jsonrpc": "2.0",
            "method": method,
            "params": drop_absent(params),
            "id": int(time.time() * 1000),
        }

        try:
            data = self._http_query(query)
            if isinstance(data, dict) and data.get("error"):
                raise RpcError(self._error_message(data["error"]))
        except (RpcError, TransportError) as e:
            if is_method_not_recognized(str(e)):
                raise DialectMismatch(str(e)) from e
            raise

        result = data
        if isinstance(data, dict):
            result = data.get("result")
            if result is None:
                result = data.get("arguments", data)
        if is_method_not_recognized(result):
            raise DialectMismatch(result)
        return result

    def _call_legacy(self, method: str, params: Dict[str, Any]) -> Any:
        query = {
            "method": legacy_method_name(method),
            "arguments": legacy_params(params),
        }
        data = self._http_query(query)
        if not isinstance(data, dict):
            raise TransportError(f"Unexpected response from Transmission: {data!r}")

        result = data.get("result")
        if result is None:
            raise RpcError("Query failed without result")
        if result != LEGACY_SUCCESS:
            raise RpcError(str(result))
        return data.get("arguments", data)

    @staticmethod
    def _error_message(error) -> str:
        if not isinstance(error, dict):
            return str(error)
        message = error.get("message") or "Unknown Transmission RPC error"
        data = error.get("data")
        detail = data.get("errorString") if isinstance(data, dict) else None
        return f"{message}: {detail}" if detail else message

    def _http_query(self, query: Dict[str, Any]) -> Any:
        """
        POST a request body, negotiating the session id if the daemon asks for it.
        """
        for attempt in range(2):
            headers = {"Content-Type": "application/json"}
            if self.session_id:
                headers[SESSION_ID_HEADER] = self.session_id

            logger.debug(f"POST {self.url} {query['method']} (attempt {attempt + 1})")
            start = time.time()
            try:
                response = self.session.post(
                    self.url,
                    json=query,
                    headers=headers,
                    auth=self.auth,
                    timeout=self.timeout
                )
            except requests.exceptions.Timeout as e:
                logger.error(f"Request to Transmission at {self.url} timed out: {e}")
                raise TransportError(f"Request to {self.url} timed out: {e}") from e
            except requests.exceptions.RequestException as e:
                logger.error(f"Failed to connect to Transmission at {self.url}: {e}")
                raise TransportError(f"Connection to {self.url} failed: {e}") from e
            logger.debug(f"HTTP request took {time.time() - start:.3f} s")

            if response.status_code != 409:
                return self._parse_response(response)

            session_id = response.headers.get(SESSION_ID_HEADER)
            if not session_id:
                raise TransportError("Transmission answered 409 without a session id")
            logger.info("Transmission issued a new session id")
            self._update_state(session_id=session_id)

        raise TransportError("Session ID negotiation failed: the new session id was rejected")

    @staticmethod
    def _parse_response(response: requests.Response) -> Any:
        if not 200 <= response.status_code < 300:
            raise TransportError(
                f"HTTP {response.status_code} {response.reason or ''}".rstrip()
                + f": {response.text[:200]}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(f"Malformed response body: {response.text[:200]!r}") from e
