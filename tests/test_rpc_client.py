"""
Tests for the Transmission RPC client: session id negotiation, the JSON-RPC
request shape, fallback to the legacy protocol, and error classification.

The requests session is a mock; replies are real requests.Response objects.
"""

import pytest
import requests
from requests.auth import HTTPBasicAuth

from conftest import RPC_URL, make_response, sent_bodies, sent_headers, session_conflict
from transmission_mcp.exceptions import RpcError, TransportError
from transmission_mcp.rpc_client import (
    Dialect,
    TransmissionRpcClient,
    is_method_not_recognized,
)


def modern_ok(result=None):
    return make_response({"jsonrpc": "2.0", "result": result if result is not None else {}, "id": 1})


def legacy_ok(arguments=None):
    return make_response({"result": "success", "arguments": arguments if arguments is not None else {}})


LEGACY_REJECTION = {"result": "method name not recognized", "arguments": {}}


class TestSessionNegotiation:
    def test_stale_session_is_resent_once_with_new_token(self, client, http):
        http.post.side_effect = [session_conflict("abc123"), modern_ok({"version": "4.0.0"})]

        result = client.call("session_get")

        assert result == {"version": "4.0.0"}
        assert http.post.call_count == 2
        headers = sent_headers(http)
        assert "X-Transmission-Session-Id" not in headers[0]
        assert headers[1]["X-Transmission-Session-Id"] == "abc123"
        bodies = sent_bodies(http)
        assert bodies[0] == bodies[1]
        assert client.session_id == "abc123"

    def test_token_is_reused_on_later_calls(self, client, http):
        http.post.side_effect = [session_conflict("abc123"), modern_ok(), modern_ok()]

        client.call("session_get")
        client.call("session_stats")

        assert http.post.call_count == 3
        assert sent_headers(http)[2]["X-Transmission-Session-Id"] == "abc123"

    def test_new_token_replaces_old_one(self, client, http):
        http.post.side_effect = [
            session_conflict("first"), modern_ok(),
            session_conflict("second"), modern_ok(),
        ]

        client.call("session_get")
        client.call("session_get")

        headers = sent_headers(http)
        assert headers[2]["X-Transmission-Session-Id"] == "first"
        assert headers[3]["X-Transmission-Session-Id"] == "second"
        assert client.session_id == "second"

    def test_second_conflict_raises_transport_error(self, client, http):
        http.post.side_effect = [session_conflict("one"), session_conflict("two")]

        with pytest.raises(TransportError, match="Session ID negotiation failed"):
            client.call("session_get")

        assert http.post.call_count == 2

    def test_conflict_without_token_raises_transport_error(self, client, http):
        http.post.side_effect = [make_response(status_code=409, reason="Conflict", text="")]

        with pytest.raises(TransportError):
            client.call("session_get")

        assert http.post.call_count == 1


class TestModernProtocol:
    def test_request_shape(self, client, http):
        http.post.side_effect = [modern_ok()]

        client.call("torrent_stop", {"ids": [1, 2]})

        call = http.post.call_args
        assert call.args[0] == RPC_URL
        body = call.kwargs["json"]
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "torrent_stop"
        assert body["params"] == {"ids": [1, 2]}
        assert isinstance(body["id"], int)
        assert call.kwargs["headers"]["Content-Type"] == "application/json"
        assert client.dialect is Dialect.MODERN

    def test_absent_params_are_not_sent(self, client, http):
        http.post.side_effect = [modern_ok()]

        client.call("torrent_add", {"filename": "magnet:?xt=urn:btih:abc", "download_dir": None, "paused": None})

        assert sent_bodies(http)[0]["params"] == {"filename": "magnet:?xt=urn:btih:abc"}

    def test_no_params_sends_empty_object(self, client, http):
        http.post.side_effect = [modern_ok()]

        client.call("session_get")

        assert sent_bodies(http)[0]["params"] == {}

    def test_result_is_returned(self, client, http):
        http.post.side_effect = [modern_ok({"torrents": [{"id": 1, "name": "debian.iso"}]})]

        assert client.call("torrent_get", {"fields": ["id", "name"]}) == {
            "torrents": [{"id": 1, "name": "debian.iso"}]
        }

    def test_arguments_returned_when_result_missing(self, client, http):
        http.post.side_effect = [make_response({"arguments": {"size_bytes": 100}})]

        assert client.call("free_space", {"path": "/data"}) == {"size_bytes": 100}

    def test_error_envelope_raises_rpc_error(self, client, http):
        http.post.side_effect = [make_response({
            "jsonrpc": "2.0",
            "error": {"code": 3, "message": "Invalid argument", "data": {"errorString": "bad ids"}},
            "id": 1,
        })]

        with pytest.raises(RpcError) as excinfo:
            client.call("torrent_stop", {"ids": ["zzz"]})

        assert excinfo.value.message == "Invalid argument: bad ids"
        assert client.dialect is Dialect.MODERN

    def test_error_without_detail(self, client, http):
        http.post.side_effect = [make_response({"jsonrpc": "2.0", "error": {"code": 1, "message": "Oops"}, "id": 1})]

        with pytest.raises(RpcError, match="^Oops$"):
            client.call("session_get")


class TestLegacyFallback:
    def test_unrecognized_method_switches_to_legacy(self, client, http):
        http.post.side_effect = [make_response(LEGACY_REJECTION), legacy_ok()]

        result = client.call("torrent_stop", {"ids": [1, 2]})

        assert result == {}
        assert http.post.call_count == 2
        assert sent_bodies(http)[1] == {"method": "torrent-stop", "arguments": {"ids": [1, 2]}}
        assert client.dialect is Dialect.LEGACY

    def test_switch_is_sticky(self, client, http):
        http.post.side_effect = [make_response(LEGACY_REJECTION), legacy_ok(), legacy_ok({"version": "2.94"})]

        client.call("torrent_stop", {"ids": [1]})
        result = client.call("session_get")

        assert result == {"version": "2.94"}
        assert http.post.call_count == 3
        assert sent_bodies(http)[2] == {"method": "session-get", "arguments": {}}

    def test_http_error_mentioning_unrecognized_method_falls_back(self, client, http):
        http.post.side_effect = [
            make_response(status_code=400, reason="Bad Request", text="Method Not Recognized"),
            legacy_ok(),
        ]

        client.call("torrent_start", {"ids": [3]})

        assert client.dialect is Dialect.LEGACY
        assert sent_bodies(http)[1]["method"] == "torrent-start"

    def test_error_envelope_mentioning_unrecognized_method_falls_back(self, client, http):
        http.post.side_effect = [
            make_response({"jsonrpc": "2.0", "error": {"code": -32601, "message": "method not recognized"}, "id": 1}),
            legacy_ok(),
        ]

        client.call("session_stats")

        assert client.dialect is Dialect.LEGACY
        assert sent_bodies(http)[1] == {"method": "session-stats", "arguments": {}}

    def test_session_negotiation_during_fallback(self, client, http):
        http.post.side_effect = [
            session_conflict("tok"),
            make_response(LEGACY_REJECTION),
            legacy_ok(),
        ]

        client.call("torrent_verify", {"ids": [4]})

        assert http.post.call_count == 3
        assert sent_headers(http)[2]["X-Transmission-Session-Id"] == "tok"

    def test_legacy_params_are_translated(self, client, http):
        client._update_state(dialect=Dialect.LEGACY)
        http.post.side_effect = [legacy_ok()]

        client.call("torrent_set_location", {"ids": [1], "location": "/data", "move": True, "delete_local_data": None})

        assert sent_bodies(http)[0] == {
            "method": "torrent-set-location",
            "arguments": {"ids": [1], "location": "/data", "move": True},
        }

    def test_legacy_fields_request_both_spellings(self, client, http):
        client._update_state(dialect=Dialect.LEGACY)
        http.post.side_effect = [legacy_ok({"torrents": []})]

        client.call("torrent_get", {"fields": ["id", "percent_done"]})

        assert sent_bodies(http)[0]["arguments"]["fields"] == ["id", "percent_done", "percentDone"]

    def test_legacy_failure_raises_rpc_error(self, client, http):
        client._update_state(dialect=Dialect.LEGACY)
        http.post.side_effect = [make_response({"result": "invalid or corrupt torrent file", "arguments": {}})]

        with pytest.raises(RpcError, match="invalid or corrupt torrent file"):
            client.call("torrent_add", {"metainfo": "bm90IGEgdG9ycmVudA=="})

    def test_legacy_missing_result_raises_rpc_error(self, client, http):
        client._update_state(dialect=Dialect.LEGACY)
        http.post.side_effect = [make_response({"arguments": {}})]

        with pytest.raises(RpcError, match="without result"):
            client.call("session_get")

    def test_legacy_success_without_arguments_returns_body(self, client, http):
        client._update_state(dialect=Dialect.LEGACY)
        http.post.side_effect = [make_response({"result": "success"})]

        assert client.call("torrent_reannounce", {"ids": [1]}) == {"result": "success"}


class TestTransportErrors:
    def test_connection_error(self, client, http):
        http.post.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(TransportError, match="Connection refused"):
            client.call("session_get")

    def test_timeout(self, client, http):
        http.post.side_effect = requests.exceptions.ReadTimeout("read timed out")

        with pytest.raises(TransportError, match="timed out"):
            client.call("session_get")

    def test_non_json_body(self, client, http):
        http.post.side_effect = [make_response(text="<html>not json</html>")]

        with pytest.raises(TransportError, match="Malformed"):
            client.call("session_get")

    def test_server_error_status(self, client, http):
        http.post.side_effect = [make_response(status_code=500, reason="Internal Server Error", text="boom")]

        with pytest.raises(TransportError) as excinfo:
            client.call("session_get")

        assert "HTTP 500" in str(excinfo.value)
        assert "boom" in str(excinfo.value)

    def test_unauthorized_status(self, client, http):
        http.post.side_effect = [make_response(status_code=401, reason="Unauthorized", text="401: Unauthorized")]

        with pytest.raises(TransportError, match="401"):
            client.call("session_get")
        assert client.dialect is Dialect.MODERN


class TestClientConfiguration:
    def test_basic_auth_is_sent(self, http):
        client = TransmissionRpcClient("http://localhost:9091", username="admin", password="secret", session=http)
        http.post.side_effect = [modern_ok()]

        client.call("session_get")

        assert http.post.call_args.kwargs["auth"] == HTTPBasicAuth("admin", "secret")

    def test_no_auth_without_credentials(self, client, http):
        http.post.side_effect = [modern_ok()]

        client.call("session_get")

        assert http.post.call_args.kwargs["auth"] is None

    def test_trailing_slash_is_stripped(self, http):
        client = TransmissionRpcClient("http://nas:9091/", session=http)

        assert client.url == "http://nas:9091/transmission/rpc"

    def test_timeout_is_passed_to_transport(self, http):
        client = TransmissionRpcClient("http://localhost:9091", timeout=5, session=http)
        http.post.side_effect = [modern_ok()]

        client.call("session_get")

        assert http.post.call_args.kwargs["timeout"] == 5

    def test_initial_state(self, client):
        assert client.session_id is None
        assert client.dialect is Dialect.MODERN


@pytest.mark.parametrize("text,expected", [
    ("method name not recognized", True),
    ("Method Not Recognized", True),
    ("success", False),
    ("", False),
    (None, False),
    ({"result": "not recognized"}, False),
])
def test_is_method_not_recognized(text, expected):
    assert is_method_not_recognized(text) is expected
