import json
from unittest.mock import MagicMock

import pytest
import requests

from transmission_mcp.rpc_client import TransmissionRpcClient


BASE_URL = "http://localhost:9091"
RPC_URL = BASE_URL + "/transmission/rpc"


def make_response(body=None, status_code=200, headers=None, text=None, reason="OK"):
    """Build a real requests.Response carrying a canned reply."""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    response.url = RPC_URL
    if text is None:
        text = json.dumps(body) if body is not None else ""
    response._content = text.encode("utf-8")
    response.encoding = "utf-8"
    response.headers.update(headers or {})
    return response


def session_conflict(session_id="token-1"):
    return make_response(
        status_code=409,
        reason="Conflict",
        headers={"X-Transmission-Session-Id": session_id},
        text="<h1>409: Conflict</h1>",
    )


def sent_bodies(http):
    return [call.kwargs["json"] for call in http.post.call_args_list]


def sent_headers(http):
    return [call.kwargs["headers"] for call in http.post.call_args_list]


@pytest.fixture
def http():
    """Stand-in for the requests session; set post.side_effect per test."""
    return MagicMock()


@pytest.fixture
def client(http):
    return TransmissionRpcClient(BASE_URL, session=http)
