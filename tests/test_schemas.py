import pytest
from pydantic import ValidationError

from transmission_mcp.constants import QueueDirection, ResponseFormat
from transmission_mcp.schemas import (
    AddTorrentInput,
    GetTorrentInput,
    ListTorrentsInput,
    QueueMoveInput,
    SetTorrentInput,
    coerce_torrent_ids,
)


class TestTorrentIds:
    def test_numeric_string_becomes_int(self):
        assert GetTorrentInput(ids="5").ids == 5

    def test_numeric_strings_in_list(self):
        assert GetTorrentInput(ids=["1", 2, "abc"]).ids == [1, 2, "abc"]

    @pytest.mark.parametrize("selector", ["all", "recently_active", "recently-active"])
    def test_selectors(self, selector):
        assert GetTorrentInput(ids=selector).ids == selector

    def test_zero_rejected(self):
        with pytest.raises(ValidationError):
            GetTorrentInput(ids=0)

    def test_empty_string_rejected(self):
        with pytest.raises(ValidationError):
            GetTorrentInput(ids="")

    def test_ids_required(self):
        with pytest.raises(ValidationError):
            GetTorrentInput()

    def test_coerce_leaves_other_values(self):
        assert coerce_torrent_ids("abc") == "abc"
        assert coerce_torrent_ids(3) == 3


class TestListTorrentsInput:
    def test_defaults(self):
        params = ListTorrentsInput()

        assert params.limit == 20
        assert params.offset == 0
        assert params.response_format == ResponseFormat.MARKDOWN

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_range(self, limit):
        with pytest.raises(ValidationError):
            ListTorrentsInput(limit=limit)

    def test_negative_offset(self):
        with pytest.raises(ValidationError):
            ListTorrentsInput(offset=-1)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            ListTorrentsInput(page=2)

    def test_json_format(self):
        assert ListTorrentsInput(response_format="json").response_format == ResponseFormat.JSON


def test_add_torrent_strips_whitespace():
    assert AddTorrentInput(torrent="  magnet:?xt=urn:btih:abc  ").torrent == "magnet:?xt=urn:btih:abc"


def test_add_torrent_requires_source():
    with pytest.raises(ValidationError):
        AddTorrentInput(torrent="")


def test_set_torrent_ranges():
    assert SetTorrentInput(ids=1, bandwidthPriority=-1, seedRatioMode=2).bandwidthPriority == -1
    with pytest.raises(ValidationError):
        SetTorrentInput(ids=1, bandwidthPriority=2)
    with pytest.raises(ValidationError):
        SetTorrentInput(ids=1, downloadLimit=-5)


def test_queue_direction():
    assert QueueMoveInput(ids=1, direction="up").direction == QueueDirection.UP
    with pytest.raises(ValidationError):
        QueueMoveInput(ids=1, direction="sideways")
