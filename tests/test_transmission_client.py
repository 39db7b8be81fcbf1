import io
from unittest.mock import patch

import pytest

from torrent_rpc.client import SESSION_HEADER
from torrent_rpc.config import TestConfig
from torrent_rpc.errors import DecodeError, RemoteError
from torrent_rpc.models import (
    DEFAULT_FIELDS,
    Status,
    TorrentAddRequest,
    TorrentGetRequest,
    TorrentRemoveRequest,
    TorrentSetRequest,
)
from torrent_rpc.sinks import StringSink


RPC_URL = TestConfig.TRANSMISSION_URL

MAGNET_LINK = "magnet:?xt=urn:btih:674D163D2184353CE21F3DE5196B0A6D7C2F9FC2&dn=bbb_sunflower_1080p_60fps_stereo_abl.mp4&tr=udp%3a%2f%2ftracker.openbittorrent.com%3a80%2fannounce"


class TestTransmissionClient:
    def test_get(self, client, requests_mock, torrents_fixture):
        requests_mock.post(RPC_URL, json={"result": "success", "arguments": {"torrents": torrents_fixture}})

        torrents = client.get()

        assert requests_mock.last_request.json() == {
            "method": "torrent-get",
            "arguments": {"fields": DEFAULT_FIELDS},
        }
        assert len(torrents) == len(torrents_fixture)
        for torrent, expected in zip(torrents, torrents_fixture):
            assert torrent.model_dump(by_alias=True) == expected

        bunny = torrents[1]
        assert bunny.id == 3
        assert bunny.status == Status.DOWNLOAD
        assert bunny.error_string == "Tracker gave an error"
        assert [f.bytes_completed for f in bunny.files] == [0, 1048576]
        assert bunny.peers == [{"address": "10.0.0.2", "clientName": "qBittorrent 4.6.0"}]

    def test_get_with_filter(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success", "arguments": {"torrents": [{"id": 3, "name": "x"}]}})

        torrents = client.get(TorrentGetRequest(ids=[3], fields=["id", "name"]))

        assert requests_mock.last_request.json()["arguments"] == {"ids": [3], "fields": ["id", "name"]}
        assert torrents[0].name == "x"
        assert torrents[0].total_size == 0

    def test_get_null_fields(self, client, requests_mock):
        requests_mock.post(RPC_URL, text='{"result": "success", "arguments": {"torrents": [{"id": 1, "errorString": null}]}}')

        torrents = client.get()

        assert torrents[0].id == 1
        assert torrents[0].error_string == ""

    def test_get_after_session_challenge(self, client, requests_mock, torrents_fixture):
        requests_mock.post(RPC_URL, [
            {"status_code": 409, "headers": {SESSION_HEADER: "abc123"}},
            {"json": {"result": "success", "arguments": {"torrents": torrents_fixture}}},
        ])

        torrents = client.get()

        assert len(torrents) == 2
        assert client.session_id == "abc123"

    def test_add_magnet(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={
            "result": "success",
            "arguments": {"torrent-added": {
                "hashString": "674d163d2184353ce21f3de5196b0a6d7c2f9fc2",
                "id": 7,
                "name": "bbb_sunflower_1080p_60fps_stereo_abl.mp4",
            }},
        })

        added = client.add(MAGNET_LINK)

        assert requests_mock.last_request.json() == {
            "method": "torrent-add",
            "arguments": {"filename": MAGNET_LINK},
        }
        assert added.id == 7
        assert added.hash_string == "674d163d2184353ce21f3de5196b0a6d7c2f9fc2"
        assert added.name == "bbb_sunflower_1080p_60fps_stereo_abl.mp4"

    def test_add_request(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={
            "result": "success",
            "arguments": {"torrent-duplicate": {"hashString": "abc", "id": 1, "name": "debian"}},
        })

        added = client.add(TorrentAddRequest(filename="/tmp/debian.torrent", paused=True))

        assert requests_mock.last_request.json()["arguments"] == {"filename": "/tmp/debian.torrent", "paused": True}
        assert added.id == 1

    def test_add_without_summary(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success", "arguments": {}})

        with pytest.raises(DecodeError):
            client.add(MAGNET_LINK)

    def test_add_rejected(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "invalid or corrupt torrent file"})

        with pytest.raises(RemoteError, match="invalid or corrupt torrent file"):
            client.add("/tmp/broken.torrent")

    @pytest.mark.parametrize("method_name, rpc_method", [
        ("start", "torrent-start"),
        ("start_now", "torrent-start-now"),
        ("stop", "torrent-stop"),
    ])
    def test_actions(self, client, requests_mock, method_name, rpc_method):
        requests_mock.post(RPC_URL, json={"result": "success"})

        assert getattr(client, method_name)(3) is None
        assert requests_mock.last_request.json() == {"method": rpc_method, "arguments": {"ids": [3]}}

    def test_action_on_all_torrents(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success"})

        client.stop()

        assert requests_mock.last_request.json() == {"method": "torrent-stop", "arguments": {}}

    def test_stop_raw_passthrough(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success", "arguments": "stopping"})
        writer = io.StringIO()

        assert client.stop(3, destination=StringSink(writer)) == "stopping"
        assert writer.getvalue() == "stopping"

    def test_set(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success", "arguments": {}})

        result = client.set(TorrentSetRequest(ids=[3], files_wanted=[1, 3], files_unwanted=[]))

        assert result is None
        assert requests_mock.last_request.json() == {
            "method": "torrent-set",
            "arguments": {"ids": [3], "files-wanted": [1, 3]},
        }

    def test_remove(self, client, requests_mock):
        requests_mock.post(RPC_URL, json={"result": "success"})

        client.remove(TorrentRemoveRequest(ids=[3], delete_local_data=False))

        assert requests_mock.last_request.json() == {
            "method": "torrent-remove",
            "arguments": {"ids": [3], "delete-local-data": False},
        }

    def test_context_manager_closes_session(self, client):
        with patch.object(client.session, "close") as close:
            with client as c:
                assert c is client
        close.assert_called_once()


if __name__ == '__main__':
    pytest.main()
