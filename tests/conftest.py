import pytest

from torrent_rpc.client import TransmissionClient
from torrent_rpc.config import TestConfig
from torrent_rpc.session import SessionTokenCache, session_tokens


RPC_URL = TestConfig.TRANSMISSION_URL


TORRENTS_FIXTURE = [
    {
        "id": 1,
        "name": "debian-12.6.0-amd64-netinst.iso",
        "error": 0,
        "errorString": "",
        "files": [
            {"bytesCompleted": 661651456, "length": 661651456, "name": "debian-12.6.0-amd64-netinst.iso"},
        ],
        "haveValid": 661651456,
        "isFinished": False,
        "peers": [],
        "percentDone": 1.0,
        "rateDownload": 0,
        "rateUpload": 5120,
        "status": 6,
        "totalSize": 661651456,
    },
    {
        "id": 3,
        "name": "Big Buck Bunny",
        "error": 2,
        "errorString": "Tracker gave an error",
        "files": [
            {"bytesCompleted": 0, "length": 140, "name": "Big Buck Bunny/Big Buck Bunny.en.srt"},
            {"bytesCompleted": 1048576, "length": 276134947, "name": "Big Buck Bunny/Big Buck Bunny.mp4"},
        ],
        "haveValid": 1048576,
        "isFinished": False,
        "peers": [{"address": "10.0.0.2", "clientName": "qBittorrent 4.6.0"}],
        "percentDone": 0.0038,
        "rateDownload": 204800,
        "rateUpload": 0,
        "status": 4,
        "totalSize": 276135087,
    },
]


@pytest.fixture(autouse=True)
def clear_session_tokens():
    session_tokens.clear()
    yield
    session_tokens.clear()


@pytest.fixture
def tokens():
    return SessionTokenCache()


@pytest.fixture
def client(tokens):
    client = TransmissionClient(
        url=RPC_URL,
        timeout=TestConfig.TRANSMISSION_TIMEOUT,
        max_session_retries=TestConfig.SESSION_RETRY_LIMIT,
        tokens=tokens,
    )
    yield client
    client.close()


@pytest.fixture
def torrents_fixture():
    return [dict(t) for t in TORRENTS_FIXTURE]
