"""
Request and response shapes for the Transmission RPC methods.

Field names follow Python conventions; the wire names used by the daemon are
kept as pydantic aliases. Request models are serialized by alias with unset
optional fields left out. Response models ignore fields they do not declare
and fall back to zero values for fields the daemon did not send or sent as
null. Status ordinals this client does not know are kept as plain ints.

Reference: https://github.com/transmission/transmission/blob/main/docs/rpc-spec.md
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


TorrentId = Union[int, str]


class Status(IntEnum):
    """Torrent lifecycle status as reported by the daemon."""
    STOPPED = 0
    CHECK_WAIT = 1
    CHECK = 2
    DOWNLOAD_WAIT = 3
    DOWNLOAD = 4
    SEED_WAIT = 5
    SEED = 6


class RPCModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # JSON null leaves the field at its zero value
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    def to_arguments(self) -> Dict[str, Any]:
        """Dump the model as an RPC arguments object."""
        data = self.model_dump(mode="json", by_alias=True, exclude_none=True)
        # Empty lists are left out like unset ones
        return {key: value for key, value in data.items() if value != []}


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------

class TorrentFileStat(RPCModel):
    model_config = ConfigDict(frozen=True)

    bytes_completed: int = Field(0, alias="bytesCompleted")
    length: int = 0
    name: str = ""


class Torrent(RPCModel):
    """Read-only snapshot of a torrent returned by torrent-get."""
    model_config = ConfigDict(frozen=True)

    id: int = 0
    name: str = ""
    error: int = 0
    error_string: str = Field("", alias="errorString")
    files: List[TorrentFileStat] = Field(default_factory=list)
    have_valid: int = Field(0, alias="haveValid")
    is_finished: bool = Field(False, alias="isFinished")
    peers: List[Any] = Field(default_factory=list)
    percent_done: float = Field(0.0, alias="percentDone")
    rate_download: int = Field(0, alias="rateDownload")
    rate_upload: int = Field(0, alias="rateUpload")
    status: Union[Status, int] = Field(Status.STOPPED, union_mode="left_to_right")
    total_size: int = Field(0, alias="totalSize")

    @property
    def is_active(self) -> bool:
        return self.status in (Status.DOWNLOAD, Status.SEED)

    @property
    def status_name(self) -> str:
        if isinstance(self.status, Status):
            return self.status.name.lower()
        return str(self.status)


# Every field of the Torrent projection, by wire name
DEFAULT_FIELDS = [
    "id", "name", "percentDone", "totalSize", "rateDownload", "rateUpload",
    "files", "isFinished", "status", "error", "haveValid", "errorString", "peers",
]


class TorrentGetResponse(RPCModel):
    torrents: List[Torrent] = Field(default_factory=list)


class TorrentAdded(RPCModel):
    model_config = ConfigDict(frozen=True)

    hash_string: str = Field("", alias="hashString")
    id: int = 0
    name: str = ""


class TorrentAddResponse(RPCModel):
    torrent_added: Optional[TorrentAdded] = Field(None, alias="torrent-added")
    torrent_duplicate: Optional[TorrentAdded] = Field(None, alias="torrent-duplicate")

    @property
    def torrent(self) -> Optional[TorrentAdded]:
        return self.torrent_added or self.torrent_duplicate


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------

class TorrentGetRequest(RPCModel):
    ids: Optional[List[TorrentId]] = None
    fields: List[str] = Field(default_factory=lambda: list(DEFAULT_FIELDS))


class TorrentAddRequest(RPCModel):
    filename: Optional[str] = None  # Path or URL to a .torrent file, or a magnet URI
    download_dir: Optional[str] = Field(None, alias="download-dir")
    paused: Optional[bool] = None


class TorrentActionRequest(RPCModel):
    """Arguments of torrent-start, torrent-start-now and torrent-stop."""
    ids: Optional[List[TorrentId]] = None


class TorrentSetRequest(RPCModel):
    ids: Optional[List[TorrentId]] = None
    files_wanted: Optional[List[int]] = Field(None, alias="files-wanted")
    files_unwanted: Optional[List[int]] = Field(None, alias="files-unwanted")


class TorrentRemoveRequest(RPCModel):
    ids: Optional[List[TorrentId]] = None
    delete_local_data: bool = Field(False, alias="delete-local-data")
