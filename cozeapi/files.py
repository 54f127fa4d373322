"""Uploading files to the API and looking them up again."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, BinaryIO, Mapping

from .request import Core, HTTPResponse


@dataclass
class FileInfo:
    """Information about an uploaded file."""

    id: str = ""
    bytes: int = 0
    created_at: int = 0
    file_name: str = ""
    log_id: str = field(default="", compare=False)

    @classmethod
    def _from_payload(cls, data: Mapping[str, Any] | None, response: HTTPResponse) -> FileInfo:
        data = data or {}
        return cls(
            id=str(data.get("id") or ""),
            bytes=int(data.get("bytes") or 0),
            created_at=int(data.get("created_at") or 0),
            file_name=str(data.get("file_name") or ""),
            log_id=response.log_id(),
        )


@dataclass
class UploadFile:
    """A readable binary stream together with the name it is uploaded under."""

    reader: BinaryIO
    name: str

    def read(self, size: int = -1) -> bytes:
        return self.reader.read(size)


class Files:
    """The /v1/files endpoints."""

    def __init__(self, core: Core) -> None:
        self._core = core

    def upload(self, file: UploadFile) -> FileInfo:
        """Upload file and return what the server recorded about it."""
        payload, response = self._core.upload_file("/v1/files/upload", file, file.name)
        return FileInfo._from_payload(payload.get("data"), response)

    def retrieve(self, file_id: str) -> FileInfo:
        """Return the information about the file with id file_id."""
        payload, response = self._core.request(
            "POST", "/v1/files/retrieve", None, params={"file_id": file_id}
        )
        return FileInfo._from_payload(payload.get("data"), response)