from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Optional, Union

from ..common import ApiModel
from ..errors import RequestValidationError
from ..internal.async_client import AsyncClient


class FileMeta(ApiModel):
    uploaded_by: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class File(ApiModel):
    """A successfully uploaded file."""
    id: str = ""
    name: str = ""
    type: str = ""
    size: int = 0
    hash: str = ""
    meta: Optional[FileMeta] = None


@dataclass
class UploadFileRequest:
    """Name and content (bytes or a binary file object) of a file to upload."""
    filename: str = ""
    content: Union[bytes, BinaryIO] = b""

    def validate(self) -> None:
        if not self.filename:
            raise RequestValidationError("empty filename")


class Client:
    """Client for the generic file upload endpoint."""

    def __init__(self, async_client: AsyncClient):
        self.async_client = async_client

    async def upload_file(self, params: UploadFileRequest) -> File:
        """
        Upload a file, e.g. a supporting document for a large redeem order.

        Raises:
            RequestValidationError: If the filename is empty
        """
        params.validate()
        data = await self.async_client.upload("/files", params.filename, params.content)
        return File.model_validate(data)
