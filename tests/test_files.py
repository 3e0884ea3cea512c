import io

import pytest

from monerium_sdk import RequestValidationError, UploadFileRequest

UPLOADED = {
    "id": "file-1",
    "name": "invoice.pdf",
    "type": "application/pdf",
    "size": 11,
    "hash": "2c26b46b68ffc68ff99b453c1d30413413422d706483bfa0f98a5e886266e7ae",
    "meta": {"uploadedBy": "user-1", "createdAt": "2023-05-02T09:30:00Z", "updatedAt": "2023-05-02T09:30:00Z"},
}


@pytest.mark.asyncio
async def test_upload_bytes(client, fake_api):
    fake_api.reply("POST", "/files", UPLOADED)

    uploaded = await client.upload_file(UploadFileRequest(filename="invoice.pdf", content=b"%PDF-1.4 ..."))

    assert uploaded.id == "file-1"
    assert uploaded.meta.uploaded_by == "user-1"
    request = fake_api.requests[0]
    assert request["field"] == "file"
    assert request["filename"] == "invoice.pdf"
    assert request["content"] == b"%PDF-1.4 ..."
    assert request["headers"]["Authorization"] == "Bearer test-token"


@pytest.mark.asyncio
async def test_upload_file_object(client, fake_api):
    fake_api.reply("POST", "/files", UPLOADED)

    await client.upload_file(UploadFileRequest(filename="invoice.pdf", content=io.BytesIO(b"hello world")))

    assert fake_api.requests[0]["content"] == b"hello world"


@pytest.mark.asyncio
async def test_upload_requires_filename(client, fake_api):
    with pytest.raises(RequestValidationError):
        await client.upload_file(UploadFileRequest(content=b"data"))
    assert fake_api.requests == []
