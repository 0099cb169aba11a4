"""Tests for image uploads."""

import httpx
import pytest

from adminapi.resources.upload import MAX_IMAGE_BYTES
from adminapi.transport.types import ResultEnvelope

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class TestUploadImage:
    @pytest.mark.asyncio
    async def test_upload_bytes(self, api, backend, ok):
        backend.queue(ok({"url": "https://cdn.example.com/a.png"}))
        result = await api.uploads.upload_image(PNG, filename="a.png")

        assert result == ResultEnvelope.ok({"url": "https://cdn.example.com/a.png"})
        request = backend.requests[0]
        assert request.url.path == "/upload/uploadImage"
        assert request.headers["content-type"].startswith("multipart/form-data")
        assert b'name="file"; filename="a.png"' in request.content
        assert b"Content-Type: image/png" in request.content

    @pytest.mark.asyncio
    async def test_upload_from_path(self, api, backend, tmp_path):
        image = tmp_path / "captcha.jpg"
        image.write_bytes(b"\xff\xd8\xff" + b"\x00" * 16)

        result = await api.uploads.upload_image(image)
        assert result.success is True
        assert b'filename="captcha.jpg"' in backend.requests[0].content
        assert b"Content-Type: image/jpeg" in backend.requests[0].content

    @pytest.mark.asyncio
    async def test_retry_resends_file(self, api, backend, ok):
        backend.queue(httpx.WriteError("broken pipe"), ok({"url": "u"}))
        result = await api.uploads.upload_image(PNG, filename="a.png")

        assert result.success is True
        assert backend.calls == 2
        assert backend.requests[0].content.count(PNG) == 1
        assert backend.requests[1].content.count(PNG) == 1

    @pytest.mark.parametrize(
        "content, kwargs, message",
        [
            (b"", {"filename": "a.png"}, "image content must not be empty"),
            (PNG, {}, "filename is required"),
            (PNG, {"filename": "notes.txt"}, "only image files can be uploaded"),
            (PNG, {"filename": "a.bin", "content_type": "application/pdf"}, "only image files can be uploaded"),
            (b"\x00" * (MAX_IMAGE_BYTES + 1), {"filename": "big.png"}, "image must not exceed 10 MB"),
            (12345, {"filename": "a.png"}, "content must be bytes or a file path"),
            (PNG, {"filename": 123}, "filename must be a string"),
        ],
    )
    @pytest.mark.asyncio
    async def test_upload_validation(self, api, backend, content, kwargs, message):
        result = await api.uploads.upload_image(content, **kwargs)
        assert result == ResultEnvelope.fail(message)
        assert backend.calls == 0

    @pytest.mark.asyncio
    async def test_missing_file(self, api, backend, tmp_path):
        result = await api.uploads.upload_image(tmp_path / "missing.png")
        assert result.success is False
        assert result.error.startswith("file not found")
        assert backend.calls == 0

    @pytest.mark.asyncio
    async def test_unexpected_argument_error_becomes_failure(self, api, backend):
        result = await api.uploads.upload_image(PNG, filename="a.png", content_type=42)

        assert isinstance(result, ResultEnvelope)
        assert result.success is False
        assert "startswith" in result.error
        assert backend.calls == 0
