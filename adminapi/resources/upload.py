"""Image upload (multipart)."""

from __future__ import annotations

import mimetypes
from pathlib import Path

from adminapi.resources.base import BaseResource, ValidationError, require, validated
from adminapi.transport.types import ResultEnvelope

MAX_IMAGE_BYTES = 10 * 1024 * 1024


def _read_content(content: bytes | str | Path) -> bytes:
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if isinstance(content, (str, Path)):
        path = Path(content)
        if not path.is_file():
            raise ValidationError(f"file not found: {path}")
        try:
            return path.read_bytes()
        except OSError as e:
            raise ValidationError(f"cannot read file {path}: {e}") from e
    raise ValidationError("content must be bytes or a file path")


class UploadApi(BaseResource):
    @validated
    async def upload_image(
        self,
        content: bytes | str | Path,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> ResultEnvelope:
        """Upload one image; ``data`` carries the stored URL on success.

        ``content`` is raw bytes or a path; ``filename`` defaults to the
        path's name and ``content_type`` is guessed from the filename.
        """
        if filename is None and isinstance(content, (str, Path)):
            filename = Path(content).name
        require(filename, "filename is required")
        if not isinstance(filename, str):
            raise ValidationError("filename must be a string")

        data = _read_content(content)
        if not data:
            raise ValidationError("image content must not be empty")
        if len(data) > MAX_IMAGE_BYTES:
            raise ValidationError(f"image must not exceed {MAX_IMAGE_BYTES // (1024 * 1024)} MB")

        content_type = content_type or mimetypes.guess_type(filename)[0]
        if not content_type or not content_type.startswith("image/"):
            raise ValidationError("only image files can be uploaded")

        return await self._post("/upload/uploadImage", files={"file": (filename, data, content_type)})
