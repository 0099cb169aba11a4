"""AI API-key inventory."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from adminapi.resources.base import (
    BaseResource,
    ValidationError,
    compact,
    require,
    require_max_length,
    require_update_data,
    validated,
)
from adminapi.transport.types import ResultEnvelope

MAX_KEY_LENGTH = 500
MAX_BATCH_SIZE = 100


class KeyApi(BaseResource):
    @validated
    async def add_key(
        self,
        key: str,
        platform: str,
        base_url: str | None = None,
        notes: str | None = None,
    ) -> ResultEnvelope:
        require(key, "key is required")
        require_max_length(key, MAX_KEY_LENGTH, f"key must not exceed {MAX_KEY_LENGTH} characters")
        require(platform, "platform is required")

        body = {"key": key, "platform": platform}
        body.update(compact({"base_url": base_url or None, "notes": notes}))
        return await self._post("/aiKey/addKey", body)

    @validated
    async def add_keys(
        self,
        keys: Sequence[str],
        platform: str,
        notes: str | None = None,
    ) -> ResultEnvelope:
        """Batch insert. The backend skips keys it already stores."""
        if isinstance(keys, str) or not isinstance(keys, Sequence) or not keys:
            raise ValidationError("keys must be a non-empty list")
        if len(keys) > MAX_BATCH_SIZE:
            raise ValidationError(f"at most {MAX_BATCH_SIZE} keys can be added at once")
        for key in keys:
            if not isinstance(key, str) or not key.strip():
                raise ValidationError("every key must be a non-empty string")
            require_max_length(key, MAX_KEY_LENGTH, f"key must not exceed {MAX_KEY_LENGTH} characters")
        require(platform, "platform is required")

        body: dict[str, Any] = {"keys": list(keys), "platform": platform}
        body.update(compact({"notes": notes}))
        return await self._post("/aiKey/addKeys", body)

    @validated
    async def update_key_info(self, key: str, update_data: Mapping[str, Any]) -> ResultEnvelope:
        """Update quota/status fields of a stored key, located by the key itself."""
        require(key, "key is required")
        filtered = require_update_data(update_data, protected=("_id", "create_date", "key"))
        return await self._post("/aiKey/updateKeyInfo", {"key": key, "updateData": filtered})
