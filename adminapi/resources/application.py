"""OAuth application pool operations."""

from __future__ import annotations

from adminapi.resources.base import BaseResource, compact, validated
from adminapi.transport.types import ResultEnvelope


class ApplicationApi(BaseResource):
    @validated
    async def get_random_application(self) -> ResultEnvelope:
        """Pick one unused application from the pool and mark it in use."""
        return await self._post("/application/getRandomApplication", {})

    @validated
    async def reset_application_usage(self, _id: str | None = None) -> ResultEnvelope:
        """Release one application, or every application when ``_id`` is omitted."""
        return await self._post("/application/resetApplicationUsage", compact({"_id": _id or None}))
