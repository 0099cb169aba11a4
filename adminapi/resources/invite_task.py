"""Invite task prioritization."""

from __future__ import annotations

from adminapi.resources.base import (
    BaseResource,
    compact,
    require,
    require_int,
    require_positive_number,
    validated,
)
from adminapi.transport.types import ResultEnvelope


class InviteTaskApi(BaseResource):
    @validated
    async def get_top_priority_task(self, platform: str | None = None) -> ResultEnvelope:
        """Highest-priority invite task still below its target; ``data`` may be ``None``."""
        return await self._post("/inviteTask/getTopPriorityTask", compact({"platform": platform or None}))

    @validated
    async def update_invite_count(self, _id: str, increment: int = 1) -> ResultEnvelope:
        require(_id, "_id is required")
        require_int(increment, "increment must be a positive integer")
        require_positive_number(increment, "increment must be a positive integer")
        return await self._post("/inviteTask/updateInviteCount", {"_id": _id, "increment": increment})
