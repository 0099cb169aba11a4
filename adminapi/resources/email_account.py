"""Email account lifecycle.

Two ways to create a record:
  - Registration info first (reg_* fields, no username/password yet), then
    ``update_email_account`` once the mailbox is registered
  - Complete record in one call when credentials already exist

Updates locate the record by one of ``_id``, ``username`` or
``reg_backup_email`` (backend priority in that order).
"""

from __future__ import annotations

from typing import Any, Mapping

from adminapi.resources.base import (
    BaseResource,
    compact,
    require_any,
    require_update_data,
    validated,
)
from adminapi.transport.types import ResultEnvelope


class EmailAccountApi(BaseResource):
    @validated
    async def add_email_account(
        self,
        username: str | None = None,
        password: str | None = None,
        reg_name: str | None = None,
        reg_id_card: str | None = None,
        reg_backup_email: str | None = None,
        reg_phone: str | None = None,
        notes: str | None = None,
        is_sold: bool = False,
    ) -> ResultEnvelope:
        require_any(
            "at least one field is required",
            username,
            password,
            reg_name,
            reg_id_card,
            reg_backup_email,
            reg_phone,
            notes,
        )
        body = compact(
            {
                "username": username,
                "password": password,
                "reg_name": reg_name,
                "reg_id_card": reg_id_card,
                "reg_backup_email": reg_backup_email,
                "reg_phone": reg_phone,
                "notes": notes,
                "is_sold": is_sold,
            }
        )
        return await self._post("/emailAccountAdmin/addEmailAccount", body)

    @validated
    async def update_email_account(
        self,
        update_data: Mapping[str, Any],
        _id: str | None = None,
        username: str | None = None,
        reg_backup_email: str | None = None,
    ) -> ResultEnvelope:
        """Partial update. ``data`` is ``{"updated", "updatedFields"}`` on success."""
        require_any("one of _id, username or reg_backup_email is required", _id, username, reg_backup_email)
        filtered = require_update_data(update_data)

        body: dict[str, Any] = {"updateData": filtered}
        body.update(
            compact(
                {
                    "_id": _id or None,
                    "username": username or None,
                    "reg_backup_email": reg_backup_email or None,
                }
            )
        )
        return await self._post("/emailAccountAdmin/updateEmailAccount", body)
