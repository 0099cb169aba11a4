"""Platform account management.

Covers account records (create / update / list / delete), login-session
tracking used by the daily check-in job, and balance bookkeeping.
"""

from __future__ import annotations

from typing import Any, Mapping

from adminapi.resources.base import (
    BaseResource,
    ValidationError,
    compact,
    require,
    require_any,
    require_non_negative_number,
    require_page,
    require_page_size,
    require_positive_number,
    require_update_data,
    validated,
)
from adminapi.transport.types import ResultEnvelope


class AccountApi(BaseResource):
    # -- records -----------------------------------------------------------

    @validated
    async def add_account(
        self,
        username: str,
        password: str,
        platform: str | None = None,
        email: str | None = None,
        notes: str | None = None,
        balance: float | None = None,
    ) -> ResultEnvelope:
        require(username, "username is required")
        require(password, "password is required")
        if balance is not None:
            require_non_negative_number(balance, "balance must be a non-negative number")

        body = {"username": username, "password": password}
        body.update(compact({"platform": platform, "email": email, "notes": notes, "balance": balance}))
        return await self._post("/account/addAccount", body)

    @validated
    async def add_official_account(
        self,
        username: str,
        password: str,
        notes: str | None = None,
    ) -> ResultEnvelope:
        """Register an account created through the platform's official sign-up."""
        require(username, "username is required")
        require(password, "password is required")

        body = {"username": username, "password": password}
        body.update(compact({"notes": notes}))
        return await self._post("/account/addOfficialAccount", body)

    @validated
    async def update_account_info(
        self,
        update_data: Mapping[str, Any],
        _id: str | None = None,
        username: str | None = None,
    ) -> ResultEnvelope:
        require_any("one of _id or username is required", _id, username)
        filtered = require_update_data(update_data)

        body: dict[str, Any] = {"updateData": filtered}
        body.update(compact({"_id": _id or None, "username": username or None}))
        return await self._post("/account/updateAccountInfo", body)

    @validated
    async def get_account_list(
        self,
        page: int = 1,
        page_size: int = 20,
        platform: str | None = None,
        username: str | None = None,
    ) -> ResultEnvelope:
        require_page(page)
        require_page_size(page_size)

        body: dict[str, Any] = {"page": page, "pageSize": page_size}
        body.update(compact({"platform": platform or None, "username": username or None}))
        return await self._post("/account/getAccountList", body)

    @validated
    async def delete_account(self, _id: str) -> ResultEnvelope:
        require(_id, "_id is required")
        return await self._post("/account/deleteAccount", {"_id": _id})

    # -- login sessions ----------------------------------------------------

    @validated
    async def get_account_login_info(self, username: str) -> ResultEnvelope:
        require(username, "username is required")
        return await self._post("/account/getAccountLoginInfo", {"username": username})

    @validated
    async def add_account_login_info(
        self,
        username: str,
        session: str,
        user_agent: str | None = None,
        expires_at: int | None = None,
    ) -> ResultEnvelope:
        """Record the session cookie obtained by a successful login."""
        require(username, "username is required")
        require(session, "session is required")

        body = {"username": username, "session": session}
        body.update(compact({"user_agent": user_agent, "expires_at": expires_at}))
        return await self._post("/account/addAccountLoginInfo", body)

    @validated
    async def get_linuxdo_accounts_with_session(self, page: int = 1, page_size: int = 20) -> ResultEnvelope:
        """Linux.do accounts that currently hold a stored login session."""
        require_page(page)
        require_page_size(page_size)
        return await self._post(
            "/account/getLinuxDoAccountsWithSession",
            {"page": page, "pageSize": page_size},
        )

    @validated
    async def get_checkinable_accounts(self, platform: str | None = None) -> ResultEnvelope:
        """Accounts that have not checked in yet today."""
        return await self._post("/account/getCheckinableAccounts", compact({"platform": platform or None}))

    @validated
    async def update_password_change(
        self,
        _id: str,
        password_changed: bool = True,
        new_password: str | None = None,
    ) -> ResultEnvelope:
        require(_id, "_id is required")
        if not isinstance(password_changed, bool):
            raise ValidationError("password_changed must be a boolean")

        body: dict[str, Any] = {"_id": _id, "password_changed": password_changed}
        body.update(compact({"new_password": new_password or None}))
        return await self._post("/account/updatePasswordChange", body)

    # -- balance -----------------------------------------------------------

    @validated
    async def increment_balance(self, _id: str, amount: float) -> ResultEnvelope:
        """Add ``amount`` to the stored balance (e.g. after a check-in reward)."""
        require(_id, "_id is required")
        require_positive_number(amount, "amount must be a positive number")
        return await self._post("/account/incrementBalance", {"_id": _id, "amount": amount})
