"""AdminApi: one object exposing every backend resource.

Usage:
    async with AdminApi() as api:
        result = await api.emails.get_latest_email("huel", EmailType.RECEIVE)
        if result.success and result.data:
            print(result.data["subject"])
"""

from __future__ import annotations

import asyncio

import httpx

from adminapi.core.config import ClientConfig
from adminapi.resources import (
    AccountApi,
    ApplicationApi,
    EmailAccountApi,
    EmailApi,
    InviteTaskApi,
    KeyApi,
    UploadApi,
)
from adminapi.transport.client import ApiClient, Sleep


class AdminApi:
    """Resource facade sharing a single ApiClient."""

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.client = ApiClient(config, transport=transport, sleep=sleep)

        self.accounts = AccountApi(self.client)
        self.applications = ApplicationApi(self.client)
        self.emails = EmailApi(self.client)
        self.email_accounts = EmailAccountApi(self.client)
        self.keys = KeyApi(self.client)
        self.invite_tasks = InviteTaskApi(self.client)
        self.uploads = UploadApi(self.client)

    @property
    def config(self) -> ClientConfig:
        return self.client.config

    async def aclose(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> AdminApi:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
