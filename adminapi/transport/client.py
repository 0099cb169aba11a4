"""Retry-Aware Transport: httpx wrapper with logging and bounded retries.

Each attempt runs through the same pipeline, composed as plain wrappers
around the base send (outermost first):

  with_retry                attach default RetryState, loop on retryable errors
    with_response_logging   log status or classified error
      with_request_logging  log method/path/attempt before dispatch
        ApiClient._dispatch raw httpx call, non-2xx → HTTPStatusError

Retry policy:
  - Only failures with no response at all are retried (see errors.py)
  - Constant delay between attempts, no backoff growth, no circuit breaking
  - Exhausting the budget re-raises the last error unmodified

Usage:
    async with ApiClient(ClientConfig.from_settings()) as client:
        result = await client.call(RequestDescriptor("POST", "/email/queryEmails", body))
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Mapping

import httpx

from adminapi.core.config import ClientConfig
from adminapi.transport.errors import error_code, is_retryable
from adminapi.transport.normalizer import extract_error_message, handle_api_response
from adminapi.transport.types import RequestDescriptor, ResultEnvelope, RetryState

logger = logging.getLogger(__name__)

Send = Callable[[RequestDescriptor], Awaitable[httpx.Response]]
Sleep = Callable[[float], Awaitable[Any]]


def _log_fields(request: RequestDescriptor, **fields: Any) -> dict[str, Any]:
    retry = request.retry or RetryState()
    return {
        "method": request.method.upper(),
        "path": request.path,
        "attempt": retry.attempt,
        "max_retries": retry.max_retries,
        **fields,
    }


# ---------------------------------------------------------------------------
# Wrappers
# ---------------------------------------------------------------------------


def with_request_logging(send: Send) -> Send:
    """Log every outgoing attempt."""

    async def _send(request: RequestDescriptor) -> httpx.Response:
        logger.info(
            "[api request] %s %s",
            request.method.upper(),
            request.path,
            extra=_log_fields(request),
        )
        return await send(request)

    return _send


def with_response_logging(send: Send) -> Send:
    """Log the response status, or classify and log the failure."""

    async def _send(request: RequestDescriptor) -> httpx.Response:
        try:
            response = await send(request)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(
                "[api error] %d - %s",
                status,
                extract_error_message(e),
                extra=_log_fields(request, status=status, error_code=str(status)),
            )
            raise
        except Exception as e:
            code = error_code(e)
            if is_retryable(e):
                logger.error(
                    "[api error] no response - %s (code: %s, path: %s)",
                    e,
                    code,
                    request.path,
                    extra=_log_fields(request, error_code=code),
                )
            else:
                logger.error("[api error] %s", e, extra=_log_fields(request, error_code=code))
            raise

        logger.info(
            "[api response] %s - status: %d",
            request.path,
            response.status_code,
            extra=_log_fields(request, status=response.status_code),
        )
        return response

    return _send


def with_retry(send: Send, defaults: RetryState, sleep: Sleep = asyncio.sleep) -> Send:
    """Reissue the request while the failure is retryable and budget remains.

    A request without retry state gets ``defaults``; a request that already
    carries one keeps its own budget.
    """

    async def _send(request: RequestDescriptor) -> httpx.Response:
        if request.retry is None:
            request = request.with_retry(defaults)

        while True:
            try:
                return await send(request)
            except Exception as e:
                state = request.retry
                if not (is_retryable(e) and state.can_retry):
                    raise

                state = state.advance()
                code = error_code(e)
                logger.warning(
                    "[api retry] retry %d/%d (%s), retrying in %dms...",
                    state.attempt,
                    state.max_retries,
                    code,
                    state.delay_ms,
                    extra=_log_fields(request.with_retry(state), error_code=code),
                )
                await sleep(state.delay_seconds)
                request = request.with_retry(state)

    return _send


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class ApiClient:
    """Backend client: one pooled httpx.AsyncClient plus the retry pipeline.

    The config is immutable and shared by all concurrent calls; each call
    carries its own RequestDescriptor and RetryState.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Args:
            config: Transport configuration; read from the environment when omitted
            transport: Optional httpx transport (e.g. ``httpx.MockTransport`` in tests)
            sleep: Awaitable used for the retry delay
        """
        self.config = config or ClientConfig.from_settings()
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._send = with_retry(
            with_response_logging(with_request_logging(self._dispatch)),
            RetryState.from_config(self.config),
            sleep,
        )

    @property
    def http(self) -> httpx.AsyncClient:
        """Underlying httpx client, created on first use."""
        if self._http is None:
            self._http = httpx.AsyncClient(
                base_url=self.config.base_url,
                timeout=httpx.Timeout(self.config.timeout_seconds),
                headers=self.config.headers,
                transport=self._transport,
            )
        return self._http

    async def _dispatch(self, request: RequestDescriptor) -> httpx.Response:
        kwargs: dict[str, Any] = {}
        if request.files:
            kwargs["files"] = dict(request.files)
            if request.body:
                kwargs["data"] = {k: str(v) for k, v in request.body.items()}
        elif request.body is not None:
            kwargs["json"] = dict(request.body)

        # httpx.Timeout bounds each phase separately; this bounds the whole attempt
        try:
            response = await asyncio.wait_for(
                self.http.request(request.method.upper(), request.path, **kwargs),
                self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise httpx.TimeoutException(
                f"timeout of {self.config.timeout_ms}ms exceeded"
            ) from e
        response.raise_for_status()
        return response

    async def request(self, request: RequestDescriptor) -> httpx.Response:
        """Send through the retry pipeline. Raises the last error on failure."""
        return await self._send(request)

    async def post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        return await self.request(RequestDescriptor("POST", path, body=body, files=files))

    async def call(self, request: RequestDescriptor) -> ResultEnvelope:
        """Send and normalize. Never raises."""
        return await handle_api_response(self.request(request))

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
