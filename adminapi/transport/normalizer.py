"""Response Normalizer: turns transport outcomes into ResultEnvelopes.

Handles the three outcomes of a transport call:
  - Response received, backend ``errCode == 0``   → success with ``data``
  - Response received, backend ``errCode != 0``   → failure with ``errMsg``
  - Exception raised (HTTP error status or no response at all)
                                                  → failure with the best
                                                    message available

This is the terminal boundary: nothing raises past it.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable

import httpx

from adminapi.transport.errors import has_response
from adminapi.transport.types import UNKNOWN_ERROR, ResultEnvelope

logger = logging.getLogger(__name__)


async def handle_api_response(call: Awaitable[httpx.Response]) -> ResultEnvelope:
    """Await a transport call and normalize its outcome."""
    try:
        response = await call
        payload = response.json()
    except Exception as e:
        return ResultEnvelope.fail(extract_error_message(e))

    return normalize_payload(payload)


def normalize_payload(payload: Any) -> ResultEnvelope:
    """Map a decoded backend body ``{errCode, errMsg, data}`` to an envelope."""
    if not isinstance(payload, dict):
        logger.warning("Backend returned a non-object body: %r", type(payload).__name__)
        return ResultEnvelope.fail(UNKNOWN_ERROR)

    code = payload.get("errCode")
    # False == 0 in Python; a boolean code is not a success code
    if code == 0 and not isinstance(code, bool):
        return ResultEnvelope.ok(payload.get("data"))

    return ResultEnvelope.fail(_message(payload.get("errMsg")))


def extract_error_message(error: BaseException) -> str:
    """Best human-readable message for a failed call.

    Preference: backend ``errMsg`` from the attached response body, then the
    exception's own message, then a generic fallback.
    """
    if has_response(error):
        try:
            body = error.response.json()
        except Exception:
            body = None
        if isinstance(body, dict):
            message = _message(body.get("errMsg"))
            if message != UNKNOWN_ERROR:
                return message

    return _message(str(error))


def _message(value: Any) -> str:
    if value is None:
        return UNKNOWN_ERROR
    text = str(value).strip()
    return text or UNKNOWN_ERROR
