"""Base resource and shared parameter checks.

Every operation validates its parameters locally before touching the
network. A failed check raises ``ValidationError``, which the ``validated``
decorator turns into a failed ResultEnvelope, so no operation ever raises to
its caller.
"""

from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable, Collection, Mapping, TypeVar

from adminapi.transport.client import ApiClient
from adminapi.transport.types import UNKNOWN_ERROR, RequestDescriptor, ResultEnvelope

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100

# Fields the backend manages itself and never accepts in update payloads
PROTECTED_FIELDS = ("_id", "create_date")

F = TypeVar("F", bound=Callable[..., Awaitable[ResultEnvelope]])


class ValidationError(ValueError):
    """Raised when caller input fails a local precondition."""


def validated(func: F) -> F:
    """Convert ValidationError into ``ResultEnvelope.fail`` without a network call.

    Any other exception raised by the operation is caught the same way; the
    transport call itself is already normalized by ``ApiClient.call``.
    """

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except ValidationError as e:
            logger.warning("%s rejected: %s", func.__qualname__, e)
            return ResultEnvelope.fail(str(e))
        except Exception as e:
            logger.error("%s failed: %s", func.__qualname__, e, exc_info=True)
            return ResultEnvelope.fail(str(e) or UNKNOWN_ERROR)

    return wrapper  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Checks
# ---------------------------------------------------------------------------


def is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    return False


def require(value: Any, message: str) -> None:
    if is_blank(value):
        raise ValidationError(message)


def require_any(message: str, *values: Any) -> None:
    if all(is_blank(v) for v in values):
        raise ValidationError(message)


def require_choice(value: Any, choices: Collection[Any], message: str) -> None:
    # bool is an int subclass: True would otherwise match 1
    if isinstance(value, bool) or value not in choices:
        raise ValidationError(message)


def require_max_length(value: Any, limit: int, message: str) -> None:
    if value is not None and len(str(value)) > limit:
        raise ValidationError(message)


def require_int(value: Any, message: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(message)


def require_positive_number(value: Any, message: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ValidationError(message)


def require_non_negative_number(value: Any, message: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
        raise ValidationError(message)


def require_page(page: Any) -> None:
    require_int(page, "page must be an integer")
    if page < 1:
        raise ValidationError("page must be greater than or equal to 1")


def require_page_size(page_size: Any) -> None:
    require_int(page_size, "page_size must be an integer")
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValidationError(f"page_size must be between 1 and {MAX_PAGE_SIZE}")


def require_update_data(update_data: Any, protected: Collection[str] = PROTECTED_FIELDS) -> dict[str, Any]:
    """Check an update payload and strip fields the backend owns."""
    if not isinstance(update_data, Mapping) or not update_data:
        raise ValidationError("update data must not be empty")
    filtered = {k: v for k, v in update_data.items() if k not in protected}
    if not filtered:
        raise ValidationError("update data must not be empty")
    return filtered


def compact(fields: Mapping[str, Any]) -> dict[str, Any]:
    """Drop ``None`` values so optional fields are omitted, not sent as null."""
    return {k: v for k, v in fields.items() if v is not None}


# ---------------------------------------------------------------------------
# Base resource
# ---------------------------------------------------------------------------


class BaseResource:
    """A group of backend operations sharing one ApiClient."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def _post(
        self,
        path: str,
        body: Mapping[str, Any] | None = None,
        files: Mapping[str, Any] | None = None,
    ) -> ResultEnvelope:
        return await self.client.call(RequestDescriptor("POST", path, body=body, files=files))
