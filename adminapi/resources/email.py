"""Email record operations (add / fetch latest / query)."""

from __future__ import annotations

from enum import IntEnum

from adminapi.resources.base import (
    BaseResource,
    ValidationError,
    compact,
    require,
    require_choice,
    require_max_length,
    require_page,
    require_page_size,
    validated,
)
from adminapi.transport.types import ResultEnvelope

EMAIL_SOURCES = ("swpu", "huel", "892507222")
MAX_SUBJECT_LENGTH = 500


class EmailType(IntEnum):
    SEND = 1
    RECEIVE = 2


def _check_source_and_type(email_source, email_type) -> None:
    require(email_source, "email_source is required")
    require_choice(
        email_source,
        EMAIL_SOURCES,
        "email_source must be one of " + ", ".join(f"'{s}'" for s in EMAIL_SOURCES),
    )
    # 0 counts as missing, like None
    if not email_type:
        raise ValidationError("email_type is required")
    require_choice(email_type, tuple(EmailType), "email_type must be 1 (send) or 2 (receive)")


class EmailApi(BaseResource):
    """Mailbox records collected from the supported school/QQ inboxes."""

    @validated
    async def add_email(
        self,
        email_source: str,
        email_type: int,
        sender_email: str,
        recipient_email: str,
        subject: str,
        sender_name: str | None = None,
        content: str | None = None,
        email_id: str | None = None,
        mail_time: int | None = None,
    ) -> ResultEnvelope:
        """Store one email. ``data`` is ``{"_id": ...}`` on success."""
        _check_source_and_type(email_source, email_type)
        if not sender_email or not recipient_email:
            raise ValidationError("sender_email and recipient_email are required")
        require(subject, "subject is required")
        require_max_length(
            subject, MAX_SUBJECT_LENGTH, f"subject must not exceed {MAX_SUBJECT_LENGTH} characters"
        )

        body = {
            "email_source": email_source,
            "email_type": int(email_type),
            "sender_email": sender_email,
            "recipient_email": recipient_email,
            "subject": subject,
        }
        body.update(
            compact(
                {
                    "sender_name": sender_name,
                    "content": content,
                    "email_id": email_id,
                    "mail_time": mail_time,
                }
            )
        )
        return await self._post("/email/addEmail", body)

    @validated
    async def get_latest_email(self, email_source: str, email_type: int) -> ResultEnvelope:
        """Most recent email for a source/type; ``data`` is ``None`` if there is none."""
        _check_source_and_type(email_source, email_type)
        return await self._post(
            "/email/getLatestEmail",
            {"email_source": email_source, "email_type": int(email_type)},
        )

    @validated
    async def query_emails(
        self,
        email_source: str,
        email_type: int,
        recipient_email: str | None = None,
        sender_email: str | None = None,
        subject: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> ResultEnvelope:
        """Paged search. ``subject`` is a case-insensitive substring match on the backend.

        ``data`` is ``{"list", "total", "page", "pageSize", "totalPages"}``.
        """
        _check_source_and_type(email_source, email_type)
        require_page(page)
        require_page_size(page_size)

        body = {
            "email_source": email_source,
            "email_type": int(email_type),
            "page": page,
            "pageSize": page_size,
        }
        body.update(
            compact(
                {
                    "recipient_email": recipient_email or None,
                    "sender_email": sender_email or None,
                    "subject": subject or None,
                }
            )
        )
        return await self._post("/email/queryEmails", body)
