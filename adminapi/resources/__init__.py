"""Backend operations grouped by resource.

Each operation validates locally, forwards only defined fields, and returns
a ResultEnvelope. None of them raise.
"""

from adminapi.resources.account import AccountApi
from adminapi.resources.ai_key import KeyApi
from adminapi.resources.application import ApplicationApi
from adminapi.resources.email import EmailApi, EmailType
from adminapi.resources.email_account import EmailAccountApi
from adminapi.resources.invite_task import InviteTaskApi
from adminapi.resources.upload import UploadApi

__all__ = [
    "AccountApi",
    "ApplicationApi",
    "EmailAccountApi",
    "EmailApi",
    "EmailType",
    "InviteTaskApi",
    "KeyApi",
    "UploadApi",
]
