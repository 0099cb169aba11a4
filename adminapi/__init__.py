"""Async client for the account/email admin backend."""

from adminapi.admin import AdminApi
from adminapi.core.config import ClientConfig, Settings
from adminapi.resources import EmailType
from adminapi.transport import ApiClient, RequestDescriptor, ResultEnvelope, RetryState, handle_api_response

__all__ = [
    "AdminApi",
    "ApiClient",
    "ClientConfig",
    "EmailType",
    "RequestDescriptor",
    "ResultEnvelope",
    "RetryState",
    "Settings",
    "handle_api_response",
]

__version__ = "1.0.0"
