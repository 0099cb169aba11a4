"""Backend transport layer.

Provides the async JSON/HTTP path every operation goes through:
  - Retry-Aware Transport (ApiClient + wrapper pipeline)
  - Failure classification (retryable vs. responded)
  - Response Normalizer (uniform ResultEnvelope)
"""

from adminapi.transport.client import ApiClient
from adminapi.transport.normalizer import handle_api_response
from adminapi.transport.types import RequestDescriptor, ResultEnvelope, RetryState

__all__ = ["ApiClient", "RequestDescriptor", "ResultEnvelope", "RetryState", "handle_api_response"]
