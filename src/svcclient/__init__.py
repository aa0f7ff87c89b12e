"""svcclient — service-invocation client for JSON envelope backends."""

from svcclient.domain.envelope import RequestErrorInfo, ServiceError, ServiceResponse
from svcclient.domain.options import ServiceCallOptions
from svcclient.domain.signals import AbortSignal
from svcclient.errors import ServiceCallError
from svcclient.services.client import ServiceClient

__version__ = "0.4.0"

__all__ = [
    "AbortSignal",
    "RequestErrorInfo",
    "ServiceCallError",
    "ServiceCallOptions",
    "ServiceClient",
    "ServiceError",
    "ServiceResponse",
    "__version__",
]
