"""Transport strategies: non-blocking (asyncio) and blocking (thread) calls.

Both implement the same contract: return the validated envelope or raise a
:class:`svcclient.errors.ServiceCallError`.
"""

from svcclient.transport.asynchronous import AsyncTransport
from svcclient.transport.synchronous import SyncTransport

__all__ = ["AsyncTransport", "SyncTransport"]
