"""Ready-made routes for common needs.

A route handler is any callable matching:
    def handler(context: DispatchContext) -> Any        # or async def

Built-in:
    ContentNegotiation -- JSON request decoding and response encoding
    timeout -- race a handler against a timer
"""

from superrouter.middleware.negotiation import ContentNegotiation
from superrouter.middleware.timeout import timeout

__all__ = [
    "ContentNegotiation",
    "timeout",
]
