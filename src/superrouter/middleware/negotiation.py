"""JSON content negotiation routes.

Usage::

    app.use(ContentNegotiation.request)     # decode the JSON request body
    router.mount(app)
    app.use(ContentNegotiation.response)    # encode the response body
"""

import json

from superrouter.context import DispatchContext
from superrouter.errors import BodyParseError
from superrouter.http.body import is_stream
from superrouter.http.request import Request


class ContentNegotiation:
    """Request and response JSON handlers. Stateless; use the static methods."""

    @staticmethod
    async def request(context: DispatchContext) -> None:
        """Replace the request body stream with its decoded JSON value.

        Chunked uploads are left as a stream. An empty body decodes to
        ``None``. Invalid JSON or invalid UTF-8 raises ``BodyParseError``.
        """
        request = context.request
        if _is_chunked(request):
            return

        data = await request.body.read()
        raw = data.decode("utf-8", "replace")
        if not raw.strip():
            request.set_body(None)
            return
        try:
            value = json.loads(data.decode("utf-8"))
        except ValueError as exc:
            raise BodyParseError(raw) from exc
        request.set_body(value)

    @staticmethod
    def response(context: DispatchContext) -> None:
        """Serialize the response body value as JSON.

        A body no route replaced is still a stream and encodes as ``null``.
        """
        response = context.response
        value = response.get_body()
        if is_stream(value):
            value = None
        response.set_header("content-type", "application/json")
        response.set_body(json.dumps(value, default=str))


def _is_chunked(request: Request) -> bool:
    encoding = request.get_header("transfer-encoding")
    return encoding is not None and "chunked" in encoding.lower()
