"""superrouter exception hierarchy.

Shared across RouteTree, Router, App, and middleware so every module
raises and catches the same types.

Handler failures are not modelled here: any ``Exception`` a handler
raises travels through the error routes as data and is what
``App.process_request()`` finally raises.
"""


class SuperRouterError(Exception):
    """Base for all superrouter-specific errors."""


class ConfigurationError(SuperRouterError):
    """Raised when wiring input is invalid.

    Always raised synchronously during setup: bad route options, an
    unknown method string, a wildcard or optional pattern given to a
    ``RouteTree``, conflicting parameter names, or registration after
    the app has frozen.
    """


class BodyParseError(SuperRouterError):
    """The request body could not be decoded as JSON."""

    def __init__(self, raw: str, detail: str = "failed to parse json in request") -> None:
        super().__init__(detail)
        self.raw = raw
        self.detail = detail


class RouteTimeout(SuperRouterError):
    """A timeout-wrapped handler did not settle in time."""

    def __init__(self, seconds: float) -> None:
        super().__init__(f"handler did not complete within {seconds:g}s")
        self.seconds = seconds
