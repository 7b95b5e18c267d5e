"""superrouter — a transport-agnostic request/response dispatcher.

Threads one request/response pair through an ordered list of routes,
switching to a list of error routes on the first failure. A host
process owns the sockets and awaits ``process_request()`` per request.

Basic usage::

    from superrouter import App, Router

    app = App()
    router = Router()

    @router.route("/users/:id", method="get")
    def show_user(ctx):
        ctx.response.set_body({"id": ctx.request.route_params["id"]})

    router.mount(app)
    app.use_error(lambda ctx: setattr(ctx.response, "status_code", 500))

    response = await app.process_request({"path": "/users/7", "method": "GET"})
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BodyParseError",
    "BodyStream",
    "ConfigurationError",
    "ContentNegotiation",
    "DispatchContext",
    "Err",
    "Headers",
    "Ok",
    "PathPattern",
    "Request",
    "Response",
    "Route",
    "RouteTimeout",
    "RouteTree",
    "Router",
    "Sensitive",
    "SuperRouterError",
    "compile_pattern",
    "get_request",
    "timeout",
]

# name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "App": "superrouter.app",
    "AppConfig": "superrouter.config",
    "BodyParseError": "superrouter.errors",
    "BodyStream": "superrouter.http.body",
    "ConfigurationError": "superrouter.errors",
    "ContentNegotiation": "superrouter.middleware.negotiation",
    "DispatchContext": "superrouter.context",
    "Err": "superrouter._internal.invoke",
    "Headers": "superrouter.http.headers",
    "Ok": "superrouter._internal.invoke",
    "PathPattern": "superrouter.routing.pattern",
    "Request": "superrouter.http.request",
    "Response": "superrouter.http.response",
    "Route": "superrouter.routing.route",
    "RouteTimeout": "superrouter.errors",
    "RouteTree": "superrouter.routing.tree",
    "Router": "superrouter.routing.router",
    "Sensitive": "superrouter.http.redaction",
    "SuperRouterError": "superrouter.errors",
    "compile_pattern": "superrouter.routing.pattern",
    "get_request": "superrouter.context",
    "timeout": "superrouter.middleware.timeout",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import superrouter`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
