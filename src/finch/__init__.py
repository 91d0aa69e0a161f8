"""Finch — convention-based HTTP routing for controller modules.

Drop modules into a ``controllers/`` directory; their function names
become routes::

    # controllers/user.py
    def read(id, request, sink):          # GET /user/42, GET /user
        return {"id": id}

    def createAccount(body, request, sink):    # POST /user/account
        return {"created": body["name"]}

Serve them::

    from finch import Router

    router = Router(controllers="controllers")
    router.run()
"""

__version__ = "0.1.0"
__all__ = [
    "BadRequest",
    "ConfigurationError",
    "DiscoveryError",
    "FinchError",
    "HTTPError",
    "NotFound",
    "Request",
    "Response",
    "ResponseAlreadySent",
    "ResponseSink",
    "RouteRecord",
    "RouteRegistrar",
    "RouteTable",
    "Router",
    "RouterConfig",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import finch`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from finch.app import Router

        return Router

    if name == "RouterConfig":
        from finch.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from finch.http.request import Request

        return Request

    if name in ("Response", "ResponseSink"):
        from finch.http import response as _resp

        return getattr(_resp, name)

    if name in ("RouteRecord", "RouteRegistrar", "RouteTable"):
        from finch.routing import builder, route, router

        for module in (route, builder, router):
            if hasattr(module, name):
                return getattr(module, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "DiscoveryError",
        "FinchError",
        "HTTPError",
        "NotFound",
        "ResponseAlreadySent",
    ):
        from finch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
