"""ASGI handler — translates ASGI scope/messages to kiln types.

The only component that touches raw ASGI directly. Converts the scope
dict to a typed Request, runs it through the middleware chain and the
router, and sends the Response back through ASGI send().
"""

import inspect
from collections.abc import Callable
from typing import Any

from kiln._internal.asgi import Receive, Scope, Send
from kiln._internal.invoke import invoke
from kiln.errors import HTTPError
from kiln.http.request import Request
from kiln.middleware.protocol import AnyResponse, Next
from kiln.routing import Router
from kiln.server.errors import handle_http_error, handle_internal_error
from kiln.server.negotiation import negotiate
from kiln.server.sender import send_response


def build_pipeline(router: Router, middleware: tuple[Callable[..., Any], ...]) -> Next:
    """Wrap the router dispatch in the middleware chain, outermost first."""

    async def dispatch(request: Request) -> AnyResponse:
        route = router.match(request.method, request.path).route
        # Handlers take the request or nothing at all
        args = (request,) if inspect.signature(route.handler).parameters else ()
        return negotiate(await invoke(route.handler, *args))

    handler: Next = dispatch
    for mw in reversed(middleware):

        async def make_next(req: Request, _mw: Any = mw, _next: Next = handler) -> AnyResponse:
            return await _mw(req, _next)

        handler = make_next
    return handler


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    pipeline: Next,
    error_handlers: dict[int | type, Callable[..., Any]],
    debug: bool,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = await pipeline(request)
    except HTTPError as exc:
        response = await handle_http_error(exc, request, error_handlers, debug)
    except Exception as exc:
        response = await handle_internal_error(exc, request, error_handlers, debug)

    await send_response(response, send, head=request.method == "HEAD")
