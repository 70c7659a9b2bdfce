"""FastAPI integration: render context, HTML responses and a component-aware route."""

from __future__ import annotations

import inspect
from functools import wraps
from inspect import isawaitable
from typing import Annotated, Any, Callable

from fastapi import Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import HTMLResponse
from fastapi.routing import APIRoute

from .component import Component
from .core import Renderable, render_html
from .rendering import RenderContext


def get_render_context(request: Request) -> RenderContext:
    """
    Render context for the current request.

    A request is authenticated when Starlette's authentication middleware
    resolved an authenticated user, or when an app stored a user on
    ``request.state.user``.
    """
    authenticated = False
    if "user" in request.scope:
        authenticated = bool(getattr(request.user, "is_authenticated", False))
    if not authenticated:
        authenticated = getattr(request.state, "user", None) is not None
    return RenderContext(authenticated=authenticated)


RenderContextDep = Annotated[RenderContext, Depends(get_render_context)]


def to_html(content: Any, context: RenderContext | None = None) -> str | None:
    """Markup for a component, element, SafeHTML or string. None for anything else."""
    if isinstance(content, Component):
        return content.render_with_lifecycle(context)
    if isinstance(content, (str, Renderable)):
        return render_html(content)
    return None


def render_response(
    content: Any,
    context: RenderContext | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    """
    Wrap a component, element or markup in an HTMLResponse.

    Usage:
        @app.get("/alert")
        def alert(ctx: RenderContextDep):
            return render_response(Alert({"title": "Saved"}), ctx)
    """
    html = to_html(content, context)
    if html is None:
        raise TypeError(f"Cannot render {type(content).__name__} as HTML")
    return HTMLResponse(html, status_code=status_code)


class ComponentRoute(APIRoute):
    """
    Route that auto-converts components, elements and SafeHTML to HTMLResponse.

    Components are rendered with the request's render context. Plain ``def``
    endpoints run in the threadpool, as FastAPI runs them on ordinary routes.

    Usage:
        router = APIRouter(route_class=ComponentRoute)

        @router.get("/alert")
        def alert():
            return Alert({"title": "Saved"})
    """

    def __init__(self, path: str, endpoint: Callable[..., Any], **kwargs):
        sig = inspect.signature(endpoint)
        wants_request = "request" in sig.parameters
        is_async = inspect.iscoroutinefunction(endpoint)

        async def call_endpoint(request: Request, values: dict[str, Any]) -> Any:
            if wants_request:
                values = {**values, "request": request}
            if is_async:
                return await endpoint(**values)
            result = await run_in_threadpool(endpoint, **values)
            return await result if isawaitable(result) else result

        @wraps(endpoint)
        async def component_endpoint(request: Request, **values):
            result = await call_endpoint(request, values)

            # Responses and plain strings keep FastAPI's handling
            if isinstance(result, (Response, str)):
                return result

            content = to_html(result, get_render_context(request))
            return result if content is None else HTMLResponse(content)

        params = list(sig.parameters.values())
        if not wants_request:
            params.insert(
                0,
                inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request),
            )
        component_endpoint.__signature__ = sig.replace(parameters=params)  # type: ignore

        super().__init__(path, component_endpoint, **kwargs)
