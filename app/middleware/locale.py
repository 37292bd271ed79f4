from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.localization.culture import (
    Culture,
    negotiate,
    reset_current_culture,
    set_current_culture,
)


class LocaleMiddleware(BaseHTTPMiddleware):
    """
    Select the active culture from the Accept-Language header.

    The culture is stored on ``request.state.culture`` and in the request's
    context; unknown or malformed preferences fall back to the default.
    """

    def __init__(self, app, *, default: Culture, known: Iterable[Culture]) -> None:
        super().__init__(app)
        self.default = default
        self.known = frozenset(known) | {default}

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        culture = negotiate(
            request.headers.get("accept-language"),
            default=self.default,
            known=self.known,
        )
        request.state.culture = culture
        token = set_current_culture(culture)
        try:
            response = await call_next(request)
        finally:
            reset_current_culture(token)
        response.headers.setdefault("Content-Language", culture.name)
        return response
