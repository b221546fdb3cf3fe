"""HTTP middleware for the CRUD API."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Awaitable, Callable

from fastapi import Request, Response

from crudkit.config import Config
from crudkit.utils import console

CallNext = Callable[[Request], Awaitable[Response]]


def logging_middleware(config: Config) -> Callable[[Request, CallNext], Awaitable[Response]]:
    """Build a middleware that prints ``[<timestamp>] <METHOD> <url>`` per request.

    Nothing is printed when the configuration is in the ``test`` environment.
    """

    async def middleware(request: Request, call_next: CallNext) -> Response:
        if not config.is_test:
            target = request.url.path
            if request.url.query:
                target = f"{target}?{request.url.query}"
            stamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
            console.print(f"[{stamp}] {request.method} {target}", markup=False, highlight=False)
        return await call_next(request)

    return middleware
