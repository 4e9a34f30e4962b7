"""
core/cors.py
------------
CORS for the operator dashboard only.

The public submission routes under /api answer their own preflights and echo
the verified Origin on success; the allow-list below must never add or strip
headers on those responses.
"""

from typing import Sequence

from starlette.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send


class DashboardCORSMiddleware(CORSMiddleware):

    def __init__(
        self,
        app: ASGIApp,
        exempt_prefixes: Sequence[str] = ("/api/",),
        **options,
    ) -> None:
        super().__init__(app, **options)
        self.exempt_prefixes = tuple(exempt_prefixes)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and scope["path"].startswith(self.exempt_prefixes):
            await self.app(scope, receive, send)
            return
        await super().__call__(scope, receive, send)
