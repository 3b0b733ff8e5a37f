from __future__ import annotations

import re
import uuid
from typing import Iterable, Mapping

from starlette.types import ASGIApp, Message, Receive, Scope, Send

REQUEST_ID_HEADER = b"x-request-id"
REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

DEFAULT_SECURITY_HEADERS: Mapping[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
    "Permissions-Policy": "interest-cohort=()",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-site",
}

RawHeaders = list[tuple[bytes, bytes]]


def resolve_request_id(inbound: str | None) -> str:
    if inbound and REQUEST_ID_RE.match(inbound):
        return inbound
    return str(uuid.uuid4())


def merge_headers(raw: Iterable[tuple[bytes, bytes]], extra: Mapping[str, str], override: bool) -> RawHeaders:
    """Merge ``extra`` into an ASGI header list.

    With ``override`` the extra values replace existing ones; otherwise a header
    already set by the app wins.
    """
    wanted = {name.lower().encode("latin-1"): value.encode("latin-1") for name, value in extra.items()}
    merged: RawHeaders = []
    for key, value in raw:
        if key.lower() in wanted:
            if override:
                continue
            wanted.pop(key.lower())
        merged.append((key, value))
    merged.extend(wanted.items())
    return merged


class _ResponseHeaderMiddleware:
    """Pure ASGI base: rewrites the headers of ``http.response.start``."""

    override = False

    def __init__(self, app: ASGIApp):
        self.app = app

    def headers_for(self, scope: Scope) -> Mapping[str, str]:
        raise NotImplementedError

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        extra = self.headers_for(scope)

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = merge_headers(message.get("headers", []), extra, self.override)
            await send(message)

        await self.app(scope, receive, send_wrapper)


class RequestIdMiddleware(_ResponseHeaderMiddleware):
    """Stores a request id on ``request.state`` and always echoes it back."""

    override = True

    def headers_for(self, scope: Scope) -> Mapping[str, str]:
        inbound = next(
            (v.decode("latin-1") for k, v in scope.get("headers") or [] if k.lower() == REQUEST_ID_HEADER),
            None,
        )
        request_id = resolve_request_id(inbound)
        scope.setdefault("state", {})["request_id"] = request_id
        return {REQUEST_ID_HEADER.decode(): request_id}


class SecurityHeadersMiddleware(_ResponseHeaderMiddleware):
    def __init__(self, app: ASGIApp, headers: Mapping[str, str] | None = None):
        super().__init__(app)
        self.headers = dict(headers or DEFAULT_SECURITY_HEADERS)

    def headers_for(self, scope: Scope) -> Mapping[str, str]:
        return self.headers
