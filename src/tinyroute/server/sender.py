"""ASGI response sending — translates a tinyroute Response to ASGI messages."""

import logging

from tinyroute._internal.asgi import Send
from tinyroute.http.response import Response, body_allowed

logger = logging.getLogger("tinyroute.server")


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Translate a Response into ASGI send() calls.

    HEAD responses keep the ``content-length`` of the full body but send
    no body bytes.
    """
    body = response.body_bytes if body_allowed(response.status) else b""

    raw_headers: list[tuple[bytes, bytes]] = []
    if body_allowed(response.status):
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers.items():
        if name.lower() in {"content-type", "content-length"}:
            continue
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
