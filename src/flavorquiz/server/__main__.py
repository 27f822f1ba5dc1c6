"""FlavorQuiz JSON-lines server.

Usage: python -m flavorquiz.server

stdout carries protocol lines only; logging goes to stderr.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Optional

from .handler import ServerHandler
from .protocol import Notification, ProtocolError, Request, Response

logger = logging.getLogger("flavorquiz.server")


async def handle_line(handler: ServerHandler, line: str) -> Optional[str]:
    """Answer one request line; blank lines get no response."""
    line = line.strip()
    if not line:
        return None

    try:
        request = Request.from_line(line)
    except ProtocolError as e:
        logger.warning("Rejected request: %s", e)
        return Response.failure(e.request_id, e).to_json_line()

    try:
        result = await handler.dispatch({"method": request.method.value, "params": request.params})
    except (ValueError, OSError) as e:
        logger.warning("%s #%d failed: %s", request.method.value, request.id, e)
        return Response.failure(request.id, e).to_json_line()
    except Exception as e:
        logger.exception("%s #%d crashed", request.method.value, request.id)
        return Response.failure(request.id, e).to_json_line()

    logger.debug("%s #%d ok", request.method.value, request.id)
    return Response(id=request.id, result=result).to_json_line()


async def main() -> None:
    logging.basicConfig(
        stream=sys.stderr, level=logging.INFO, format="flavorquiz-server: %(levelname)s %(message)s"
    )
    loop = asyncio.get_event_loop()

    def write_line(text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def write_notification(notification: Notification) -> None:
        write_line(notification.to_json_line())

    handler = ServerHandler(write_notification=write_notification)
    logger.info("ready")

    reader = asyncio.StreamReader()
    await loop.connect_read_pipe(lambda: asyncio.StreamReaderProtocol(reader), sys.stdin)

    while line := await reader.readline():
        reply = await handle_line(handler, line.decode("utf-8", errors="replace"))
        if reply is not None:
            write_line(reply)

    logger.info("stdin closed, exiting")


if __name__ == "__main__":
    asyncio.run(main())
