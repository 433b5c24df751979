"""
SSE relay for upstream text generation.

Turns a lazy, possibly slow, possibly failing sequence of text fragments into
a correctly terminated event stream:

- each fragment is written as its own `data:` event, in upstream order
- a `:` comment is written every `heartbeat_interval` seconds while the
  session is open
- normal completion ends with the DONE sentinel, a failure with a single
  `event: error` frame carrying the normalized message

Data and heartbeat frames are produced by two tasks owned by the session but
written by one consumer through a per-session queue, so their bytes never
interleave. The consumer stops at the first terminal frame.
"""

import asyncio
import logging
from typing import AsyncIterator, Awaitable, Callable, Optional

from blessing_api.utils.exceptions import TransportError, normalize_error
from blessing_api.utils.sse import FrameKind, SSEFrame

logger = logging.getLogger(__name__)

DEFAULT_HEARTBEAT_INTERVAL = 5.0
# Upper bound on frames buffered ahead of a slow client
QUEUE_MAXSIZE = 256

SSE_MEDIA_TYPE = "text/event-stream; charset=utf-8"
SSE_HEADERS = {
    "Cache-Control": "no-cache, no-transform",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",  # Disable nginx buffering
}


class RelaySession:
    """
    Live state of one streaming response.

    Owns the frame queue, the heartbeat task and the upstream iteration.
    Use `frames()` as the body iterator of a streaming response; every exit
    path (completion, upstream failure, client disconnect, cancellation)
    runs the same cleanup exactly once.
    """

    def __init__(
        self,
        source: AsyncIterator[str],
        heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL,
        is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
    ):
        self._source = source
        self._heartbeat_interval = heartbeat_interval
        self._is_disconnected = is_disconnected
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_MAXSIZE)
        self._heartbeat_task: Optional[asyncio.Task] = None
        self._producer_task: Optional[asyncio.Task] = None
        self._started = False
        self.closed = False
        self.chunks_sent = 0
        self.heartbeats_sent = 0
        self.terminal_frame: Optional[SSEFrame] = None

    @property
    def heartbeat_active(self) -> bool:
        """Whether the heartbeat timer is still scheduled."""
        return self._heartbeat_task is not None and not self._heartbeat_task.done()

    async def _heartbeat_loop(self) -> None:
        while True:
            await asyncio.sleep(self._heartbeat_interval)
            # A full queue means the client is not draining; a comment adds nothing
            if not self._queue.full():
                self._queue.put_nowait(SSEFrame.heartbeat())

    def _stop_heartbeat(self) -> None:
        if self._heartbeat_task is not None and not self._heartbeat_task.done():
            self._heartbeat_task.cancel()

    async def _produce(self) -> None:
        terminal = SSEFrame.done()
        try:
            async for chunk in self._source:
                if chunk:
                    await self._queue.put(SSEFrame.data(chunk))
        except Exception as e:
            logger.warning(f"Upstream stream failed: {e!r}")
            terminal = SSEFrame.error(normalize_error(e))

        # Nothing may be queued after the terminal frame
        self._stop_heartbeat()
        await self._queue.put(terminal)

    async def _ensure_connected(self) -> None:
        if self._is_disconnected is not None and await self._is_disconnected():
            raise TransportError("Client disconnected")

    async def frames(self) -> AsyncIterator[str]:
        """Yield encoded SSE frames until the terminal frame or a disconnect."""
        if self._started:
            raise RuntimeError("RelaySession.frames() can only be consumed once")
        self._started = True

        self._heartbeat_task = asyncio.create_task(self._heartbeat_loop())
        self._producer_task = asyncio.create_task(self._produce())
        try:
            while True:
                frame: SSEFrame = await self._queue.get()
                await self._ensure_connected()

                yield frame.encode()

                if frame.kind is FrameKind.DATA:
                    self.chunks_sent += 1
                elif frame.kind is FrameKind.HEARTBEAT:
                    self.heartbeats_sent += 1
                if frame.is_terminal:
                    self.terminal_frame = frame
                    logger.info(
                        f"Relay finished with {frame.kind.value} after {self.chunks_sent} chunks"
                    )
                    return
        except TransportError:
            logger.info(f"Client disconnected after {self.chunks_sent} chunks; closing relay")
        finally:
            await self.close()

    async def close(self) -> None:
        """Cancel the heartbeat and producer, then release the upstream iterator."""
        if self.closed:
            return
        self.closed = True

        # Cancel synchronously first so nothing can be queued past this point
        tasks = [t for t in (self._heartbeat_task, self._producer_task) if t is not None]
        for task in tasks:
            if not task.done():
                task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

        aclose = getattr(self._source, "aclose", None)
        if aclose is not None:
            try:
                await aclose()
            except Exception as e:
                logger.debug(f"Error closing upstream iterator: {e!r}")


def relay_stream(
    source: AsyncIterator[str],
    heartbeat_interval: float = DEFAULT_HEARTBEAT_INTERVAL,
    is_disconnected: Optional[Callable[[], Awaitable[bool]]] = None,
) -> AsyncIterator[str]:
    """Convenience wrapper returning the encoded frame iterator of a new session."""
    return RelaySession(source, heartbeat_interval, is_disconnected).frames()
