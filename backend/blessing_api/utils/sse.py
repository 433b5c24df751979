from dataclasses import dataclass
from enum import Enum

import orjson

HEARTBEAT = ":\n\n"
DONE = "data: { text: [DONE] } \n\n"


class FrameKind(str, Enum):
    DATA = "data"
    HEARTBEAT = "heartbeat"
    ERROR = "error"
    DONE = "done"


@dataclass(frozen=True)
class SSEFrame:
    """A single unit written to an event-stream response."""

    kind: FrameKind
    payload: str = ""

    @classmethod
    def data(cls, text: str) -> "SSEFrame":
        return cls(FrameKind.DATA, text)

    @classmethod
    def heartbeat(cls) -> "SSEFrame":
        return cls(FrameKind.HEARTBEAT)

    @classmethod
    def error(cls, message: str) -> "SSEFrame":
        return cls(FrameKind.ERROR, message)

    @classmethod
    def done(cls) -> "SSEFrame":
        return cls(FrameKind.DONE)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (FrameKind.DONE, FrameKind.ERROR)

    def encode(self) -> str:
        if self.kind is FrameKind.DATA:
            return format_data(self.payload)
        if self.kind is FrameKind.ERROR:
            return format_error(self.payload)
        if self.kind is FrameKind.DONE:
            return DONE
        return HEARTBEAT


def format_data(text: str) -> str:
    """Format a text fragment as an SSE data event"""
    return f"data: {orjson.dumps({'text': text}).decode()}\n\n"


def format_error(message: str) -> str:
    """Format a terminal SSE error event"""
    return f"event: error\ndata: {orjson.dumps({'message': message}).decode()}\n\n"
