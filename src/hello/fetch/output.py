"""Output boundary: writes response bodies, optionally decorated with terminal colors.

Decoration is kept apart from fetching so it can be swapped or dropped freely.
"""

from typing import BinaryIO, Callable, Optional

Decorator = Callable[[bytes], bytes]

RESET = b"\033[0m"

COLORS = {
    "none": None,
    "black": b"\033[30m",
    "red": b"\033[31m",
    "green": b"\033[32m",
    "yellow": b"\033[33m",
    "blue": b"\033[34m",
    "magenta": b"\033[35m",
    "cyan": b"\033[36m",
    "white": b"\033[37m",
}


def plain(body: bytes) -> bytes:
    return body


def colorize(color: str) -> Decorator:
    """Return a decorator wrapping a body in the given ANSI foreground color and a reset."""
    code = COLORS.get(color)
    if code is None:
        raise ValueError(f"Unknown color '{color}'. Expected one of {', '.join(c for c in COLORS if COLORS[c])}")

    def decorate(body: bytes) -> bytes:
        return code + body + RESET

    return decorate


def get_decorator(color: Optional[str] = None) -> Decorator:
    if color is None or color == "none":
        return plain
    return colorize(color)


def write_body(body: bytes, stream: BinaryIO, decorator: Decorator = plain) -> None:
    """Write body to a binary stream as-is, no newline appended."""
    stream.write(decorator(body))
    stream.flush()
