from __future__ import annotations

import re
import uuid
from enum import Enum

__all__ = [
    "MAX_UUID_COUNT",
    "UuidFormat",
    "generate_uuids",
    "is_v4",
]

MAX_UUID_COUNT = 100

_V4_FORMATTED_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")
_V4_RAW_RE = re.compile(r"^[0-9a-f]{12}4[0-9a-f]{3}[89ab][0-9a-f]{15}$")


class UuidFormat(str, Enum):
    formatted = "formatted"  # 8-4-4-4-12, lowercase
    raw = "raw"  # the same 32 hex digits, no hyphens


def generate_uuids(count: int = 1, fmt: UuidFormat | str = UuidFormat.formatted) -> list[str]:
    """Return `count` independent random (version 4) UUIDs rendered as `fmt`.

    Raises:
        ValueError: if count is not an int in [1, MAX_UUID_COUNT] or fmt is unknown.
    """
    if isinstance(count, bool) or not isinstance(count, int):
        raise ValueError("count must be an integer")
    if not 1 <= count <= MAX_UUID_COUNT:
        raise ValueError(f"count must be between 1 and {MAX_UUID_COUNT}")
    fmt = UuidFormat(fmt)

    out: list[str] = []
    for _ in range(count):
        u = uuid.uuid4()
        out.append(u.hex if fmt is UuidFormat.raw else str(u))
    return out


def is_v4(value: str) -> bool:
    """True if `value` is a lowercase v4 UUID in either format."""
    return bool(_V4_FORMATTED_RE.match(value) or _V4_RAW_RE.match(value))
