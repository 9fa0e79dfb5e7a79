"""Hex object ids for stored documents.

Ids follow the 12-byte ObjectId layout, rendered as 24 lowercase hex
characters:

    4 bytes  seconds since the epoch, big-endian
    5 bytes  random value chosen once per process
    3 bytes  counter, randomly seeded, incremented per id

Ids sort roughly by creation time and satisfy the ``id`` field type.
"""
from __future__ import annotations

import os
import threading
import time
from datetime import datetime, timezone

_COUNTER_MAX = 0xFFFFFF

_process_random = os.urandom(5)
_counter = int.from_bytes(os.urandom(3), "big")
_counter_lock = threading.Lock()


def _next_counter() -> int:
    global _counter
    with _counter_lock:
        _counter = (_counter + 1) & _COUNTER_MAX
        return _counter


def generate_object_id(timestamp: float | None = None) -> str:
    """Generate a new 24-character hex object id."""
    seconds = int(time.time() if timestamp is None else timestamp) & 0xFFFFFFFF
    raw = (
        seconds.to_bytes(4, "big")
        + _process_random
        + _next_counter().to_bytes(3, "big")
    )
    return raw.hex()


def object_id_timestamp(object_id: str) -> datetime:
    """Creation time encoded in an object id.

    Raises:
        ValueError: ``object_id`` is not 24 hex characters
    """
    if len(object_id) != 24:
        raise ValueError(f"object id must be 24 hex characters, got {len(object_id)}")
    raw = bytes.fromhex(object_id)
    return datetime.fromtimestamp(int.from_bytes(raw[:4], "big"), tz=timezone.utc)
