# app/core/object_id.py
import itertools
import os
import re
import threading
import time

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")

# 5 random bytes, fixed for the lifetime of the process
_PROCESS_UNIQUE = os.urandom(5)
_counter = itertools.count(int.from_bytes(os.urandom(3), "big"))
_lock = threading.Lock()


def new_object_id() -> str:
    """
    Generate a 24-hex-character identifier in the document-database ObjectId layout.

    Layout (12 bytes):
      - 4 bytes: seconds since the epoch (big-endian)
      - 5 bytes: per-process random value
      - 3 bytes: incrementing counter, seeded randomly
    """
    with _lock:
        count = next(_counter) % 0xFFFFFF
    raw = (
        int(time.time()).to_bytes(4, "big")
        + _PROCESS_UNIQUE
        + count.to_bytes(3, "big")
    )
    return raw.hex()


def is_valid_object_id(value: object) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None
