from __future__ import annotations

import base64
import itertools
import secrets

# Batch ids are drawn from [0, BATCH_ID_SPACE).
BATCH_ID_SPACE = 100_000

_counter = itertools.count(1)


def basic_auth_header(user: str, password: str) -> str:
    token = base64.b64encode(f"{user}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def next_request_id() -> int:
    return next(_counter)


def random_request_id() -> int:
    return secrets.randbelow(BATCH_ID_SPACE)


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes", "on"):
        return True
    if normalized in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Not a boolean value: {value!r}")
