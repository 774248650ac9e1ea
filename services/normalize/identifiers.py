"""
Request identifiers and pseudonymous user ids
"""

import hashlib
import secrets
from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def hash_pseudonym(email: str) -> str:
    """
    Derive a stable 8-hex pseudonym from an email address.

    Case and surrounding whitespace are ignored. Collisions are possible at
    32 bits and are accepted.
    """
    normalized = email.strip().lower()
    return hashlib.md5(normalized.encode("utf-8")).hexdigest()[:8]


def anonymous_pseudonym() -> str:
    """Random, non-reproducible 8-hex pseudonym for submissions without email"""
    return secrets.token_hex(4)


def new_user_id(email: Optional[str] = None) -> str:
    if email and email.strip():
        return f"user_{hash_pseudonym(email)}"
    return f"user_{anonymous_pseudonym()}"


def new_request_id(clock: Clock = utc_now) -> str:
    """req_<YYYYMMDDHHmmss>_<4 hex>, ordered at second granularity"""
    stamp = clock().astimezone(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"req_{stamp}_{secrets.token_hex(2)}"


def new_timestamp(clock: Clock = utc_now) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and Z suffix"""
    now = clock().astimezone(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
