# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Scrub credentials and bearer material out of log messages.

Session and share tokens are bearer credentials and are always masked.
"""

from __future__ import annotations

import re
from typing import Any

REDACTED = "***REDACTED***"

_TOKEN_CHARS = r"[A-Za-z0-9_\-\.]"

_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(rf"(bearer\s+){_TOKEN_CHARS}{{20,}}", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(rf"(/api/shared/){_TOKEN_CHARS}{{20,}}"), rf"\1{REDACTED}"),
    (
        re.compile(rf"((?:share_?)?token\s*[:=]\s*['\"]?){_TOKEN_CHARS}{{20,}}", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    (
        re.compile(r"((?:secret_?key|api_?secret)\s*[:=]\s*['\"]?)[A-Za-z0-9_\-]{10,}", re.IGNORECASE),
        rf"\1{REDACTED}",
    ),
    (re.compile(r"(password\s*[:=]\s*['\"]?)[^'\"\s,]+", re.IGNORECASE), rf"\1{REDACTED}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{REDACTED}@"),
    (re.compile(r"[A-Za-z0-9._%+-]+@([A-Za-z0-9.-]+\.[A-Za-z]{2,})"), r"***@\1"),
    (re.compile(r"(authorization\s*:\s*['\"]?)[^'\"\n]{10,}", re.IGNORECASE), rf"\1{REDACTED}"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: rewrites the message in place and always lets it through."""
    if "message" in record:
        record["message"] = sanitize_message(record["message"])
    return True


__all__ = ["REDACTED", "sanitize_message", "sanitize_record"]
