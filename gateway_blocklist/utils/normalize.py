from __future__ import annotations

import re
from typing import Iterable

HOSTS_PREFIX_RE = re.compile(r"(0\.0\.0\.0|127\.0\.0\.1|::1|::)\s+")

# Applied in order, first occurrence only.
NORMALIZATION_RULES: tuple[tuple[re.Pattern | str, str], ...] = (
    (HOSTS_PREFIX_RE, ""),
    ("||", ""),
    ("^$important", ""),
    ("*.", ""),
    ("^", ""),
)

ALLOWLIST_MARKER = "@@||"
COMMENT_PREFIXES = ("#", "!")


def _apply(rule: re.Pattern | str, replacement: str, value: str) -> str:
    if isinstance(rule, re.Pattern):
        return rule.sub(replacement, value, count=1)
    return value.replace(rule, replacement, 1)


def normalize_domain(value: str, is_allowlisting: bool = False) -> str:
    normalized = value
    # The "||" rule would otherwise consume the tail of the allow-list marker.
    if is_allowlisting:
        normalized = normalized.replace(ALLOWLIST_MARKER, "", 1)
    for rule, replacement in NORMALIZATION_RULES:
        normalized = _apply(rule, replacement, normalized)
    return normalized


def normalize_entries(lines: Iterable[str], is_allowlisting: bool = False) -> list[str]:
    """Normalize a raw list file: skip blanks and comments, keep first-seen order."""
    seen = set()
    out = []
    for raw in lines:
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue
        value = normalize_domain(line, is_allowlisting)
        if value and value not in seen:
            seen.add(value)
            out.append(value)
    return out


def redact_token(token: str, keep: int = 5) -> str:
    return f"{token[:keep]}..."


def sanitize_headers(headers: dict) -> dict:
    sanitized = {}
    for k, v in headers.items():
        key = k.lower()
        if key in {"authorization", "cookie", "set-cookie"}:
            sanitized[k] = "[redacted]"
        else:
            sanitized[k] = v
    return sanitized
