from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class AttemptRecord:
    attempts: int = 0
    token_index: int = 0
    last_status: int | None = None
    last_error: Exception | None = None
    last_body: Any = None

    def advance(self, token_count: int) -> bool:
        """Count a failed attempt and rotate; returns True when the rotation wrapped to the first token."""
        self.attempts += 1
        self.token_index = (self.token_index + 1) % token_count
        return self.token_index == 0

    def error_detail(self) -> str | None:
        body = self.last_body
        if isinstance(body, dict):
            errors = body.get("errors")
            if isinstance(errors, list) and errors:
                first = errors[0]
                if isinstance(first, dict) and first.get("message"):
                    return str(first["message"])
                return str(first)
        return None
