"""Error body returned by the Koios API.

Koios is served through PostgREST, which reports failures as a JSON object:

    {"code": "PGRST103", "message": "...", "details": "...", "hint": null}
"""

from dataclasses import dataclass
from typing import Any

import httpx

ERROR_FIELDS = frozenset(["code", "message", "details", "hint"])


@dataclass(frozen=True)
class ErrorDetail:
    """PostgREST error object."""

    code: str | None = None
    message: str | None = None
    details: str | None = None
    hint: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "ErrorDetail | None":
        """Build from decoded JSON, or return None if it is not an error object."""
        if not isinstance(data, dict) or not any(field in data for field in ERROR_FIELDS):
            return None

        return cls(
            code=_as_text(data.get("code")),
            message=_as_text(data.get("message")),
            details=_as_text(data.get("details")),
            hint=_as_text(data.get("hint")),
        )

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ErrorDetail | None":
        """Parse the error object from an HTTP response.

        Args:
            response: HTTP response object

        Returns:
            ErrorDetail or None if the body is not a PostgREST error
        """
        try:
            data = response.json()
        except (ValueError, TypeError, AttributeError):
            # Empty body, plain text or HTML error pages from a proxy
            return None
        return cls.from_dict(data)

    def to_exception_message(self) -> str:
        """Convert the error object to an exception message."""
        lines = []

        if self.message:
            lines.append(self.message)
        if self.code:
            lines.append(f"Code: {self.code}")
        if self.details:
            lines.append(f"Details: {self.details}")
        if self.hint:
            lines.append(f"Hint: {self.hint}")

        return "\n".join(lines) if lines else "Unknown API error"


def _as_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)
