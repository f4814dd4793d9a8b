"""A captured HTTP response, normalised for WAF checks."""

from __future__ import annotations

from dataclasses import dataclass, field

from stealthreq.waf.check import ResponseContext
from stealthreq.waf.helpers import extract_cookies

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


@dataclass
class HttpResponseSnapshot:
    """Status, headers (any casing) and raw body bytes of a response."""

    status: int
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: bytes = b""

    def body_str(self) -> str:
        """The body decoded as UTF-8, with invalid bytes replaced."""
        return self.body.decode("utf-8", errors="replace")

    def body_str_lower(self) -> str:
        """The decoded body with ASCII letters lowercased."""
        return _ascii_lower(self.body_str())

    def context(self) -> ResponseContext:
        """Lowercased headers, body and cookie names ready for matching."""
        headers = tuple(
            (_ascii_lower(name), _ascii_lower(value)) for name, value in self.headers
        )
        return ResponseContext(
            headers=headers,
            body=self.body_str_lower(),
            cookies=tuple(extract_cookies(headers)),
            status=self.status,
        )