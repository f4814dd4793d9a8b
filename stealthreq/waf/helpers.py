"""Small helpers shared by WAF detection."""

from __future__ import annotations

from collections.abc import Iterable

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _ascii_lower(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def extract_cookies(headers: Iterable[tuple[str, str]]) -> list[str]:
    """Cookie names from ``set-cookie`` and ``cookie`` headers, lowercased.

    Header names are expected to be lowercase already. Attributes without
    an ``=`` (such as ``secure``) are skipped.
    """
    cookies: list[str] = []
    for name, value in headers:
        if name not in ("set-cookie", "cookie"):
            continue
        for part in value.split(";"):
            key, sep, _ = part.strip().partition("=")
            if sep:
                cookies.append(_ascii_lower(key.strip()))
    return cookies