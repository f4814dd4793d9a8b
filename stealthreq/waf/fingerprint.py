"""WAF detection results and the evasive encodings they suggest."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

MIN_CONFIDENCE_THRESHOLD = 0.35
"""Minimum confidence score required to consider a signature match."""


@dataclass
class WafFingerprint:
    """A detected WAF with its confidence and matching indicators."""

    name: str
    confidence: float
    indicators: list[str] = field(default_factory=list)


class WafEncoding(Enum):
    """Payload encodings that may slip past a WAF."""

    URL_ENCODE = "UrlEncode"
    DOUBLE_URL_ENCODE = "DoubleUrlEncode"
    HTML_ENCODE = "HtmlEncode"
    UNICODE_ENCODE = "UnicodeEncode"
    BASE64_ENCODE = "Base64Encode"
    HEX_ENCODE = "HexEncode"


def parse_encoding(name: str) -> WafEncoding | None:
    """Map an encoding name from signature data; unknown names give None."""
    try:
        return WafEncoding(name)
    except ValueError:
        return None