"""Request safety: endpoint blocklists, method classification and safe-request guards.

Scanning with real user credentials must never reach endpoints that delete
accounts, end sessions or move money. The guards here block such requests.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from datetime import timedelta
from urllib.parse import unquote_to_bytes

DANGEROUS_ENDPOINTS: frozenset[str] = frozenset(
    {
        "/account/delete",
        "/account/deactivate",
        "/account/close",
        "/api/account/delete",
        "/api/v1/account/delete",
        "/api/v2/account/delete",
        "/settings/delete",
        "/user/delete",
        "/profile/delete",
        "/logout",
        "/signout",
        "/sign-out",
        "/auth/logout",
        "/api/auth/logout",
        "/api/logout",
        "/account/password/reset",
        "/api/account/password",
        "/transfer",
        "/api/transfer",
        "/payment/send",
        "/api/payment",
        "/withdraw",
        "/api/withdraw",
        "/order/cancel-all",
    }
)
"""Endpoints that must never be accessed during authenticated scanning."""

_SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
_DEFAULT_BLOCKED_METHODS = frozenset({"DELETE", "PATCH"})


@dataclass
class SafetyConfig:
    """Which endpoints and methods are off limits, and whether checks run."""

    enabled: bool = True
    blocked_endpoints: set[str] = field(default_factory=lambda: set(DANGEROUS_ENDPOINTS))
    blocked_methods: set[str] = field(
        default_factory=lambda: set(_DEFAULT_BLOCKED_METHODS)
    )


def _percent_decode(path: str) -> str:
    """Decode ``%XX`` escapes; keep the input when the result is not UTF-8."""
    try:
        return unquote_to_bytes(path).decode("utf-8")
    except UnicodeDecodeError:
        return path


def _glob_match(path: str, pattern: str) -> bool:
    """Match ``pattern`` where ``.*`` stands for any run of characters."""
    remaining = path
    for part in pattern.split(".*"):
        if not part:
            continue
        pos = remaining.find(part)
        if pos < 0:
            return False
        remaining = remaining[pos + len(part):]
    return True


def is_safe_endpoint(path: str, config: SafetyConfig) -> bool:
    """True unless the decoded, lowercased path hits a blocked endpoint.

    Only the part before ``?`` is checked. Blocked entries containing ``.*``
    are treated as glob patterns; the others match as substrings.
    """
    if not config.enabled:
        return True
    path_only = _percent_decode(path).lower().split("?", 1)[0]
    for blocked in config.blocked_endpoints:
        pattern = blocked.lower()
        if ".*" in pattern:
            if _glob_match(path_only, pattern):
                return False
        elif pattern in path_only:
            return False
    return True


def is_safe_method(method: str) -> bool:
    """True for the read-only methods GET, HEAD and OPTIONS."""
    return method.upper() in _SAFE_METHODS


def is_safe_request(method: str, path: str, config: SafetyConfig) -> bool:
    """Combined check of the endpoint and the configured blocked methods."""
    if not config.enabled:
        return True
    if not is_safe_endpoint(path, config):
        return False
    return method.upper() not in config.blocked_methods


def gaussian_delay(min_ms: int, max_ms: int, rng: random.Random) -> timedelta:
    """A normally distributed delay clamped to ``[min_ms, max_ms]``.

    The mean is the middle of the range and the standard deviation a quarter
    of its width. Swapped bounds are reordered; ``max_ms == 0`` gives zero.
    """
    if max_ms == 0:
        return timedelta(0)
    low, high = min(min_ms, max_ms), max(min_ms, max_ms)
    if low == high:
        return timedelta(milliseconds=low)

    mean = (low + high) / 2.0
    stddev = (high - low) / 4.0

    # Box-Muller transform
    u1 = rng.uniform(0.001, 1.0)
    u2 = rng.uniform(0.0, math.tau)
    z = math.sqrt(-2.0 * math.log(u1)) * math.cos(u2)

    delay_ms = min(max(mean + z * stddev, float(low)), float(high))
    return timedelta(milliseconds=int(delay_ms))