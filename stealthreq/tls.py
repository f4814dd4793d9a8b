"""Simulated TLS fingerprint profiles and their rotation.

No handshake is performed here; the data lets callers bind a profile
to their own TLS stack.
"""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass, field


@dataclass(frozen=True)
class TlsFingerprint:
    """A named TLS client profile with its JA3 string and hash."""

    name: str
    ja3: str
    ja3_hash: str
    alpn: tuple[str, ...] = ()
    cipher_suites: tuple[str, ...] = ()
    extensions: tuple[str, ...] = ()

    def as_header_hints(self) -> list[tuple[str, str]]:
        return [
            ("Sec-CH-UA-Platform", ""),
            ("X-TLS-Fingerprint", self.ja3_hash),
        ]


def compute_ja3_hash(ja3: str) -> str:
    """Return the 32-character lowercase MD5 hex digest of a JA3 string."""
    return hashlib.md5(ja3.encode("utf-8")).hexdigest()


_DEFAULT_PROFILES = (
    (
        "chrome-desktop-121",
        "770,4865-4866-4867,23-24,0-11-10-35-16-22,0-1",
        ("TLS_AES_128_GCM_SHA256", "TLS_AES_256_GCM_SHA384"),
        ("server_name", "application_layer_protocol_negotiation"),
    ),
    (
        "chrome-mobile-121",
        "771,4865-4867,23-24-25,0-11-10-35-16,0-1",
        ("TLS_CHACHA20_POLY1305_SHA256", "TLS_AES_128_GCM_SHA256"),
        ("server_name", "extended_master_secret"),
    ),
    (
        "firefox-desktop",
        "772,4867-4866-4865,23-24,0-10-11-16-35,0-1",
        ("TLS_AES_128_GCM_SHA256", "TLS_CHACHA20_POLY1305_SHA256"),
        ("server_name", "key_share"),
    ),
)

_FALLBACK_JA3 = "771,4865,0,0,0"


def build_default_profiles() -> list[TlsFingerprint]:
    """The built-in browser profiles, in a fixed order."""
    return [
        TlsFingerprint(
            name=name,
            ja3=ja3,
            ja3_hash=compute_ja3_hash(ja3),
            alpn=("h2", "http/1.1"),
            cipher_suites=ciphers,
            extensions=extensions,
        )
        for name, ja3, ciphers, extensions in _DEFAULT_PROFILES
    ]


def _fallback_profile() -> TlsFingerprint:
    return TlsFingerprint(
        name="fallback",
        ja3=_FALLBACK_JA3,
        ja3_hash=compute_ja3_hash(_FALLBACK_JA3),
        alpn=("h2",),
        cipher_suites=("TLS_AES_128_GCM_SHA256",),
        extensions=("server_name",),
    )


@dataclass(frozen=True)
class TlsRotationConfig:
    """Serialisable TLS rotation settings."""

    enabled: bool = True


@dataclass
class TlsRotationPolicy:
    """A pool of TLS profiles picked at random per request."""

    profiles: list[TlsFingerprint] = field(default_factory=build_default_profiles)
    enable: bool = True
    rotating: bool = True

    @classmethod
    def from_config(cls, cfg: TlsRotationConfig) -> TlsRotationPolicy:
        return cls(enable=cfg.enabled, rotating=cfg.enabled)

    @classmethod
    def with_defaults(cls) -> TlsRotationPolicy:
        return cls()

    def rotate(self, rng: random.Random) -> TlsFingerprint:
        """Pick a profile; an empty pool yields a fixed fallback profile."""
        if not self.profiles:
            return _fallback_profile()
        return self.profiles[rng.randrange(len(self.profiles))]