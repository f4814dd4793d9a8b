"""Stealth profile configuration loaded from TOML."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stealthreq.errors import ConfigError
from stealthreq.headers import HeaderPolicyConfig
from stealthreq.policy import StealthPolicy
from stealthreq.timing import TimingJitter
from stealthreq.tls import TlsRotationConfig, TlsRotationPolicy

_U64_MAX = 2**64 - 1


def _u64(data: Mapping[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"`{key}` must be an integer")
    if not 0 <= value <= _U64_MAX:
        raise ConfigError(f"`{key}` is out of range")
    return value


def _bool(data: Mapping[str, Any], key: str, default: bool | None) -> bool:
    if key not in data:
        if default is None:
            raise ConfigError(f"missing field `{key}`")
        return default
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(f"`{key}` must be a boolean")
    return value


def _table(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    if key not in data:
        return None
    value = data[key]
    if not isinstance(value, Mapping):
        raise ConfigError(f"`{key}` must be a table")
    return value


def _headers_config(data: Mapping[str, Any] | None) -> HeaderPolicyConfig:
    # A missing section keeps the defaults; a present one starts from empty values.
    if data is None:
        return HeaderPolicyConfig()

    hosts = data.get("referer_hosts", [])
    if not isinstance(hosts, list) or not all(isinstance(h, str) for h in hosts):
        raise ConfigError("`headers.referer_hosts` must be a list of strings")

    extras: list[tuple[str, str]] = []
    for pair in data.get("extra_headers", []):
        if (
            not isinstance(pair, list)
            or len(pair) != 2
            or not all(isinstance(part, str) for part in pair)
        ):
            raise ConfigError("`headers.extra_headers` must hold [name, value] pairs")
        extras.append((pair[0], pair[1]))

    return HeaderPolicyConfig(
        referer_hosts=list(hosts),
        extra_headers=extras,
        include_pragmas=_bool(data, "include_pragmas", False),
    )


def _tls_config(data: Mapping[str, Any] | None) -> TlsRotationConfig:
    if data is None:
        return TlsRotationConfig()
    return TlsRotationConfig(enabled=_bool(data, "enabled", None))


@dataclass
class StealthProfileConfig:
    """Settings from which a :class:`StealthPolicy` is built."""

    jitter_ms_min: int = 80
    jitter_ms_max: int = 350
    header_budget: int = 4
    seed: int | None = None
    rotate_tls: bool = True
    headers: HeaderPolicyConfig = field(default_factory=HeaderPolicyConfig)
    tls: TlsRotationConfig = field(default_factory=TlsRotationConfig)

    @classmethod
    def from_toml(cls, text: str) -> StealthProfileConfig:
        """Parse and validate a configuration; raises ``ConfigError``."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as err:
            raise ConfigError(str(err)) from err

        seed = _u64(data, "seed", 0) if "seed" in data else None
        config = cls(
            jitter_ms_min=_u64(data, "jitter_ms_min", 80),
            jitter_ms_max=_u64(data, "jitter_ms_max", 350),
            header_budget=_u64(data, "header_budget", 4),
            seed=seed,
            rotate_tls=_bool(data, "rotate_tls", True),
            headers=_headers_config(_table(data, "headers")),
            tls=_tls_config(_table(data, "tls")),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Raise ``ConfigError`` when the values are inconsistent."""
        if self.jitter_ms_min > self.jitter_ms_max:
            raise ConfigError("jitter_ms_min cannot exceed jitter_ms_max")
        if self.header_budget == 0:
            raise ConfigError("header_budget must be >= 1")

    def build(self) -> StealthPolicy:
        """Turn the configuration into an executable policy."""
        return (
            StealthPolicy()
            .with_seed(self.seed)
            .with_timing(TimingJitter(self.jitter_ms_min, self.jitter_ms_max))
            .with_header_budget(self.header_budget)
            .with_headers(self.headers.into_profile())
            .with_tls_rotation(TlsRotationPolicy.from_config(self.tls))
            .with_rotate_tls(self.rotate_tls)
        )