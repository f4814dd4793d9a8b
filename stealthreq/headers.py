"""Pools of realistic browser header values and their per-request sampling."""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from stealthreq.timing import TimingJitter

USER_AGENTS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/123.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 14_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Version/17.4 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Firefox/125.0",
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_4 like Mac OS X) AppleWebKit/605.1.15 "
    "(KHTML, like Gecko) Version/17.4 Mobile/15E148 Safari/604.1",
)
ACCEPT_LANGS = (
    "en-US,en;q=0.9",
    "en-GB,en;q=0.8",
    "en-CA,en;q=0.8",
    "fr-FR,fr;q=0.8,en;q=0.7",
)
ACCEPT_ENCODINGS = ("gzip, deflate, br", "gzip, br", "br, gzip", "gzip")
CACHE_CONTROL = ("no-cache", "max-age=0", "no-store", "must-revalidate")
UPGRADE_INSECURE_REQUEST = ("1", "0")

_BURST_HEADERS = (
    ("DNT", "1"),
    ("Sec-Fetch-Site", "none"),
    ("Sec-Fetch-Mode", "navigate"),
    ("Sec-Fetch-Dest", "document"),
)

_DEFAULT_REFERERS = ("https://example.com", "https://www.google.com")
_DEFAULT_EXTRA = (
    ("Accept", "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"),
)

_LIST_FIELDS = (
    "user_agents",
    "accept_languages",
    "accept_encodings",
    "cache_controls",
    "upgrade_insecure",
    "referer_hosts",
)


def _pick(rng: random.Random, items: list):
    return items[rng.randrange(len(items))] if items else None


def _is_user_agent(name: str) -> bool:
    return name.lower() == "user-agent"


def _swap_remove(items: list, idx: int) -> None:
    last = items.pop()
    if idx < len(items):
        items[idx] = last


def _prune_to_budget(
    rng: random.Random, headers: list[tuple[str, str]], budget: int
) -> None:
    """Drop random headers until ``budget`` remain, keeping User-Agent."""
    if budget <= 0:
        headers.clear()
        return
    while len(headers) > budget:
        ua_pos = next(
            (pos for pos, (name, _) in enumerate(headers) if _is_user_agent(name)),
            None,
        )
        count = len(headers)
        if ua_pos == 0 and count > 1:
            idx = rng.randrange(1, count)
        elif ua_pos is not None and count > 1:
            choice = rng.randrange(count - 1)
            idx = choice + 1 if choice >= ua_pos else choice
        else:
            idx = rng.randrange(count)
        _swap_remove(headers, idx)


@dataclass
class HeaderPolicy:
    """Header mutation profile holding pools of browser-like values."""

    user_agents: list[str] = field(default_factory=lambda: list(USER_AGENTS))
    accept_languages: list[str] = field(default_factory=lambda: list(ACCEPT_LANGS))
    accept_encodings: list[str] = field(
        default_factory=lambda: list(ACCEPT_ENCODINGS)
    )
    cache_controls: list[str] = field(default_factory=lambda: list(CACHE_CONTROL))
    upgrade_insecure: list[str] = field(
        default_factory=lambda: list(UPGRADE_INSECURE_REQUEST)
    )
    referer_hosts: list[str] = field(default_factory=lambda: list(_DEFAULT_REFERERS))
    extra_headers: list[tuple[str, str]] = field(
        default_factory=lambda: list(_DEFAULT_EXTRA)
    )
    include_pragmas: bool = True

    def materialize(
        self, rng: random.Random, header_budget: int, timing: TimingJitter
    ) -> list[tuple[str, str]]:
        """Sample one header set, pruned to at most ``header_budget`` entries."""
        headers: list[tuple[str, str]] = []
        for name, pool in (
            ("User-Agent", self.user_agents),
            ("Accept-Language", self.accept_languages),
            ("Accept-Encoding", self.accept_encodings),
            ("Cache-Control", self.cache_controls),
            ("Upgrade-Insecure-Requests", self.upgrade_insecure),
        ):
            value = _pick(rng, pool)
            if value is not None:
                headers.append((name, value))

        # An empty policy must produce no headers at all.
        if timing.burstiness() and headers:
            headers.extend(_BURST_HEADERS)

        referer = _pick(rng, self.referer_hosts)
        if referer is not None:
            headers.append(("Referer", referer))

        if self.include_pragmas:
            headers.append(("Pragma", "no-cache"))

        extra = _pick(rng, self.extra_headers)
        if extra is not None:
            name, value = extra
            headers.append((name, value))

        _prune_to_budget(rng, headers, header_budget)
        return headers

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {key: list(getattr(self, key)) for key in _LIST_FIELDS}
        data["extra_headers"] = [[name, value] for name, value in self.extra_headers]
        data["include_pragmas"] = self.include_pragmas
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> HeaderPolicy:
        """Build a policy from a mapping; every field is required."""
        required = (*_LIST_FIELDS, "extra_headers", "include_pragmas")
        missing = [key for key in required if key not in data]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")

        kwargs: dict[str, Any] = {}
        for key in _LIST_FIELDS:
            items = data[key]
            if not isinstance(items, (list, tuple)) or not all(
                isinstance(item, str) for item in items
            ):
                raise ValueError(f"field `{key}` must be a list of strings")
            kwargs[key] = list(items)

        extras: list[tuple[str, str]] = []
        for pair in data["extra_headers"]:
            if (
                not isinstance(pair, (list, tuple))
                or len(pair) != 2
                or not all(isinstance(part, str) for part in pair)
            ):
                raise ValueError("field `extra_headers` must hold [name, value] pairs")
            extras.append((pair[0], pair[1]))
        kwargs["extra_headers"] = extras

        include = data["include_pragmas"]
        if not isinstance(include, bool):
            raise ValueError("field `include_pragmas` must be a boolean")
        kwargs["include_pragmas"] = include
        return cls(**kwargs)


@dataclass
class HeaderPolicyConfig:
    """The configurable part of a header policy."""

    referer_hosts: list[str] = field(default_factory=lambda: list(_DEFAULT_REFERERS))
    extra_headers: list[tuple[str, str]] = field(
        default_factory=lambda: list(_DEFAULT_EXTRA)
    )
    include_pragmas: bool = True

    def into_profile(self) -> HeaderPolicy:
        """Combine these settings with the built-in value pools."""
        return HeaderPolicy(
            referer_hosts=list(self.referer_hosts),
            extra_headers=[(name, value) for name, value in self.extra_headers],
            include_pragmas=self.include_pragmas,
        )