"""Stealth policies that shape outgoing requests with browser-like headers."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import timedelta

from stealthreq.errors import InternalError
from stealthreq.headers import HeaderPolicy
from stealthreq.timing import TimingJitter
from stealthreq.tls import TlsFingerprint, TlsRotationPolicy


class MutableRequest(ABC):
    """Minimal header interface an HTTP request adapter has to provide."""

    @abstractmethod
    def set_header(self, name: str, value: str) -> None:
        """Set one header on the underlying request."""

    def set_user_agent(self, value: str) -> None:
        self.set_header("User-Agent", value)


@dataclass(frozen=True)
class AppliedRequestProfile:
    """What a policy did to a request, and what the caller should do next."""

    user_agent: str
    applied_headers: list[tuple[str, str]]
    jitter: timedelta
    tls_profile: TlsFingerprint


class RequestModifier(ABC):
    """Interface shared by everything that can shape a request."""

    @abstractmethod
    def apply_with_rng(
        self, request: MutableRequest, rng: random.Random
    ) -> AppliedRequestProfile:
        """Shape ``request`` using the given random source."""

    @abstractmethod
    def apply(self, request: MutableRequest) -> AppliedRequestProfile:
        """Shape ``request`` using the modifier's own random source."""

    @abstractmethod
    def next_jitter(self, rng: random.Random) -> timedelta:
        """Draw the delay to wait before sending."""

    @abstractmethod
    def next_tls_profile(self, rng: random.Random) -> TlsFingerprint:
        """Choose the TLS profile to present."""


def _is_user_agent(name: str) -> bool:
    return name.lower() == "user-agent"


@dataclass(frozen=True)
class StealthPolicy(RequestModifier):
    """Header sampling, timing jitter and TLS rotation in one policy.

    The ``with_*`` methods return a modified copy and leave the policy intact.
    """

    header_budget: int = 6
    jitter: TimingJitter = field(default_factory=lambda: TimingJitter(80, 250))
    headers: HeaderPolicy = field(default_factory=HeaderPolicy)
    tls: TlsRotationPolicy = field(default_factory=TlsRotationPolicy.with_defaults)
    rotate_tls: bool = True
    seed: int | None = None

    def with_seed(self, seed: int | None) -> StealthPolicy:
        return replace(self, seed=seed)

    def with_timing(self, jitter: TimingJitter) -> StealthPolicy:
        return replace(self, jitter=jitter)

    def with_headers(self, headers: HeaderPolicy) -> StealthPolicy:
        return replace(self, headers=headers)

    def with_tls_rotation(self, tls: TlsRotationPolicy) -> StealthPolicy:
        return replace(self, tls=tls)

    def with_header_budget(self, header_budget: int) -> StealthPolicy:
        """Set the header budget; values below one are raised to one."""
        return replace(self, header_budget=max(header_budget, 1))

    def with_rotate_tls(self, rotate_tls: bool) -> StealthPolicy:
        return replace(self, rotate_tls=rotate_tls)

    def _seeded_rng(self) -> random.Random:
        seed = self.seed if self.seed is not None else random.getrandbits(64)
        return random.Random(seed)

    def apply_with_rng(
        self, request: MutableRequest, rng: random.Random
    ) -> AppliedRequestProfile:
        """Sample headers, set them on ``request`` and report the result.

        Raises ``InternalError`` when no headers or no User-Agent come out.
        """
        candidates = self.headers.materialize(rng, self.header_budget, self.jitter)
        if not candidates:
            raise InternalError("no headers generated")

        user_agent = next(
            (value for name, value in candidates if _is_user_agent(name)), None
        )
        if user_agent is None:
            raise InternalError("User-Agent not generated")

        for name, value in candidates:
            request.set_header(name, value)

        jitter = self.next_jitter(rng)
        tls_profile = self.next_tls_profile(rng)
        return AppliedRequestProfile(
            user_agent=user_agent,
            applied_headers=candidates,
            jitter=jitter,
            tls_profile=tls_profile,
        )

    def apply(self, request: MutableRequest) -> AppliedRequestProfile:
        """Apply with a generator seeded from ``seed``, or randomly if unset."""
        return self.apply_with_rng(request, self._seeded_rng())

    def next_jitter(self, rng: random.Random) -> timedelta:
        return self.jitter.sample_delay(rng)

    def next_tls_profile(self, rng: random.Random) -> TlsFingerprint:
        """A random profile, or the first one when rotation is off."""
        if not self.rotate_tls and self.tls.profiles:
            return self.tls.profiles[0]
        return self.tls.rotate(rng)