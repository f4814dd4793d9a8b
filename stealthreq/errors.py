"""Errors raised while building or applying stealth profiles."""


class StealthError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(StealthError, ValueError):
    """Invalid TOML or inconsistent configuration values."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"stealth profile configuration error: {detail}. "
            "Fix: validate the TOML keys and keep `jitter_ms_min <= jitter_ms_max` "
            "with `header_budget >= 1`."
        )


class InternalError(StealthError, RuntimeError):
    """A policy could not produce a usable request profile."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(
            f"stealth policy error: {detail}. "
            "Fix: use a non-empty header policy and at least one TLS profile "
            "when rotation is enabled."
        )