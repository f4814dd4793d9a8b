"""Declarative checks evaluated against a normalised HTTP response."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ResponseContext:
    """Response fields, lowercased and ready for matching."""

    headers: Sequence[tuple[str, str]] = ()
    body: str = ""
    cookies: Sequence[str] = ()
    status: int = 0


class CheckKind(Enum):
    HEADER_EXISTS = "header_exists"
    HEADER_ANY_EXISTS = "header_any_exists"
    HEADER_CONTAINS = "header_contains"
    BODY_CONTAINS = "body_contains"
    BODY_ANY = "body_any"
    COOKIE_EXISTS = "cookie_exists"
    COOKIE_ANY = "cookie_any"
    COOKIE_PREFIX = "cookie_prefix"
    COOKIE_CONTAINS = "cookie_contains"
    ANY_HEADER_CONTAINS = "any_header_contains"
    STATUS_IN = "status_in"
    ALL_OF = "all_of"
    ANY_OF = "any_of"


_FIELDS: dict[CheckKind, tuple[str, ...]] = {
    CheckKind.HEADER_EXISTS: ("value",),
    CheckKind.HEADER_ANY_EXISTS: ("values",),
    CheckKind.HEADER_CONTAINS: ("name", "value"),
    CheckKind.BODY_CONTAINS: ("value",),
    CheckKind.BODY_ANY: ("values",),
    CheckKind.COOKIE_EXISTS: ("value",),
    CheckKind.COOKIE_ANY: ("values",),
    CheckKind.COOKIE_PREFIX: ("value",),
    CheckKind.COOKIE_CONTAINS: ("value",),
    CheckKind.ANY_HEADER_CONTAINS: ("value",),
    CheckKind.STATUS_IN: ("values",),
    CheckKind.ALL_OF: ("checks",),
    CheckKind.ANY_OF: ("checks",),
}


def _require_str(data: Mapping[str, Any], key: str) -> str:
    value = data[key]
    if not isinstance(value, str):
        raise ValueError(f"field `{key}` must be a string")
    return value


def _require_list(data: Mapping[str, Any], key: str, item_type: type) -> tuple:
    items = data[key]
    if not isinstance(items, (list, tuple)):
        raise ValueError(f"field `{key}` must be a list")
    for item in items:
        if not isinstance(item, item_type) or isinstance(item, bool):
            raise ValueError(f"field `{key}` must hold {item_type.__name__} items")
    return tuple(items)


@dataclass(frozen=True)
class Check:
    """One signature check; which fields matter depends on ``kind``."""

    kind: CheckKind
    value: str = ""
    name: str = ""
    values: tuple = ()
    checks: tuple[Check, ...] = field(default=())

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Check:
        """Build a check from a mapping tagged by its ``type`` key."""
        if "type" not in data:
            raise ValueError("missing field `type`")
        try:
            kind = CheckKind(data["type"])
        except ValueError:
            raise ValueError(f"unknown check type {data['type']!r}") from None

        missing = [key for key in _FIELDS[kind] if key not in data]
        if missing:
            raise ValueError(f"missing field `{missing[0]}` for check {kind.value}")

        kwargs: dict[str, Any] = {}
        for key in _FIELDS[kind]:
            if key in ("value", "name"):
                kwargs[key] = _require_str(data, key)
            elif key == "values":
                item_type = int if kind is CheckKind.STATUS_IN else str
                kwargs[key] = _require_list(data, key, item_type)
            else:
                nested = data[key]
                if not isinstance(nested, (list, tuple)):
                    raise ValueError("field `checks` must be a list")
                kwargs[key] = tuple(cls.from_dict(item) for item in nested)
        return cls(kind=kind, **kwargs)

    def evaluate(self, ctx: ResponseContext) -> bool:
        header_names = (name for name, _ in ctx.headers)
        match self.kind:
            case CheckKind.HEADER_EXISTS:
                return self.value in header_names
            case CheckKind.HEADER_ANY_EXISTS:
                present = set(header_names)
                return any(v in present for v in self.values)
            case CheckKind.HEADER_CONTAINS:
                return any(
                    h == self.name and self.value in v for h, v in ctx.headers
                )
            case CheckKind.BODY_CONTAINS:
                return self.value in ctx.body
            case CheckKind.BODY_ANY:
                return any(v in ctx.body for v in self.values)
            case CheckKind.COOKIE_EXISTS:
                return self.value in ctx.cookies
            case CheckKind.COOKIE_ANY:
                return any(v in ctx.cookies for v in self.values)
            case CheckKind.COOKIE_PREFIX:
                return any(c.startswith(self.value) for c in ctx.cookies)
            case CheckKind.COOKIE_CONTAINS:
                return any(self.value in c for c in ctx.cookies)
            case CheckKind.ANY_HEADER_CONTAINS:
                return any(
                    self.value in name or self.value in v for name, v in ctx.headers
                )
            case CheckKind.STATUS_IN:
                return ctx.status in self.values
            case CheckKind.ALL_OF:
                return all(c.evaluate(ctx) for c in self.checks)
            case CheckKind.ANY_OF:
                return any(c.evaluate(ctx) for c in self.checks)
        raise ValueError(f"unhandled check kind {self.kind!r}")