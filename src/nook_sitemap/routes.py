from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple

from .validators import ChangeFrequency, validate_priority, validate_route_path


class RouteConfigError(ValueError):
    """A route definition is malformed (bad path, priority or changefreq)."""


@dataclass(frozen=True)
class Route:
    """A locale-neutral page with its crawl metadata."""

    path: str
    priority: float
    changefreq: ChangeFrequency

    def __post_init__(self) -> None:
        is_valid, msg = validate_route_path(self.path)
        if not is_valid:
            raise RouteConfigError(msg)

        is_valid, msg = validate_priority(self.priority)
        if not is_valid:
            raise RouteConfigError(f"{self.path}: {msg}")
        object.__setattr__(self, "priority", float(self.priority))

        try:
            freq = ChangeFrequency(self.changefreq)
        except ValueError:
            allowed = ", ".join(f.value for f in ChangeFrequency)
            raise RouteConfigError(
                f"{self.path}: changefreq must be one of {allowed}, got {self.changefreq!r}"
            ) from None
        object.__setattr__(self, "changefreq", freq)

    @property
    def priority_text(self) -> str:
        # Always one fractional digit: 1.0, never 1
        return f"{self.priority:.1f}"


# Ordered; sitemap output follows this order.
DEFAULT_ROUTES: Tuple[Route, ...] = (
    Route("/", 1.0, ChangeFrequency.DAILY),
    Route("/chat", 1.0, ChangeFrequency.WEEKLY),
    Route("/transcribe", 1.0, ChangeFrequency.WEEKLY),
    Route("/text-to-speech", 1.0, ChangeFrequency.WEEKLY),
    Route("/background-remover", 1.0, ChangeFrequency.WEEKLY),
    Route("/count-tokens", 1.0, ChangeFrequency.WEEKLY),
    Route("/count-tokens/anthropic-claude", 1.0, ChangeFrequency.WEEKLY),
    Route("/count-tokens/openai-chatgpt", 1.0, ChangeFrequency.WEEKLY),
    Route("/language", 0.8, ChangeFrequency.MONTHLY),
)


def build_registry(raw_routes: Iterable[Dict[str, Any]]) -> Tuple[Route, ...]:
    """Build an immutable route registry from plain mappings (e.g. YAML)."""
    routes = []
    seen = set()
    for raw in raw_routes:
        if not isinstance(raw, dict):
            raise RouteConfigError(f"Route must be a mapping, got {raw!r}")
        missing = [k for k in ("path", "priority", "changefreq") if k not in raw]
        if missing:
            raise RouteConfigError(
                f"Route {raw.get('path', raw)!r} is missing: {', '.join(missing)}"
            )
        route = Route(
            path=raw["path"],
            priority=raw["priority"],
            changefreq=raw["changefreq"],
        )
        if route.path in seen:
            raise RouteConfigError(f"Duplicate route path: {route.path}")
        seen.add(route.path)
        routes.append(route)
    if not routes:
        raise RouteConfigError("Route registry must contain at least one route")
    return tuple(routes)
