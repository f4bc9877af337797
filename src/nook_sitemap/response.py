"""
Response metadata for serving the sitemap.

The package does not run a server; whatever serves ``/sitemap.xml`` takes
``body`` and ``headers`` from here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Dict, Optional

from .sitemap import generate_sitemap

if TYPE_CHECKING:
    from .config import AppConfig

CONTENT_TYPE = "application/xml"
CACHE_CONTROL = "public, max-age=3600"

SITEMAP_HEADERS: Dict[str, str] = {
    "Content-Type": CONTENT_TYPE,
    "Cache-Control": CACHE_CONTROL,
}


@dataclass(frozen=True)
class SitemapResponse:
    body: str
    status: int = 200
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Caller headers extend or override the sitemap defaults
        object.__setattr__(self, "headers", {**SITEMAP_HEADERS, **self.headers})

    @property
    def content_type(self) -> str:
        return self.headers["Content-Type"]

    @property
    def cache_control(self) -> str:
        return self.headers["Cache-Control"]


def sitemap_response(
    config: "AppConfig",
    dev: bool = False,
    now: Optional[datetime] = None,
) -> SitemapResponse:
    body = generate_sitemap(
        routes=config.routes,
        localizer=config.localizer(),
        base_url=config.base_url_for(dev),
        now=now,
    )
    return SitemapResponse(body=body)
