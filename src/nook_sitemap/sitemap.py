from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Sequence
import xml.etree.ElementTree as ET

from .i18n import Localizer
from .logger import get_logger
from .routes import DEFAULT_ROUTES, Route

logger = get_logger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

PRODUCTION_BASE_URL = "https://nook.software"
DEV_BASE_URL = "http://localhost:5173"


@dataclass(frozen=True)
class SitemapEntry:
    location: str
    last_modified: str
    changefreq: str
    priority: str


def format_lastmod(now: datetime) -> str:
    """
    Format a timestamp as ISO-8601 UTC with millisecond precision,
    e.g. ``2024-01-01T12:00:00.000Z``. Naive datetimes are taken as UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def build_location(base_url: str, localized_path: str) -> str:
    """Join base URL and localized path; the root path adds nothing."""
    base = base_url.rstrip("/")
    if localized_path == "/":
        return base
    return f"{base}{localized_path}"


def build_entries(
    routes: Sequence[Route],
    localizer: Localizer,
    base_url: str,
    now: Optional[datetime] = None,
) -> List[SitemapEntry]:
    """
    Expand routes x locales into sitemap entries.

    Order is route-major, locale-minor. The timestamp is read once and shared
    by every entry. A localizer error aborts the whole build.
    """
    lastmod = format_lastmod(now if now is not None else datetime.now(timezone.utc))

    entries: List[SitemapEntry] = []
    for route in routes:
        for locale in localizer.locales:
            localized_path = localizer.localize(route.path, locale)
            entries.append(
                SitemapEntry(
                    location=build_location(base_url, localized_path),
                    last_modified=lastmod,
                    changefreq=route.changefreq.value,
                    priority=route.priority_text,
                )
            )

    logger.debug(
        f"Built {len(entries)} sitemap entries "
        f"({len(routes)} routes x {len(localizer.locales)} locales, lastmod={lastmod})"
    )
    return entries


def render_sitemap_xml(entries: Sequence[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", attrib={"xmlns": SITEMAP_NAMESPACE})

    for entry in entries:
        url_el = ET.SubElement(urlset, "url")
        ET.SubElement(url_el, "loc").text = entry.location
        ET.SubElement(url_el, "lastmod").text = entry.last_modified
        ET.SubElement(url_el, "changefreq").text = entry.changefreq
        ET.SubElement(url_el, "priority").text = entry.priority

    ET.indent(urlset, space="  ")
    # ElementTree's own declaration uses single quotes, so write it by hand
    body = ET.tostring(urlset, encoding="unicode")
    return f"{XML_DECLARATION}\n{body}\n"


def generate_sitemap(
    routes: Sequence[Route] = DEFAULT_ROUTES,
    localizer: Optional[Localizer] = None,
    base_url: str = PRODUCTION_BASE_URL,
    now: Optional[datetime] = None,
) -> str:
    """Build the full sitemap document for every route in every locale."""
    if localizer is None:
        localizer = Localizer()
    entries = build_entries(routes, localizer, base_url, now=now)
    logger.info(
        f"Generated sitemap with {len(entries)} URLs for {base_url} "
        f"(locales: {', '.join(localizer.locales)})"
    )
    return render_sitemap_xml(entries)


def write_sitemap_xml(xml_text: str, path: str | Path) -> Path:
    """Write to a sibling temp file, then move it over ``path``."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = target.with_name(target.name + ".tmp")
    try:
        tmp_path.write_text(xml_text, encoding="utf-8")
        tmp_path.replace(target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.info(f"Wrote sitemap.xml to {target}")
    return target
