from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

import yaml

from .i18n import DEFAULT_LOCALE, LOCALES, Localizer
from .routes import DEFAULT_ROUTES, Route, build_registry
from .sitemap import DEV_BASE_URL, PRODUCTION_BASE_URL
from .validators import validate_config_basic


DEFAULT_CONFIG_NAME = "nook.config.yml"


@dataclass
class SiteConfig:
    base_url: str = PRODUCTION_BASE_URL
    # used instead of base_url for local development builds
    dev_base_url: str = DEV_BASE_URL
    default_locale: str = DEFAULT_LOCALE
    locales: List[str] = field(default_factory=lambda: list(LOCALES))


@dataclass
class OutputConfig:
    sitemap_xml: str = "sitemap.xml"


@dataclass
class AppConfig:
    site: SiteConfig = field(default_factory=SiteConfig)
    routes: Tuple[Route, ...] = DEFAULT_ROUTES
    output: OutputConfig = field(default_factory=OutputConfig)

    def base_url_for(self, dev: bool = False) -> str:
        return self.site.dev_base_url if dev else self.site.base_url

    def localizer(self) -> Localizer:
        return Localizer(self.site.locales, self.site.default_locale)


def default_config() -> AppConfig:
    return AppConfig()


def _load_raw_config(path: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Config root must be a mapping")
    return data


def load_config(path: Path, validate: bool = True) -> AppConfig:
    raw = _load_raw_config(path)

    if validate:
        errors = validate_config_basic(raw)
        if errors:
            raise ValueError(
                f"Invalid config {path}:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    site_raw = raw.get("site") or {}
    locales = [str(lang) for lang in (site_raw.get("locales") or LOCALES)]
    site = SiteConfig(
        base_url=str(site_raw.get("base_url", PRODUCTION_BASE_URL)).rstrip("/"),
        dev_base_url=str(site_raw.get("dev_base_url", DEV_BASE_URL)).rstrip("/"),
        default_locale=str(site_raw.get("default_locale", DEFAULT_LOCALE)),
        locales=locales,
    )

    # 未配置 routes 时使用内置路由表
    if "routes" in raw:
        routes = build_registry(raw.get("routes") or [])
    else:
        routes = DEFAULT_ROUTES

    output_raw = raw.get("output") or {}
    output = OutputConfig(
        sitemap_xml=str(output_raw.get("sitemap_xml", "sitemap.xml")),
    )

    config = AppConfig(site=site, routes=routes, output=output)
    # Fail on a bad locale set here rather than at generation time
    config.localizer()
    return config
