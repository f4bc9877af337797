import argparse
import sys
from datetime import datetime
from pathlib import Path

from .config import DEFAULT_CONFIG_NAME, default_config, load_config
from .logger import console_to, get_logger, set_log_level
from .sitemap import build_entries, generate_sitemap, write_sitemap_xml

logger = get_logger(__name__)


def cmd_init(args):
    """Create a starter config file in the current directory."""
    target = Path(args.path or DEFAULT_CONFIG_NAME)
    if target.exists() and not args.force:
        print(f"[WARN] Config file already exists: {target}", file=sys.stderr)
        return 1

    template = """# Nook sitemap config
#
# 所有字段都有默认值，通常只需要调整：
# 1）site.base_url  —— 生产环境域名
# 2）site.locales   —— 支持的语言（第一个不一定是默认语言，见 default_locale）
# 3）routes         —— 需要出现在 sitemap 中的页面

site:
  base_url: "https://nook.software"
  # 本地开发时（generate --dev）使用的地址
  dev_base_url: "http://localhost:5173"
  # 默认语言的页面没有语言前缀，如 /chat/；其他语言为 /es/chat/
  default_locale: "en"
  locales: ["en", "es", "ja", "sv", "uk"]

# priority: 0.0 ~ 1.0
# changefreq: always / hourly / daily / weekly / monthly / yearly / never
routes:
  - path: "/"
    priority: 1.0
    changefreq: "daily"
  - path: "/chat"
    priority: 1.0
    changefreq: "weekly"
  - path: "/transcribe"
    priority: 1.0
    changefreq: "weekly"
  - path: "/text-to-speech"
    priority: 1.0
    changefreq: "weekly"
  - path: "/background-remover"
    priority: 1.0
    changefreq: "weekly"
  - path: "/count-tokens"
    priority: 1.0
    changefreq: "weekly"
  - path: "/count-tokens/anthropic-claude"
    priority: 1.0
    changefreq: "weekly"
  - path: "/count-tokens/openai-chatgpt"
    priority: 1.0
    changefreq: "weekly"
  - path: "/language"
    priority: 0.8
    changefreq: "monthly"

output:
  sitemap_xml: "build/sitemap.xml"
"""
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(template, encoding="utf-8")
    print(f"[OK] Created config file: {target}")
    return 0


def _load(args):
    """Load the config named on the command line, or the defaults if none exists."""
    config_path = Path(args.config or DEFAULT_CONFIG_NAME)
    if not config_path.exists():
        if args.config:
            raise ValueError(f"Config file not found: {config_path}")
        logger.info(f"{config_path} not found, using built-in routes and locales")
        return default_config()

    validate = not getattr(args, "no_validate", False)
    return load_config(config_path, validate=validate)


def _parse_now(value):
    if value is None:
        return None
    # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid --now timestamp: {value}") from None


def cmd_generate(args):
    if args.stdout:
        # stdout carries the document only
        with console_to("stderr"):
            return _generate(args)
    return _generate(args)


def _generate(args):
    config = _load(args)
    now = _parse_now(args.now)
    base_url = config.base_url_for(args.dev)
    localizer = config.localizer()

    if args.dry_run:
        entries = build_entries(config.routes, localizer, base_url, now=now)
        print(
            f"[DRY-RUN] {len(config.routes)} routes x {len(localizer.locales)} locales "
            f"= {len(entries)} URLs"
        )
        for entry in entries[:10]:
            print(f"  {entry.location}  ({entry.changefreq}, {entry.priority})")
        if len(entries) > 10:
            print(f"  ... and {len(entries) - 10} more")
        return 0

    xml_text = generate_sitemap(
        routes=config.routes, localizer=localizer, base_url=base_url, now=now
    )
    if args.stdout:
        sys.stdout.write(xml_text)
        return 0

    write_sitemap_xml(xml_text, args.output or config.output.sitemap_xml)
    return 0


def cmd_routes(args):
    """Print every route with its localized location per locale."""
    config = _load(args)
    localizer = config.localizer()
    entries = build_entries(config.routes, localizer, config.base_url_for(args.dev))
    locale_count = len(localizer.locales)
    for idx, route in enumerate(config.routes):
        print(f"{route.path}  priority={route.priority_text} changefreq={route.changefreq.value}")
        block = entries[idx * locale_count:(idx + 1) * locale_count]
        for locale, entry in zip(localizer.locales, block):
            print(f"  [{locale}] {entry.location}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="nook-sitemap",
        description="Localized sitemap.xml generator for the Nook AI tools site.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # init
    p_init = subparsers.add_parser(
        "init", help=f"Create a starter {DEFAULT_CONFIG_NAME} in current directory."
    )
    p_init.add_argument(
        "-p",
        "--path",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME})",
    )
    p_init.add_argument(
        "-f",
        "--force",
        action="store_true",
        help="Overwrite existing config file.",
    )
    p_init.set_defaults(func=cmd_init)

    # generate
    p_gen = subparsers.add_parser("generate", help="Generate sitemap.xml.")
    p_gen.add_argument(
        "-c",
        "--config",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME}, built-in defaults if missing)",
    )
    p_gen.add_argument(
        "-o",
        "--output",
        help="Output file path (overrides output.sitemap_xml).",
    )
    p_gen.add_argument(
        "--dev",
        action="store_true",
        help="Use site.dev_base_url instead of site.base_url.",
    )
    p_gen.add_argument(
        "--now",
        help="Pin the lastmod timestamp (ISO-8601, e.g. 2024-01-01T12:00:00.000Z).",
    )
    p_gen.add_argument(
        "--stdout",
        action="store_true",
        help="Print the document instead of writing a file.",
    )
    p_gen.add_argument(
        "--dry-run",
        action="store_true",
        help="Do not write files; only print counts and sample URLs.",
    )
    p_gen.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip configuration validation (not recommended).",
    )
    p_gen.set_defaults(func=cmd_generate)

    # routes
    p_routes = subparsers.add_parser(
        "routes", help="List every route and its localized URLs."
    )
    p_routes.add_argument(
        "-c",
        "--config",
        help=f"Config file path (default: {DEFAULT_CONFIG_NAME})",
    )
    p_routes.add_argument(
        "--dev",
        action="store_true",
        help="Use site.dev_base_url instead of site.base_url.",
    )
    p_routes.set_defaults(func=cmd_routes)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_log_level("DEBUG")

    func = getattr(args, "func", None)
    if func is None:
        parser.print_help()
        return 1

    try:
        return int(func(args)) or 0
    except (ValueError, OSError) as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
