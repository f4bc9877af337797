"""
配置验证工具
用于验证配置文件和路由表的正确性和完整性
"""
from __future__ import annotations

from enum import Enum
from urllib.parse import urlparse
from typing import Any, List, Tuple


class ChangeFrequency(str, Enum):
    """sitemap 协议定义的 changefreq 取值"""

    ALWAYS = "always"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    NEVER = "never"


CHANGE_FREQUENCIES = tuple(freq.value for freq in ChangeFrequency)


def validate_url(url: str) -> Tuple[bool, str]:
    """
    验证 URL 是否有效

    Returns:
        (is_valid, error_message)
    """
    if not url or not isinstance(url, str):
        return False, "URL 不能为空"

    url = url.strip()
    if not url:
        return False, "URL 不能为空"

    parsed = urlparse(url)
    if not parsed.scheme:
        return False, f"URL 缺少协议（scheme）: {url}"
    if parsed.scheme not in ("http", "https"):
        return False, f"URL 协议必须是 http 或 https: {url}"
    if not parsed.netloc:
        return False, f"URL 缺少域名: {url}"
    return True, ""


def validate_base_url(base_url: str) -> Tuple[bool, str]:
    """验证 base_url：只允许协议 + 域名（可带端口），不允许路径、查询参数"""
    is_valid, msg = validate_url(base_url)
    if not is_valid:
        return False, f"base_url 无效: {msg}"

    parsed = urlparse(base_url.strip())
    if parsed.path not in ("", "/"):
        return False, f"base_url 不应包含路径: {base_url}"
    if parsed.query or parsed.fragment:
        return False, f"base_url 不应包含查询参数或锚点: {base_url}"

    return True, ""


def validate_language_code(lang: str) -> Tuple[bool, str]:
    """
    验证语言代码格式（ISO 639-1）

    Returns:
        (is_valid, error_message)
    """
    if not lang or not isinstance(lang, str):
        return False, "语言代码不能为空"

    lang = lang.strip()

    # 基本格式：2-3 个小写字母（会直接作为 URL 前缀使用）
    if not lang.isalpha():
        return False, f"语言代码只能包含字母: {lang}"

    if lang != lang.lower():
        return False, f"语言代码必须是小写: {lang}"

    if len(lang) < 2 or len(lang) > 3:
        return False, f"语言代码长度应为 2-3 个字母: {lang}"

    return True, ""


def validate_route_path(path: Any) -> Tuple[bool, str]:
    """路由路径必须是以 / 开头的绝对路径，且不含协议、查询参数或锚点"""
    if not path or not isinstance(path, str):
        return False, "路由路径不能为空"
    if not path.startswith("/"):
        return False, f"路由路径必须以 / 开头: {path}"
    if "//" in path:
        return False, f"路由路径不能包含连续的 /: {path}"
    if any(ch in path for ch in "?#") or any(ch.isspace() for ch in path):
        return False, f"路由路径不能包含查询参数、锚点或空白字符: {path}"
    return True, ""


def validate_priority(priority: Any) -> Tuple[bool, str]:
    """priority 必须是 0.0 ~ 1.0 之间的数字"""
    # bool 是 int 的子类，这里显式排除
    if isinstance(priority, bool) or not isinstance(priority, (int, float)):
        return False, f"priority 必须是数字: {priority!r}"
    if not 0.0 <= float(priority) <= 1.0:
        return False, f"priority 必须在 0.0 ~ 1.0 之间: {priority}"
    return True, ""


def validate_changefreq(changefreq: Any) -> Tuple[bool, str]:
    if changefreq not in CHANGE_FREQUENCIES:
        return False, (
            f"changefreq 必须是 {', '.join(CHANGE_FREQUENCIES)} 之一: {changefreq!r}"
        )
    return True, ""


def validate_config_basic(config_dict: dict) -> List[str]:
    """
    验证配置的基本结构

    Returns:
        错误消息列表（空列表表示无错误）
    """
    errors: List[str] = []

    if not isinstance(config_dict, dict):
        errors.append("配置文件必须是 YAML 字典格式")
        return errors

    # site 部分可选，全部字段都有默认值
    site = config_dict.get("site") or {}
    if not isinstance(site, dict):
        errors.append("'site' 必须是字典格式")
        return errors

    for key in ("base_url", "dev_base_url"):
        value = site.get(key)
        if value is None:
            continue
        is_valid, msg = validate_base_url(value)
        if not is_valid:
            errors.append(f"'site.{key}' {msg}")

    locales = site.get("locales")
    if locales is not None:
        if not isinstance(locales, list) or not locales:
            errors.append("'site.locales' 必须是非空列表")
            locales = None
        else:
            for i, lang in enumerate(locales):
                is_valid, msg = validate_language_code(lang)
                if not is_valid:
                    errors.append(f"'site.locales[{i}]' {msg}")
            if len(set(map(str, locales))) != len(locales):
                errors.append("'site.locales' 不能包含重复的语言代码")

    default_locale = site.get("default_locale")
    if default_locale is not None:
        is_valid, msg = validate_language_code(default_locale)
        if not is_valid:
            errors.append(f"'site.default_locale' {msg}")
        elif locales and default_locale not in locales:
            errors.append(
                f"'site.default_locale' 必须包含在 'site.locales' 中: {default_locale}"
            )

    # routes 部分可选，缺省时使用内置路由表
    if "routes" not in config_dict:
        return errors

    routes = config_dict.get("routes")
    if not isinstance(routes, list) or not routes:
        errors.append("'routes' 必须是非空列表")
        return errors

    seen_paths = set()
    for i, route in enumerate(routes):
        if not isinstance(route, dict):
            errors.append(f"'routes[{i}]' 必须是字典格式")
            continue

        path = route.get("path")
        is_valid, msg = validate_route_path(path)
        if not is_valid:
            errors.append(f"'routes[{i}].path' {msg}")
        elif path in seen_paths:
            errors.append(f"'routes[{i}].path' 重复: {path}")
        else:
            seen_paths.add(path)

        if "priority" not in route:
            errors.append(f"'routes[{i}].priority' 是必需的")
        else:
            is_valid, msg = validate_priority(route["priority"])
            if not is_valid:
                errors.append(f"'routes[{i}].priority' {msg}")

        if "changefreq" not in route:
            errors.append(f"'routes[{i}].changefreq' 是必需的")
        else:
            is_valid, msg = validate_changefreq(route["changefreq"])
            if not is_valid:
                errors.append(f"'routes[{i}].changefreq' {msg}")

    return errors
