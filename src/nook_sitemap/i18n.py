"""
Locale-aware path localization.

The default locale is served without a prefix; every other locale lives
under ``/<locale>/``. All localized paths end with a trailing slash, matching
the site's ``trailingSlash = 'always'`` routing.
"""
from __future__ import annotations

from typing import Iterable, Tuple

DEFAULT_LOCALE = "en"
LOCALES: Tuple[str, ...] = ("en", "es", "ja", "sv", "uk")


class UnsupportedLocaleError(ValueError):
    """Raised when a path is localized for a locale outside the locale set."""

    def __init__(self, locale: str, supported: Iterable[str]):
        self.locale = locale
        self.supported = tuple(supported)
        super().__init__(
            f"Unsupported locale {locale!r} (supported: {', '.join(self.supported)})"
        )


def _with_trailing_slash(path: str) -> str:
    if path.endswith("/"):
        return path
    return path + "/"


class Localizer:
    """Maps locale-neutral paths to locale-specific ones."""

    def __init__(
        self,
        locales: Iterable[str] = LOCALES,
        default_locale: str = DEFAULT_LOCALE,
    ):
        self._locales = tuple(locales)
        if not self._locales:
            raise ValueError("At least one locale is required")
        if len(set(self._locales)) != len(self._locales):
            raise ValueError(f"Duplicate locale codes in {self._locales}")
        if default_locale not in self._locales:
            raise ValueError(
                f"Default locale {default_locale!r} is not in locales {self._locales}"
            )
        self._default_locale = default_locale

    @property
    def locales(self) -> Tuple[str, ...]:
        return self._locales

    @property
    def default_locale(self) -> str:
        return self._default_locale

    def localize(self, path: str, locale: str) -> str:
        """
        Return the path under which ``path`` is served for ``locale``.

        >>> Localizer().localize("/chat", "en")
        '/chat/'
        >>> Localizer().localize("/", "ja")
        '/ja/'
        """
        if locale not in self._locales:
            raise UnsupportedLocaleError(locale, self._locales)
        if not path.startswith("/"):
            raise ValueError(f"Path must be absolute: {path!r}")

        if locale == self._default_locale:
            if path == "/":
                return path
            return _with_trailing_slash(path)

        if path == "/":
            return f"/{locale}/"
        return _with_trailing_slash(f"/{locale}{path}")

    def resolve(self, requested: str | None) -> str:
        """Fall back to the default locale for missing or unknown codes."""
        if requested and requested in self._locales:
            return requested
        return self._default_locale

    def __repr__(self) -> str:
        return f"Localizer(locales={self._locales!r}, default_locale={self._default_locale!r})"


_default = Localizer()

locales = _default.locales


def localize(path: str, locale: str) -> str:
    return _default.localize(path, locale)
