"""
Nook Sitemap

Localized sitemap.xml generator for the Nook AI tools site.
"""

__all__ = [
    "__version__",
    "config",
    "i18n",
    "response",
    "routes",
    "sitemap",
    "validators",
]

__version__ = "0.1.0"
