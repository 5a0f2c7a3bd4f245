"""Runtime package.

Provides template caching, locale number formatting and message rendering.
Depends on the rules and formatting packages.

Python 3.13+.
"""

from .catalog import CatalogEntry, TemplateCatalog
from .locale_context import LocaleContext
from .renderer import MessageRenderer, as_count

__all__ = [
    "CatalogEntry",
    "LocaleContext",
    "MessageRenderer",
    "TemplateCatalog",
    "as_count",
]
