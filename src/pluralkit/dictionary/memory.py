"""In-memory dictionaries over already-decoded translation tables.

MappingDictionary merges a fallback-locale table under a primary table, so
keys missing from the primary locale resolve to the fallback translation.
It also counts key lookups and hands the pending counts to an optional
callback on flush(), which is where a storage layer would persist usage
statistics.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections import Counter
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import TypeAlias

from pluralkit.locale_utils import normalize_locale, primary_language
from pluralkit.templates import RawValue

__all__ = ["MappingDictionary", "MappingDictionaryFactory", "UsageCallback"]

logger = logging.getLogger(__name__)

UsageCallback: TypeAlias = Callable[[Mapping[str, int]], None]
"""Receives key -> lookup count for lookups since the previous flush."""


class MappingDictionary:
    """Dictionary backed by plain mappings.

    Example:
        >>> d = MappingDictionary({"hello": "Ahoj"}, fallback={"bye": "Bye"})
        >>> d.lookup("hello"), d.lookup("bye"), d.lookup("nope")
        ('Ahoj', 'Bye', None)
    """

    __slots__ = ("_lock", "_messages", "_on_flush", "_usage")

    def __init__(
        self,
        messages: Mapping[str, RawValue],
        *,
        fallback: Mapping[str, RawValue] | None = None,
        on_flush: UsageCallback | None = None,
    ) -> None:
        """Initialize dictionary.

        Args:
            messages: Primary translations
            fallback: Translations used for keys missing from messages
            on_flush: Receives pending usage counts on flush()
        """
        merged: dict[str, RawValue] = dict(fallback or {})
        merged.update(messages)
        self._messages = MappingProxyType(merged)
        self._on_flush = on_flush
        self._usage: Counter[str] = Counter()
        self._lock = threading.Lock()

    @property
    def messages(self) -> Mapping[str, RawValue]:
        """Read-only view of the merged translations."""
        return self._messages

    def lookup(self, key: str) -> RawValue | None:
        """Get the raw value for key, counting the hit."""
        value = self._messages.get(key)
        if value is not None and self._on_flush is not None:
            with self._lock:
                self._usage[key] += 1
        return value

    def has(self, key: str) -> bool:
        """True if key has a translation (primary or fallback)."""
        return key in self._messages

    def flush(self) -> None:
        """Hand pending usage counts to the callback, then reset them."""
        if self._on_flush is None:
            return
        with self._lock:
            pending = dict(self._usage)
            self._usage.clear()
        if pending:
            logger.debug("Flushing usage counts for %d keys", len(pending))
            self._on_flush(pending)

    def __len__(self) -> int:
        return len(self._messages)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"MappingDictionary(messages={len(self._messages)})"


class MappingDictionaryFactory:
    """Builds MappingDictionary instances from per-locale tables.

    Tables are keyed by locale code. A requested locale resolves to its
    exact table ("cs_CZ", hyphens allowed), else to its language table
    ("cs"), else to an empty table.

    Example:
        >>> factory = MappingDictionaryFactory({
        ...     "cs": {"hello": "Ahoj"},
        ...     "en": {"hello": "Hello", "bye": "Bye"},
        ... })
        >>> d = factory.create("cs_CZ", "en_US")
        >>> d.lookup("hello"), d.lookup("bye")
        ('Ahoj', 'Bye')
    """

    __slots__ = ("_on_flush", "_tables")

    def __init__(
        self,
        tables: Mapping[str, Mapping[str, RawValue]],
        *,
        on_flush: UsageCallback | None = None,
    ) -> None:
        """Initialize factory.

        Args:
            tables: Locale code -> translations
            on_flush: Usage callback passed to every created dictionary
        """
        self._tables = {normalize_locale(code).lower(): table for code, table in tables.items()}
        self._on_flush = on_flush

    def table_for(self, locale: str) -> Mapping[str, RawValue]:
        """Resolve the translation table for a locale."""
        exact = self._tables.get(normalize_locale(locale).lower())
        if exact is not None:
            return exact
        return self._tables.get(primary_language(locale), {})

    def create(self, locale: str, fallback_locale: str | None) -> MappingDictionary:
        """Create a dictionary for locale merged over fallback_locale."""
        fallback = None
        if fallback_locale and normalize_locale(fallback_locale) != normalize_locale(locale):
            fallback = self.table_for(fallback_locale)
        logger.debug("Creating dictionary for %s (fallback %s)", locale, fallback_locale)
        return MappingDictionary(self.table_for(locale), fallback=fallback, on_flush=self._on_flush)
