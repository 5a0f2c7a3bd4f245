"""Dictionary collaborator contracts.

A Dictionary hands already-decoded translation values to the engine; it
never exposes file formats, SQL rows or caches. A DictionaryFactory builds
one Dictionary per (locale, fallback locale) pair, and the engine asks for
a fresh one whenever either locale changes.

These are Protocols (structural typing) rather than ABCs so storage layers
can implement them without importing pluralkit base classes.

Python 3.13+. Zero external dependencies.
"""

from typing import Protocol, runtime_checkable

from pluralkit.templates import RawValue

__all__ = ["Dictionary", "DictionaryFactory"]


@runtime_checkable
class Dictionary(Protocol):
    """Read access to the translations of one locale.

    Example:
        >>> class StaticDictionary:
        ...     def lookup(self, key: str) -> RawValue | None:
        ...         return {"hello": "Ahoj"}.get(key)
        ...     def flush(self) -> None:
        ...         pass
    """

    def lookup(self, key: str) -> RawValue | None:
        """Get the raw value for key.

        Args:
            key: Message key

        Returns:
            Plain string, plural form table, or None if the key is unknown
        """
        ...

    def flush(self) -> None:
        """Persist pending side data such as usage counters.

        Must be idempotent and safe to call any number of times,
        including zero.
        """
        ...


@runtime_checkable
class DictionaryFactory(Protocol):
    """Builds a Dictionary for a locale pair."""

    def create(self, locale: str, fallback_locale: str | None) -> Dictionary:
        """Create a dictionary for locale, filling gaps from fallback_locale.

        Args:
            locale: Primary locale
            fallback_locale: Locale whose entries are used for keys the
                primary locale lacks; None disables fallback

        Returns:
            Dictionary ready for lookups
        """
        ...
