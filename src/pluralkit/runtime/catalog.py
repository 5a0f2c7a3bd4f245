"""Per-dictionary memo of decoded templates and their render metadata.

Each key is looked up, decoded and classified at most once, even under
concurrent access: the first caller computes and publishes while holding
the lock, later callers read the published entry without locking. Entries
never go stale because dictionary values are immutable; a new locale gets
a new catalog.

Python 3.13+. Zero external dependencies.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Final

from pluralkit.diagnostics import TemplateError
from pluralkit.dictionary import Dictionary
from pluralkit.formatting.detector import FormatDetector
from pluralkit.templates import FormatMetadata, Template

__all__ = ["CatalogEntry", "TemplateCatalog"]

logger = logging.getLogger(__name__)

_MISSING: Final = object()


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """Decoded template with its metadata."""

    template: Template
    metadata: FormatMetadata


class TemplateCatalog:
    """Lazy, thread-safe template cache over a Dictionary.

    Example:
        >>> from pluralkit.dictionary import MappingDictionary
        >>> catalog = TemplateCatalog(MappingDictionary({"hi": "Hello"}))
        >>> catalog.get("hi").template
        LiteralTemplate(text='Hello')
        >>> catalog.get("missing") is None
        True
    """

    __slots__ = ("_detector", "_dictionary", "_entries", "_lock")

    def __init__(self, dictionary: Dictionary, detector: FormatDetector | None = None) -> None:
        """Initialize catalog.

        Args:
            dictionary: Source of raw entries
            detector: Entry classifier (default FormatDetector())
        """
        self._dictionary = dictionary
        self._detector = detector or FormatDetector()
        self._entries: dict[str, CatalogEntry | None] = {}
        self._lock = threading.Lock()

    @property
    def dictionary(self) -> Dictionary:
        """Dictionary this catalog reads from."""
        return self._dictionary

    def get(self, key: str) -> CatalogEntry | None:
        """Get the decoded entry for key.

        Args:
            key: Message key

        Returns:
            CatalogEntry, or None when the key is missing or its value is
            not a usable template (logged at warning level)
        """
        entry = self._entries.get(key, _MISSING)
        if entry is not _MISSING:
            return entry  # type: ignore[return-value]

        with self._lock:
            entry = self._entries.get(key, _MISSING)
            if entry is _MISSING:
                entry = self._build(key)
                self._entries[key] = entry
            return entry  # type: ignore[return-value]

    def _build(self, key: str) -> CatalogEntry | None:
        raw = self._dictionary.lookup(key)
        if raw is None:
            return None
        try:
            template = self._detector.to_template(raw)
        except TemplateError as e:
            logger.warning("Unusable translation for '%s': %s", key, e)
            return None
        metadata = self._detector.metadata(template)
        logger.debug("Cached %s template for '%s'", metadata.kind, key)
        return CatalogEntry(template, metadata)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        """Forget all cached entries."""
        with self._lock:
            self._entries.clear()
