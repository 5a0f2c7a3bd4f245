"""Tests for TemplateCatalog memoization."""

from __future__ import annotations

import logging
import threading
from collections import Counter

import pytest

from pluralkit.dictionary import MappingDictionary
from pluralkit.enums import FormatKind
from pluralkit.runtime import TemplateCatalog
from pluralkit.templates import CldrForms, LiteralTemplate, RawValue


class CountingDictionary:
    """Dictionary that records every lookup."""

    def __init__(self, messages: dict[str, RawValue], delay: threading.Event | None = None) -> None:
        self.messages = messages
        self.lookups: Counter[str] = Counter()
        self.delay = delay
        self._lock = threading.Lock()

    def lookup(self, key: str) -> RawValue | None:
        with self._lock:
            self.lookups[key] += 1
        if self.delay is not None:
            self.delay.wait(timeout=0.05)
        return self.messages.get(key)

    def flush(self) -> None:
        pass


class TestTemplateCatalog:
    """Lookup, decode and classify at most once per key."""

    def test_literal_entry(self) -> None:
        """Plain strings decode to literal templates."""
        catalog = TemplateCatalog(MappingDictionary({"hi": "Hello"}))
        entry = catalog.get("hi")
        assert entry is not None
        assert entry.template == LiteralTemplate("Hello")
        assert entry.metadata.kind is FormatKind.SPRINTF

    def test_cldr_entry_has_pattern(self) -> None:
        """CLDR tables carry their ICU pattern."""
        catalog = TemplateCatalog(MappingDictionary({"files": {"one": "# file", "other": "# files"}}))
        entry = catalog.get("files")
        assert entry is not None
        assert isinstance(entry.template, CldrForms)
        assert entry.metadata.pattern == "{count, plural, one {# file} other {# files}}"

    def test_entry_computed_once(self) -> None:
        """Repeated gets hit the dictionary once."""
        dictionary = CountingDictionary({"hi": "Hello"})
        catalog = TemplateCatalog(dictionary)
        first = catalog.get("hi")
        second = catalog.get("hi")
        assert first is second
        assert dictionary.lookups["hi"] == 1

    def test_missing_key_cached(self) -> None:
        """Misses are remembered too."""
        dictionary = CountingDictionary({})
        catalog = TemplateCatalog(dictionary)
        assert catalog.get("nope") is None
        assert catalog.get("nope") is None
        assert dictionary.lookups["nope"] == 1

    def test_unusable_entry(self, caplog: pytest.LogCaptureFixture) -> None:
        """Empty form tables are logged and treated as missing."""
        catalog = TemplateCatalog(MappingDictionary({"broken": {}}))
        with caplog.at_level(logging.WARNING):
            assert catalog.get("broken") is None
        assert "Unusable translation for 'broken'" in caplog.text

    def test_contains_and_len(self) -> None:
        """Membership reflects usable entries."""
        catalog = TemplateCatalog(MappingDictionary({"hi": "Hello"}))
        assert "hi" in catalog
        assert "nope" not in catalog
        assert 42 not in catalog
        assert len(catalog) == 2

    def test_clear(self) -> None:
        """clear() forgets entries."""
        dictionary = CountingDictionary({"hi": "Hello"})
        catalog = TemplateCatalog(dictionary)
        catalog.get("hi")
        catalog.clear()
        assert len(catalog) == 0
        catalog.get("hi")
        assert dictionary.lookups["hi"] == 2

    def test_concurrent_gets_compute_once(self) -> None:
        """Concurrent first access decodes a key exactly once."""
        dictionary = CountingDictionary(
            {"files": {"one": "# file", "few": "# files", "other": "# filez"}},
            delay=threading.Event(),
        )
        catalog = TemplateCatalog(dictionary)
        barrier = threading.Barrier(8)
        results: list[object] = []
        results_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            entry = catalog.get("files")
            with results_lock:
                results.append(entry)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert dictionary.lookups["files"] == 1
        assert len(results) == 8
        assert all(entry is results[0] for entry in results)
