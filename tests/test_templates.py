"""Tests for immutable template variants and legacy key expansion."""

from __future__ import annotations

import pytest

from pluralkit.diagnostics import DiagnosticCode, TemplateError
from pluralkit.enums import FormatKind, PluralCategory
from pluralkit.templates import (
    CldrForms,
    FormatMetadata,
    LegacyForms,
    LiteralTemplate,
    expand_legacy_keys,
)


class TestExpandLegacyKeys:
    """Range expansion of legacy form keys."""

    def test_range_expands_inclusive(self) -> None:
        """"2-4" covers 2, 3 and 4."""
        forms, literal = expand_legacy_keys({"2-4": "X"})
        assert forms == {2: "X", 3: "X", 4: "X"}
        assert literal == {}

    def test_integer_keys(self) -> None:
        """String and int keys are both accepted."""
        forms, _ = expand_legacy_keys({"0": "none", 1: "one"})
        assert forms == {0: "none", 1: "one"}

    def test_later_entry_wins(self) -> None:
        """An explicit key after a range overwrites it."""
        forms, _ = expand_legacy_keys({"2-4": "few", "3": "three"})
        assert forms[3] == "three"
        assert forms[2] == "few"

    def test_reversed_range_is_empty(self) -> None:
        """"4-2" produces no keys."""
        forms, literal = expand_legacy_keys({"4-2": "X"})
        assert forms == {}
        assert literal == {}

    @pytest.mark.parametrize("key", ["a-b", "2-x", "-1", "2-", "two"])
    def test_malformed_keys_kept_literally(self, key: str) -> None:
        """Keys that are neither integers nor ranges are returned untouched."""
        forms, literal = expand_legacy_keys({key: "X", "1": "one"})
        assert forms == {1: "one"}
        assert literal == {key: "X"}


class TestLiteralTemplate:
    """Plain text template."""

    def test_frozen(self) -> None:
        """Templates are immutable."""
        template = LiteralTemplate("Hello")
        with pytest.raises(AttributeError):
            template.text = "Bye"  # type: ignore[misc]


class TestLegacyForms:
    """Integer-keyed plural forms."""

    def test_exact_index(self) -> None:
        """Present index is returned."""
        forms = LegacyForms.from_raw({"0": "none", "1": "one", "2-4": "few", "5": "many"})
        assert forms.get(3) == "few"

    def test_missing_index_uses_max_key(self) -> None:
        """Absent index falls back to the highest key."""
        forms = LegacyForms.from_raw({"0": "no messages", "1": "one message"})
        assert forms.max_key == 1
        assert forms.get(99) == "one message"

    def test_literal_keys_never_selected(self) -> None:
        """Non-numeric keys are kept but ignored for selection."""
        forms = LegacyForms.from_raw({"1": "one", "other": "x", "many-more": "y"})
        assert forms.literal_keys == {"many-more": "y", "other": "x"}
        assert forms.get(7) == "one"

    def test_empty_raises(self) -> None:
        """A form table needs at least one form."""
        with pytest.raises(TemplateError) as exc_info:
            LegacyForms({})
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.EMPTY_FORM_TABLE

    def test_only_literal_keys_raises(self) -> None:
        """A table with no usable keys is empty."""
        with pytest.raises(TemplateError):
            LegacyForms.from_raw({"abc": "x"})

    def test_forms_are_read_only(self) -> None:
        """Forms cannot be mutated after construction."""
        source = {1: "one"}
        forms = LegacyForms(source)
        source[2] = "two"
        assert 2 not in forms.forms
        with pytest.raises(TypeError):
            forms.forms[3] = "three"  # type: ignore[index]


class TestCldrForms:
    """Category-keyed plural forms."""

    def test_other_synthesized_from_many(self) -> None:
        """many is the first donor."""
        forms = CldrForms({PluralCategory.ONE: "a", PluralCategory.FEW: "b", PluralCategory.MANY: "c"})
        assert forms.forms[PluralCategory.OTHER] == "c"

    def test_other_synthesized_from_few(self) -> None:
        """few donates when many is absent."""
        forms = CldrForms({PluralCategory.ONE: "a", PluralCategory.FEW: "b"})
        assert forms.forms[PluralCategory.OTHER] == "b"

    def test_other_synthesized_from_one(self) -> None:
        """one donates last."""
        forms = CldrForms({PluralCategory.ONE: "a"})
        assert forms.forms[PluralCategory.OTHER] == "a"

    def test_other_default(self) -> None:
        """Without donors other is the bare count."""
        forms = CldrForms({PluralCategory.ZERO: "none"})
        assert forms.forms[PluralCategory.OTHER] == "{count}"

    def test_canonical_order(self) -> None:
        """Categories are reordered canonically."""
        forms = CldrForms({
            PluralCategory.OTHER: "d",
            PluralCategory.FEW: "b",
            PluralCategory.ZERO: "z",
            PluralCategory.ONE: "a",
        })
        assert forms.categories == (
            PluralCategory.ZERO,
            PluralCategory.ONE,
            PluralCategory.FEW,
            PluralCategory.OTHER,
        )

    def test_from_raw_ignores_foreign_keys(self) -> None:
        """Only category names are kept."""
        forms = CldrForms.from_raw({"one": "a", "other": "b", "5": "x", "plural": "y"})
        assert forms.categories == (PluralCategory.ONE, PluralCategory.OTHER)

    def test_from_raw_keeps_pattern(self) -> None:
        """Source pattern travels with the forms."""
        pattern = "{count, plural, other {# x}}"
        forms = CldrForms.from_raw({"other": "{count} x"}, pattern)
        assert forms.pattern == pattern

    def test_empty_raises(self) -> None:
        """A form table needs at least one form."""
        with pytest.raises(TemplateError):
            CldrForms({})

    def test_to_legacy_bridge(self) -> None:
        """many and other share index 5; other wins."""
        forms = CldrForms({
            PluralCategory.ONE: "a",
            PluralCategory.FEW: "b",
            PluralCategory.MANY: "c",
            PluralCategory.OTHER: "d",
        })
        legacy = forms.to_legacy()
        assert dict(legacy.forms) == {1: "a", 3: "b", 5: "d"}

    def test_to_legacy_count_placeholder(self) -> None:
        """{count} becomes %count% on the legacy side."""
        legacy = CldrForms({PluralCategory.ONE: "{count} file"}).to_legacy()
        assert legacy.get(1) == "%count% file"
        assert legacy.get(5) == "%count% file"

    def test_equality(self) -> None:
        """Equal inputs give equal templates."""
        assert CldrForms({PluralCategory.ONE: "a"}) == CldrForms({PluralCategory.ONE: "a"})


class TestFormatMetadata:
    """Render metadata."""

    def test_is_icu(self) -> None:
        """Kind decides is_icu."""
        assert FormatMetadata(FormatKind.ICU, "{count, plural, other {#}}").is_icu
        assert not FormatMetadata(FormatKind.SPRINTF).is_icu
