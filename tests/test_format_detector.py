"""Tests for entry classification, ICU pattern synthesis and legacy conversion."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pluralkit.diagnostics import TemplateError
from pluralkit.enums import CATEGORY_ORDER, FormatKind, PluralCategory
from pluralkit.formatting import (
    FormatDetector,
    build_icu_pattern,
    convert_legacy_to_cldr,
    parse_icu_pattern,
    sprintf_to_icu,
    trim_forms,
)
from pluralkit.rules import BabelPluralRules
from pluralkit.templates import CldrForms, LegacyForms, LiteralTemplate

ZERO = PluralCategory.ZERO
ONE = PluralCategory.ONE
FEW = PluralCategory.FEW
MANY = PluralCategory.MANY
OTHER = PluralCategory.OTHER

POKOJ_FORMS = {
    "one": "{count} pokoj",
    "few": "{count} pokoje",
    "many": "{count, number} pokoje",
    "other": "{count} pokojů",
}


class TestSprintfToIcu:
    """printf placeholder conversion."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("%s files", "{count} files"),
            ("%d files", "{count} files"),
            ("%u files", "{count} files"),
            ("%f files", "{count} files"),
            ("%1$s files in %2$s", "{count} files in {1}"),
            ("%3$d of %1$s", "{2} of {count}"),
            ("no placeholders", "no placeholders"),
        ],
    )
    def test_conversion(self, text: str, expected: str) -> None:
        """Simple and positional verbs become ICU placeholders."""
        assert sprintf_to_icu(text) == expected


class TestBuildIcuPattern:
    """Canonical pattern synthesis."""

    def test_pokoj_forms(self) -> None:
        """{count} becomes #; {count, number} is kept."""
        assert build_icu_pattern(POKOJ_FORMS) == (
            "{count, plural, one {# pokoj} few {# pokoje} "
            "many {{count, number} pokoje} other {# pokojů}}"
        )

    def test_canonical_order(self) -> None:
        """Input order does not matter."""
        forward = build_icu_pattern({"one": "a", "few": "b", "other": "c"})
        backward = build_icu_pattern({"other": "c", "few": "b", "one": "a"})
        assert forward == backward == "{count, plural, one {a} few {b} other {c}}"

    def test_other_from_few(self) -> None:
        """Missing other is taken from few when many is absent."""
        assert build_icu_pattern({"one": "# file", "few": "%d files"}) == (
            "{count, plural, one {# file} few {# files} other {# files}}"
        )

    def test_other_default(self) -> None:
        """No donor gives a bare #."""
        assert build_icu_pattern({"zero": "none"}) == "{count, plural, zero {none} other {#}}"

    def test_positional_placeholders(self) -> None:
        """%2$s becomes {1}."""
        assert build_icu_pattern({"other": "%1$s files in %2$s"}) == (
            "{count, plural, other {# files in {1}}}"
        )

    def test_accepts_enum_keys(self) -> None:
        """PluralCategory keys work like names."""
        assert build_icu_pattern({ONE: "a", OTHER: "b"}) == build_icu_pattern({"one": "a", "other": "b"})

    def test_deterministic(self) -> None:
        """Same forms give byte-identical patterns."""
        assert build_icu_pattern(POKOJ_FORMS) == build_icu_pattern(dict(POKOJ_FORMS))


_TEXT_PIECES = st.sampled_from(["a", "b", " ", "x y", "{count}", "#", "%s", "{1}", "{user}", "é"])
_FORM_TEXT = st.lists(_TEXT_PIECES, max_size=6).map("".join)
_FORMS = st.dictionaries(st.sampled_from(CATEGORY_ORDER), _FORM_TEXT, min_size=1)


class TestBuildIcuPatternProperties:
    """Round-trip properties of pattern synthesis."""

    @given(forms=_FORMS)
    def test_rebuild_is_idempotent(self, forms: dict[PluralCategory, str]) -> None:
        """Parsing a built pattern and building again gives the same pattern."""
        pattern = build_icu_pattern(forms)
        assert build_icu_pattern(parse_icu_pattern(pattern)) == pattern

    @given(forms=_FORMS)
    def test_other_always_emitted_last(self, forms: dict[PluralCategory, str]) -> None:
        """Every pattern ends with an other branch."""
        parsed = parse_icu_pattern(build_icu_pattern(forms))
        assert list(parsed)[-1] == OTHER

    @given(forms=_FORMS)
    def test_categories_preserved(self, forms: dict[PluralCategory, str]) -> None:
        """Present categories survive, in canonical order."""
        parsed = parse_icu_pattern(build_icu_pattern(forms))
        expected = [c for c in CATEGORY_ORDER if c in forms or c is OTHER]
        assert list(parsed) == expected


class TestConvertLegacyToCldr:
    """Legacy numeric tables mapped onto categories."""

    def test_czech(self) -> None:
        """1 is one, 2-4 few, 5 other."""
        result = convert_legacy_to_cldr({"1": "soubor", "2-4": "soubory", "5": "souborů"}, "cs")
        assert result == {ONE: "soubor", FEW: "soubory", OTHER: "souborů"}
        assert list(result) == [ONE, FEW, OTHER]

    def test_russian(self) -> None:
        """other comes from the maximum key when nothing classifies as other."""
        result = convert_legacy_to_cldr({"1": "файл", "2-4": "файла", "5": "файлов"}, "ru")
        assert result == {ONE: "файл", FEW: "файла", MANY: "файлов", OTHER: "файлов"}

    def test_lowest_number_wins(self) -> None:
        """0 and 5 are both other in Czech; 0 comes first."""
        result = convert_legacy_to_cldr({"0": "žádné", "1": "jeden", "5": "mnoho"}, "cs")
        assert result[OTHER] == "žádné"

    def test_injected_rules(self) -> None:
        """A rules strategy can be supplied."""
        result = convert_legacy_to_cldr({"1": "a", "3": "b"}, "cy", BabelPluralRules())
        assert result == {ONE: "a", FEW: "b", OTHER: "b"}

    def test_no_numeric_keys_raises(self) -> None:
        """Tables without integer keys cannot be converted."""
        with pytest.raises(TemplateError):
            convert_legacy_to_cldr({"abc": "x"}, "cs")


class TestTrimForms:
    """Dropping categories a locale never selects."""

    def test_english_drops_few(self) -> None:
        """English has only one and other."""
        forms = {ONE: "a", FEW: "b", MANY: "c", OTHER: "d"}
        assert trim_forms(forms, "en") == {ONE: "a", OTHER: "d"}

    def test_czech_keeps_all(self) -> None:
        """Czech uses all four."""
        forms = {ONE: "a", FEW: "b", MANY: "c", OTHER: "d"}
        assert trim_forms(forms, "cs") == forms

    def test_zero_dropped_outside_latvian(self) -> None:
        """zero only survives where it can be selected."""
        forms = {ZERO: "z", OTHER: "o"}
        assert trim_forms(forms, "lv") == forms
        assert trim_forms(forms, "cs") == {OTHER: "o"}


class TestFormatDetector:
    """Raw entry classification."""

    def test_detect_cldr(self) -> None:
        """Category keys make a CLDR table."""
        detection = FormatDetector().detect(POKOJ_FORMS)
        assert detection.is_cldr
        assert detection.pattern == build_icu_pattern(POKOJ_FORMS)

    def test_detect_legacy(self) -> None:
        """Numeric keys make a legacy table."""
        detection = FormatDetector().detect({"0": "none", "2-4": "few", 5: "many"})
        assert not detection.is_cldr
        assert detection.pattern is None

    def test_mixed_keys_are_cldr(self) -> None:
        """Any category key is enough."""
        assert FormatDetector.is_cldr({"1": "a", "other": "b"})

    def test_to_template_literal(self) -> None:
        """Plain strings are literal."""
        assert FormatDetector().to_template("Hello %s") == LiteralTemplate("Hello %s")

    def test_to_template_icu_string(self) -> None:
        """ICU pattern strings become CLDR forms carrying the source."""
        raw = "You have {count, plural, one {# message} other {# messages}}"
        template = FormatDetector().to_template(raw)
        assert isinstance(template, CldrForms)
        assert template.pattern == raw
        assert template.forms[ONE] == "{count} message"

    def test_to_template_broken_icu_string(self) -> None:
        """Unparseable ICU text stays literal."""
        raw = "{count, plural, one {# message}}"
        assert FormatDetector().to_template(raw) == LiteralTemplate(raw)

    def test_to_template_legacy(self) -> None:
        """Numeric-key mappings become legacy forms."""
        template = FormatDetector().to_template({"1": "one", "2-4": "few"})
        assert isinstance(template, LegacyForms)
        assert template.get(3) == "few"

    def test_to_template_cldr(self) -> None:
        """Category-key mappings become CLDR forms."""
        template = FormatDetector().to_template({"one": "a", "few": "b"})
        assert isinstance(template, CldrForms)
        assert template.categories == (ONE, FEW, OTHER)

    @pytest.mark.parametrize("raw", [{}, 42, ["a"]])
    def test_to_template_rejects(self, raw: object) -> None:
        """Empty tables and foreign types are unusable."""
        with pytest.raises(TemplateError):
            FormatDetector().to_template(raw)  # type: ignore[arg-type]

    def test_metadata_cldr(self) -> None:
        """CLDR forms render through ICU with the canonical pattern."""
        template = CldrForms.from_raw(POKOJ_FORMS)
        metadata = FormatDetector().metadata(template)
        assert metadata.kind is FormatKind.ICU
        assert metadata.pattern == build_icu_pattern(POKOJ_FORMS)
        assert metadata.categories == (ONE, FEW, MANY, OTHER)

    def test_metadata_prefers_source_pattern(self) -> None:
        """Pattern strings keep their surrounding text."""
        raw = "Inbox: {count, plural, other {# new}}"
        metadata = FormatDetector().metadata(FormatDetector().to_template(raw))
        assert metadata.pattern == raw

    def test_metadata_sprintf(self) -> None:
        """Literal and legacy templates are printf."""
        detector = FormatDetector()
        assert detector.metadata(LiteralTemplate("x")).kind is FormatKind.SPRINTF
        assert detector.metadata(LegacyForms({1: "x"})).pattern is None
