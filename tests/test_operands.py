"""Tests for count operands and locale utilities."""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from pluralkit.locale_utils import get_system_locale, normalize_locale, primary_language
from pluralkit.rules.operands import plural_operands, to_decimal


class TestToDecimal:
    """Float conversion without binary noise."""

    def test_float_uses_repr(self) -> None:
        """1.1 stays 1.1."""
        assert to_decimal(1.1) == Decimal("1.1")

    def test_int(self) -> None:
        """Integers convert exactly."""
        assert to_decimal(-7) == Decimal(-7)

    def test_decimal_unchanged(self) -> None:
        """Decimals pass through."""
        value = Decimal("2.50")
        assert to_decimal(value) is value


class TestPluralOperands:
    """Integer flag and truncated magnitude."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (Decimal("2.0"), (True, 2)),
            (Decimal("2.5"), (False, 2)),
            (Decimal("-21.5"), (False, 21)),
            (Decimal("0.5"), (False, 0)),
            (Decimal(0), (True, 0)),
        ],
    )
    def test_operands(self, value: Decimal, expected: tuple[bool, int]) -> None:
        """Operands split as expected."""
        assert plural_operands(value) == expected

    @pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
    def test_non_finite(self, value: Decimal) -> None:
        """Non-finite counts have no operands."""
        assert plural_operands(value) is None

    @given(st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_are_integral(self, n: int) -> None:
        """Every int is integral with magnitude |n|."""
        assert plural_operands(to_decimal(n)) == (True, abs(n))


class TestLocaleUtils:
    """Locale code helpers."""

    def test_normalize(self) -> None:
        """Hyphens become underscores."""
        assert normalize_locale("pt-BR") == "pt_BR"

    @pytest.mark.parametrize(
        ("locale", "language"),
        [("cs_CZ", "cs"), ("CS-cz", "cs"), ("sr-Latn-RS", "sr"), ("cnr", "cnr"), ("", "")],
    )
    def test_primary_language(self, locale: str, language: str) -> None:
        """Lowercase primary subtag."""
        assert primary_language(locale) == language

    def test_system_locale_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """LANG is used when the OS locale is unset."""
        monkeypatch.setattr("locale.getlocale", lambda: (None, None))
        monkeypatch.delenv("LC_ALL", raising=False)
        monkeypatch.delenv("LC_MESSAGES", raising=False)
        monkeypatch.setenv("LANG", "cs_CZ.UTF-8")
        assert get_system_locale() == "cs_CZ"

    def test_system_locale_unknown(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Nothing set falls back or raises on request."""
        monkeypatch.setattr("locale.getlocale", lambda: ("C", None))
        for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
            monkeypatch.delenv(var, raising=False)
        assert get_system_locale() == "en_US"
        with pytest.raises(RuntimeError):
            get_system_locale(raise_on_failure=True)
