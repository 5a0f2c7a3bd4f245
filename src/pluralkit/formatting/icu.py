"""ICU MessageFormat plural subset: parsing and evaluation.

Supported syntax::

    prefix {count, plural, =0 {none} one {# item} other {# items}} suffix

Inside a branch, ``#`` and ``{count}`` / ``{count, number}`` insert the
locale-formatted count, ``{N}`` inserts positional argument N (the count is
argument 0) and ``{name}`` inserts a named argument. Placeholders outside
the plural block are substituted the same way, except ``#`` which is only
meaningful inside a branch. Unknown placeholders are left as written.

Only ``plural`` is supported: no select, selectordinal, offset, date or time
arguments, and no apostrophe quoting.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from decimal import Decimal

from pluralkit.constants import COUNT_ARGUMENT, ICU_NUMBER_TOKEN
from pluralkit.diagnostics import ErrorTemplate, InvalidPatternError
from pluralkit.enums import CATEGORY_NAMES, PluralCategory

__all__ = [
    "PluralMessage",
    "has_plural_argument",
    "naive_substitute",
    "parse_icu_message",
    "parse_icu_pattern",
]

_PLURAL_HEAD = re.compile(r"\{\s*(?P<argument>\w+)\s*,\s*plural\s*,")
_SELECTOR = re.compile(r"=\d+|[A-Za-z]\w*")
_PLACEHOLDER = re.compile(r"\{\s*(\w+)\s*(?:,\s*number\s*)?\}")
_BRANCH_TOKEN = re.compile(r"\{\s*(\w+)\s*(?:,\s*number\s*)?\}|#")

# Explicit selectors that have a category equivalent in form tables.
_EXPLICIT_CATEGORY: dict[str, PluralCategory] = {
    "=0": PluralCategory.ZERO,
    "=1": PluralCategory.ONE,
    "=2": PluralCategory.TWO,
}


def _invalid(pattern: str, reason: str, position: int) -> InvalidPatternError:
    return InvalidPatternError(
        ErrorTemplate.invalid_pattern(pattern, reason, position),
        pattern=pattern,
        position=position,
    )


def _skip_whitespace(text: str, position: int) -> int:
    while position < len(text) and text[position].isspace():
        position += 1
    return position


def _closing_brace(pattern: str, opening: int) -> int:
    """Index of the brace closing the one at opening; nested braces allowed."""
    depth = 0
    for index in range(opening, len(pattern)):
        char = pattern[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    raise _invalid(pattern, "unterminated branch", opening)


@dataclass(frozen=True, slots=True)
class PluralMessage:
    """Parsed ICU message with a single plural argument.

    Attributes:
        argument: Name of the plural argument (normally "count")
        variants: Selector ("one", "few", "=0", ...) to raw branch text,
            in source order
        prefix: Text before the plural block
        suffix: Text after the plural block
    """

    argument: str
    variants: Mapping[str, str]
    prefix: str = ""
    suffix: str = ""

    def select(self, category: PluralCategory, count: Decimal | None) -> str:
        """Pick the branch: exact ``=N`` match first, then category, then other."""
        if count is not None and count.is_finite() and count == count.to_integral_value():
            exact = self.variants.get(f"={int(count)}")
            if exact is not None:
                return exact
        return self.variants.get(category.value, self.variants["other"])

    def format(
        self,
        category: PluralCategory,
        count: Decimal | None,
        count_text: str,
        args: Sequence[object] = (),
        named: Mapping[str, object] | None = None,
    ) -> str:
        """Render the message for an already-selected category.

        Args:
            category: Category selected for count in the active locale
            count: Numeric count for exact-match selectors, None if unknown
            count_text: Text inserted for ``#`` and ``{count}``
            args: Positional arguments for ``{N}``
            named: Named arguments for ``{name}``

        Returns:
            Rendered message
        """
        named = named or {}
        branch = self.select(category, count)

        def replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name is None or name == self.argument or name == COUNT_ARGUMENT:
                return count_text
            if name.isdigit():
                index = int(name)
                if index < len(args):
                    value = args[index]
                    return "" if value is None else str(value)
                return match.group(0)
            if name in named:
                value = named[name]
                return "" if value is None else str(value)
            return match.group(0)

        return "".join((
            _PLACEHOLDER.sub(replace, self.prefix),
            _BRANCH_TOKEN.sub(replace, branch),
            _PLACEHOLDER.sub(replace, self.suffix),
        ))


def has_plural_argument(text: str) -> bool:
    """True if text contains an ICU ``{name, plural, ...`` block opener."""
    return _PLURAL_HEAD.search(text) is not None


def parse_icu_message(pattern: str) -> PluralMessage:
    """Parse an ICU message containing one plural argument.

    Args:
        pattern: ICU message text

    Returns:
        PluralMessage

    Raises:
        InvalidPatternError: No plural block, unbalanced braces, a
            malformed selector, or no ``other`` branch

    Example:
        >>> msg = parse_icu_message("{count, plural, one {# file} other {# files}}")
        >>> dict(msg.variants)
        {'one': '# file', 'other': '# files'}
    """
    head = _PLURAL_HEAD.search(pattern)
    if head is None:
        raise _invalid(pattern, "no plural argument", 0)

    variants: dict[str, str] = {}
    position = head.end()
    while True:
        position = _skip_whitespace(pattern, position)
        if position >= len(pattern):
            raise _invalid(pattern, "unterminated plural block", head.start())
        if pattern[position] == "}":
            break
        selector = _SELECTOR.match(pattern, position)
        if selector is None:
            raise _invalid(pattern, "expected plural selector", position)
        position = _skip_whitespace(pattern, selector.end())
        if position >= len(pattern) or pattern[position] != "{":
            raise _invalid(pattern, "expected '{' after selector", position)
        closing = _closing_brace(pattern, position)
        variants[selector.group()] = pattern[position + 1 : closing]
        position = closing + 1

    if "other" not in variants:
        raise _invalid(pattern, "missing 'other' branch", position)

    return PluralMessage(
        argument=head.group("argument"),
        variants=variants,
        prefix=pattern[: head.start()],
        suffix=pattern[position + 1 :],
    )


def parse_icu_pattern(pattern: str) -> dict[PluralCategory, str]:
    """Extract a CLDR form table from an ICU plural pattern.

    ``=0``, ``=1`` and ``=2`` map to zero, one and two; other exact
    selectors and unknown keywords are dropped. ``#`` becomes ``{count}``.

    Args:
        pattern: ICU message text

    Returns:
        Category to form text, in source order

    Raises:
        InvalidPatternError: If the pattern cannot be parsed

    Example:
        >>> parse_icu_pattern("{count, plural, =0 {no files} other {# files}}")
        {<PluralCategory.ZERO: 'zero'>: 'no files', <PluralCategory.OTHER: 'other'>: '{count} files'}
    """
    forms: dict[PluralCategory, str] = {}
    count_placeholder = "{" + COUNT_ARGUMENT + "}"
    for selector, text in parse_icu_message(pattern).variants.items():
        if selector in _EXPLICIT_CATEGORY:
            category = _EXPLICIT_CATEGORY[selector]
        elif selector in CATEGORY_NAMES:
            category = PluralCategory(selector)
        else:
            continue
        forms[category] = text.replace(ICU_NUMBER_TOKEN, count_placeholder)
    return forms


def naive_substitute(pattern: str, count_text: str) -> str:
    """Replace ``{count}`` and ``#`` in raw pattern text.

    Last-resort rendering for patterns that fail to parse.
    """
    return pattern.replace("{" + COUNT_ARGUMENT + "}", count_text).replace(
        ICU_NUMBER_TOKEN, count_text
    )
