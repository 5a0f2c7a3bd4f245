"""printf-style positional substitution.

Implements the conversion set legacy translation files rely on:
``%s %d %u %f %F %e %E %g %G %x %X %o %b %c %%`` with optional argument
number (``%2$s``), flags (``-``, ``+``, space, ``0``, ``'c`` custom padding),
width and precision. Sequential conversions consume arguments left to right;
numbered conversions address arguments directly.

``None`` arguments render as empty strings. Framework-reserved placeholders
(``%label``, ``%name``, ``%value``) survive substitution untouched.

Python 3.13+. Zero external dependencies.
"""

import re
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from pluralkit.constants import RESERVED_PLACEHOLDERS

__all__ = ["SprintfError", "apply_sprintf", "vsprintf"]

_SPEC = re.compile(
    r"%(?:(?P<argnum>[1-9]\d*)\$)?"
    r"(?P<flags>(?:[-+ 0]|'.)*)"
    r"(?P<width>\d+)?"
    r"(?:\.(?P<precision>\d+))?"
    r"(?P<conv>[bcdeEfFgGosuxX%])?"
)

_UNSIGNED_WRAP = 1 << 64


class SprintfError(ValueError):
    """Template and arguments do not fit together."""


def _to_int(value: object) -> int:
    match value:
        case None:
            return 0
        case bool() | int():
            return int(value)
        case float() | Decimal():
            try:
                return int(value)
            except (ValueError, OverflowError):  # NaN, infinity
                return 0
        case _:
            try:
                return int(Decimal(str(value).strip()))
            except (InvalidOperation, ValueError):
                return 0


def _to_float(value: object) -> float:
    match value:
        case None:
            return 0.0
        case bool() | int() | float() | Decimal():
            return float(value)
        case _:
            try:
                return float(str(value).strip())
            except ValueError:
                return 0.0


def _to_str(value: object) -> str:
    match value:
        case None | False:
            return ""
        case True:
            return "1"
        case _:
            return str(value)


def _php_exponent(text: str) -> str:
    # 1.500000e+01 -> 1.500000e+1
    marker = "e" if "e" in text else "E"
    mantissa, found, exponent = text.partition(marker)
    if not found or not exponent:
        return text
    digits = exponent[1:].lstrip("0") or "0"
    return f"{mantissa}{marker}{exponent[0]}{digits}"


def _convert(conv: str, value: object, precision: int | None) -> str:
    match conv:
        case "s":
            text = _to_str(value)
            return text if precision is None else text[:precision]
        case "d":
            return str(_to_int(value))
        case "u":
            number = _to_int(value)
            return str(number + _UNSIGNED_WRAP if number < 0 else number)
        case "f" | "F":
            return f"{_to_float(value):.{6 if precision is None else precision}f}"
        case "e" | "E":
            text = f"{_to_float(value):.{6 if precision is None else precision}{conv}}"
            return _php_exponent(text)
        case "g" | "G":
            return f"{_to_float(value):{'' if precision is None else '.' + str(precision)}{conv}}"
        case "x":
            return f"{_to_int(value) % _UNSIGNED_WRAP:x}"
        case "X":
            return f"{_to_int(value) % _UNSIGNED_WRAP:X}"
        case "o":
            return f"{_to_int(value) % _UNSIGNED_WRAP:o}"
        case "b":
            return f"{_to_int(value) % _UNSIGNED_WRAP:b}"
        case "c":
            return chr(_to_int(value) % 0x110000)
    msg = f"Unknown format specifier '{conv}'"
    raise SprintfError(msg)


def _pad(text: str, flags: str, width: int, numeric: bool) -> str:
    left = "-" in flags
    pad_char = " "
    if "0" in flags:
        pad_char = "0"
    if (quote := flags.rfind("'")) != -1:
        pad_char = flags[quote + 1]
    if len(text) >= width:
        return text
    if left:
        # PHP never right-pads with zeros, it would change the value.
        return text.ljust(width, " " if pad_char == "0" else pad_char)
    if pad_char == "0" and numeric and text[:1] in "+-":
        return text[0] + text[1:].rjust(width - 1, "0")
    return text.rjust(width, pad_char)


def vsprintf(template: str, args: Sequence[object]) -> str:
    """Substitute args into a printf-style template.

    Args:
        template: Template with printf conversions
        args: Arguments, consumed left to right by unnumbered conversions

    Returns:
        Formatted string

    Raises:
        SprintfError: Too few arguments, or an unknown conversion

    Example:
        >>> vsprintf("%d items in %s", [3, "cart"])
        '3 items in cart'
        >>> vsprintf("%2$s before %1$s", ["a", "b"])
        'b before a'
    """
    parts: list[str] = []
    position = 0
    next_arg = 0
    while (start := template.find("%", position)) != -1:
        parts.append(template[position:start])
        match = _SPEC.match(template, start)
        conv = match.group("conv") if match else None
        if match is None or conv is None:
            msg = f"Missing conversion at offset {start}"
            raise SprintfError(msg)
        position = match.end()

        if conv == "%":
            parts.append("%")
            continue

        if argnum := match.group("argnum"):
            index = int(argnum) - 1
        else:
            index = next_arg
            next_arg += 1
        if index >= len(args):
            msg = f"{index + 1} arguments are required, {len(args)} given"
            raise SprintfError(msg)

        precision = match.group("precision")
        value = args[index]
        text = _convert(conv, value, None if precision is None else int(precision))
        flags = match.group("flags")
        numeric = conv not in "sc"
        if "+" in flags and conv in "deEfFgGu" and not text.startswith("-"):
            text = "+" + text
        width = match.group("width")
        parts.append(_pad(text, flags, int(width), numeric) if width else text)

    parts.append(template[position:])
    return "".join(parts)


def apply_sprintf(template: str, args: Sequence[object]) -> str:
    """Substitute args, preserving reserved placeholders.

    Never raises: a template that cannot be substituted (too few arguments,
    stray ``%``) is returned unchanged. ``%label``, ``%name`` and ``%value``
    are protected by doubling their ``%`` before substitution.

    Args:
        template: Template with printf conversions
        args: Arguments; None values render as ""

    Returns:
        Formatted string, or template unchanged on failure

    Example:
        >>> apply_sprintf("%s of %label", ["Name"])
        'Name of %label'
        >>> apply_sprintf("%s and %s", ["only one"])
        '%s and %s'
    """
    protected = template
    for placeholder in RESERVED_PLACEHOLDERS:
        protected = protected.replace(placeholder, "%" + placeholder)
    try:
        return vsprintf(protected, args)
    except SprintfError:
        return template
