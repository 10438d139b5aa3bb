"""Conversion of troff lengths into CSS lengths.

| unit | troff meaning | CSS |
|---|---|---|
| ``c`` | centimetres | ``cm`` |
| ``f`` | 1/65536 of the font size | ``%`` (one decimal) |
| ``i`` | inches | ``in`` |
| ``m`` | ems | ``em`` |
| ``M`` | 1/100 em | ``em`` (two decimals) |
| ``n`` | ens | ``em`` (halved) |
| ``P`` | picas | ``pc`` |
| ``p`` | points | ``pt`` |
| ``s`` | multiple of the font size | ``%`` (one decimal) |
| ``u`` | device units | ``px`` |
| ``v`` | multiple of the line height | unitless |
"""

from __future__ import annotations

from collections.abc import Callable
import re

from .tokens import parse_value


DEFAULT_INDENT = "2.5em"
DEFAULT_INSET = "0.5in"

_LEADING_NUMBER_RE = re.compile(r"[ \t\n\r\f\v]*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

UnitConverter = Callable[[str, float], str]

UNITS: dict[str, UnitConverter] = {
    "c": lambda number, _value: f"{number}cm",
    "f": lambda _number, value: f"{100.0 * value / 65536.0:.1f}%",
    "i": lambda number, _value: f"{number}in",
    "m": lambda number, _value: f"{number}em",
    "M": lambda _number, value: f"{0.01 * value:.2f}em",
    "n": lambda _number, value: f"{0.5 * value:g}em",
    "P": lambda number, _value: f"{number}pc",
    "p": lambda number, _value: f"{number}pt",
    "s": lambda _number, value: f"{100.0 * value:.1f}%",
    "u": lambda number, _value: f"{number}px",
    "v": lambda number, _value: number,
}


def leading_float(text: str) -> float:
    """Return the numeric prefix of ``text``, or ``0.0`` when there is none."""
    match = _LEADING_NUMBER_RE.match(text)
    return float(match.group(1)) if match else 0.0


def convert_measurement(token: str, default_unit: str) -> str | None:
    """Convert one troff length token into a CSS length.

    A trailing letter selects the unit, otherwise ``default_unit`` applies.
    Returns ``None`` for empty tokens and unknown units.
    """
    if not token:
        return None

    last = token[-1]
    if last.isascii() and last.isalpha():
        unit, number = last, token[:-1]
    else:
        unit, number = default_unit, token

    converter = UNITS.get(unit)
    if converter is None:
        return None
    return converter(number, leading_float(number))


def parse_measurement(text: str, default_unit: str) -> tuple[str | None, str]:
    """Parse the next argument of ``text`` as a length.

    Returns ``(css_length, remainder)``; ``css_length`` is ``None`` when no
    argument is left or its unit is unknown.
    """
    value, remainder = parse_value(text)
    if value is None:
        return None, remainder
    return convert_measurement(value, default_unit), remainder


__all__ = [
    "DEFAULT_INDENT",
    "DEFAULT_INSET",
    "UNITS",
    "convert_measurement",
    "leading_float",
    "parse_measurement",
]
