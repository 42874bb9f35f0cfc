"""Per-type criteria: parse raw field text and render canonical values."""

import math
import re
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Callable, Optional, Tuple

import polars as pl

from src.criteria.color_space import hsl_to_rgb, rgb_to_hsl
from src.criteria.exceptions import CriteriaError, InvalidNumericText, ParseMismatch
from src.criteria.renderer import Renderer
from src.criteria.time_units import seconds_per_unit
from src.criteria.units import UnitTables

_LEADING_FLOAT = re.compile(r'\d*\.?\d*')
_DECIMAL_LITERAL = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_RADIX_LITERALS = (
    (re.compile(r'0[xX][0-9a-fA-F]+'), 16),
    (re.compile(r'0[oO][0-7]+'), 8),
    (re.compile(r'0[bB][01]+'), 2),
)


def format_number(value: Any) -> str:
    """Render a number the way it reads in a text field: `5`, `1.5`, `NaN`."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))

    # shortest round-trip digits; exponent form only outside 1e-7 .. 1e21
    shortest = Decimal(repr(value)).normalize()
    sign, digits, exp = shortest.as_tuple()
    point = len(digits) + exp
    if -6 < point <= 21:
        return format(shortest, "f")
    prefix = "-" if sign else ""
    mantissa = "".join(map(str, digits))
    if len(mantissa) > 1:
        mantissa = mantissa[0] + "." + mantissa[1:]
    power = point - 1
    return f"{prefix}{mantissa}e{'+' if power > 0 else '-'}{abs(power)}"


def to_fixed(value: float) -> str:
    """Round to zero decimals, ties away from zero on the exact binary value.

    The sign is kept even when the magnitude rounds to zero (`-0.4` -> `-0`).
    """
    if math.isnan(value) or math.isinf(value) or abs(value) >= 1e21:
        return format_number(value)
    rounded = int(Decimal(abs(value)).to_integral_value(rounding=ROUND_HALF_UP))
    return ("-" if value < 0 else "") + str(rounded)


def leading_float(text: str) -> float:
    """Parse the longest numeric prefix of `text` (`"1.2.3"` -> 1.2).

    Raises:
        InvalidNumericText: If the prefix holds no digits
    """
    prefix = _LEADING_FLOAT.match(text).group(0)
    if not any(ch.isdigit() for ch in prefix):
        raise InvalidNumericText(f"No numeric value in '{text}'")
    return float(prefix)


def coerce_number(value: Any) -> float:
    """Coerce field text to a number, yielding NaN instead of failing."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    text = str(value).strip()
    if not text:
        return 0.0
    if _DECIMAL_LITERAL.fullmatch(text):
        return float(text)
    for pattern, base in _RADIX_LITERALS:
        if pattern.fullmatch(text):
            return float(int(text[2:], base))
    if text in ("Infinity", "+Infinity"):
        return math.inf
    if text == "-Infinity":
        return -math.inf
    return math.nan


class Criteria(ABC):
    """Parse and render behaviour for one semantic field type."""

    name: str = ""
    pattern: Optional[re.Pattern] = None
    dtype: Any = pl.Float64
    sanitizes: bool = True

    def sanitize(self, text: str) -> Any:
        """Convert raw field text to the canonical value.

        Raises:
            CriteriaError: If this criteria has no parse step (`sanitizes` is False)
        """
        raise CriteriaError(f"Criteria '{self.name}' does not sanitize")

    @abstractmethod
    def display(self, value: Any) -> str:
        """Human-readable form of a canonical value."""

    def present(self, value: Any, target: Renderer) -> None:
        target.set_text(self.display(value))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


class ColorCriteria(Criteria):
    """Six hex digits, stored as an HSL triple packed into 24 bits.

    The packed value is read back as HSL and converted to RGB for display,
    so `display(sanitize(s))` is not `s` in general: `ff0000` shows as
    `ff0101`.
    """

    name = "color"
    pattern = re.compile(r'[a-f0-9]{6}', re.IGNORECASE)
    dtype = pl.Int64

    def sanitize(self, text: str) -> int:
        if not self.pattern.fullmatch(text):
            raise ParseMismatch(f"Color '{text}' is not six hex digits")
        i = int(text, 16)
        return self.from_rgb((i >> 16) & 0xff, (i >> 8) & 0xff, i & 0xff)

    def from_rgb(self, r: int, g: int, b: int) -> int:
        h, s, l = (math.ceil(c * 255) for c in rgb_to_hsl(r, g, b))
        return (h << 16) + (s << 8) + l

    def to_hsl(self, value: int) -> Tuple[float, float, float]:
        return (
            ((value >> 16) & 0xff) / 255.0,
            ((value >> 8) & 0xff) / 255.0,
            (value & 0xff) / 255.0,
        )

    def display(self, value: int) -> str:
        r, g, b = hsl_to_rgb(*self.to_hsl(value))
        return f"{r:02x}{g:02x}{b:02x}"

    def present(self, value: int, target: Renderer) -> None:
        target.set_background_color('#' + self.display(value))


class DateCriteria(Criteria):
    """Absolute date literals, or offsets from now such as `d+3`."""

    name = "date"
    pattern = re.compile(r'([A-Za-z])([+-])(\d+)')
    dtype = pl.Datetime
    formats = (
        "%Y/%m/%d",
        "%m/%d/%Y",
    )
    # month names are matched in English whatever LC_TIME says
    month_day_year = re.compile(r'([A-Za-z]+)\.?\s+(\d{1,2}),?\s+(\d{4})')
    day_month_year = re.compile(r'(\d{1,2})\s+([A-Za-z]+)\.?,?\s+(\d{4})')
    months = {
        name: number
        for number, full in enumerate(
            ("january", "february", "march", "april", "may", "june", "july",
             "august", "september", "october", "november", "december"),
            start=1,
        )
        for name in (full, full[:3])
    }

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self.clock = clock or datetime.now

    def sanitize(self, text: str) -> datetime:
        text = text.strip()
        relative = self.pattern.fullmatch(text)
        if relative:
            anchor, sign, magnitude = relative.groups()
            add_ms = 1000 * seconds_per_unit(anchor) * int(magnitude)
            if sign == '-':
                add_ms = -add_ms
            try:
                return self.clock() + timedelta(milliseconds=add_ms)
            except OverflowError as e:
                raise ParseMismatch(f"Relative date '{text}' is out of range") from e
        return self._parse_absolute(text)

    def _parse_absolute(self, text: str) -> datetime:
        try:
            value = datetime.fromisoformat(text)
        except ValueError:
            value = None
        if value is None:
            for fmt in self.formats:
                try:
                    value = datetime.strptime(text, fmt)
                    break
                except ValueError:
                    continue
        if value is None:
            value = self._parse_month_name(text)
        if value is None:
            raise ParseMismatch(f"Unrecognized date '{text}'")
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value

    def _parse_month_name(self, text: str) -> Optional[datetime]:
        """`January 15, 2024`, `Jan 15 2024` or `15 Jan 2024`."""
        match = self.month_day_year.fullmatch(text)
        if match:
            month, day, year = match.groups()
        else:
            match = self.day_month_year.fullmatch(text)
            if not match:
                return None
            day, month, year = match.groups()
        number = self.months.get(month.lower())
        if number is None:
            return None
        try:
            return datetime(int(year), number, int(day))
        except ValueError as e:
            raise ParseMismatch(f"Invalid calendar date '{text}'") from e

    def display(self, value: datetime) -> str:
        return f"{value.month}/{value.day}/{value.year}"


class MeasuredCriteria(Criteria):
    """A number followed by a unit token from a conversion table."""

    domain: str = ""
    pattern = re.compile(r'([\d.]+)\s*(\S+)')

    def __init__(self, unit_tables: UnitTables):
        self.unit_tables = unit_tables

    @property
    def units(self):
        return self.unit_tables.table(self.domain)

    def sanitize(self, text: str) -> float:
        value_unit = self.pattern.search(text)
        if not value_unit:
            raise ParseMismatch(f"Expected '<number><unit>' for {self.name}, got '{text}'")
        number, unit = value_unit.groups()
        return self.unit_tables.convert(leading_float(number), unit, self.domain)

    @abstractmethod
    def scale(self, value: float) -> Tuple[float, str]:
        """Pick a display unit for a base-unit value."""

    def display(self, value: float) -> str:
        scaled, unit = self.scale(value)
        return to_fixed(scaled) + unit


class DistanceCriteria(MeasuredCriteria):
    name = "distance"
    domain = "distance"

    def scale(self, value: float) -> Tuple[float, str]:
        if value > 2000:
            return value / 1000, 'km'
        if value > 1:
            return value, 'm'
        if value > 0.01:
            return value * 100, 'cm'
        return value, ''


class MassCriteria(MeasuredCriteria):
    name = "mass"
    domain = "mass"

    def scale(self, value: float) -> Tuple[float, str]:
        if value > 2000:
            return value / 1000, 'kg'
        return value, 'g'


class DurationCriteria(Criteria):
    """`<number><unit letter>` in seconds; unparseable text counts as 1."""

    name = "duration"
    pattern = re.compile(r'([\d.]+)\s*(\S)')

    def sanitize(self, text: str) -> float:
        seconds = 1.0
        dur_parts = self.pattern.search(text)
        if dur_parts:
            number, unit = dur_parts.groups()
            seconds *= seconds_per_unit(unit)
            seconds *= leading_float(number)
        return seconds

    def display(self, value: float) -> str:
        return format_number(value) + 's'


class ElementCriteria(Criteria):
    name = "element"

    def sanitize(self, text: str) -> float:
        return coerce_number(text)

    def display(self, value: float) -> str:
        return format_number(value)


class LetterCriteria(Criteria):
    name = "letter"
    dtype = pl.Int64

    def sanitize(self, text: str) -> int:
        upper = str(text).upper()
        if not upper:
            raise ParseMismatch("Letter field is empty")
        return ord(upper[0])

    def display(self, value: int) -> str:
        return chr(int(value))


class NumberCriteria(Criteria):
    """Plain numbers are left as they are."""

    name = "number"
    sanitizes = False

    def display(self, value: Any) -> str:
        return format_number(value)
