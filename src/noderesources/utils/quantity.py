"""
Kubernetes resource quantity parsing and normalization.

Quantities are parsed into exact ``Decimal`` values in base units (cores for
CPU, bytes for memory). Display conversion happens only at the edge:

* CPU: scaled to whole milli-cores (rounded up, as Kubernetes does), then
  divided by 1000 and printed with two decimals, e.g. ``2.50``.
* Memory: truncated to whole gigabytes (10^9 bytes) and printed with a
  literal ``Gi`` suffix, e.g. ``16Gi``. The suffix is a display label kept
  for compatibility with existing consumers, not a binary unit.
"""

import re
from decimal import ROUND_CEILING, ROUND_FLOOR, Decimal, InvalidOperation, Overflow
from typing import Optional, Union

from ..core.exceptions import QuantityParseError

QuantityInput = Union[str, int, Decimal]

_BINARY_SUFFIXES = {
    "Ki": Decimal(1024),
    "Mi": Decimal(1024) ** 2,
    "Gi": Decimal(1024) ** 3,
    "Ti": Decimal(1024) ** 4,
    "Pi": Decimal(1024) ** 5,
    "Ei": Decimal(1024) ** 6,
}

_DECIMAL_SUFFIXES = {
    "n": Decimal("0.000000001"),
    "u": Decimal("0.000001"),
    "m": Decimal("0.001"),
    "": Decimal(1),
    "k": Decimal(1000),
    "M": Decimal(1000) ** 2,
    "G": Decimal(1000) ** 3,
    "T": Decimal(1000) ** 4,
    "P": Decimal(1000) ** 5,
    "E": Decimal(1000) ** 6,
}

_QUANTITY_RE = re.compile(
    r"^(?P<number>[+-]?(?:\d+(?:\.\d*)?|\.\d+))"
    r"(?P<suffix>Ki|Mi|Gi|Ti|Pi|Ei|[numkMGTPE]|[eE][+-]?\d+)?$"
)

MILLI = Decimal(1000)
# Far above any real capacity; keeps milli scaling and summing inside the Decimal context.
MAX_MAGNITUDE = Decimal(10) ** 30
GIGA = Decimal(1000) ** 3
MEMORY_DISPLAY_SUFFIX = "Gi"


def parse_quantity(quantity: QuantityInput) -> Decimal:
    """
    Parse a Kubernetes quantity into an exact Decimal in base units.

    Raises:
        QuantityParseError: If the value is not a syntactically valid quantity.
    """
    if isinstance(quantity, bool):
        raise QuantityParseError(quantity, "booleans are not quantities")
    if isinstance(quantity, (int, Decimal)):
        return _checked(Decimal(quantity), quantity)
    if not isinstance(quantity, str):
        raise QuantityParseError(quantity, f"unsupported type {type(quantity).__name__}")

    match = _QUANTITY_RE.match(quantity.strip())
    if not match:
        raise QuantityParseError(quantity)

    try:
        number = Decimal(match.group("number"))
    except InvalidOperation as e:
        raise QuantityParseError(quantity) from e

    suffix = match.group("suffix") or ""
    try:
        if suffix in _BINARY_SUFFIXES:
            value = number * _BINARY_SUFFIXES[suffix]
        elif suffix in _DECIMAL_SUFFIXES:
            value = number * _DECIMAL_SUFFIXES[suffix]
        else:
            # Decimal exponent, e.g. "12e6"
            value = number.scaleb(int(suffix[1:]))
    except (Overflow, InvalidOperation) as e:
        raise QuantityParseError(quantity, "out of range") from e
    return _checked(value, quantity)


def _checked(value: Decimal, quantity: QuantityInput) -> Decimal:
    if not value.is_finite() or abs(value) >= MAX_MAGNITUDE:
        raise QuantityParseError(quantity, "out of range")
    return value


def parse_optional_quantity(quantity: Optional[QuantityInput]) -> Decimal:
    """Like parse_quantity, but an absent value counts as zero."""
    if quantity is None:
        return Decimal(0)
    return parse_quantity(quantity)


def to_millicores(cores: Decimal) -> int:
    """Scale a core count to whole milli-cores, rounding up."""
    return int((cores * MILLI).to_integral_value(rounding=ROUND_CEILING))


def to_gigabytes(num_bytes: Decimal) -> int:
    """Truncate a byte count to whole gigabytes (10^9)."""
    return int((num_bytes / GIGA).to_integral_value(rounding=ROUND_FLOOR))


def format_cpu(cores: Decimal) -> str:
    """Display string for a CPU amount, e.g. ``Decimal("2.5")`` -> ``"2.50"``."""
    return f"{to_millicores(cores) / 1000.0:.2f}"


def format_memory(num_bytes: Decimal) -> str:
    """Display string for a memory amount, e.g. 16e9 bytes -> ``"16Gi"``."""
    return f"{to_gigabytes(num_bytes)}{MEMORY_DISPLAY_SUFFIX}"


def display_to_float(value: str) -> float:
    """
    Re-parse a CPU or memory display string into a number.

    Used by exporters that need numeric cells. Accepts exactly the formats
    produced by format_cpu and format_memory.
    """
    text = value.replace(MEMORY_DISPLAY_SUFFIX, "")
    try:
        return float(text)
    except ValueError as e:
        raise QuantityParseError(value, "not a display value") from e
