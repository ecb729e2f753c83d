"""Money helpers and BRL amount normalization for input handlers.

Amounts travel as ``Decimal`` quantized to cents. Display strings follow the
pt-BR convention (``R$ 1.234,56``). The normalizer functions are pure and
total: they never raise on user input.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Protocol

MONEY_PRECISION = Decimal("0.01")
ZERO = Decimal("0")

_NON_DIGITS = re.compile(r"\D", re.ASCII)
_PLAIN_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


class LocaleFormatter(Protocol):
    """Formats major-unit amounts as currency strings for one locale."""

    currency_symbol: str
    decimal_separator: str
    grouping_separator: str

    def format(self, amount: Decimal) -> str: ...


@dataclass(frozen=True, slots=True)
class BRLFormatter:
    """pt-BR currency formatter with exactly two fractional digits."""

    currency_symbol: str = "R$"
    decimal_separator: str = ","
    grouping_separator: str = "."

    def format(self, amount: Decimal) -> str:
        quantized = quantize_money(amount)
        sign = "-" if quantized < ZERO else ""
        grouped = f"{quantized.copy_abs():,f}"
        integer_part, fraction_part = grouped.split(".")
        integer_part = integer_part.replace(",", self.grouping_separator)
        return (
            f"{sign}{self.currency_symbol} "
            f"{integer_part}{self.decimal_separator}{fraction_part}"
        )


DEFAULT_FORMATTER: LocaleFormatter = BRLFormatter()


def _money_context(value: Decimal):
    """Context wide enough to hold every integer digit of value plus cents."""

    context = getcontext().copy()
    context.prec = max(context.prec, value.adjusted() + 4)
    return localcontext(context)


def quantize_money(value: Decimal) -> Decimal:
    """Return value rounded to two decimal places with HALF_UP strategy."""

    with _money_context(value):
        return value.quantize(MONEY_PRECISION, rounding=ROUND_HALF_UP)


def parse_money(value: str) -> Decimal:
    """Parse and normalize a plain ``1234.56`` money string into Decimal."""

    return quantize_money(Decimal(value))


def format_money(value: Decimal) -> str:
    """Render money as plain string with exactly two decimal places."""

    return f"{quantize_money(value):f}"


def _cents_from_digits(raw: str) -> Decimal:
    digits = _NON_DIGITS.sub("", raw)
    return Decimal(digits) if digits else ZERO


def _scale_cents(cents: Decimal) -> Decimal:
    with _money_context(cents):
        return quantize_money(cents.scaleb(-2))


def _amount_to_cents(amount: Decimal) -> Decimal:
    with _money_context(amount):
        return quantize_money(amount).scaleb(2)


def cents_from_digits(raw: str) -> int:
    """Read every decimal digit of raw as one running count of cents."""

    return int(_cents_from_digits(raw))


def cents_to_amount(cents: int) -> Decimal:
    """Convert integer cents to a two-place major-unit amount."""

    return _scale_cents(Decimal(cents))


def amount_to_cents(amount: Decimal) -> int:
    """Convert a major-unit amount to integer cents (HALF_UP)."""

    return int(_amount_to_cents(amount))


def format_currency(
    amount: Decimal, *, formatter: LocaleFormatter = DEFAULT_FORMATTER
) -> str:
    """Render a numeric amount as a display string."""

    return formatter.format(amount)


def format_from_digits(
    raw: str, *, formatter: LocaleFormatter = DEFAULT_FORMATTER
) -> str:
    """Format raw keystrokes as a display string, treating digits as cents.

    Non-digits are discarded, so "1", "12" and "123" render as 0,01, 0,12
    and 1,23. Input without digits renders the zero amount.
    """

    return formatter.format(_scale_cents(_cents_from_digits(raw)))


def try_parse_amount(
    display: str, *, formatter: LocaleFormatter = DEFAULT_FORMATTER
) -> Decimal | None:
    """Parse a display string, returning ``None`` when the residue is not numeric."""

    noise = set(formatter.currency_symbol)
    cleaned = "".join(
        char for char in display if char not in noise and not char.isspace()
    )
    if formatter.decimal_separator in cleaned:
        cleaned = cleaned.replace(formatter.grouping_separator, "")
        cleaned = cleaned.replace(formatter.decimal_separator, ".")

    if _PLAIN_NUMBER.fullmatch(cleaned) is None:
        return None
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def parse_to_amount(
    display: str, *, formatter: LocaleFormatter = DEFAULT_FORMATTER
) -> Decimal:
    """Parse a display string into an amount, degrading to zero on failure.

    Zero is also a legitimate result, so callers must check positivity
    before accepting the value as user input.
    """

    amount = try_parse_amount(display, formatter=formatter)
    if amount is None:
        return ZERO
    return amount


def normalize_on_input(
    previous_raw: str,
    raw_keystroke_value: str,
    *,
    formatter: LocaleFormatter = DEFAULT_FORMATTER,
) -> str:
    """Normalize the input buffer after a change event.

    ``previous_raw`` keeps the change-event signature and is not read.
    """

    value = raw_keystroke_value
    if "." in value and "," not in value:
        value = value.replace(".", ",", 1)
    return format_from_digits(value, formatter=formatter)


def normalize_on_blur(
    display: str, *, formatter: LocaleFormatter = DEFAULT_FORMATTER
) -> str:
    """Canonicalize a positive display string; leave anything else untouched."""

    amount = parse_to_amount(display, formatter=formatter)
    if amount <= ZERO:
        return display
    cents = _amount_to_cents(amount)
    return format_from_digits(f"{cents:f}", formatter=formatter)
