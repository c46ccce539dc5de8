"""Currency display helpers.

Prices are stored as whole numbers in the smallest unit the store uses
(COP has no subunits). Everything here is presentation: it turns amounts
into locale-style strings and back, following the ``es-CO`` conventions
by default.

Unsupported currency codes never fail: they fall back to COP and log a
warning.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

logger = logging.getLogger(__name__)

NBSP = "\u00a0"


@dataclass(frozen=True)
class CurrencyConfig:
    code: str
    locale: str
    symbol: str
    minimum_fraction_digits: int
    maximum_fraction_digits: int
    group_separator: str
    decimal_separator: str
    pattern: str  # "{symbol}" / "{number}" placement
    min_grouping_digits: int = 1

    @property
    def language(self) -> str:
        return self.locale.split("-", 1)[0]


CURRENCIES: dict[str, CurrencyConfig] = {
    "COP": CurrencyConfig(
        code="COP",
        locale="es-CO",
        symbol="$",
        minimum_fraction_digits=0,
        maximum_fraction_digits=0,
        group_separator=".",
        decimal_separator=",",
        pattern="{symbol}" + NBSP + "{number}",
    ),
    "USD": CurrencyConfig(
        code="USD",
        locale="en-US",
        symbol="$",
        minimum_fraction_digits=2,
        maximum_fraction_digits=2,
        group_separator=",",
        decimal_separator=".",
        pattern="{symbol}{number}",
    ),
    "EUR": CurrencyConfig(
        code="EUR",
        locale="es-ES",
        symbol="€",
        minimum_fraction_digits=2,
        maximum_fraction_digits=2,
        group_separator=".",
        decimal_separator=",",
        pattern="{number}" + NBSP + "{symbol}",
        # Spanish (Spain) only groups numbers of five or more digits
        min_grouping_digits=2,
    ),
    "MXN": CurrencyConfig(
        code="MXN",
        locale="es-MX",
        symbol="$",
        minimum_fraction_digits=2,
        maximum_fraction_digits=2,
        group_separator=",",
        decimal_separator=".",
        pattern="{symbol}{number}",
    ),
}

DEFAULT_CURRENCY = "COP"
SUPPORTED_CURRENCIES: tuple[str, ...] = tuple(CURRENCIES)

# Compact-notation magnitudes per language, largest first
_COMPACT_UNITS: dict[str, tuple[tuple[int, str], ...]] = {
    "en": ((10**12, "T"), (10**9, "B"), (10**6, "M"), (10**3, "K")),
    "es": ((10**12, NBSP + "B"), (10**9, NBSP + "mil" + NBSP + "M"),
           (10**6, NBSP + "M"), (10**3, NBSP + "mil")),
}

Number = int | float | Decimal


@dataclass(frozen=True)
class DiscountBreakdown:
    original_price: str
    final_price: str
    discount_amount: str
    discount_percent: str
    savings: int


# --- Lookup -------------------------------------------------------------------


def is_currency_supported(currency: str) -> bool:
    return currency.upper() in CURRENCIES


def get_currency_symbol(currency: str) -> str:
    """Symbol for a supported currency; the code itself otherwise."""
    config = CURRENCIES.get(currency.upper())
    return config.symbol if config else currency


def get_currency_config(currency: str) -> CurrencyConfig:
    config = CURRENCIES.get(currency.upper())
    if config is None:
        logger.warning(
            "Unsupported currency %r, falling back to %s", currency, DEFAULT_CURRENCY
        )
        return CURRENCIES[DEFAULT_CURRENCY]
    return config


# --- Formatting ---------------------------------------------------------------


def format_price(
    price: Number,
    currency: str = DEFAULT_CURRENCY,
    minimum_fraction_digits: int | None = None,
    maximum_fraction_digits: int | None = None,
) -> str:
    """Format ``price`` as a currency string, e.g. ``$ 45.000`` for COP.

    The fraction-digit arguments override the currency defaults.
    """
    config = get_currency_config(currency)
    min_digits = (
        config.minimum_fraction_digits
        if minimum_fraction_digits is None
        else minimum_fraction_digits
    )
    max_digits = (
        config.maximum_fraction_digits
        if maximum_fraction_digits is None
        else maximum_fraction_digits
    )
    max_digits = max(max_digits, min_digits)
    amount = _to_decimal(price)
    number = _format_decimal(abs(amount), config, min_digits, max_digits)
    return _apply_pattern(config, number, negative=amount < 0)


def format_price_compact(price: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """Short form for large amounts: ``$ 1,5 mil``, ``$1.5K``, ``$ 15 M``."""
    config = get_currency_config(currency)
    amount = _to_decimal(price)
    magnitude = abs(amount)

    suffix = ""
    for threshold, unit in _COMPACT_UNITS.get(config.language, _COMPACT_UNITS["en"]):
        if magnitude >= threshold:
            magnitude = magnitude / threshold
            suffix = unit
            break

    number = _format_decimal(magnitude, config, 0, 1) + suffix
    return _apply_pattern(config, number, negative=amount < 0)


def format_number(price: Number, currency: str = DEFAULT_CURRENCY) -> str:
    """Format the bare number with the currency's digits, without a symbol."""
    config = get_currency_config(currency)
    amount = _to_decimal(price)
    number = _format_decimal(
        abs(amount),
        config,
        config.minimum_fraction_digits,
        config.maximum_fraction_digits,
    )
    return f"-{number}" if amount < 0 else number


def format_price_range(
    min_price: Number, max_price: Number, currency: str = DEFAULT_CURRENCY
) -> str:
    if min_price == max_price:
        return format_price(min_price, currency)
    return f"{format_price(min_price, currency)} - {format_price(max_price, currency)}"


# --- Arithmetic ---------------------------------------------------------------


def convert_price(
    price: Number, from_currency: str, to_currency: str, exchange_rate: Number
) -> Number:
    """Convert with a caller-supplied rate, rounding to a whole amount."""
    if from_currency.upper() == to_currency.upper():
        return price
    converted = _to_decimal(price) * _to_decimal(exchange_rate)
    return int(converted.to_integral_value(rounding=ROUND_HALF_UP))


def calculate_discount(
    original_price: Number, discount_percent: Number, currency: str = DEFAULT_CURRENCY
) -> DiscountBreakdown:
    original = _to_decimal(original_price)
    discount = (original * _to_decimal(discount_percent) / 100).to_integral_value(
        rounding=ROUND_HALF_UP
    )
    final = original - discount
    return DiscountBreakdown(
        original_price=format_price(original, currency),
        final_price=format_price(final, currency),
        discount_amount=format_price(discount, currency),
        discount_percent=f"{discount_percent}%",
        savings=int(discount),
    )


# --- Parsing ------------------------------------------------------------------


def parse_price(price_string: str, currency: str = DEFAULT_CURRENCY) -> Decimal:
    """Read a formatted price back into a number (``Decimal("0")`` if unreadable).

    Separators are interpreted with the currency's locale, so
    ``"$ 150.000"`` is 150000 in COP while ``"$150,000.50"`` is
    150000.50 in USD.
    """
    config = get_currency_config(currency)
    cleaned = re.sub(r"[^\d.,]", "", price_string)
    cleaned = cleaned.replace(config.group_separator, "")
    cleaned = cleaned.replace(config.decimal_separator, ".")
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return Decimal("0")
    if price_string.strip().startswith("-"):
        value = -value
    return value


# --- Internal helpers ---------------------------------------------------------


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _format_decimal(
    value: Decimal, config: CurrencyConfig, min_digits: int, max_digits: int
) -> str:
    quantum = Decimal(1).scaleb(-max_digits)
    rounded = value.quantize(quantum, rounding=ROUND_HALF_UP)
    integer_part, _, fraction = f"{rounded:f}".partition(".")

    # Drop optional trailing zeros down to the minimum
    while len(fraction) > min_digits and fraction.endswith("0"):
        fraction = fraction[:-1]

    integer_part = _group(integer_part, config)
    if fraction:
        return f"{integer_part}{config.decimal_separator}{fraction}"
    return integer_part


def _group(digits: str, config: CurrencyConfig) -> str:
    if len(digits) < 3 + config.min_grouping_digits:
        return digits
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return config.group_separator.join(groups)


def _apply_pattern(config: CurrencyConfig, number: str, negative: bool) -> str:
    formatted = config.pattern.format(symbol=config.symbol, number=number)
    return f"-{formatted}" if negative else formatted
