"""
Currency normalization.

Rewrites amounts such as ``$10``, ``10 USD`` and ``$10 USD`` into spoken
form ("ten dollars"). Known symbols and codes come from a
:class:`CurrencyRegistry` that is built once from the spoken-name table
and region currency data, then shared read-only.

Matching is conservative: an unknown symbol or code, or an amount that
does not parse, leaves the original text untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

import regex

from ttsnorm.config import (
    CURRENCY_NAMES,
    CURRENCY_PRIORITY,
    CURRENCY_SYMBOL_PRIORITY,
    LOCALE_CURRENCY_DATA,
    REGEX_TIMEOUT,
)
from ttsnorm.exceptions import EmptyCurrencyTableError
from ttsnorm.number_words import CONVERSION_ERRORS, cardinal_words
from ttsnorm.rule import ALNUM_AFTER, ALNUM_BEFORE, Rule, alternation, compile_pattern
from ttsnorm.utils import LazyValue

logger = logging.getLogger(__name__)

# Integer part with optional grouping (comma, whitespace, apostrophe, period),
# then an optional 1-2 digit fraction introduced by "." or ",".
AMOUNT_PATTERN = (
    r"(?P<integer>[0-9]{1,3}(?:[,\s'.][0-9]{3})+|[0-9]+)"
    r"(?:[.,](?P<fraction>[0-9]{1,2}))?"
)

_GROUPING_SEPARATORS = regex.compile(r"[,\s'.]")


@dataclass(frozen=True)
class CurrencyUnit:
    """Spoken names for one currency."""

    iso_code: str
    singular: str
    plural: str
    fraction_singular: str
    fraction_plural: str
    symbols: tuple[str, ...] = ()

    def unit_name(self, amount: int) -> str:
        return self.singular if amount == 1 else self.plural

    def fraction_name(self, amount: int) -> str:
        return self.fraction_singular if amount == 1 else self.fraction_plural


class CurrencyRegistry:
    """
    Immutable lookup of currency symbols and ISO codes.

    Args:
        names: ISO code -> (singular, plural, fraction singular, fraction plural)
        locale_pairs: ``(iso_code, symbol)`` pairs, one per region
        symbol_priority: Symbols that always resolve to a fixed ISO code

    Raises:
        EmptyCurrencyTableError: If no symbol or code survives the build
    """

    def __init__(
        self,
        names: Mapping[str, tuple[str, str, str, str]],
        locale_pairs: Iterable[tuple[str, str]],
        symbol_priority: Mapping[str, str] | None = None,
    ):
        names_by_code = {code.upper(): spoken for code, spoken in names.items() if code}
        symbol_to_code: dict[str, str] = {}
        codes: set[str] = set()

        for iso_code, symbol in locale_pairs:
            iso_code = (iso_code or "").strip().upper()
            if not iso_code or iso_code not in names_by_code:
                continue
            codes.add(iso_code)
            symbol = (symbol or "").strip()
            # Letter-only symbols ("kr", "CHF") are codes in disguise
            if not symbol or all(char.isalnum() for char in symbol):
                continue
            symbol_to_code.setdefault(symbol, iso_code)

        for symbol, iso_code in (symbol_priority or {}).items():
            iso_code = iso_code.upper()
            if iso_code in names_by_code:
                symbol_to_code[symbol] = iso_code
                codes.add(iso_code)

        if not symbol_to_code and not codes:
            raise EmptyCurrencyTableError()

        units = {}
        for code in sorted(codes):
            symbols = tuple(sorted(s for s, c in symbol_to_code.items() if c == code))
            units[code] = CurrencyUnit(code, *names_by_code[code], symbols=symbols)

        # Symbols are looked up case-insensitively ("r$" is "R$")
        folded: dict[str, str] = {}
        for symbol, iso_code in symbol_to_code.items():
            folded.setdefault(symbol.casefold(), iso_code)
        for symbol in symbol_priority or {}:
            if symbol in symbol_to_code:
                folded[symbol.casefold()] = symbol_to_code[symbol]

        self._units: Mapping[str, CurrencyUnit] = units
        self._symbols: Mapping[str, str] = dict(symbol_to_code)
        self._folded_symbols: Mapping[str, str] = folded

    @property
    def symbols(self) -> frozenset[str]:
        return frozenset(self._symbols)

    @property
    def codes(self) -> frozenset[str]:
        return frozenset(self._units)

    @property
    def units(self) -> tuple[CurrencyUnit, ...]:
        return tuple(self._units.values())

    def resolve(self, symbol_or_code: str) -> CurrencyUnit | None:
        """Find the unit for a symbol or ISO code, ignoring case."""
        iso_code = self._folded_symbols.get(symbol_or_code.casefold())
        if iso_code is None:
            iso_code = symbol_or_code.upper()
        return self._units.get(iso_code)

    @classmethod
    def from_locale_data(
        cls,
        locale_data: Mapping[str, tuple[str, str]] | None = None,
        names: Mapping[str, tuple[str, str, str, str]] | None = None,
    ) -> CurrencyRegistry:
        """Build a registry from ``region -> (iso_code, symbol)`` data."""
        locale_data = LOCALE_CURRENCY_DATA if locale_data is None else locale_data
        return cls(
            CURRENCY_NAMES if names is None else names,
            locale_data.values(),
            CURRENCY_SYMBOL_PRIORITY,
        )


def _build_default_registry() -> CurrencyRegistry:
    registry = CurrencyRegistry.from_locale_data()
    logger.debug(
        f"Currency registry built: {len(registry.codes)} codes, "
        f"symbols {sorted(registry.symbols)}"
    )
    return registry


_DEFAULT_REGISTRY: LazyValue[CurrencyRegistry] = LazyValue(_build_default_registry)


def get_default_registry() -> CurrencyRegistry:
    """Return the process-wide registry, building it on first use."""
    return _DEFAULT_REGISTRY.get()


def parse_amount(integer_part: str, fraction_part: str | None) -> tuple[int, int] | None:
    """
    Parse a matched amount into whole units and hundredths.

    A single fraction digit counts as tens of hundredths (".5" is 50).

    Returns:
        ``(integer, fraction)`` or None if the amount is unusable
    """
    digits = _GROUPING_SEPARATORS.sub("", integer_part)
    if not digits or not digits.isascii() or not digits.isdigit():
        return None
    integer = int(digits)

    fraction = 0
    if fraction_part:
        padded = fraction_part.ljust(2, "0")
        if not padded.isascii() or not padded.isdigit():
            return None
        fraction = int(padded)
        if not 0 <= fraction <= 99:
            return None
    return integer, fraction


def spoken_amount(unit: CurrencyUnit, integer: int, fraction: int) -> str:
    """
    Compose the spoken form of an amount.

    Examples:
        >>> spoken_amount(usd, 1, 50)
        'one dollar fifty cents'
    """
    parts = [cardinal_words(integer), unit.unit_name(integer)]
    if fraction > 0:
        parts += [cardinal_words(fraction), unit.fraction_name(fraction)]
    return " ".join(parts)


class CurrencyNormalizationRule(Rule):
    """
    Normalize currency symbols and codes into spoken amounts.

    Three passes run in order so a full ``$10 USD`` is never split by the
    weaker forms:

    1. symbol, amount, code (``$10 USD``, ``$10MXN``); the code picks the unit
    2. symbol, amount (``$10``, ``R$ 42,50``)
    3. amount, code (``10 USD``)

    Args:
        registry: Currency lookup; defaults to the process-wide registry
        timeout: Seconds allowed for each regex pass

    Examples:
        >>> CurrencyNormalizationRule().apply("$1.50")
        ' one dollar fifty cents '
    """

    name = "currency"
    priority = CURRENCY_PRIORITY

    def __init__(self, registry: CurrencyRegistry | None = None, timeout: float = REGEX_TIMEOUT):
        self.registry = registry if registry is not None else get_default_registry()
        self.timeout = timeout
        self._passes = self._build_passes(self.registry)

    def _build_passes(self, registry: CurrencyRegistry) -> list:
        symbols = alternation(registry.symbols)
        codes = alternation(registry.codes)
        flags = regex.IGNORECASE
        passes = []

        if symbols and codes:
            pattern = (
                rf"{ALNUM_BEFORE}(?P<symbol>{symbols})\s?{AMOUNT_PATTERN}"
                rf"\s?(?P<code>{codes}){ALNUM_AFTER}"
            )
            passes.append((compile_pattern("currency symbol+code", pattern, flags), self._replace))
        if symbols:
            pattern = rf"{ALNUM_BEFORE}(?P<symbol>{symbols})\s?{AMOUNT_PATTERN}{ALNUM_AFTER}"
            passes.append((compile_pattern("currency symbol", pattern, flags), self._replace))
        if codes:
            pattern = rf"{ALNUM_BEFORE}{AMOUNT_PATTERN}\s?(?P<code>{codes}){ALNUM_AFTER}"
            passes.append((compile_pattern("currency code", pattern, flags), self._replace))
        return passes

    def _apply(self, text: str) -> str:
        return self._run_passes(text, self._passes, self.timeout)

    def _replace(self, match: regex.Match) -> str:
        groups = match.groupdict()
        key = groups.get("code") or groups.get("symbol")
        unit = self.registry.resolve(key) if key else None
        if unit is None:
            return match.group(0)

        amount = parse_amount(groups["integer"], groups.get("fraction"))
        if amount is None:
            return match.group(0)

        try:
            return f" {spoken_amount(unit, *amount)} "
        except CONVERSION_ERRORS as e:
            logger.warning(f"Could not spell currency amount '{match.group(0)}': {e}")
            return match.group(0)
