"""Country redenomination registry.

Holds historical (and announced) redenominations keyed by country code and
year, and derives engine rules from them. ``RuleRegistry`` is an explicit
object so independent registries can coexist; the module-level functions
operate on ``default_registry``.

Registries are not synchronised. Guard mutation with a lock if a registry is
shared between threads.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..models.rule import FormattingOptions, Rule
from ..utils.logging import get_logger

logger = get_logger(__name__)


class CountryRedenomination(BaseModel):
    """One redenomination event, unique by (country_code, year)."""

    model_config = ConfigDict(frozen=True)

    country_code: str
    country_name: str
    year: int
    factor: float
    old_currency: str
    new_currency: str
    old_local_symbol: str | None = None
    new_local_symbol: str | None = None
    decimals: int | None = Field(default=None, ge=0)
    formatting: FormattingOptions | None = None
    # Defaults to True when a new local symbol is present
    use_local_symbol: bool | None = None

    @field_validator("country_code")
    @classmethod
    def _upper_country_code(cls, value: str) -> str:
        return value.upper()

    def to_rule(self) -> Rule:
        """Derive the engine rule for this event."""
        return Rule(
            name=f"{self.country_code.lower()}-{self.year}",
            factor=self.factor,
            old_currency=self.old_currency,
            new_currency=self.new_currency,
            old_local_symbol=self.old_local_symbol,
            new_local_symbol=self.new_local_symbol,
            decimals=2 if self.decimals is None else self.decimals,
            country_code=self.country_code,
            year=self.year,
            formatting=self.formatting,
            use_local_symbol=(
                self.use_local_symbol if self.use_local_symbol is not None else self.new_local_symbol is not None
            ),
        )


DEFAULT_COUNTRY_REDENOMINATIONS: tuple[CountryRedenomination, ...] = (
    CountryRedenomination(
        country_code="ID", country_name="Indonesia", year=2027, factor=1000,
        old_currency="IDR", new_currency="IDR", old_local_symbol="Rp", new_local_symbol="Rp",
        decimals=2, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="id-ID", thousands_separator=".", decimal_separator=",",
            symbol_position="before", symbol_spacing=True,
            hide_decimals=True,  # "Rp 10.000", not "Rp 10.000,00"
        ),
    ),
    CountryRedenomination(
        country_code="TR", country_name="Turkey", year=2005, factor=1_000_000,
        old_currency="TRL", new_currency="TRY", old_local_symbol="₺", new_local_symbol="₺",
        decimals=2, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="tr-TR", thousands_separator=".", decimal_separator=",",
            symbol_position="after", symbol_spacing=True,
        ),
    ),
    CountryRedenomination(
        country_code="ZW", country_name="Zimbabwe", year=2008, factor=10_000_000_000,
        old_currency="ZWD", new_currency="ZWL", old_local_symbol="Z$", new_local_symbol="Z$",
        decimals=2, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="en-ZW", thousands_separator=",", decimal_separator=".",
            symbol_position="before", symbol_spacing=True,
        ),
    ),
    CountryRedenomination(
        country_code="BR", country_name="Brazil", year=1994, factor=2750,
        old_currency="BRC", new_currency="BRL", old_local_symbol="R$", new_local_symbol="R$",
        decimals=2, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="pt-BR", thousands_separator=".", decimal_separator=",",
            symbol_position="before", symbol_spacing=True,
        ),
    ),
    CountryRedenomination(
        country_code="RU", country_name="Russia", year=1998, factor=1000,
        old_currency="RUR", new_currency="RUB", old_local_symbol="₽", new_local_symbol="₽",
        decimals=2, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="ru-RU", thousands_separator=" ", decimal_separator=",",
            symbol_position="after", symbol_spacing=True,
        ),
    ),
    CountryRedenomination(
        country_code="VN", country_name="Vietnam", year=1985, factor=10,
        old_currency="VND", new_currency="VND", old_local_symbol="₫", new_local_symbol="₫",
        decimals=0, use_local_symbol=True,
        formatting=FormattingOptions(
            locale="vi-VN", thousands_separator=".", decimal_separator=",",
            symbol_position="after", symbol_spacing=True,
        ),
    ),
)

# Named aliases kept alongside the generated "{code}{year}" keys
LEGACY_RULE_KEYS: dict[str, tuple[str, int]] = {
    "indonesia2027": ("ID", 2027),
    "turkey2005": ("TR", 2005),
    "zimbabwe2008": ("ZW", 2008),
    "brazil1994": ("BR", 1994),
    "russia1998": ("RU", 1998),
    "vietnam1985": ("VN", 1985),
}


def _coerce_entry(entry: CountryRedenomination | Mapping[str, Any]) -> CountryRedenomination:
    if isinstance(entry, CountryRedenomination):
        return entry
    return CountryRedenomination.model_validate(dict(entry))


def create_country_rule(
    country_code: str,
    country_name: str,
    year: int,
    factor: float,
    old_currency: str,
    new_currency: str,
    *,
    old_local_symbol: str | None = None,
    new_local_symbol: str | None = None,
    decimals: int | None = None,
    formatting: FormattingOptions | Mapping[str, Any] | None = None,
    use_local_symbol: bool | None = None,
) -> CountryRedenomination:
    """Build a registry entry without registering it."""
    return CountryRedenomination(
        country_code=country_code.upper(),
        country_name=country_name,
        year=year,
        factor=factor,
        old_currency=old_currency,
        new_currency=new_currency,
        old_local_symbol=old_local_symbol,
        new_local_symbol=new_local_symbol,
        decimals=2 if decimals is None else decimals,
        formatting=formatting,
        use_local_symbol=use_local_symbol if use_local_symbol is not None else new_local_symbol is not None,
    )


class RuleRegistry:
    """In-memory catalogue of country redenominations, in insertion order."""

    def __init__(self, entries: Iterable[CountryRedenomination | Mapping[str, Any]] | None = None):
        seed = DEFAULT_COUNTRY_REDENOMINATIONS if entries is None else entries
        self._entries: list[CountryRedenomination] = [_coerce_entry(e) for e in seed]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CountryRedenomination]:
        return iter(list(self._entries))

    def entries(self) -> list[CountryRedenomination]:
        """Snapshot of the registry rows."""
        return list(self._entries)

    def _find_index(self, country_code: str, year: int) -> int | None:
        code = country_code.upper()
        for index, entry in enumerate(self._entries):
            if entry.country_code == code and entry.year == year:
                return index
        return None

    # ── Queries ────────────────────────────────────────────────────────────

    def get_rule_by_country(self, country_code: str, year: int | None = None) -> Rule | None:
        """Rule for *country_code* (case-insensitive) and *year*.

        Without a year the first matching entry in registry order is used,
        which is not necessarily the most recent one.
        """
        code = country_code.upper()
        for entry in self._entries:
            if entry.country_code == code and (year is None or entry.year == year):
                return entry.to_rule()
        return None

    def get_rules_by_country(self, country_code: str) -> list[Rule]:
        code = country_code.upper()
        return [entry.to_rule() for entry in self._entries if entry.country_code == code]

    def get_available_countries(self) -> list[dict[str, Any]]:
        """One summary per country code: ``{"code", "name", "years"}``."""
        countries: dict[str, dict[str, Any]] = {}
        for entry in self._entries:
            if entry.country_code in countries:
                countries[entry.country_code]["years"].append(entry.year)
            else:
                countries[entry.country_code] = {
                    "code": entry.country_code,
                    "name": entry.country_name,
                    "years": [entry.year],
                }
        return list(countries.values())

    def get_all_rules(self) -> list[Rule]:
        return [entry.to_rule() for entry in self._entries]

    def get_rules_by_currency(self, currency_code: str) -> list[Rule]:
        """Rules whose old or new currency matches *currency_code*."""
        code = currency_code.upper()
        return [
            entry.to_rule()
            for entry in self._entries
            if entry.old_currency.upper() == code or entry.new_currency.upper() == code
        ]

    def get_rules_by_factor(self, min_factor: float | None = None, max_factor: float | None = None) -> list[Rule]:
        """Rules with ``min_factor <= factor <= max_factor`` (either bound optional)."""
        return [
            entry.to_rule()
            for entry in self._entries
            if (min_factor is None or entry.factor >= min_factor)
            and (max_factor is None or entry.factor <= max_factor)
        ]

    def predefined_rules(self) -> dict[str, Rule]:
        """Legacy named rules merged with a ``{code}{year}`` key per entry."""
        rules: dict[str, Rule] = {}
        for key, (code, year) in LEGACY_RULE_KEYS.items():
            rule = self.get_rule_by_country(code, year)
            if rule is not None:
                rules[key] = rule
        for entry in self._entries:
            rules[f"{entry.country_code.lower()}{entry.year}"] = entry.to_rule()
        return rules

    # ── Mutation ───────────────────────────────────────────────────────────

    def add_country_redenomination(self, entry: CountryRedenomination | Mapping[str, Any]) -> None:
        """Insert *entry*, replacing in place any entry with the same code and year."""
        entry = _coerce_entry(entry)
        index = self._find_index(entry.country_code, entry.year)
        if index is None:
            self._entries.append(entry)
        else:
            self._entries[index] = entry
        logger.debug(
            "country_redenomination_upserted",
            country_code=entry.country_code,
            year=entry.year,
            replaced=index is not None,
        )

    def remove_country_redenomination(self, country_code: str, year: int) -> bool:
        """Remove the entry for *country_code* and *year*; return whether one existed."""
        index = self._find_index(country_code, year)
        if index is None:
            return False
        del self._entries[index]
        logger.debug("country_redenomination_removed", country_code=country_code.upper(), year=year)
        return True


default_registry = RuleRegistry()

PREDEFINED_RULES: dict[str, Rule] = default_registry.predefined_rules()


def get_rule_by_country(country_code: str, year: int | None = None) -> Rule | None:
    return default_registry.get_rule_by_country(country_code, year)


def get_rules_by_country(country_code: str) -> list[Rule]:
    return default_registry.get_rules_by_country(country_code)


def get_available_countries() -> list[dict[str, Any]]:
    return default_registry.get_available_countries()


def add_country_redenomination(entry: CountryRedenomination | Mapping[str, Any]) -> None:
    default_registry.add_country_redenomination(entry)


def remove_country_redenomination(country_code: str, year: int) -> bool:
    return default_registry.remove_country_redenomination(country_code, year)


def get_all_rules() -> list[Rule]:
    return default_registry.get_all_rules()


def get_rules_by_currency(currency_code: str) -> list[Rule]:
    return default_registry.get_rules_by_currency(currency_code)


def get_rules_by_factor(min_factor: float | None = None, max_factor: float | None = None) -> list[Rule]:
    return default_registry.get_rules_by_factor(min_factor, max_factor)
