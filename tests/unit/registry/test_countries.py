"""Test the country redenomination registry."""
import pytest
from redenomination.models.rule import FormattingOptions
from redenomination.registry.countries import (
    DEFAULT_COUNTRY_REDENOMINATIONS,
    PREDEFINED_RULES,
    CountryRedenomination,
    RuleRegistry,
    create_country_rule,
    default_registry,
    get_all_rules,
    get_available_countries,
    get_rule_by_country,
    get_rules_by_country,
    get_rules_by_currency,
    get_rules_by_factor,
)
from tests.factories import make_country


class TestGetRuleByCountry:
    def test_lookup(self, registry):
        rule = registry.get_rule_by_country("ID", 2027)
        assert rule.name == "id-2027"
        assert rule.factor == 1000
        assert rule.new_local_symbol == "Rp"
        assert rule.formatting.hide_decimals is True

    def test_case_insensitive(self, registry):
        assert registry.get_rule_by_country("tr", 2005) == registry.get_rule_by_country("TR", 2005)

    def test_every_entry_factor_matches(self, registry):
        for entry in registry:
            assert registry.get_rule_by_country(entry.country_code.lower(), entry.year).factor == entry.factor

    def test_unknown_country(self, registry):
        assert registry.get_rule_by_country("XX") is None

    def test_unknown_year(self, registry):
        assert registry.get_rule_by_country("ID", 1999) is None

    def test_without_year_returns_first_match(self, registry):
        registry.add_country_redenomination(make_country("ID", 2035, factor=10, country_name="Indonesia"))
        assert registry.get_rule_by_country("ID").year == 2027


class TestGetRulesByCountry:
    def test_registry_order(self, registry):
        registry.add_country_redenomination(make_country("ID", 1965, factor=1000, country_name="Indonesia"))
        assert [rule.year for rule in registry.get_rules_by_country("id")] == [2027, 1965]

    def test_unknown(self, registry):
        assert registry.get_rules_by_country("XX") == []


class TestAvailableCountries:
    def test_summary(self, registry):
        countries = registry.get_available_countries()
        assert [c["code"] for c in countries] == ["ID", "TR", "ZW", "BR", "RU", "VN"]
        assert countries[0] == {"code": "ID", "name": "Indonesia", "years": [2027]}

    def test_groups_years(self, registry):
        registry.add_country_redenomination(make_country("TR", 2030, country_name="Turkey"))
        turkey = registry.get_available_countries()[1]
        assert turkey["years"] == [2005, 2030]


class TestDerivedViews:
    def test_all_rules(self, registry):
        assert [rule.name for rule in registry.get_all_rules()] == [
            "id-2027", "tr-2005", "zw-2008", "br-1994", "ru-1998", "vn-1985",
        ]

    def test_by_currency_new(self, registry):
        assert [rule.name for rule in registry.get_rules_by_currency("try")] == ["tr-2005"]

    def test_by_currency_old(self, registry):
        assert [rule.name for rule in registry.get_rules_by_currency("TRL")] == ["tr-2005"]

    def test_by_currency_unknown(self, registry):
        assert registry.get_rules_by_currency("USD") == []

    def test_by_factor_range(self, registry):
        assert [rule.name for rule in registry.get_rules_by_factor(1000, 1000)] == ["id-2027", "ru-1998"]

    def test_by_factor_minimum(self, registry):
        assert [rule.name for rule in registry.get_rules_by_factor(1e9)] == ["zw-2008"]

    def test_by_factor_maximum(self, registry):
        assert [rule.name for rule in registry.get_rules_by_factor(max_factor=100)] == ["vn-1985"]

    def test_by_factor_unbounded(self, registry):
        assert len(registry.get_rules_by_factor()) == 6


class TestMutation:
    def test_add(self, registry):
        registry.add_country_redenomination(make_country())
        assert len(registry) == 7
        rule = registry.get_rule_by_country("my", 2024)
        assert rule.name == "my-2024"
        assert rule.factor == 100

    def test_add_mapping_normalises_code(self, registry):
        registry.add_country_redenomination({
            "country_code": "gh",
            "country_name": "Ghana",
            "year": 2007,
            "factor": 10000,
            "old_currency": "GHC",
            "new_currency": "GHS",
        })
        assert registry.entries()[-1].country_code == "GH"
        assert registry.get_rule_by_country("GH", 2007).factor == 10000

    def test_add_replaces_same_key_in_place(self, registry):
        registry.add_country_redenomination(make_country("ID", 2027, factor=500, country_name="Indonesia"))
        assert len(registry) == 6
        assert registry.entries()[0].factor == 500
        rule = registry.get_rule_by_country("ID", 2027)
        assert rule.factor == 500
        assert rule.name == "id-2027"

    def test_remove(self, registry):
        assert registry.remove_country_redenomination("zw", 2008) is True
        assert registry.get_rule_by_country("ZW") is None
        assert len(registry) == 5

    def test_remove_missing(self, registry):
        assert registry.remove_country_redenomination("ZW", 2009) is False
        assert len(registry) == 6

    def test_registries_are_independent(self, registry):
        other = RuleRegistry()
        registry.add_country_redenomination(make_country())
        assert other.get_rule_by_country("MY") is None
        assert default_registry.get_rule_by_country("MY") is None

    def test_custom_seed(self):
        registry = RuleRegistry([make_country()])
        assert [c["code"] for c in registry.get_available_countries()] == ["MY"]
        assert registry.predefined_rules() == {"my2024": registry.get_rule_by_country("MY")}

    def test_empty_registry(self):
        registry = RuleRegistry([])
        assert len(registry) == 0
        assert registry.get_all_rules() == []


class TestToRule:
    def test_defaults(self):
        rule = make_country(new_local_symbol="RM").to_rule()
        assert rule.decimals == 2
        assert rule.use_local_symbol is True
        assert rule.country_code == "MY"
        assert rule.year == 2024

    def test_no_local_symbol(self):
        assert make_country().to_rule().use_local_symbol is False

    def test_explicit_use_local_symbol(self):
        assert make_country(new_local_symbol="RM", use_local_symbol=False).to_rule().use_local_symbol is False

    def test_zero_decimals_kept(self):
        assert make_country(decimals=0).to_rule().decimals == 0


class TestCreateCountryRule:
    def test_builder(self):
        entry = create_country_rule(
            "my", "Malaysia", 2024, 100, "MYR", "MYR",
            new_local_symbol="RM",
            formatting={"locale": "ms-MY", "symbol_position": "before", "hide_decimals": True},
        )
        assert isinstance(entry, CountryRedenomination)
        assert entry.country_code == "MY"
        assert entry.decimals == 2
        assert entry.use_local_symbol is True
        assert entry.formatting == FormattingOptions(locale="ms-MY", symbol_position="before", hide_decimals=True)

    def test_infers_use_local_symbol(self):
        assert create_country_rule("MY", "Malaysia", 2024, 100, "MYR", "MYR").use_local_symbol is False

    def test_does_not_register(self):
        create_country_rule("MY", "Malaysia", 2024, 100, "MYR", "MYR")
        assert get_rule_by_country("MY") is None


class TestPredefinedRules:
    def test_legacy_keys(self):
        assert PREDEFINED_RULES["indonesia2027"].name == "id-2027"
        assert PREDEFINED_RULES["turkey2005"].factor == 1_000_000
        assert PREDEFINED_RULES["turkey2005"].old_currency == "TRL"
        assert PREDEFINED_RULES["zimbabwe2008"].factor == 10_000_000_000
        assert PREDEFINED_RULES["zimbabwe2008"].new_currency == "ZWL"

    def test_generated_keys_cover_every_entry(self):
        for entry in DEFAULT_COUNTRY_REDENOMINATIONS:
            key = f"{entry.country_code.lower()}{entry.year}"
            assert PREDEFINED_RULES[key] == entry.to_rule()

    def test_legacy_and_generated_agree(self):
        assert PREDEFINED_RULES["brazil1994"] == PREDEFINED_RULES["br1994"]
        assert len(PREDEFINED_RULES) == 12

    def test_registry_predefined_rules_reflect_upsert(self, registry):
        registry.add_country_redenomination(make_country("ID", 2027, factor=500, country_name="Indonesia"))
        rules = registry.predefined_rules()
        assert rules["indonesia2027"].factor == 500
        assert rules["id2027"].factor == 500


class TestModuleFunctions:
    def test_default_registry_queries(self):
        assert get_rule_by_country("tr").name == "tr-2005"
        assert len(get_rules_by_country("BR")) == 1
        assert get_available_countries()[0]["code"] == "ID"
        assert len(get_all_rules()) == len(default_registry)
        assert get_rules_by_currency("RUB")[0].name == "ru-1998"
        assert get_rules_by_factor(2750, 2750)[0].name == "br-1994"
