"""Test locale number format lookup."""
from redenomination.models.locale import get_number_format


class TestGetNumberFormat:
    def test_exact_tag(self):
        fmt = get_number_format("id-ID")
        assert fmt.decimal_separator == ","
        assert fmt.thousands_separator == "."

    def test_case_and_underscore(self):
        assert get_number_format("de_de").decimal_separator == ","

    def test_language_fallback(self):
        assert get_number_format("pt-PT").thousands_separator == "."

    def test_unknown_defaults_to_us(self):
        fmt = get_number_format("xx-YY")
        assert fmt.decimal_separator == "."
        assert fmt.thousands_separator == ","

    def test_none_defaults_to_us(self):
        assert get_number_format(None).example == "1,234.56"

    def test_space_grouping(self):
        assert get_number_format("ru-RU").thousands_separator == "\u00a0"
