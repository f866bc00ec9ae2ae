"""Locale number conventions used for currency rendering.

Only grouping and decimal separators are modelled; everything else about a
locale (digit shapes, grouping sizes) follows the western three-digit
convention.
"""

from __future__ import annotations

from pydantic import BaseModel


class NumberFormat(BaseModel):
    """Describes the number formatting convention of a locale."""

    decimal_separator: str = "."
    thousands_separator: str = ","
    example: str = "1,234.56"


_US = NumberFormat()
_EU_DOT = NumberFormat(decimal_separator=",", thousands_separator=".", example="1.234,56")
_EU_SPACE = NumberFormat(decimal_separator=",", thousands_separator="\u00a0", example="1\u00a0234,56")

LOCALE_FORMATS: dict[str, NumberFormat] = {
    "en-US": _US,
    "en-GB": _US,
    "en-ZW": _US,
    "ja-JP": _US,
    "ms-MY": _US,
    "id-ID": _EU_DOT,
    "tr-TR": _EU_DOT,
    "pt-BR": _EU_DOT,
    "vi-VN": _EU_DOT,
    "de-DE": _EU_DOT,
    "es-ES": _EU_DOT,
    "it-IT": _EU_DOT,
    "nl-NL": _EU_DOT,
    "ru-RU": _EU_SPACE,
    "fr-FR": NumberFormat(decimal_separator=",", thousands_separator="\u202f", example="1\u202f234,56"),
    "de-CH": NumberFormat(decimal_separator=".", thousands_separator="\u2019", example="1\u2019234.56"),
}

# Language subtag fallbacks, e.g. "pt-PT" -> "pt"
LANGUAGE_FORMATS: dict[str, NumberFormat] = {
    "en": _US,
    "ja": _US,
    "ms": _US,
    "id": _EU_DOT,
    "tr": _EU_DOT,
    "pt": _EU_DOT,
    "vi": _EU_DOT,
    "de": _EU_DOT,
    "es": _EU_DOT,
    "it": _EU_DOT,
    "nl": _EU_DOT,
    "ru": _EU_SPACE,
    "fr": LOCALE_FORMATS["fr-FR"],
}


def get_number_format(locale: str | None) -> NumberFormat:
    """Resolve a BCP 47 style locale tag to its number format.

    Tries the full tag, then the language subtag, then falls back to en-US.
    Underscores are accepted in place of hyphens ("id_ID").
    """
    if not locale:
        return _US
    tag = locale.replace("_", "-")
    for key, fmt in LOCALE_FORMATS.items():
        if key.lower() == tag.lower():
            return fmt
    language = tag.split("-", 1)[0].lower()
    return LANGUAGE_FORMATS.get(language, _US)
