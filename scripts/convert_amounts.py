#!/usr/bin/env python3
"""Convert amounts with a registered country redenomination."""
import sys

# Load .env file
from dotenv import load_dotenv
load_dotenv()

from redenomination.config import Settings
from redenomination.conversion.engine import RedenominationEngine
from redenomination.conversion.plugins import create_logging_plugin
from redenomination.registry.countries import get_available_countries, get_rule_by_country
from redenomination.utils.logging import setup_logging


def main(argv: list[str]) -> None:
    """Convert each amount in *argv* and print the formatted result."""
    reverse = "--reverse" in argv
    year = None
    if "--year" in argv:
        position = argv.index("--year")
        year = int(argv[position + 1])
        argv = argv[:position] + argv[position + 2:]
    args = [arg for arg in argv if arg != "--reverse"]

    settings = Settings()
    setup_logging(settings)

    country = args[0]
    rule = get_rule_by_country(country, year)
    if rule is None:
        known = ", ".join(f"{c['code']} {c['years']}" for c in get_available_countries())
        print(f"Error: No redenomination registered for {country} (known: {known})")
        sys.exit(1)

    engine = RedenominationEngine(rule, [create_logging_plugin()], settings=settings)
    direction = "reverse" if reverse else "forward"

    print(f"Rule: {rule.name} (factor {rule.factor:,.0f}, {direction})")
    print("-" * 50)

    for raw in args[1:] or ["1000000"]:
        result = engine.convert(float(raw), direction)
        if reverse:
            print(f"{result.original:>20,.2f} -> {result.amount:,.2f}")
        else:
            print(f"{result.original:>20,.2f} -> {engine.format(result.amount)}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/convert_amounts.py <country-code> [amount ...] [--year YEAR] [--reverse]")
        sys.exit(1)

    main(sys.argv[1:])
