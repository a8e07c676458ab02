"""Command-line interface for protex-specs."""

import argparse
import json
import logging
import sys

from protex_specs import __version__
from protex_specs.core import CatalogReview, load_products, review_catalog
from protex_specs.exceptions import InputError, ProtexSpecsError
from protex_specs.parsing import ParserConfig, SpecificationParser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="protex-specs",
        description="Review EPI product specifications before catalog migration",
    )
    parser.add_argument("products", help="Path to a JSON file holding an array of products")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"protex-specs {__version__}",
    )

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        products = load_products(args.products)
    except InputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except ProtexSpecsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    catalog = review_catalog(products, parser=SpecificationParser(ParserConfig.from_env()))

    if args.json:
        print(json.dumps(_to_json(catalog), indent=2, ensure_ascii=False, default=str))
    else:
        _print_formatted(catalog)

    return 1 if catalog.blocked_products else 0


def _to_json(catalog: CatalogReview) -> dict:
    return {
        "totalProducts": catalog.total_products,
        "industrialProducts": catalog.industrial_products,
        "blockedProducts": catalog.blocked_products,
        "products": [
            {
                "sku": review.sku,
                "industrial": review.industrial,
                "blocked": review.blocked,
                "fieldErrors": review.field_errors,
                "parseErrors": [error.model_dump() for error in review.parsed.errors] if review.parsed else [],
                "errors": review.validation.friendly_errors if review.validation else [],
                "warnings": review.validation.friendly_warnings if review.validation else [],
            }
            for review in catalog.reviews
        ],
    }


def _print_formatted(catalog: CatalogReview) -> None:
    """Print the review in human-readable format."""
    print()
    print("  protex-specs")
    print()

    fields = [
        ("Products", catalog.total_products),
        ("Industrial", catalog.industrial_products),
        ("Blocked", catalog.blocked_products),
    ]
    for label, value in fields:
        print(f"  {label + ':':<14} {value}")
    print()

    for review in catalog.reviews:
        lines = _review_lines(review)
        if not lines:
            continue
        status = "BLOCKED" if review.blocked else "ok"
        print(f"  [{status}] {review.sku or '-'}")
        for line in lines:
            print(f"    {line}")
        print()


def _review_lines(review) -> list[str]:
    """Collect every finding for one product as display lines."""
    lines = list(review.field_errors)
    if review.parsed:
        lines.extend(f"{error.code}: {error.message}" for error in review.parsed.errors)
    if review.validation:
        lines.extend(review.validation.friendly_errors)
        lines.extend(review.validation.friendly_warnings)
    return lines


if __name__ == "__main__":
    sys.exit(main())
