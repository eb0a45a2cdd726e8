# -*- coding: utf-8 -*-
"""Voice expense command-line interface.

Runs the interpreter on typed text, mainly for trying out keyword tables and
currency data locally:

    voice-expense interpret --text "I spent 50 dirhams on groceries" --currency USD
    voice-expense resolve --text "25 AED for lunch"

Every command prints one JSON object to stdout. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime
from typing import Any

from voice_expense import config
from voice_expense.parser.extract_category import classify, default_classifier
from voice_expense.parser.normalize_input import normalize_transcript
from voice_expense.processor import process_transcript
from voice_expense.shared.currency_catalog import CurrencyDefinition, default_catalog
from voice_expense.shared.currency_resolver import normalize_symbols, resolve


def _print_json(payload: dict[str, Any]) -> None:
    sys.stdout.write(json.dumps(payload, ensure_ascii=False))
    sys.stdout.write("\n")


def _currency_to_dict(currency: CurrencyDefinition) -> dict[str, Any]:
    return {
        "code": currency.code,
        "symbol": currency.symbol,
        "display_name": currency.display_name,
        "decimal_places": currency.decimal_places,
        "is_right_to_left": currency.is_right_to_left,
    }


def _iso_datetime(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}")


def cmd_interpret(args: argparse.Namespace) -> int:
    result = process_transcript(args.text, args.currency, context_date=args.date)
    _print_json(result.to_dict())
    return 1 if result.is_error else 0


def cmd_resolve(args: argparse.Namespace) -> int:
    currency = resolve(args.text)
    _print_json({"text": args.text, "currency": _currency_to_dict(currency) if currency else None})
    return 0 if currency else 1


def cmd_classify(args: argparse.Namespace) -> int:
    category = classify(args.text)
    _print_json({
        "text": args.text,
        "category": category.value,
        "keyword": default_classifier().matched_keyword(args.text),
    })
    return 0


def cmd_normalize(args: argparse.Namespace) -> int:
    text = normalize_transcript(args.text)
    _print_json({"text": args.text, "normalized": normalize_symbols(text)})
    return 0


def cmd_currencies(args: argparse.Namespace) -> int:
    catalog = default_catalog()
    currencies = catalog.common() if args.common else catalog.all()
    _print_json({"count": len(currencies), "currencies": [_currency_to_dict(c) for c in currencies]})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="voice-expense", description="Voice expense command interpreter")
    sub = parser.add_subparsers(dest="command", required=True)

    interpret = sub.add_parser("interpret", help="Interpret an expense sentence")
    interpret.add_argument("--text", required=True)
    interpret.add_argument("--currency", help=f"Default currency code (default: {config.DEFAULT_CURRENCY})")
    interpret.add_argument("--date", type=_iso_datetime, help="Reference date, ISO format (default: now)")
    interpret.set_defaults(func=cmd_interpret)

    resolve_cmd = sub.add_parser("resolve", help="Detect the currency mentioned in text")
    resolve_cmd.add_argument("--text", required=True)
    resolve_cmd.set_defaults(func=cmd_resolve)

    classify_cmd = sub.add_parser("classify", help="Classify text into an expense category")
    classify_cmd.add_argument("--text", required=True)
    classify_cmd.set_defaults(func=cmd_classify)

    normalize = sub.add_parser("normalize", help="Replace currency symbols with codes")
    normalize.add_argument("--text", required=True)
    normalize.set_defaults(func=cmd_normalize)

    currencies = sub.add_parser("currencies", help="List catalog currencies")
    currencies.add_argument("--common", action="store_true", help="Only the common currencies")
    currencies.set_defaults(func=cmd_currencies)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )
    parser = build_parser()
    args = parser.parse_args(argv)
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
