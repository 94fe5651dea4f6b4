"""
main.py - CLI for scoring a receipt JSON file without running the server.

Usage:
    python main.py receipt.json
    python main.py receipt.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from logging_config import get_logger, setup_logging
from models import Receipt
from points import RULE_NAMES, points_breakdown
from receipt_api import decode_receipt

logger = get_logger("receipt-points")

OUTPUT_WIDTH = 48


def _configure_output_symbols() -> tuple[str, str]:
    """Configure stdout encoding and return safe line/fail symbols."""
    try:
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    except Exception:
        pass

    try:
        "═✗".encode(sys.stdout.encoding or "utf-8")
        return "═", "✗"
    except Exception:
        return "=", "X"


BOX_CHAR, FAIL_CHAR = _configure_output_symbols()


def load_receipt(receipt_path: str) -> Receipt:
    """Read and decode a receipt JSON file."""
    path = Path(str(receipt_path).strip())
    if not path.is_file():
        raise FileNotFoundError(f"Receipt file not found: {path}")
    return decode_receipt(path.read_bytes())


def format_breakdown(receipt: Receipt, breakdown: dict[str, int]) -> str:
    """Render a per-rule points table."""
    separator = BOX_CHAR * OUTPUT_WIDTH
    lines = [
        "",
        separator,
        f"  Receipt: {receipt.retailer or '(no retailer)'}",
        f"           {receipt.purchase_date or '-'} {receipt.purchase_time or '-'}"
        f"  |  total {receipt.total or '-'}",
        separator,
    ]
    for name in RULE_NAMES:
        lines.append(f"  {name:<28}{breakdown[name]:>8}")
    lines.append(separator)
    lines.append(f"  {'TOTAL POINTS':<28}{sum(breakdown.values()):>8}")
    lines.append(separator)
    return "\n".join(lines)


def run(receipt_path: str, as_json: bool = False) -> int:
    """Score one receipt file and print the result. Returns a process exit code."""
    try:
        receipt = load_receipt(receipt_path)
    except FileNotFoundError as exc:
        print(f"  {FAIL_CHAR} {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        logger.error("cli_decode_error | path=%s | error=%s", receipt_path, exc)
        print(f"  {FAIL_CHAR} Could not decode receipt: {exc}", file=sys.stderr)
        return 1

    breakdown = points_breakdown(receipt)
    if as_json:
        print(json.dumps({"points": sum(breakdown.values()), "breakdown": breakdown}, indent=2))
    else:
        print(format_breakdown(receipt, breakdown))
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Score a receipt JSON file.")
    parser.add_argument("receipt", help="Path to a receipt JSON file")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of a table")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)
    return run(args.receipt, as_json=args.json)


if __name__ == "__main__":
    sys.exit(main())
