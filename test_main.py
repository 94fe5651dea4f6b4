"""
test_main.py - CLI scoring checks.

Usage:
    python test_main.py
"""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from main import main as cli_main
from main import load_receipt


def _symbols() -> tuple[str, str, str]:
    try:
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8", errors="replace")
    except Exception:
        pass

    try:
        "✓✗═".encode(sys.stdout.encoding or "utf-8")
        return "✓", "✗", "═"
    except Exception:
        return "[OK]", "[FAIL]", "="


PASS, FAIL, LINE = _symbols()


def _run_cli(argv: list[str]) -> tuple[int, str]:
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer), contextlib.redirect_stderr(io.StringIO()):
        code = cli_main(argv)
    return code, buffer.getvalue()


def main() -> int:
    passed = 0
    failed = 0

    def check(name: str, condition: bool) -> None:
        nonlocal passed, failed
        if condition:
            passed += 1
            print(f"    {PASS} {name}")
        else:
            failed += 1
            print(f"    {FAIL} {name}")

    print(LINE * 50)
    print("  CLI Tests")
    print(LINE * 50)

    with tempfile.TemporaryDirectory(prefix="receipt-points-") as tmp_dir:
        tmp_path = Path(tmp_dir)
        receipt_path = tmp_path / "receipt.json"
        receipt_path.write_text(
            json.dumps(
                {
                    "retailer": "M&M Corner Market",
                    "purchaseDate": "2022-03-20",
                    "purchaseTime": "14:33",
                    "items": [{"shortDescription": "Gatorade", "price": "2.25"}] * 4,
                    "total": "9.00",
                }
            ),
            encoding="utf-8",
        )
        broken_path = tmp_path / "broken.json"
        broken_path.write_text("{\"retailer\": ", encoding="utf-8")

        receipt = load_receipt(str(receipt_path))
        check("load_receipt decodes camelCase fields", receipt.purchase_time == "14:33")
        check("load_receipt keeps every item", len(receipt.items) == 4)

        code, output = _run_cli([str(receipt_path), "--json"])
        result = json.loads(output) if code == 0 else {}
        check("--json exits 0", code == 0)
        check("--json reports total points", result.get("points") == 112)
        check(
            "--json reports per-rule breakdown",
            result.get("breakdown", {}).get("afternoon_purchase") == 10,
        )

        code, output = _run_cli([str(receipt_path)])
        check("Table output exits 0", code == 0)
        check("Table output shows total", "TOTAL POINTS" in output and "112" in output)

        code, _ = _run_cli([str(tmp_path / "missing.json")])
        check("Missing file exits 1", code == 1)

        code, _ = _run_cli([str(broken_path)])
        check("Undecodable file exits 1", code == 1)

    print(f"\n{LINE * 50}")
    print(f"  Results: {passed}/{passed + failed} passed")
    if failed == 0:
        print(f"  CLI checks complete {PASS}")
    else:
        print(f"  CLI checks failed: {failed}")
    print(f"{LINE * 50}")
    return failed


def test_cli() -> None:
    assert main() == 0


if __name__ == "__main__":
    sys.exit(1 if main() else 0)
