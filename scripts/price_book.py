#!/usr/bin/env python3
"""Production script: batch-price a book of options under the CEV model.

Usage
-----
    python scripts/price_book.py --input book.csv --output prices.csv
    python scripts/price_book.py --input book.csv --output prices.json

Input CSV format
----------------
    id,spot,strike,texp,sigma,beta,intr,divr,kind
    1,100,90,1.2,2.0,0.5,0.0,0.0,call
    2,100,110,0.5,2.0,0.5,0.03,0.01,put

Optional columns ``forward`` and ``df`` override the values derived from
``spot`` / ``divr`` and ``intr``; blank cells fall back to the defaults.

Output
------
    CSV or JSON with columns: id, price, mass_zero (and error for failed rows)
"""

from __future__ import annotations
import argparse
import csv
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from cevpricer.cev import cev_price, cev_mass_zero

logger = logging.getLogger("price_book")


def _opt_float(row: dict, key: str, default=None):
    val = (row.get(key) or "").strip()
    return float(val) if val else default


def _price_row(row: dict) -> dict:
    """Price a single book row and return result dict."""
    rid = row.get("id", "")
    kw = dict(
        texp=_opt_float(row, "texp", 1.0),
        sigma=_opt_float(row, "sigma"),
        beta=_opt_float(row, "beta", 0.5),
        intr=_opt_float(row, "intr", 0.0),
        divr=_opt_float(row, "divr", 0.0),
        forward=_opt_float(row, "forward"),
        df=_opt_float(row, "df"),
    )
    spot = _opt_float(row, "spot")
    strike = _opt_float(row, "strike")
    kind = (row.get("kind") or "call").strip().lower()

    px = cev_price(strike, spot, cp=kind, **kw)
    mass = cev_mass_zero(spot, **kw)
    return {"id": rid, "price": float(px), "mass_zero": float(mass)}


def price_book(rows: list[dict]) -> list[dict]:
    results = []
    for i, row in enumerate(rows):
        try:
            results.append(_price_row(row))
        except ValueError as e:
            logger.warning("Row %d (id=%s): %s", i, row.get("id", "?"), e)
            results.append({"id": row.get("id", ""), "price": None,
                            "mass_zero": None, "error": str(e)})
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Batch-price an options book under the CEV model."
    )
    parser.add_argument("--input", required=True, help="Path to book CSV")
    parser.add_argument("--output", required=True, help="Output path (.csv or .json)")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    with open(args.input, newline="") as f:
        rows = list(csv.DictReader(f))

    logger.info("Pricing %d positions...", len(rows))
    results = price_book(rows)

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2, default=str)
    else:
        if not results:
            logger.info("No results to write.")
            return
        fieldnames = ["id", "price", "mass_zero"]
        if any("error" in r for r in results):
            fieldnames.append("error")
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)

    priced = [r for r in results if r.get("price") is not None]
    logger.info("Results written to %s (priced: %d | failed: %d)",
                args.output, len(priced), len(results) - len(priced))


if __name__ == "__main__":
    main()
