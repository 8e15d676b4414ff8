"""Tests for the batch pricing script."""

import csv
import json

from cevpricer.cev import cev_price, cev_mass_zero
import price_book

BOOK = [
    {"id": "1", "spot": "100", "strike": "90", "texp": "1.2", "sigma": "2",
     "beta": "0.5", "intr": "0", "divr": "0", "kind": "call"},
    {"id": "2", "spot": "100", "strike": "110", "texp": "0.5", "sigma": "2",
     "beta": "0.5", "intr": "0.03", "divr": "0.01", "kind": "put"},
    {"id": "3", "spot": "", "strike": "", "texp": "1", "sigma": "2",
     "beta": "", "intr": "", "divr": "", "kind": "", "forward": "104", "df": "0.97"},
    {"id": "4", "spot": "100", "strike": "100", "texp": "1", "sigma": "2",
     "beta": "1.0", "intr": "0", "divr": "0", "kind": "call"},
]


def test_price_book_rows():
    results = price_book.price_book(BOOK)
    assert [r["id"] for r in results] == ["1", "2", "3", "4"]

    assert abs(results[0]["price"] - cev_price(90.0, 100.0, 1.2, 2.0, 0.5)) < 1e-12
    assert abs(results[1]["price"]
               - cev_price(110.0, 100.0, 0.5, 2.0, 0.5, 0.03, 0.01, -1)) < 1e-12
    # blank cells fall back to the defaults, strike to the forward
    assert abs(results[2]["price"]
               - cev_price(forward=104.0, df=0.97, texp=1.0, sigma=2.0)) < 1e-12
    assert abs(results[2]["mass_zero"]
               - cev_mass_zero(forward=104.0, texp=1.0, sigma=2.0)) < 1e-12

    assert results[3]["price"] is None
    assert "beta" in results[3]["error"]


def test_main_csv(tmp_path):
    src = tmp_path / "book.csv"
    with open(src, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(BOOK[2].keys()))
        writer.writeheader()
        writer.writerows(BOOK)
    out = tmp_path / "prices.csv"
    price_book.main(["--input", str(src), "--output", str(out)])

    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 4
    assert float(rows[0]["price"]) > 0
    assert rows[3]["price"] == ""
    assert rows[3]["error"]


def test_main_json(tmp_path):
    src = tmp_path / "book.csv"
    with open(src, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(BOOK[2].keys()))
        writer.writeheader()
        writer.writerows(BOOK[:2])
    out = tmp_path / "prices.json"
    price_book.main(["--input", str(src), "--output", str(out)])

    data = json.loads(out.read_text())
    assert [r["id"] for r in data] == ["1", "2"]
    assert all(0.0 <= r["mass_zero"] <= 1.0 for r in data)
