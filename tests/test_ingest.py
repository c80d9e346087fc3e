from __future__ import annotations

import pytest

from salespulse.aggregate.build import aggregate
from salespulse.ingest.parse_csv import IngestionError, normalize_header, parse_csv, parse_csv_text


def test_normalize_header() -> None:
    assert normalize_header("  Unit  Price ") == "unit_price"
    assert normalize_header("Order\tDate") == "order_date"
    assert normalize_header("SALES") == "sales"


def test_parse_csv_text_normalizes_headers_and_types() -> None:
    text = (
        "Date,Product Name,Units,Unit Price\n"
        "2024-01-05,Widget,2,9.5\n"
        "\n"
        "2024-01-06,Gadget,,3\n"
    )
    records = parse_csv_text(text)
    assert len(records) == 2
    assert set(records[0]) == {"date", "product_name", "units", "unit_price"}
    assert records[0]["date"] == "2024-01-05"
    assert records[0]["unit_price"] == 9.5
    assert records[1]["units"] is None


def test_parse_csv_reads_files_with_bom(tmp_path) -> None:
    path = tmp_path / "sales.csv"
    path.write_bytes("\ufeffdate,product,sales\n2024-02-01,A,10\n".encode("utf-8"))
    records = parse_csv(path)
    assert records == [{"date": "2024-02-01", "product": "A", "sales": 10}]


def test_parse_csv_honours_delimiter() -> None:
    records = parse_csv_text("date;sales\n2024-02-01;5\n", delimiter=";")
    assert records == [{"date": "2024-02-01", "sales": 5}]


def test_duplicate_headers_keep_first_column() -> None:
    records = parse_csv_text("Sales,sales \n1,2\n")
    assert records == [{"sales": 1}]


@pytest.mark.parametrize("text", ["", "date,product,sales\n", "\n\n"])
def test_empty_files_raise(text: str) -> None:
    with pytest.raises(IngestionError):
        parse_csv_text(text)


def test_missing_file_raises(tmp_path) -> None:
    with pytest.raises(IngestionError):
        parse_csv(tmp_path / "missing.csv")


def test_undecodable_file_raises(tmp_path) -> None:
    path = tmp_path / "latin.csv"
    path.write_bytes("product,sales\nCaf\xe9,1\n".encode("latin-1"))
    with pytest.raises(IngestionError):
        parse_csv(path, encoding="utf-8")


def test_trailing_delimiters_keep_header_mapping() -> None:
    records = parse_csv_text("date,product,sales\n2024-01-05,A,100,\n2024-02-05,B,50,\n")
    assert records == [
        {"date": "2024-01-05", "product": "A", "sales": 100},
        {"date": "2024-02-05", "product": "B", "sales": 50},
    ]
    assert [r.product for r in aggregate(records).rows] == ["A", "B"]


def test_line_with_extra_fields_is_skipped() -> None:
    text = "date,product,sales\n2024-01-05,A,100\n2024-02-05,B,50,extra\n2024-03-05,C,10\n"
    records = parse_csv_text(text)
    assert [r["product"] for r in records] == ["A", "C"]
    assert [r["sales"] for r in records] == [100, 10]
