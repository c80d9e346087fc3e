from __future__ import annotations

import json
import logging

import pytest

from salespulse.cli import build_parser, main


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("SALESPULSE_LOG_LEVEL", "INFO")
    monkeypatch.delenv("SALESPULSE_LOG_PATH", raising=False)
    # main() binds a handler to the captured stdout of the current test
    yield
    logging.basicConfig(handlers=[logging.NullHandler()], force=True)


def _write_csv(tmp_path):
    path = tmp_path / "sales.csv"
    path.write_text(
        "Date,Product,Quantity,Unit Price,Revenue\n"
        "2024-01-05,Widget,2,10,\n"
        "2024-02-07,Gadget,1,5,7\n"
        "2024-02-09,Widget,oops,3,\n",
        encoding="utf-8",
    )
    return path


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_summarize_json(tmp_path, capsys) -> None:
    path = _write_csv(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["summarize", str(path), "--json"])
    assert exc.value.code == 0

    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert "Parsed 3 records" in captured.err
    assert [r["product"] for r in payload["rows"]] == ["Widget", "Gadget"]
    assert [t["product"] for t in payload["product_totals"]] == ["Widget", "Gadget"]
    assert [m["key"] for m in payload["monthly"]] == ["2024-01", "2024-02"]
    assert payload["monthly"][1]["pct_change"] == pytest.approx(-65)
    assert payload["naive"] == 7


def test_summarize_text_report(tmp_path, capsys) -> None:
    path = _write_csv(tmp_path)
    with pytest.raises(SystemExit) as exc:
        main(["summarize", str(path), "--top-n", "1"])
    assert exc.value.code == 0
    assert "Total sales=$27" in capsys.readouterr().out


def test_summarize_reports_ingestion_failure(tmp_path, capsys) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        main(["summarize", str(path)])
    assert exc.value.code == 1
    assert "empty" in capsys.readouterr().out
