from decimal import Decimal

import pytest

from cardwise.cli import build_parser, main
from cardwise.data.snapshot import JsonLedgerFile


@pytest.fixture
def ledger_path(tmp_path, snapshot):
    path = tmp_path / "ledger.json"
    JsonLedgerFile(path).save(snapshot)
    return path


class TestPlans:
    def test_flat(self, capsys):
        assert main(["flat", "5000000", "--rate", "21", "--tenor", "12"]) == 0
        out = capsys.readouterr().out
        assert "Flat plan" in out
        assert "504,167" in out
        assert "1,050,000" in out

    def test_annuity(self, capsys):
        assert main(["annuity", "1000000", "--rate", "1.75", "--tenor", "6"]) == 0
        assert "177,023" in capsys.readouterr().out

    def test_compare(self, capsys):
        assert main(["compare", "5000000", "--rate", "21", "--tenors", "3", "12"]) == 0
        lines = [l for l in capsys.readouterr().out.splitlines() if l.strip()]
        # header plus one row per tenor
        assert len(lines) == 3
        assert "Eff. APR" in lines[0]

    def test_invalid_tenor(self, capsys):
        assert main(["flat", "5000000", "--rate", "21", "--tenor", "0"]) == 2
        assert "error:" in capsys.readouterr().err

    @pytest.mark.parametrize("value", ["nan", "NaN", "inf", "-Infinity"])
    def test_non_finite_number(self, capsys, value):
        with pytest.raises(SystemExit) as exc:
            main(["flat", value, "--rate", "21", "--tenor", "12"])
        assert exc.value.code == 2
        assert "not a finite number" in capsys.readouterr().err

    def test_non_finite_rate(self):
        with pytest.raises(SystemExit) as exc:
            main(["annuity", "1000000", "--rate", "Infinity", "--tenor", "6"])
        assert exc.value.code == 2

    def test_bad_number_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["flat", "lots", "--rate", "21", "--tenor", "12"])


class TestBills:
    def test_overview(self, capsys, ledger_path):
        assert main(["bills", str(ledger_path), "--today", "2024-06-10"]) == 0
        out = capsys.readouterr().out
        assert "1,800,000" in out
        assert "Nearest due date: 2024-06-12" in out
        overdue, upcoming = out.split("Upcoming:")
        assert "Card card-b" in overdue.split("Overdue:")[1]
        assert "Card card-a" in upcoming
        assert "Card card-c" not in upcoming

    def test_missing_snapshot(self, capsys, tmp_path):
        assert main(["bills", str(tmp_path / "nope.json")]) == 2
        assert "Cannot read" in capsys.readouterr().err


class TestPay:
    def test_appends_payment(self, capsys, ledger_path):
        assert main(["pay", str(ledger_path), "card-b", "300000"]) == 0
        assert "Recorded payment of 300,000" in capsys.readouterr().out

        snapshot = JsonLedgerFile(ledger_path).load()
        assert len(snapshot.transactions) == 9
        last = snapshot.transactions[-1]
        assert last.card_id == "card-b"
        assert last.amount == Decimal("300000")
        assert last.category.value == "payment"

    def test_unknown_card(self, capsys, ledger_path):
        assert main(["pay", str(ledger_path), "card-z", "1000"]) == 2
        assert "Unknown card" in capsys.readouterr().err
        assert len(JsonLedgerFile(ledger_path).load().transactions) == 8
