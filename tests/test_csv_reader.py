import sys
import os
import csv
from decimal import Decimal

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from csv_reader import parse_csv_row, parse_transactions, read_transactions
from models import Chargeback, Deposit, Dispute, Resolve, Withdrawal


class TestParseCsvRow:
    def test_deposit(self):
        record = parse_csv_row({"type": "deposit", "client": "1", "tx": "2", "amount": "1.5"})
        assert record == Deposit(client_id=1, transaction_id=2, amount=Decimal("1.5"))

    def test_whitespace_and_case_trimmed(self):
        record = parse_csv_row({" type": " Withdrawal ", " client": " 3", " tx": " 4 ", " amount": " 2.0000"})
        assert record == Withdrawal(client_id=3, transaction_id=4, amount=Decimal("2.0000"))

    def test_reference_records_ignore_amount(self):
        assert parse_csv_row({"type": "dispute", "client": "1", "tx": "2", "amount": ""}) == Dispute(1, 2)
        assert parse_csv_row({"type": "resolve", "client": "1", "tx": "2", "amount": None}) == Resolve(1, 2)
        assert parse_csv_row({"type": "chargeback", "client": "1", "tx": "2", "amount": "7"}) == Chargeback(1, 2)

    def test_unknown_type_skipped(self, caplog):
        assert parse_csv_row({"type": "refund", "client": "1", "tx": "2", "amount": "1"}) is None
        assert "Failed to parse row" in caplog.text

    def test_missing_amount_skipped(self):
        assert parse_csv_row({"type": "deposit", "client": "1", "tx": "2", "amount": ""}) is None

    def test_bad_values_skipped(self):
        assert parse_csv_row({"type": "deposit", "client": "x", "tx": "2", "amount": "1"}) is None
        assert parse_csv_row({"type": "deposit", "client": "1", "tx": "2", "amount": "1.2.3"}) is None
        assert parse_csv_row({"type": "deposit", "client": "1", "tx": "2", "amount": "NaN"}) is None
        assert parse_csv_row({"type": "deposit", "client": "1", "tx": "-2", "amount": "1"}) is None

    def test_missing_column_skipped(self):
        assert parse_csv_row({"type": "deposit", "tx": "2", "amount": "1"}) is None


class TestParseTransactions:
    def test_parses_in_order(self):
        lines = [
            "type, client, tx, amount\n",
            "deposit, 1, 1, 1.0\n",
            "dispute, 1, 1\n",
            "withdrawal, 2, 2, 3\n",
        ]
        assert list(parse_transactions(lines)) == [
            Deposit(1, 1, Decimal("1.0")),
            Dispute(1, 1),
            Withdrawal(2, 2, Decimal("3")),
        ]

    def test_is_lazy(self):
        def lines():
            yield "type,client,tx,amount\n"
            yield "deposit,1,1,1\n"
            raise AssertionError("read past first record")

        records = parse_transactions(lines())
        assert next(records) == Deposit(1, 1, Decimal("1"))

    def test_read_transactions_from_file(self, tmp_path):
        csv_file = tmp_path / "input.csv"
        csv_file.write_text("type,client,tx,amount\ndeposit,1,1,5\nbogus\nresolve,1,1,\n")

        assert list(read_transactions(str(csv_file))) == [Deposit(1, 1, Decimal("5")), Resolve(1, 1)]

    def test_undecodable_row_skipped(self, tmp_path, caplog):
        csv_file = tmp_path / "input.csv"
        csv_file.write_bytes(b"type,client,tx,amount\ndeposit,1,1,5\ndeposit,2,2,\xff\xfe\ndeposit,3,3,7\n")

        assert list(read_transactions(str(csv_file))) == [
            Deposit(1, 1, Decimal("5")),
            Deposit(3, 3, Decimal("7")),
        ]
        assert "Failed to parse row" in caplog.text

    def test_oversized_field_skipped(self, caplog):
        lines = [
            "type,client,tx,amount\n",
            "deposit,1,1," + "9" * (csv.field_size_limit() + 1) + "\n",
            "deposit,2,2,3\n",
        ]

        assert list(parse_transactions(lines)) == [Deposit(2, 2, Decimal("3"))]
        assert "Failed to read line" in caplog.text
