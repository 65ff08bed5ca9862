import csv
import logging
from decimal import Decimal, InvalidOperation
from typing import Dict, Iterable, Iterator, Optional

from models import Chargeback, Deposit, Dispute, Resolve, TransactionRecord, Withdrawal

logger = logging.getLogger(__name__)

AMOUNT_RECORDS = {
    "deposit": Deposit,
    "withdrawal": Withdrawal,
}

REFERENCE_RECORDS = {
    "dispute": Dispute,
    "resolve": Resolve,
    "chargeback": Chargeback,
}


def read_transactions(filepath: str) -> Iterator[TransactionRecord]:
    """Lazily read records from a CSV file."""
    # Undecodable bytes decode to U+FFFD and the row is skipped like any other bad row.
    with open(filepath, "r", newline="", encoding="utf-8", errors="replace") as f:
        yield from parse_transactions(f)


def parse_transactions(lines: Iterable[str]) -> Iterator[TransactionRecord]:
    """Parse CSV lines (header first), skipping rows that cannot be parsed."""
    reader = csv.DictReader(lines, skipinitialspace=True)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            logger.warning(f"Failed to read line {reader.line_num}: {e}")
            continue

        record = parse_csv_row(row)
        if record is not None:
            yield record


def parse_csv_row(row: Dict[str, Optional[str]]) -> Optional[TransactionRecord]:
    """Parse CSV row into a transaction record."""
    try:
        normalized = {
            k.strip(): (v or "").strip()
            for k, v in row.items()
            if k is not None
        }

        record_type = normalized["type"].lower()
        client_id = int(normalized["client"])
        transaction_id = int(normalized["tx"])

        if record_type in REFERENCE_RECORDS:
            return REFERENCE_RECORDS[record_type](client_id=client_id, transaction_id=transaction_id)

        if record_type not in AMOUNT_RECORDS:
            raise ValueError(f"unknown transaction type {record_type!r}")

        amount_str = normalized.get("amount", "")
        if not amount_str:
            raise ValueError(f"{record_type} requires an amount")

        amount = Decimal(amount_str)

        return AMOUNT_RECORDS[record_type](
            client_id=client_id,
            transaction_id=transaction_id,
            amount=amount,
        )
    except (KeyError, ValueError, InvalidOperation) as e:
        logger.warning(f"Failed to parse row {row}: {e}")
        return None
