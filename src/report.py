import csv
from decimal import Decimal
from typing import Iterable, TextIO

from models import LEDGER_CONTEXT, AccountSnapshot

FOUR_PLACES = Decimal("0.0001")

HEADER = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    return f"{LEDGER_CONTEXT.quantize(value, FOUR_PLACES):f}"


def write_accounts(snapshots: Iterable[AccountSnapshot], stream: TextIO) -> None:
    """Write account snapshots as CSV, one row per client."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for snapshot in snapshots:
        writer.writerow([
            snapshot.client_id,
            format_decimal(snapshot.available),
            format_decimal(snapshot.held),
            format_decimal(snapshot.total),
            str(snapshot.locked).lower(),
        ])
