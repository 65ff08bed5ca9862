import logging
import os
import sys

from csv_reader import read_transactions
from ledger import Ledger
from report import write_accounts

LOG_LEVEL_ENV = "PAYMENTS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"


def configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    if len(argv) != 2:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    configure_logging()

    filepath = argv[1]
    ledger = Ledger()
    ledger.process(read_transactions(filepath))

    write_accounts(ledger.snapshot(), sys.stdout)

    stats = ledger.stats
    print(f"Processed: {stats.processed}, Failed: {stats.failed}", file=sys.stderr)
    for code, count in sorted(stats.failures_by_code.items()):
        print(f"  {code}: {count}", file=sys.stderr)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
