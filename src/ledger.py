import logging
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional

from errors import LedgerError
from models import AccountSnapshot, ProcessingStats, Transaction, TransactionRecord
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RejectedRecord:
    record: TransactionRecord
    error: LedgerError


class Ledger:
    """
    Applies transaction records in arrival order and owns the resulting
    account balances and transaction history.

    Processing is single-threaded. A record that breaks a rule is rejected
    on its own; the rest of the run carries on.
    """

    def __init__(self):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._stats = ProcessingStats()

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def get_or_create_account(self, client_id: int) -> AccountSnapshot:
        return AccountSnapshot.from_account(self._state.get_or_create_account(client_id))

    def find_account(self, client_id: int) -> Optional[AccountSnapshot]:
        """Read-only view of an account; balances change only through apply."""
        account = self._state.find_account(client_id)
        if account is None:
            return None
        return AccountSnapshot.from_account(account)

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Detached copy of a recorded transaction."""
        transaction = self._state.get_transaction(transaction_id)
        if transaction is None:
            return None
        return replace(transaction)

    def apply(self, record: TransactionRecord) -> None:
        """Apply one record, raising LedgerError if it is rejected."""
        try:
            self._processor.process_transaction(record)
        except LedgerError as e:
            self._stats.record_failure(e.code)
            raise
        self._stats.record_success()

    def process(self, records: Iterable[TransactionRecord]) -> List[RejectedRecord]:
        """Apply records in order, collecting rejections instead of stopping."""
        logger.info("Starting processing")

        rejected = []
        for record in records:
            try:
                self.apply(record)
            except LedgerError as e:
                logger.warning(f"Rejected {record}: {e}")
                rejected.append(RejectedRecord(record, e))

        logger.info(f"Processing complete: {self._stats.processed} applied, {self._stats.failed} rejected")
        return rejected

    def snapshot(self) -> List[AccountSnapshot]:
        """Every account, ordered by client id."""
        return [AccountSnapshot.from_account(account) for account in self._state.get_sorted_accounts()]
