import logging

from errors import (
    AccountLocked,
    AccountNotFound,
    InsufficientFunds,
    InsufficientHoldFunds,
    InvalidAmount,
    InvalidTransactionType,
    TransactionAlreadyDisputed,
    TransactionAlreadyExists,
    TransactionIsNotDisputed,
    TransactionNotFound,
)
from models import (
    Chargeback,
    ClientAccount,
    Deposit,
    Dispute,
    Resolve,
    Transaction,
    TransactionRecord,
    TransactionStatus,
    TransactionType,
    Withdrawal,
)
from state_manager import StateManager

logger = logging.getLogger(__name__)


class TransactionProcessor:
    """
    Applies transaction records against state.

    Every handler runs all of its checks before touching an account, so a
    record either applies completely or raises a LedgerError and leaves
    state exactly as it was.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(self, record: TransactionRecord) -> None:
        """
        Apply a single record.

        Raises:
            LedgerError: the record broke a rule; nothing was changed.
        """
        account = self._state.find_account(record.client_id)
        if account is not None and account.locked:
            raise AccountLocked(record.client_id, record.transaction_id)

        match record:
            case Deposit():
                self._handle_deposit(record)
            case Withdrawal():
                self._handle_withdrawal(record)
            case Dispute():
                self._handle_dispute(record)
            case Resolve():
                self._handle_resolve(record)
            case Chargeback():
                self._handle_chargeback(record)
            case _:
                raise TypeError(f"Unsupported transaction record: {record!r}")

    def _handle_deposit(self, deposit: Deposit) -> None:
        self._check_amount(deposit)
        self._check_unused(deposit)

        account = self._state.get_or_create_account(deposit.client_id)
        account.credit(deposit.amount)
        self._record(TransactionType.DEPOSIT, deposit)

    def _handle_withdrawal(self, withdrawal: Withdrawal) -> None:
        self._check_amount(withdrawal)
        account = self._require_account(withdrawal)
        self._check_unused(withdrawal)

        if account.available < withdrawal.amount:
            raise InsufficientFunds(withdrawal.client_id, withdrawal.transaction_id)

        account.debit(withdrawal.amount)
        self._record(TransactionType.WITHDRAWAL, withdrawal)

    def _handle_dispute(self, dispute: Dispute) -> None:
        original = self._find_original(dispute)
        account = self._require_account(dispute)

        # Only deposits can be disputed; withdrawn funds have already left the account
        if original.transaction_type is not TransactionType.DEPOSIT:
            raise InvalidTransactionType(dispute.client_id, dispute.transaction_id)

        if original.status is not TransactionStatus.COMPLETED:
            raise TransactionAlreadyDisputed(dispute.client_id, dispute.transaction_id)

        if account.available < original.amount:
            raise InsufficientHoldFunds(dispute.client_id, dispute.transaction_id)

        account.hold(original.amount)
        original.status = TransactionStatus.DISPUTED

    def _handle_resolve(self, resolve: Resolve) -> None:
        original, account = self._find_disputed(resolve)

        account.release_hold(original.amount)
        original.status = TransactionStatus.RESOLVED

    def _handle_chargeback(self, chargeback: Chargeback) -> None:
        original, account = self._find_disputed(chargeback)

        account.remove_held(original.amount)
        account.lock()
        original.status = TransactionStatus.CHARGEBACKED
        logger.info(f"Account {account.client_id} locked after chargeback of tx {original.transaction_id}")

    def _check_amount(self, record) -> None:
        if record.amount <= 0:
            raise InvalidAmount(record.client_id, record.transaction_id)

    def _check_unused(self, record) -> None:
        if self._state.has_transaction(record.transaction_id):
            raise TransactionAlreadyExists(record.client_id, record.transaction_id)

    def _require_account(self, record) -> ClientAccount:
        account = self._state.find_account(record.client_id)
        if account is None:
            raise AccountNotFound(record.client_id, record.transaction_id)
        return account

    def _find_original(self, record) -> Transaction:
        original = self._state.get_transaction(record.transaction_id)
        # A transaction owned by another client is reported as missing, never applied across accounts.
        if original is None or original.client_id != record.client_id:
            raise TransactionNotFound(record.client_id, record.transaction_id)
        return original

    def _find_disputed(self, record):
        """Checks shared by resolve and chargeback."""
        original = self._find_original(record)
        account = self._require_account(record)

        if original.status is not TransactionStatus.DISPUTED:
            raise TransactionIsNotDisputed(record.client_id, record.transaction_id)

        if account.held < original.amount:
            raise InsufficientHoldFunds(record.client_id, record.transaction_id)

        return original, account

    def _record(self, transaction_type: TransactionType, record) -> None:
        self._state.store_transaction(
            Transaction(
                transaction_type=transaction_type,
                client_id=record.client_id,
                transaction_id=record.transaction_id,
                amount=record.amount,
            )
        )
