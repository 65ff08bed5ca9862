"""
Errors raised by the ledger when a record breaks one of its rules.

Every error names the client and transaction it was raised for and carries
a machine-readable `code`, so callers can tally and report rejections
without parsing messages. A rejected record never changes ledger state.
"""

from typing import Optional


class LedgerError(Exception):
    """Base class for all per-record ledger rejections."""

    code: str = "LEDGER_ERROR"
    reason: str = "ledger error"

    def __init__(self, client_id: int, transaction_id: Optional[int] = None):
        self.client_id = client_id
        self.transaction_id = transaction_id
        super().__init__(f"{self.reason} (client={client_id}, tx={transaction_id})")


class AccountNotFound(LedgerError):
    code = "ACCOUNT_NOT_FOUND"
    reason = "account not found"


class AccountLocked(LedgerError):
    code = "ACCOUNT_LOCKED"
    reason = "account is locked"


class TransactionNotFound(LedgerError):
    """No recorded transaction with this id belongs to the client."""

    code = "TRANSACTION_NOT_FOUND"
    reason = "transaction not found"


class TransactionAlreadyExists(LedgerError):
    code = "TRANSACTION_ALREADY_EXISTS"
    reason = "transaction already exists"


class InsufficientFunds(LedgerError):
    code = "INSUFFICIENT_FUNDS"
    reason = "insufficient available funds"


class InsufficientHoldFunds(LedgerError):
    code = "INSUFFICIENT_HOLD_FUNDS"
    reason = "insufficient funds to place or release hold"


class InvalidTransactionType(LedgerError):
    """Only deposits can be disputed."""

    code = "INVALID_TRANSACTION_TYPE"
    reason = "invalid transaction type for operation"


class TransactionAlreadyDisputed(LedgerError):
    code = "TRANSACTION_ALREADY_DISPUTED"
    reason = "transaction already disputed"


class TransactionIsNotDisputed(LedgerError):
    code = "TRANSACTION_IS_NOT_DISPUTED"
    reason = "transaction is not disputed"


class InvalidAmount(LedgerError):
    code = "INVALID_AMOUNT"
    reason = "amount must be positive"
