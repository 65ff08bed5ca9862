from collections import Counter
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal
from enum import Enum
from typing import NamedTuple, Union

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

# Balance arithmetic is exact: sums never round, however many digits they need.
LEDGER_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class TransactionStatus(Enum):
    COMPLETED = "completed"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGEBACKED = "chargebacked"


def _check_ids(client_id: int, transaction_id: int) -> None:
    if not 0 <= client_id <= MAX_CLIENT_ID:
        raise ValueError(f"client id out of range: {client_id}")
    if not 0 <= transaction_id <= MAX_TRANSACTION_ID:
        raise ValueError(f"transaction id out of range: {transaction_id}")


def _check_amount(amount) -> None:
    if not isinstance(amount, Decimal):
        raise TypeError(f"amount must be a Decimal, got {type(amount).__name__}")
    if not amount.is_finite():
        raise ValueError(f"amount is not a finite number: {amount}")


@dataclass(frozen=True)
class Deposit:
    client_id: int
    transaction_id: int
    amount: Decimal

    def __post_init__(self):
        _check_ids(self.client_id, self.transaction_id)
        _check_amount(self.amount)


@dataclass(frozen=True)
class Withdrawal:
    client_id: int
    transaction_id: int
    amount: Decimal

    def __post_init__(self):
        _check_ids(self.client_id, self.transaction_id)
        _check_amount(self.amount)


@dataclass(frozen=True)
class Dispute:
    client_id: int
    transaction_id: int

    def __post_init__(self):
        _check_ids(self.client_id, self.transaction_id)


@dataclass(frozen=True)
class Resolve:
    client_id: int
    transaction_id: int

    def __post_init__(self):
        _check_ids(self.client_id, self.transaction_id)


@dataclass(frozen=True)
class Chargeback:
    client_id: int
    transaction_id: int

    def __post_init__(self):
        _check_ids(self.client_id, self.transaction_id)


TransactionRecord = Union[Deposit, Withdrawal, Dispute, Resolve, Chargeback]


@dataclass
class Transaction:
    """A deposit or withdrawal kept in history so later disputes can reference it."""

    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Decimal
    status: TransactionStatus = TransactionStatus.COMPLETED

    def __repr__(self) -> str:
        return (
            f"Transaction({self.transaction_type.value}, client={self.client_id}, "
            f"tx={self.transaction_id}, amount={self.amount}, status={self.status.value})"
        )


@dataclass
class ClientAccount:
    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False

    @property
    def total(self) -> Decimal:
        return LEDGER_CONTEXT.add(self.available, self.held)

    def credit(self, amount: Decimal) -> None:
        self.available = LEDGER_CONTEXT.add(self.available, amount)

    def debit(self, amount: Decimal) -> None:
        self.available = LEDGER_CONTEXT.subtract(self.available, amount)

    def hold(self, amount: Decimal) -> None:
        self.available = LEDGER_CONTEXT.subtract(self.available, amount)
        self.held = LEDGER_CONTEXT.add(self.held, amount)

    def release_hold(self, amount: Decimal) -> None:
        self.held = LEDGER_CONTEXT.subtract(self.held, amount)
        self.available = LEDGER_CONTEXT.add(self.available, amount)

    def remove_held(self, amount: Decimal) -> None:
        self.held = LEDGER_CONTEXT.subtract(self.held, amount)

    def lock(self) -> None:
        self.locked = True


class AccountSnapshot(NamedTuple):
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool

    @classmethod
    def from_account(cls, account: ClientAccount) -> "AccountSnapshot":
        return cls(
            client_id=account.client_id,
            available=account.available,
            held=account.held,
            total=account.total,
            locked=account.locked,
        )


class ProcessingStats:
    """Counters for the end-of-run summary."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.failures_by_code: Counter = Counter()

    def record_success(self):
        self.processed += 1

    def record_failure(self, code: str):
        self.failed += 1
        self.failures_by_code[code] += 1
