"""
Transaction Processing Module

Validates loosely shaped deposit/withdraw requests into strict internal
records and applies them, in input order, to the run's account. Rejections
are ordinary outcomes: each carries the request's 1-based position and a
reason, and processing continues with the next request.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union
from enum import Enum
import uuid

from .amounts import parse_amount, format_amount
from .accounts import Account, StructuralError, open_account
from .config import get_config
from .logging_config import get_logger, log_action


class TransactionType(Enum):
    """Accepted transaction types (matched case-sensitively)"""
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"


_TYPES_BY_VALUE = {t.value: t for t in TransactionType}


@dataclass(frozen=True)
class TransactionRequest:
    """A request that passed validation"""
    transaction_type: TransactionType
    amount: Decimal
    position: int


@dataclass(frozen=True)
class AppliedTransaction:
    """Transaction that mutated the account balance"""
    position: int
    transaction_type: TransactionType
    amount: Decimal
    balance_after: Decimal

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "type": self.transaction_type.value,
            "amount": format_amount(self.amount),
            "balance_after": format_amount(self.balance_after),
        }


@dataclass(frozen=True)
class TransactionRejection:
    """Per-transaction validation or rule failure"""
    position: int
    reason: str
    request: Any = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "position": self.position,
            "reason": self.reason,
            "request": self.request,
        }


@dataclass(frozen=True)
class SystemRejection:
    """Structural failure of the whole run, with no transaction context"""
    message: str
    error: str = "System Error"

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.error, "message": self.message}


Rejection = Union[TransactionRejection, SystemRejection]


@dataclass
class ProcessingResult:
    """Outcome of one processing run"""
    account: Optional[Account]
    applied: List[AppliedTransaction] = field(default_factory=list)
    rejected: List[Rejection] = field(default_factory=list)
    summary: str = ""
    correlation_id: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True unless the run aborted on a structural failure"""
        return self.account is not None

    @property
    def total(self) -> int:
        return len(self.applied) + len(self.rejected)

    @property
    def final_balance(self) -> Optional[Decimal]:
        return self.account.balance if self.account else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "account": self.account.to_dict() if self.account else None,
            "applied": [a.to_dict() for a in self.applied],
            "rejected": [r.to_dict() for r in self.rejected],
            "statistics": {
                "total": self.total,
                "applied": len(self.applied),
                "rejected": len(self.rejected),
            },
            "summary": self.summary,
        }


def validate_transaction(raw: Any, position: int) -> Union[TransactionRequest, TransactionRejection]:
    """
    Validate one raw request into a TransactionRequest

    Checks run in a fixed order and the first failure is returned. The
    balance check is not done here since it depends on the running balance.

    Args:
        raw: Input record, expected to hold "type" and "amount"
        position: 1-based position of the record in the input sequence

    Returns:
        TransactionRequest, or TransactionRejection with the reason
    """
    def reject(reason: str) -> TransactionRejection:
        return TransactionRejection(position=position, reason=reason, request=raw)

    if not isinstance(raw, Mapping):
        return reject("Invalid transaction object")

    raw_type = raw.get("type")
    if raw_type is None or raw_type == "":
        return reject("Missing transaction type")

    transaction_type = _TYPES_BY_VALUE.get(raw_type) if isinstance(raw_type, str) else None
    if transaction_type is None:
        return reject(f"Unknown transaction type: {raw_type}")

    raw_amount = raw.get("amount")
    if raw_amount is None:
        return reject("Missing transaction amount")

    amount = parse_amount(raw_amount)
    if amount is None:
        return reject(f"Invalid amount: {raw_amount}")

    if amount <= Decimal('0'):
        return reject(f"Amount must be positive: {format_amount(amount)}")

    return TransactionRequest(transaction_type=transaction_type, amount=amount, position=position)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


class TransactionProcessor:
    """
    Applies transaction requests to a single account, strictly in order

    Holds no per-run state; each process() call opens its own Account.
    """

    def __init__(self, log_transactions: Optional[bool] = None):
        if log_transactions is None:
            log_transactions = get_config().log_transactions
        self.log_transactions = log_transactions
        self.logger = get_logger("banking_processor.transactions")

    def apply(self, account: Account, raw: Any, position: int,
              correlation_id: Optional[str] = None) -> Union[AppliedTransaction, TransactionRejection]:
        """
        Validate and apply one request against the current balance

        Args:
            account: The run's account, mutated on success
            raw: Raw request record
            position: 1-based position in the input sequence
            correlation_id: Run identifier for log records

        Returns:
            AppliedTransaction or TransactionRejection
        """
        outcome = validate_transaction(raw, position)

        if isinstance(outcome, TransactionRequest):
            if (outcome.transaction_type == TransactionType.WITHDRAW
                    and not account.can_withdraw(outcome.amount)):
                outcome = TransactionRejection(
                    position=position,
                    reason=(
                        f"Insufficient balance: required {format_amount(outcome.amount)}, "
                        f"available {format_amount(account.balance)}"
                    ),
                    request=raw,
                )
            else:
                if outcome.transaction_type == TransactionType.DEPOSIT:
                    balance_after = account.deposit(outcome.amount)
                else:
                    balance_after = account.withdraw(outcome.amount)
                outcome = AppliedTransaction(
                    position=position,
                    transaction_type=outcome.transaction_type,
                    amount=outcome.amount,
                    balance_after=balance_after,
                )

        self._log_outcome(account, outcome, correlation_id)
        return outcome

    def process(self, account_descriptor: Any, transaction_requests: Any) -> ProcessingResult:
        """
        Run a batch of transaction requests against a new account

        Structural problems with the descriptor or the request list abort
        the run before any request is evaluated. Per-request rejections do
        not stop processing.

        Args:
            account_descriptor: Mapping describing the account
            transaction_requests: Ordered list of raw request records

        Returns:
            ProcessingResult with the final account, applied and rejected
            outcomes in input order, and a one-line summary
        """
        correlation_id = str(uuid.uuid4())

        account = open_account(account_descriptor)
        if isinstance(account, StructuralError):
            return self._abort(account, correlation_id)

        if not _is_sequence(transaction_requests):
            return self._abort(StructuralError("Transactions must be a list"), correlation_id)

        log_action(
            self.logger, "info", "Processing run started",
            action="process_transactions",
            resource=f"account:{account.account_number}",
            correlation_id=correlation_id,
            extra={
                "currency": account.currency,
                "initial_balance": format_amount(account.initial_balance),
                "transaction_count": len(transaction_requests),
            }
        )

        result = ProcessingResult(account=account, correlation_id=correlation_id)
        for index, raw in enumerate(transaction_requests):
            outcome = self.apply(account, raw, index + 1, correlation_id)
            if isinstance(outcome, AppliedTransaction):
                result.applied.append(outcome)
            else:
                result.rejected.append(outcome)

        result.summary = f"Completed: {len(result.applied)} applied, {len(result.rejected)} rejected."

        log_action(
            self.logger, "info", result.summary,
            action="process_transactions",
            resource=f"account:{account.account_number}",
            correlation_id=correlation_id,
            extra={
                "applied": len(result.applied),
                "rejected": len(result.rejected),
                "final_balance": format_amount(account.balance),
            }
        )
        return result

    def process_batch(self, payload: Any) -> ProcessingResult:
        """
        Run a combined batch record: account fields plus "transactions"

        Args:
            payload: Mapping holding the account descriptor keys and a
                "transactions" list

        Returns:
            ProcessingResult as for process()
        """
        if not isinstance(payload, Mapping):
            return self._abort(StructuralError("Input must be a valid object"), str(uuid.uuid4()))
        return self.process(payload, payload.get("transactions"))

    def _abort(self, error: StructuralError, correlation_id: str) -> ProcessingResult:
        log_action(
            self.logger, "error", f"Processing aborted: {error.message}",
            action="process_transactions",
            correlation_id=correlation_id,
        )
        return ProcessingResult(
            account=None,
            rejected=[SystemRejection(message=error.message)],
            summary=error.message,
            correlation_id=correlation_id,
        )

    def _log_outcome(self, account: Account, outcome: Union[AppliedTransaction, TransactionRejection],
                     correlation_id: Optional[str]) -> None:
        if not self.log_transactions:
            return

        if isinstance(outcome, AppliedTransaction):
            log_action(
                self.logger, "debug", f"Transaction applied: {outcome.transaction_type.value}",
                action="apply_transaction",
                resource=f"account:{account.account_number}",
                correlation_id=correlation_id,
                extra={
                    "position": outcome.position,
                    "amount": format_amount(outcome.amount),
                    "balance": format_amount(outcome.balance_after),
                }
            )
        else:
            log_action(
                self.logger, "warning", f"Transaction rejected: {outcome.reason}",
                action="reject_transaction",
                resource=f"account:{account.account_number}",
                correlation_id=correlation_id,
                extra={"position": outcome.position}
            )


def process(account_descriptor: Any, transaction_requests: Any) -> ProcessingResult:
    """Run a batch with a default TransactionProcessor"""
    return TransactionProcessor().process(account_descriptor, transaction_requests)


def process_batch(payload: Any) -> ProcessingResult:
    """Run a combined batch record with a default TransactionProcessor"""
    return TransactionProcessor().process_batch(payload)
