"""
Account Module

The single in-memory account a processing run operates on, and the
validation that turns a loose account descriptor into one.
"""

from decimal import Decimal
from dataclasses import dataclass, field
from typing import Any, Mapping, Union

from .amounts import parse_amount, format_amount, add_amounts, subtract_amounts


@dataclass(frozen=True)
class StructuralError:
    """Malformed top-level input; no transaction is evaluated"""
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass
class Account:
    """
    Account owned by one processing run

    The balance starts at the initial balance and changes only through
    deposit() and withdraw().
    """
    account_number: str
    account_holder: str
    currency: str
    initial_balance: Decimal
    balance: Decimal = field(init=False)

    def __post_init__(self):
        if not isinstance(self.initial_balance, Decimal):
            self.initial_balance = Decimal(str(self.initial_balance))
        self.balance = self.initial_balance

    def can_withdraw(self, amount: Decimal) -> bool:
        """Check if the current balance covers amount"""
        return amount <= self.balance

    def deposit(self, amount: Decimal) -> Decimal:
        """Credit the account and return the new balance"""
        if amount <= Decimal('0'):
            raise ValueError(f"Deposit amount must be positive: {format_amount(amount)}")
        self.balance = add_amounts(self.balance, amount)
        return self.balance

    def withdraw(self, amount: Decimal) -> Decimal:
        """Debit the account and return the new balance"""
        if amount <= Decimal('0'):
            raise ValueError(f"Withdrawal amount must be positive: {format_amount(amount)}")
        if not self.can_withdraw(amount):
            raise ValueError(
                f"Insufficient balance: required {format_amount(amount)}, "
                f"available {format_amount(self.balance)}"
            )
        self.balance = subtract_amounts(self.balance, amount)
        return self.balance

    def to_dict(self) -> dict:
        return {
            "account_number": self.account_number,
            "account_holder": self.account_holder,
            "currency": self.currency,
            "initial_balance": format_amount(self.initial_balance),
            "balance": format_amount(self.balance),
        }


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def open_account(descriptor: Any) -> Union[Account, StructuralError]:
    """
    Validate an account descriptor and open the run's account

    Checks run in a fixed order and the first failure is returned.

    Args:
        descriptor: Mapping with account_number, account_holder,
            initial_balance and currency

    Returns:
        A new Account, or the StructuralError describing the first problem
    """
    if not isinstance(descriptor, Mapping):
        return StructuralError("Account details must be a valid object")

    if _is_blank(descriptor.get("account_number")):
        return StructuralError("Missing account number")
    if _is_blank(descriptor.get("account_holder")):
        return StructuralError("Missing account holder")
    if descriptor.get("initial_balance") is None:
        return StructuralError("Missing initial balance")
    if _is_blank(descriptor.get("currency")):
        return StructuralError("Missing currency")

    raw_balance = descriptor["initial_balance"]
    initial_balance = parse_amount(raw_balance)
    if initial_balance is None:
        return StructuralError(f"Invalid initial balance: {raw_balance}")

    return Account(
        account_number=str(descriptor["account_number"]),
        account_holder=str(descriptor["account_holder"]),
        currency=str(descriptor["currency"]),
        initial_balance=initial_balance,
    )
