"""
Store contract shared by the in-memory and SQL-backed implementations.

Both backends return the plain records defined here so the services and the
API never depend on which one is wired in `topup_store/api/main.py`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Union


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit_card"
    WALLET = "wallet"
    QR = "qr"


@dataclass
class UserRecord:
    email: str
    password: str


@dataclass
class Transaction:
    id: str
    email: str
    phone: str
    package: str
    payment_method: str
    amount: Union[int, float]
    status: str
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        """Public JSON shape (camelCase keys)."""
        data = asdict(self)
        data["paymentMethod"] = data.pop("payment_method")
        data["createdAt"] = data.pop("created_at")
        return data


def normalize_email(email: Any) -> str:
    return ("" if email is None else str(email)).strip().lower()


def normalize_amount(amount: float) -> Union[int, float]:
    """Whole amounts are kept as ints so 1199 is served as 1199, not 1199.0."""
    amount = float(amount)
    return int(amount) if amount.is_integer() else amount


class TopUpStore(ABC):
    """Users keyed by normalized email, transactions keyed by id."""

    def create_tables(self) -> None:
        return None

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #
    @abstractmethod
    def create_user(self, email: str, password: str) -> UserRecord:
        """Insert a user. Raises ConflictError if the email already exists."""

    @abstractmethod
    def get_user(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    def update_user_password(self, email: str, password: str) -> Optional[UserRecord]:
        ...

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    @abstractmethod
    def create_transaction(self, txn: Transaction) -> Transaction:
        ...

    @abstractmethod
    def list_transactions(self, email: str) -> List[Transaction]:
        """Transactions owned by ``email``, newest first."""

    @abstractmethod
    def get_transaction(self, txn_id: str) -> Optional[Transaction]:
        ...

    @abstractmethod
    def update_transaction_status(self, txn_id: str, status: str) -> Optional[Transaction]:
        ...

    @abstractmethod
    def delete_transaction(self, txn_id: str) -> Optional[Transaction]:
        ...
