"""
In-memory TopUpStore for local development and tests.

State lives in process memory and is lost on restart. Used whenever no
DATABASE_URL is configured.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Dict, List, Optional

from topup_store.database.base import TopUpStore, Transaction, UserRecord, normalize_amount, normalize_email
from topup_store.error_handler import ConflictError

logger = logging.getLogger(__name__)


class InMemoryTopUpStore(TopUpStore):
    """
    In-memory stand-in for the Postgres-backed store.

    Records are copied on the way in and out.
    """

    def __init__(self) -> None:
        self._users: Dict[str, UserRecord] = {}
        # Insertion order is creation order; listing walks it backwards.
        self._transactions: List[Transaction] = []

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #
    def create_user(self, email: str, password: str) -> UserRecord:
        key = normalize_email(email)
        if key in self._users:
            raise ConflictError()
        user = UserRecord(email=key, password=password)
        self._users[key] = user
        return replace(user)

    def get_user(self, email: str) -> Optional[UserRecord]:
        user = self._users.get(normalize_email(email))
        return replace(user) if user else None

    def update_user_password(self, email: str, password: str) -> Optional[UserRecord]:
        user = self._users.get(normalize_email(email))
        if not user:
            return None
        user.password = password
        return replace(user)

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def create_transaction(self, txn: Transaction) -> Transaction:
        stored = replace(txn, amount=normalize_amount(txn.amount))
        self._transactions.append(stored)
        return replace(stored)

    def list_transactions(self, email: str) -> List[Transaction]:
        key = normalize_email(email)
        return [replace(t) for t in reversed(self._transactions) if t.email == key]

    def get_transaction(self, txn_id: str) -> Optional[Transaction]:
        txn = self._find(txn_id)
        return replace(txn) if txn else None

    def update_transaction_status(self, txn_id: str, status: str) -> Optional[Transaction]:
        txn = self._find(txn_id)
        if not txn:
            return None
        txn.status = status
        return replace(txn)

    def delete_transaction(self, txn_id: str) -> Optional[Transaction]:
        for index, txn in enumerate(self._transactions):
            if txn.id == txn_id:
                return replace(self._transactions.pop(index))
        return None

    def _find(self, txn_id: str) -> Optional[Transaction]:
        return next((t for t in self._transactions if t.id == txn_id), None)
