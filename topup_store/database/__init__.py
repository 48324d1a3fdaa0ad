"""
Persistence for users and transactions.

- memory.InMemoryTopUpStore: default, and the test double
- postgres.PostgresTopUpStore: SQLAlchemy, used when DATABASE_URL is set
"""

from .base import PaymentMethod, TopUpStore, Transaction, UserRecord, normalize_email

__all__ = ["PaymentMethod", "TopUpStore", "Transaction", "UserRecord", "normalize_email"]
