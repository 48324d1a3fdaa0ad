"""
Postgres-backed TopUpStore, selected when DATABASE_URL is set.
Implements the same interface as topup_store.database.memory.
"""

from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import create_engine, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from topup_store.database.base import TopUpStore, Transaction, UserRecord, normalize_amount, normalize_email
from topup_store.database.models import Base, TransactionRow, User
from topup_store.error_handler import ConflictError, StoreError

logger = logging.getLogger(__name__)


def _normalize_connection_string(s: str) -> str:
    """Strip common mistakes: 'psql \'...\'', extra quotes, whitespace; pick the psycopg driver."""
    s = s.strip()
    if re.match(r"^psql\s+", s, re.IGNORECASE):
        s = re.sub(r"^psql\s+", "", s, flags=re.IGNORECASE).strip()
    if len(s) >= 2 and s[0] == s[-1] and s[0] in ("'", '"'):
        s = s[1:-1].strip()
    if s.startswith("postgres://"):
        s = "postgresql://" + s[len("postgres://"):]
    if s.startswith("postgresql://"):
        s = "postgresql+psycopg://" + s[len("postgresql://"):]
    return s


def _to_user(row: User) -> UserRecord:
    return UserRecord(email=row.email, password=row.password)


def _to_transaction(row: TransactionRow) -> Transaction:
    return Transaction(
        id=row.txn_id,
        email=row.email,
        phone=row.phone,
        package=row.package_name,
        payment_method=row.payment_method,
        amount=normalize_amount(row.amount),
        status=row.status,
        created_at=row.created_at,
    )


class PostgresTopUpStore(TopUpStore):
    """
    SQL data access using SQLAlchemy. Any SQLAlchemy URL works; Postgres is
    the deployment target.
    """

    def __init__(self, connection_string: str, pool_size: int = 5, max_overflow: int = 10) -> None:
        connection_string = _normalize_connection_string(connection_string)
        engine_kwargs = {"pool_pre_ping": True}
        if not connection_string.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
        self.engine = create_engine(connection_string, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, expire_on_commit=False)

    def create_tables(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        s = self.SessionLocal()
        try:
            yield s
            s.commit()
        except IntegrityError:
            s.rollback()
            raise
        except SQLAlchemyError as e:
            s.rollback()
            logger.error("Database operation failed: %s", e, exc_info=True)
            raise StoreError() from e
        except Exception:
            s.rollback()
            raise
        finally:
            s.close()

    # ------------------------------------------------------------------ #
    # Users
    # ------------------------------------------------------------------ #
    def create_user(self, email: str, password: str) -> UserRecord:
        try:
            with self._session() as s:
                u = User(email=normalize_email(email), password=password)
                s.add(u)
                s.flush()
                return _to_user(u)
        except IntegrityError as e:
            raise ConflictError() from e

    def get_user(self, email: str) -> Optional[UserRecord]:
        with self._session() as s:
            u = s.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()
            return _to_user(u) if u else None

    def update_user_password(self, email: str, password: str) -> Optional[UserRecord]:
        with self._session() as s:
            u = s.execute(select(User).where(User.email == normalize_email(email))).scalar_one_or_none()
            if not u:
                return None
            u.password = password
            return _to_user(u)

    # ------------------------------------------------------------------ #
    # Transactions
    # ------------------------------------------------------------------ #
    def create_transaction(self, txn: Transaction) -> Transaction:
        try:
            with self._session() as s:
                row = TransactionRow(
                    txn_id=txn.id,
                    email=txn.email,
                    phone=txn.phone,
                    package_name=txn.package,
                    payment_method=txn.payment_method,
                    amount=txn.amount,
                    status=txn.status,
                    created_at=txn.created_at,
                )
                s.add(row)
                s.flush()
                return _to_transaction(row)
        except IntegrityError as e:
            logger.error("Transaction %s could not be inserted: %s", txn.id, e)
            raise StoreError() from e

    def list_transactions(self, email: str) -> List[Transaction]:
        with self._session() as s:
            stmt = (
                select(TransactionRow)
                .where(TransactionRow.email == normalize_email(email))
                .order_by(TransactionRow.id.desc())
            )
            return [_to_transaction(r) for r in s.execute(stmt).scalars().all()]

    def get_transaction(self, txn_id: str) -> Optional[Transaction]:
        with self._session() as s:
            row = self._find(s, txn_id)
            return _to_transaction(row) if row else None

    def update_transaction_status(self, txn_id: str, status: str) -> Optional[Transaction]:
        with self._session() as s:
            row = self._find(s, txn_id)
            if not row:
                return None
            row.status = status
            return _to_transaction(row)

    def delete_transaction(self, txn_id: str) -> Optional[Transaction]:
        with self._session() as s:
            row = self._find(s, txn_id)
            if not row:
                return None
            deleted = _to_transaction(row)
            s.delete(row)
            return deleted

    @staticmethod
    def _find(s: Session, txn_id: str) -> Optional[TransactionRow]:
        return s.execute(select(TransactionRow).where(TransactionRow.txn_id == txn_id)).scalar_one_or_none()
