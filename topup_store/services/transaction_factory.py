"""Builds transaction records for successful top-ups."""

from __future__ import annotations

import time
from typing import Callable, Optional

from topup_store.database.base import Transaction
from topup_store.utils.timestamps import DEFAULT_TIMEZONE, format_timestamp

TXN_PREFIX = "TXN-"


class TxnIdGenerator:
    """``TXN-<epoch ms>`` ids, strictly increasing within the process."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def __call__(self) -> str:
        value = int(self._clock() * 1000)
        if value <= self._last:
            value = self._last + 1
        self._last = value
        return f"{TXN_PREFIX}{value}"


_default_generator = TxnIdGenerator()


def build_transaction(
    *,
    email: str,
    phone: str,
    package: str,
    payment_method: str,
    amount: float,
    status: str = "SUCCESS",
    timezone: str = DEFAULT_TIMEZONE,
    id_generator: Optional[Callable[[], str]] = None,
) -> Transaction:
    return Transaction(
        id=(id_generator or _default_generator)(),
        email=email,
        phone=phone,
        package=package,
        payment_method=payment_method,
        amount=amount,
        status=status,
        created_at=format_timestamp(tz=timezone),
    )
