"""Top-up orchestration (gateway -> transaction factory -> store) and
transaction lookup/mutation."""

import logging
from typing import Any, Dict, List, Optional

from topup_store.database.base import PaymentMethod, TopUpStore, Transaction, normalize_email
from topup_store.error_handler import NotFoundError, ValidationError
from topup_store.integrations.clients.mocks.gateway import MockGatewayClient
from topup_store.services.transaction_factory import build_transaction
from topup_store.services.validation import (
    raise_if_errors,
    require_amount,
    require_email,
    require_str,
    validate_enum,
)
from topup_store.utils.timestamps import DEFAULT_TIMEZONE

logger = logging.getLogger(__name__)

PAYMENT_METHODS = [m.value for m in PaymentMethod]


class TopUpService:

    def __init__(self, store: TopUpStore, gateway: MockGatewayClient, timezone: str = DEFAULT_TIMEZONE):
        self.store = store
        self.gateway = gateway
        self.timezone = timezone

    async def topup(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Charge through the gateway and persist the transaction.

        Gateway failures propagate before anything is stored; a successful
        charge stores exactly one SUCCESS transaction.
        """
        errors: Dict[str, str] = {}
        email = require_email(payload.get("email"), "email", errors)
        package = require_str(payload.get("package"), "package", errors)
        phone = require_str(payload.get("phone"), "phone", errors)
        amount = require_amount(payload.get("amount"), "amount", errors)
        payment_method = validate_enum(payload.get("paymentMethod"), "paymentMethod", errors, PAYMENT_METHODS)
        raise_if_errors(errors)

        await self.gateway.authorize(phone)

        txn = build_transaction(
            email=email,
            phone=phone,
            package=package,
            payment_method=payment_method,
            amount=amount,
            timezone=self.timezone,
        )
        txn = self.store.create_transaction(txn)
        logger.info("Top-up %s stored for %s amount=%s", txn.id, email, txn.amount)
        return {"status": "success", "txnId": txn.id, "amount": txn.amount}

    def list_transactions(self, email: Any) -> List[Transaction]:
        email = normalize_email(email)
        if not email:
            raise ValidationError("Email query required")
        return self.store.list_transactions(email)

    def get_transaction(self, txn_id: str) -> Transaction:
        return self._require(self.store.get_transaction(txn_id))

    def update_status(self, txn_id: str, status: Any) -> Transaction:
        # Any non-empty string is accepted; there is no fixed status set.
        if not isinstance(status, str) or not status.strip():
            raise ValidationError()
        txn = self._require(self.store.update_transaction_status(txn_id, status.strip().upper()))
        logger.info("Transaction %s status -> %s", txn_id, txn.status)
        return txn

    def delete_transaction(self, txn_id: str) -> Transaction:
        txn = self._require(self.store.delete_transaction(txn_id))
        logger.info("Transaction %s deleted", txn_id)
        return txn

    @staticmethod
    def _require(txn: Optional[Transaction]) -> Transaction:
        if txn is None:
            raise NotFoundError("Transaction not found")
        return txn
