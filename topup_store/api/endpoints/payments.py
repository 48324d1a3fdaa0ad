from typing import Any, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from topup_store.api.dependencies import get_topup_service
from topup_store.services.topup_service import TopUpService

api = APIRouter()
payments_api = api


class TopUpRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])
    package: Any = Field(default=None, examples=["5G Max Speed"])
    phone: Any = Field(default=None, examples=["0891234567"])
    amount: Any = Field(default=None, examples=[1199])
    paymentMethod: Any = Field(default=None, examples=["credit_card"])


class UpdateStatusRequest(BaseModel):
    status: Any = Field(default=None, examples=["REFUNDED"])


@api.post("/topup", tags=["Payments"])
async def topup(request: TopUpRequest, service: TopUpService = Depends(get_topup_service)):
    """
    Perform a top-up payment.

    Gateway behavior by phone prefix: 099 fails immediately (500), 088
    succeeds after 5s, anything else succeeds after 1.5s.
    """
    return await service.topup(request.model_dump())


@api.get("/transactions", tags=["Transactions"])
async def list_transactions(
    email: Optional[str] = Query(default=None),
    service: TopUpService = Depends(get_topup_service),
):
    """Transactions for a user, newest first."""
    return [t.to_dict() for t in service.list_transactions(email)]


@api.get("/transactions/{txn_id}", tags=["Transactions"])
async def get_transaction(txn_id: str, service: TopUpService = Depends(get_topup_service)):
    return service.get_transaction(txn_id).to_dict()


@api.put("/transactions/{txn_id}", tags=["Transactions"])
async def update_transaction(
    txn_id: str,
    request: UpdateStatusRequest,
    service: TopUpService = Depends(get_topup_service),
):
    """Update a transaction status. Any non-empty value is stored uppercased."""
    return service.update_status(txn_id, request.status).to_dict()


@api.delete("/transactions/{txn_id}", tags=["Transactions"])
async def delete_transaction(txn_id: str, service: TopUpService = Depends(get_topup_service)):
    return service.delete_transaction(txn_id).to_dict()
