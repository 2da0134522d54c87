"""Transaction router - checkout, refunds, printable receipts and invoices"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ...auth import AuthenticatedUser, get_current_business_id, get_current_user
from ...database import get_db
from .schemas import (
    ReceiptSettingInput,
    ReceiptSettingResponse,
    RefundCreate,
    RefundResponse,
    TaxSettingInput,
    TaxSettingResponse,
    TransactionCreate,
    TransactionDetailResponse,
    TransactionResponse,
    TransactionUpdate,
)
from .service import TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


def get_transaction_service(db: Session = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


# ============================================================================
# SETTINGS
# ============================================================================


@router.get("/tax-settings", response_model=list[TaxSettingResponse])
async def get_tax_settings(
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get_tax_settings(business_id)


@router.put("/tax-settings", response_model=list[TaxSettingResponse])
async def replace_tax_settings(
    rows: list[TaxSettingInput],
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """Replace every tax row of the business; an empty list restores the defaults"""
    return service.replace_tax_settings(business_id, rows)


@router.get("/receipt-settings", response_model=ReceiptSettingResponse)
async def get_receipt_settings(
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get_receipt_settings(business_id)


@router.put("/receipt-settings", response_model=ReceiptSettingResponse)
async def save_receipt_settings(
    data: ReceiptSettingInput,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.save_receipt_settings(business_id, data)


# ============================================================================
# TRANSACTIONS
# ============================================================================


@router.get("", response_model=list[TransactionResponse])
async def get_transactions(
    status: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=500),
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get_transactions(business_id, status, limit)


@router.get("/{transaction_id}", response_model=TransactionDetailResponse)
async def get_transaction(
    transaction_id: str,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get_transaction(transaction_id, business_id)


@router.post("", response_model=TransactionDetailResponse, status_code=201)
async def create_transaction(
    data: TransactionCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.create_transaction(data, business_id, current_user.user_id)


@router.patch("/{transaction_id}", response_model=TransactionResponse)
async def update_transaction(
    transaction_id: str,
    data: TransactionUpdate,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.update_transaction(transaction_id, data, business_id)


@router.post("/{transaction_id}/void", response_model=TransactionResponse)
async def void_transaction(
    transaction_id: str,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.void_transaction(transaction_id, business_id)


@router.post("/{transaction_id}/refunds", response_model=RefundResponse, status_code=201)
async def refund_transaction(
    transaction_id: str,
    data: RefundCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.refund_transaction(transaction_id, data, business_id, current_user.user_id)


@router.get("/{transaction_id}/refunds", response_model=list[RefundResponse])
async def get_refunds(
    transaction_id: str,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    return service.get_refunds(transaction_id, business_id)


@router.get("/{transaction_id}/receipt", response_class=HTMLResponse)
async def get_receipt(
    transaction_id: str,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """80mm thermal receipt, ready for the browser print dialog"""
    return HTMLResponse(service.render_receipt(transaction_id, business_id))


@router.get("/{transaction_id}/invoice", response_class=HTMLResponse)
async def get_invoice(
    transaction_id: str,
    business_id: str = Depends(get_current_business_id),
    service: TransactionService = Depends(get_transaction_service),
):
    """Letter-size invoice"""
    return HTMLResponse(service.render_invoice(transaction_id, business_id))
