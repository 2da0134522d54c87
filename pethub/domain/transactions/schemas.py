"""Transaction domain schemas - all money fields are integer cents"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LineItemInput(BaseModel):
    type: str  # service, product
    reference_id: Optional[str] = None
    name: str
    quantity: int = 1
    unit_price: int = 0
    line_total: int = 0


class TransactionCreate(BaseModel):
    customer_id: Optional[str] = None
    appointment_id: Optional[str] = None
    line_items: list[LineItemInput] = Field(default_factory=list)
    discount_amount: int = 0
    discount_label: Optional[str] = None
    tip_amount: int = 0
    payment_method: str = "cash"
    payment_method_secondary: Optional[str] = None
    amount_tendered: Optional[int] = None
    change_given: Optional[int] = None
    status: Optional[str] = None  # derived from amount_tendered when omitted
    notes: Optional[str] = None


class TransactionUpdate(BaseModel):
    payment_method: Optional[str] = None
    payment_method_secondary: Optional[str] = None
    total: Optional[int] = None
    amount_tendered: Optional[int] = None
    change_given: Optional[int] = None
    notes: Optional[str] = None
    status: Optional[str] = None


class RefundCreate(BaseModel):
    amount: int
    reason: Optional[str] = None
    restock_product_ids: list[str] = Field(default_factory=list)


class TaxSnapshotItem(BaseModel):
    label: str
    rate: float
    amount: int


class LineItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    type: str
    reference_id: Optional[str] = None
    name: str
    quantity: int
    unit_price: int
    line_total: int


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_number: Optional[int] = None
    customer_id: Optional[str] = None
    appointment_id: Optional[str] = None
    staff_id: Optional[str] = None
    status: str
    payment_method: str
    payment_method_secondary: Optional[str] = None
    subtotal: int
    discount_amount: int = 0
    discount_label: Optional[str] = None
    tax_snapshot: Optional[list[TaxSnapshotItem]] = None
    tip_amount: int = 0
    total: int
    amount_tendered: Optional[int] = None
    change_given: Optional[int] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class TransactionDetailResponse(TransactionResponse):
    line_items: list[LineItemResponse] = Field(default_factory=list)


class RefundResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_id: str
    amount: int
    reason: Optional[str] = None
    staff_id: Optional[str] = None
    restock_applied: bool
    created_at: Optional[datetime] = None


class TaxSettingInput(BaseModel):
    label: str
    rate: float  # percent
    enabled: bool = True
    region: Optional[str] = None
    sort_order: int = 0


class TaxSettingResponse(TaxSettingInput):
    model_config = ConfigDict(from_attributes=True)

    id: str


class ReceiptSettingInput(BaseModel):
    header_text: Optional[str] = None
    footer_text: Optional[str] = None
    logo_url: Optional[str] = None


class ReceiptSettingResponse(ReceiptSettingInput):
    model_config = ConfigDict(from_attributes=True)
