"""Sale and sale item models."""
import enum
from datetime import datetime
from typing import List
from pydantic import BaseModel, Field


class PaymentMethod(str, enum.Enum):
    """Payment method recorded on a sale (nothing is settled)."""
    CASH = 'cash'
    CARD = 'card'
    PIX = 'pix'  # instant transfer


def normalize_payment_method(value) -> PaymentMethod:
    """
    Normalize a payment method given as enum or string.

    Raises:
        ValueError: If value is not a known method
    """
    if isinstance(value, PaymentMethod):
        return value
    if isinstance(value, str):
        normalized = value.lower().strip()
        if normalized in ('instant-transfer', 'instant_transfer'):
            return PaymentMethod.PIX
        return PaymentMethod(normalized)
    raise ValueError(f"Invalid payment method: {value!r}")


class SaleItem(BaseModel):
    """Sale line. Unit price is a snapshot taken when the sale was made."""

    id: int
    product_id: int
    qty: int = Field(..., gt=0)
    unit_price_cents: int
    subtotal_cents: int


class Sale(BaseModel):
    """Confirmed sale. Immutable once recorded."""

    id: int
    cashier_id: int = 0
    total_cents: int
    discount_cents: int = 0
    paid_cents: int
    payment_method: PaymentMethod
    issued_at: datetime
    receipt_code: str
    items: List[SaleItem] = Field(default_factory=list)

    def __repr__(self):
        return f"<Sale(id={self.id}, total_cents={self.total_cents}, receipt='{self.receipt_code}')>"
