"""Product model."""
import enum
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, model_validator


class Category(str, enum.Enum):
    """Product category (pães, bolos, doces, outros)."""
    BREAD = 'bread'
    CAKES = 'cakes'
    SWEETS = 'sweets'
    OTHER = 'other'


class Product(BaseModel):
    """Product on the bakery shelf. Money fields are in centavos."""

    id: int
    name: str
    description: str = ''
    price_cents: int = Field(0, ge=0)
    cost_cents: Optional[int] = None
    # Never negative after a sale, but not clamped here
    quantity: int = 0
    expires_at: Optional[datetime] = None
    category: Category = Category.OTHER
    is_active: bool = True
    image_url: str = ''
    created_at: datetime
    updated_at: datetime

    @model_validator(mode='after')
    def _check_timestamps(self):
        if self.updated_at < self.created_at:
            raise ValueError('updated_at must not be earlier than created_at')
        return self

    def __repr__(self):
        return f"<Product(id={self.id}, name='{self.name}', quantity={self.quantity})>"


class ProductPatch(BaseModel):
    """
    Partial product for upserts.

    Only the fields the caller actually set are merged onto the stored
    record, so setting ``cost_cents=None`` clears the cost while leaving it
    out keeps it.
    """

    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price_cents: Optional[int] = Field(None, ge=0)
    cost_cents: Optional[int] = None
    quantity: Optional[int] = None
    expires_at: Optional[datetime] = None
    category: Optional[Category] = None
    is_active: Optional[bool] = None
    image_url: Optional[str] = None

    def changes(self) -> dict:
        """Fields explicitly set by the caller, id excluded."""
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if name != 'id'
        }
