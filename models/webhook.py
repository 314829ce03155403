"""
Webhook debug event models.

Entries kept in the recent-events log and served by /debug/webhooks.
"""

from datetime import datetime, timezone
from typing import Any, Literal, Optional
from pydantic import BaseModel, Field

from models.base import BaseSchema


class OrderSummary(BaseSchema):
    """Order fields copied from the order-paid payload."""
    id: Optional[Any] = None
    name: Optional[str] = None
    email: Optional[str] = None
    financial_status: Optional[str] = None
    total_price: Optional[str] = None


class ItemSummary(BaseSchema):
    """First line item's display fields."""
    title: Optional[str] = None
    variant_title: Optional[str] = None
    quantity: Optional[Any] = None


class CustomizationField(BaseModel):
    name: str
    value: str


class WebhookEvent(BaseModel):
    """One processed (or failed) order-paid delivery."""
    at: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    topic: Optional[str] = None
    shop: Optional[str] = None
    order: OrderSummary = Field(default_factory=OrderSummary)
    item: ItemSummary = Field(default_factory=ItemSummary)
    customization_fields: list[CustomizationField] = Field(default_factory=list)
    status: Literal["resolved", "failed"]
    resolution: Optional[dict[str, Any]] = None
    error: Optional[dict[str, Any]] = None
