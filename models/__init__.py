"""
Models module.

Pydantic schemas for API payloads and frozen dataclasses for the
per-request port resolution values.
"""

from models.base import BaseSchema
from models.line_item import LineItemProperty, ResolvedFields
from models.resolution import (
    ResolutionSource,
    MatchMetadata,
    ResolutionResult,
    ResolutionFailure,
)
from models.webhook import (
    OrderSummary,
    ItemSummary,
    CustomizationField,
    WebhookEvent,
)

__all__ = [
    # Base
    "BaseSchema",

    # Line items
    "LineItemProperty",
    "ResolvedFields",

    # Resolution
    "ResolutionSource",
    "MatchMetadata",
    "ResolutionResult",
    "ResolutionFailure",

    # Webhooks
    "OrderSummary",
    "ItemSummary",
    "CustomizationField",
    "WebhookEvent",
]
