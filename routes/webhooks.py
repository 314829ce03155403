"""
Shopify webhook routes.

POST /webhooks/order-paid always answers 200 "OK", even when port
resolution fails, so Shopify does not retry. Failures are visible only
in the recent-events log at GET /debug/webhooks.
"""

import json
from typing import Any, Optional
import structlog

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response

from models.line_item import LineItemProperty
from models.webhook import (
    CustomizationField,
    ItemSummary,
    OrderSummary,
    WebhookEvent,
)
from services.port_resolution_service import (
    Resolution,
    first_line_item,
    get_port_resolution_service,
)
from services.webhook_log_service import get_recent_events_log

logger = structlog.get_logger(__name__)
router = APIRouter(tags=["Webhooks"])

TOPIC_HEADER = "x-shopify-topic"
SHOP_HEADER = "x-shopify-shop-domain"


def _text(value: Any) -> Optional[str]:
    # Shopify sends "" for absent optional fields
    if value is None or value == "":
        return None
    return str(value)


def _order_summary(body: dict) -> OrderSummary:
    return OrderSummary(
        id=body.get("id") or None,
        name=_text(body.get("name")),
        email=_text(body.get("email")),
        financial_status=_text(body.get("financial_status")),
        total_price=_text(body.get("total_price")),
    )


def _item_summary(item: dict) -> ItemSummary:
    return ItemSummary(
        title=_text(item.get("title")),
        variant_title=_text(item.get("variant_title")),
        quantity=item.get("quantity") or None,
    )


def build_webhook_event(
    body: dict,
    topic: Optional[str],
    shop: Optional[str],
    fields: list[LineItemProperty],
    resolution: Resolution
) -> WebhookEvent:
    """Debug log entry for one delivery."""
    return WebhookEvent(
        topic=topic,
        shop=shop,
        order=_order_summary(body),
        item=_item_summary(first_line_item(body)),
        customization_fields=[
            CustomizationField(name=prop.name, value=prop.value) for prop in fields
        ],
        status="resolved" if resolution.succeeded else "failed",
        resolution=resolution.to_dict() if resolution.succeeded else None,
        error=None if resolution.succeeded else resolution.to_dict(),
    )


async def _read_body(request: Request) -> dict:
    """JSON object body, or {} if the body is missing or not an object."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        logger.warning("webhook_body_not_json", size=len(raw))
        return {}
    return body if isinstance(body, dict) else {}


@router.post("/webhooks/order-paid", response_class=PlainTextResponse)
async def order_paid(request: Request):
    """
    Receive a Shopify orders/paid webhook.

    Resolves the ports of call for the first line item and records the
    outcome for /debug/webhooks.

    Returns:
        200 "OK" in every case
    """
    topic = request.headers.get(TOPIC_HEADER)
    shop = request.headers.get(SHOP_HEADER)

    try:
        body = await _read_body(request)
        service = get_port_resolution_service()
        fields = service.extract_fields(body)
        resolution = await service.resolve_fields(fields)

        event = build_webhook_event(body, topic, shop, fields, resolution)
        get_recent_events_log().record(event)

        logger.info(
            "order_webhook_received",
            order=event.order.name,
            status=event.order.financial_status,
            item=event.item.title,
            fields=len(fields),
            resolution=event.status,
            source=event.resolution["source"] if event.resolution else None,
            ports=len(event.resolution["ports"]) if event.resolution else 0
        )
    except Exception as e:
        logger.error(
            "order_webhook_failed",
            topic=topic,
            shop=shop,
            error=str(e),
            error_type=type(e).__name__
        )
        get_recent_events_log().record(WebhookEvent(
            topic=topic,
            shop=shop,
            status="failed",
            error={
                "code": "WEBHOOK_ERROR",
                "message": str(e),
                "details": {"error_type": type(e).__name__},
            },
        ))

    return PlainTextResponse("OK", status_code=200)


@router.get("/debug/webhooks")
async def debug_webhooks():
    """
    Recent webhook events, most recent first.

    Returns:
        Pretty-printed JSON list
    """
    events = [event.model_dump(mode="json") for event in get_recent_events_log().events()]
    return Response(
        content=json.dumps(events, indent=2),
        media_type="application/json"
    )
