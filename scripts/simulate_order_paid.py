#!/usr/bin/env python3
"""
Order-paid webhook simulator.

Posts a sample Shopify orders/paid webhook to a running instance and
prints the newest /debug/webhooks entry.

Usage:
    python scripts/simulate_order_paid.py                         # Scrape path
    python scripts/simulate_order_paid.py --override              # Customer override path
    python scripts/simulate_order_paid.py --ship "Icon of the Seas" --sail-date 1/10/2026
    python scripts/simulate_order_paid.py --ports Miami Nassau "Perfect Day at CocoCay"
    python scripts/simulate_order_paid.py --base-url URL          # Custom API URL
"""

import argparse
import json
import sys
import uuid

try:
    import httpx
except ImportError:
    print("Error: httpx not installed. Run: pip install httpx")
    sys.exit(1)


# ===================
# CONFIGURATION
# ===================

DEFAULT_BASE_URL = "http://localhost:3000"
TIMEOUT = 180.0  # Scrape path waits on Apify

DEFAULT_PORTS = ["Miami, Florida", "Cozumel, Mexico", "Roatan, Honduras"]


def build_payload(
    cruise_line: str,
    ship: str,
    sail_date: str,
    override: bool,
    ports: list[str]
) -> dict:
    """Sample orders/paid body with one map line item."""
    properties = [
        {"name": "Cruise Line", "value": cruise_line},
        {"name": "Ship Name", "value": ship},
        {"name": "Sail Date", "value": sail_date},
        {"name": "Ports Changed?", "value": "Yes" if override else "No"},
    ]
    if override:
        properties += [
            {"name": f"Actual Port {i}", "value": port}
            for i, port in enumerate(ports, start=1)
        ]

    order_number = uuid.uuid4().int % 100000
    return {
        "id": order_number,
        "name": f"#SIM{order_number}",
        "email": "simulator@example.com",
        "financial_status": "paid",
        "total_price": "49.00",
        "line_items": [
            {
                "title": "Custom Cruise Itinerary Map",
                "variant_title": "18x24",
                "quantity": 1,
                "properties": properties,
            }
        ],
    }


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Simulate a Shopify order-paid webhook")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL)
    parser.add_argument("--cruise-line", default="Royal Caribbean")
    parser.add_argument("--ship", default="Wonder of the Seas")
    parser.add_argument("--sail-date", default="12/06/2025")
    parser.add_argument("--override", action="store_true", help="Send customer override ports")
    parser.add_argument("--ports", nargs="+", default=DEFAULT_PORTS)
    args = parser.parse_args()

    payload = build_payload(
        args.cruise_line,
        args.ship,
        args.sail_date,
        args.override,
        args.ports
    )
    base_url = args.base_url.rstrip("/")

    with httpx.Client(timeout=TIMEOUT) as client:
        print(f"POST {base_url}/webhooks/order-paid ({payload['name']})")
        response = client.post(
            f"{base_url}/webhooks/order-paid",
            json=payload,
            headers={
                "X-Shopify-Topic": "orders/paid",
                "X-Shopify-Shop-Domain": "simulator.myshopify.com",
            },
        )
        print(f"[{response.status_code}] {response.text}")

        events = client.get(f"{base_url}/debug/webhooks").json()

    if not events:
        print("[ERROR] No events recorded")
        sys.exit(1)

    latest = events[0]
    print(json.dumps(latest, indent=2))
    sys.exit(0 if latest["status"] == "resolved" else 1)


if __name__ == "__main__":
    main()
