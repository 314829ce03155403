"""
End-to-end webhook flow tests.

Posts order-paid webhooks through the FastAPI app with a fake Apify API
and checks the HTTP contract plus what lands in /debug/webhooks:

- the webhook always answers 200 "OK"
- override orders never reach Apify
- scrape failures are recorded, not surfaced
"""

from tests.factories import WebhookFactory, SailingRecordFactory

HEADERS = {
    "X-Shopify-Topic": "orders/paid",
    "X-Shopify-Shop-Domain": "savvy-cruiser.myshopify.com",
}


def post_order(test_client, body, **kwargs):
    return test_client.post("/webhooks/order-paid", json=body, headers=HEADERS, **kwargs)


def latest_event(test_client) -> dict:
    response = test_client.get("/debug/webhooks")
    assert response.status_code == 200
    return response.json()[0]


class TestOrderPaidOverride:
    """Customer supplied their own ports."""

    def test_override_resolved_without_scrape(self, test_client, fake_apify):
        body = WebhookFactory.create(ports_changed="Yes", ports=["Miami", "Cozumel"])

        response = post_order(test_client, body)

        assert response.status_code == 200
        assert response.text == "OK"
        assert fake_apify.requests == []

        event = latest_event(test_client)
        assert event["status"] == "resolved"
        assert event["resolution"]["source"] == "customer_override"
        assert event["resolution"]["ports"] == ["Miami", "Cozumel"]
        assert event["error"] is None

    def test_event_carries_order_context(self, test_client):
        body = WebhookFactory.create(ports_changed="Yes", ports=["Miami", "Cozumel"])

        post_order(test_client, body)

        event = latest_event(test_client)
        assert event["topic"] == "orders/paid"
        assert event["shop"] == "savvy-cruiser.myshopify.com"
        assert event["order"]["name"] == body["name"]
        assert event["order"]["financial_status"] == "paid"
        assert event["order"]["total_price"] == "49.00"
        assert event["item"]["title"] == "Custom Cruise Itinerary Map"
        assert event["item"]["quantity"] == 1
        assert {"name": "Actual Port 1", "value": "Miami"} in event["customization_fields"]


class TestOrderPaidScrape:
    """Ports come from the Apify scrape."""

    def test_scrape_resolved(self, test_client, fake_apify):
        fake_apify.set_dataset([SailingRecordFactory.create()])

        response = post_order(test_client, WebhookFactory.create())

        assert response.status_code == 200
        event = latest_event(test_client)
        assert event["status"] == "resolved"
        assert event["resolution"]["source"] == "apify_scrape"
        assert event["resolution"]["ports"] == ["Miami, Florida", "Cozumel, Mexico", "Roatan, Honduras"]
        assert event["resolution"]["match"]["degraded"] is False

    def test_empty_dataset_still_ok(self, test_client, fake_apify):
        """Should answer 200 and record EMPTY_DATASET."""
        fake_apify.set_dataset([])

        response = post_order(test_client, WebhookFactory.create())

        assert response.status_code == 200
        assert response.text == "OK"
        event = latest_event(test_client)
        assert event["status"] == "failed"
        assert event["resolution"] is None
        assert event["error"]["code"] == "EMPTY_DATASET"
        assert event["error"]["inputs"]["ship_name"] == "Wonder of the Seas"

    def test_degraded_match_without_stops_recorded(self, test_client, fake_apify):
        fake_apify.set_dataset([{"ship_name": "Other Ship", "cruise_date": "2024 Jan 01"}])

        post_order(test_client, WebhookFactory.create())

        event = latest_event(test_client)
        assert event["error"]["code"] == "NO_PORTS_EXTRACTED"
        assert event["error"]["details"]["record_keys"] == ["ship_name", "cruise_date"]


class TestOrderPaidMalformed:
    """Bodies Shopify should never send still get 200."""

    def test_invalid_json(self, test_client):
        response = test_client.post(
            "/webhooks/order-paid",
            content=b"{not json",
            headers={**HEADERS, "Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.text == "OK"
        event = latest_event(test_client)
        assert event["status"] == "failed"
        assert event["customization_fields"] == []

    def test_no_line_items(self, test_client):
        response = post_order(test_client, {"id": 1, "name": "#1"})

        assert response.status_code == 200
        assert latest_event(test_client)["order"]["name"] == "#1"


class TestDebugWebhooks:
    """GET /debug/webhooks"""

    def test_most_recent_first(self, test_client):
        first = WebhookFactory.create(ports_changed="Yes", ports=["A", "B"])
        second = WebhookFactory.create(ports_changed="Yes", ports=["C", "D"])

        post_order(test_client, first)
        post_order(test_client, second)

        response = test_client.get("/debug/webhooks")
        names = [event["order"]["name"] for event in response.json()]
        assert names == [second["name"], first["name"]]

    def test_pretty_printed(self, test_client):
        post_order(test_client, WebhookFactory.create(ports_changed="Yes", ports=["A", "B"]))

        response = test_client.get("/debug/webhooks")

        assert response.headers["content-type"].startswith("application/json")
        assert response.text.startswith("[\n  {")

    def test_keeps_last_twenty(self, test_client):
        for _ in range(25):
            post_order(test_client, WebhookFactory.create(ports_changed="Yes", ports=["A", "B"]))

        assert len(test_client.get("/debug/webhooks").json()) == 20


class TestHealth:

    def test_root_banner(self, test_client):
        response = test_client.get("/")

        assert response.status_code == 200
        assert "running" in response.text

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert "apify_configured" in response.json()
