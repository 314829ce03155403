"""
Port resolution service.

Turns an order-paid webhook into the ordered ports of call for the
customer's sailing:

1. Extract the first line item's custom fields
2. Resolve cruise line, ship, sail date, and override ports
3. Use the customer's override ports if they flagged a change and gave
   at least two, otherwise scrape the itinerary with Apify

Scrape failures never raise out of resolve(); they come back as a
ResolutionFailure so the webhook can still be acknowledged.
"""

from typing import Any, Optional, Union
import structlog

from config import settings, ApifyConfig
from exceptions import MissingCredentialsError, PortResolutionError
from integrations.apify import ApifyClient
from models.line_item import LineItemProperty, ResolvedFields
from models.resolution import (
    MatchMetadata,
    ResolutionFailure,
    ResolutionResult,
    ResolutionSource,
)
from parsers.line_item_parser import extract_line_item_properties
from services.field_resolver_service import FieldResolver, get_field_resolver
from services.sailing_service import SailingService, get_sailing_service

logger = structlog.get_logger(__name__)

Resolution = Union[ResolutionResult, ResolutionFailure]


def first_line_item(webhook_body: Any) -> dict:
    """First line item of the order, or {} if there is none."""
    if not isinstance(webhook_body, dict):
        return {}
    line_items = webhook_body.get("line_items")
    if not isinstance(line_items, list) or not line_items:
        return {}
    item = line_items[0]
    return item if isinstance(item, dict) else {}


class PortResolutionService:
    """
    Override-vs-scrape port resolution.

    Handles one webhook per call; holds no per-request state.
    """

    def __init__(
        self,
        scrape_client: Optional[ApifyClient] = None,
        missing_credentials: Optional[list[str]] = None,
        field_resolver: Optional[FieldResolver] = None,
        sailing_service: Optional[SailingService] = None
    ):
        self.scrape_client = scrape_client
        self.missing_credentials = missing_credentials or []
        self.field_resolver = field_resolver or get_field_resolver()
        self.sailing_service = sailing_service or get_sailing_service()

    def extract_fields(self, webhook_body: Any) -> list[LineItemProperty]:
        """Custom fields of the order's first line item."""
        return extract_line_item_properties(first_line_item(webhook_body))

    async def resolve(self, webhook_body: Any) -> Resolution:
        """
        Resolve ports for an order-paid webhook body.

        Args:
            webhook_body: Parsed webhook JSON

        Returns:
            ResolutionResult, or ResolutionFailure if scraping failed
        """
        return await self.resolve_fields(self.extract_fields(webhook_body))

    async def resolve_fields(self, fields: list[LineItemProperty]) -> Resolution:
        """
        Resolve ports from already-extracted custom fields.

        Args:
            fields: Line item properties

        Returns:
            ResolutionResult, or ResolutionFailure if scraping failed
        """
        resolved = self.field_resolver.resolve(fields)

        if self.field_resolver.wants_override(resolved):
            logger.info(
                "ports_resolved",
                source=ResolutionSource.CUSTOMER_OVERRIDE.value,
                ports=len(resolved.override_ports)
            )
            return ResolutionResult(
                source=ResolutionSource.CUSTOMER_OVERRIDE,
                ports=resolved.override_ports,
            )

        try:
            return await self._scrape_ports(resolved)
        except PortResolutionError as e:
            return self._failure(resolved, e.code, e.message, e.details)
        except Exception as e:
            logger.error(
                "port_resolution_crashed",
                error=str(e),
                error_type=type(e).__name__
            )
            return self._failure(
                resolved,
                "UNEXPECTED_ERROR",
                str(e),
                {"error_type": type(e).__name__}
            )

    async def _scrape_ports(self, resolved: ResolvedFields) -> ResolutionResult:
        if self.scrape_client is None:
            missing = self.missing_credentials or ["apify_token", "apify_task_id"]
            raise MissingCredentialsError(missing)

        scrape = await self.scrape_client.run(
            cruise_line=resolved.cruise_line,
            ship_name=resolved.ship_name,
            iso_sail_date=resolved.sail_date,
        )

        sailing = self.sailing_service.match(
            scrape.dataset,
            resolved.ship_name,
            resolved.sail_date
        )
        ports = self.sailing_service.extract_ports(sailing.record)

        match = MatchMetadata(
            ship_name=sailing.record.get("ship_name"),
            cruise_date=sailing.record.get("cruise_date"),
            record_index=sailing.index,
            degraded=sailing.degraded,
            dataset_id=scrape.dataset_id,
            run_id=scrape.run_id,
        )

        logger.info(
            "ports_resolved",
            source=ResolutionSource.APIFY_SCRAPE.value,
            ports=len(ports),
            degraded=sailing.degraded
        )
        return ResolutionResult(
            source=ResolutionSource.APIFY_SCRAPE,
            ports=tuple(ports),
            match=match,
        )

    def _failure(
        self,
        resolved: ResolvedFields,
        code: str,
        message: str,
        details: dict
    ) -> ResolutionFailure:
        inputs = resolved.to_dict()
        logger.warning(
            "port_resolution_failed",
            code=code,
            error=message,
            ship_name=resolved.ship_name,
            sail_date=resolved.sail_date
        )
        return ResolutionFailure(
            error_code=code,
            message=message,
            details=details,
            inputs=inputs,
        )


def build_port_resolution_service(
    config: Optional[ApifyConfig] = None
) -> PortResolutionService:
    """
    Wire the service from configuration.

    Missing Apify credentials do not stop the app: the override path
    still works and scrape requests are recorded as failures.
    """
    config = config or ApifyConfig.from_settings(settings)
    try:
        client = ApifyClient(config)
    except MissingCredentialsError as e:
        logger.warning("apify_not_configured", missing=e.details["missing"])
        return PortResolutionService(missing_credentials=e.details["missing"])
    return PortResolutionService(scrape_client=client)


_port_resolution_service: Optional[PortResolutionService] = None


def get_port_resolution_service() -> PortResolutionService:
    """Get or create PortResolutionService instance."""
    global _port_resolution_service
    if _port_resolution_service is None:
        _port_resolution_service = build_port_resolution_service()
    return _port_resolution_service
