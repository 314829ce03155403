"""
Business logic services.

Each service handles one step of port resolution.
"""

from services.field_resolver_service import FieldResolver, get_field_resolver
from services.sailing_service import SailingService, SailingMatch, get_sailing_service
from services.port_resolution_service import (
    PortResolutionService,
    build_port_resolution_service,
    get_port_resolution_service,
)
from services.webhook_log_service import RecentEventsLog, get_recent_events_log

__all__ = [
    "FieldResolver",
    "get_field_resolver",
    "SailingService",
    "SailingMatch",
    "get_sailing_service",
    "PortResolutionService",
    "build_port_resolution_service",
    "get_port_resolution_service",
    "RecentEventsLog",
    "get_recent_events_log",
]
