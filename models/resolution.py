"""
Port resolution result models.

Exactly one ResolutionResult or ResolutionFailure is produced per
webhook delivery.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Optional


class ResolutionSource(str, Enum):
    """Where a port list came from."""
    CUSTOMER_OVERRIDE = "customer_override"
    APIFY_SCRAPE = "apify_scrape"


@dataclass(frozen=True)
class MatchMetadata:
    """Identity of the sailing record the ports were taken from."""
    ship_name: Optional[str]
    cruise_date: Optional[str]
    record_index: int
    degraded: bool = False  # True when no record matched and the first was used
    dataset_id: Optional[str] = None
    run_id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ResolutionResult:
    """Ordered ports of call for one order."""
    source: ResolutionSource
    ports: tuple[str, ...]
    match: Optional[MatchMetadata] = None

    @property
    def succeeded(self) -> bool:
        return True

    def to_dict(self) -> dict:
        return {
            "source": self.source.value,
            "ports": list(self.ports),
            "match": self.match.to_dict() if self.match else None,
        }


@dataclass(frozen=True)
class ResolutionFailure:
    """Scrape path failed; recorded instead of raised."""
    error_code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)
    inputs: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return False

    def to_dict(self) -> dict:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "inputs": self.inputs,
        }
