"""
Line item custom field models.

Created fresh for each webhook delivery and never mutated.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional


@dataclass(frozen=True)
class LineItemProperty:
    """One customer-entered custom field (value is never blank)."""
    name: str
    value: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ResolvedFields:
    """Semantic booking fields resolved from a line item's properties."""
    cruise_line: Optional[str] = None
    ship_name: Optional[str] = None
    sail_date: Optional[str] = None
    raw_sail_date: Optional[str] = None
    ports_changed: bool = False
    override_ports: tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "cruise_line": self.cruise_line,
            "ship_name": self.ship_name,
            "sail_date": self.sail_date,
            "raw_sail_date": self.raw_sail_date,
            "ports_changed": self.ports_changed,
            "override_ports": list(self.override_ports),
        }
