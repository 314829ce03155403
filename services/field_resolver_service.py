"""
Field resolver service.

Maps customer-labelled custom fields ("Ship Name", "Sail Date (MM/DD/YYYY)",
"Actual Port 3", ...) to the booking fields the port resolution needs.
Labels vary between product templates, so lookup is by case-insensitive
substring and the first matching field wins.
"""

from typing import Optional, Sequence
import re
import structlog

from models.line_item import LineItemProperty, ResolvedFields
from utils.date_utils import to_iso_date

logger = structlog.get_logger(__name__)


# Canonical field -> accepted label substrings, tried in order
FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    "cruise_line": ("cruise line", "cruiseline"),
    "ship_name": ("ship", "ships"),
    "sail_date": ("sail date", "sailing date", "departure date"),
    "ports_changed": ("ports changed", "port changed", "changed ports"),
}

OVERRIDE_PORT_LABEL = "actual port"

# Ordinal for "Actual Port" labels without a number
UNNUMBERED_PORT_ORDINAL = 9999

TRUTHY_VALUES = {"yes", "y", "true", "1", "on", "checked"}

# Fewest override ports that replace the scrape
MIN_OVERRIDE_PORTS = 2

_DIGITS = re.compile(r"\d+")


class FieldResolver:
    """
    Custom field lookup.

    Stateless; one shared instance via get_field_resolver().
    """

    def find_field(
        self,
        fields: Sequence[LineItemProperty],
        substring: str
    ) -> Optional[str]:
        """
        Value of the first field whose name contains substring.

        Later fields with a matching name are shadowed.

        Args:
            fields: Extracted line item properties
            substring: Label fragment, compared case-insensitively

        Returns:
            Field value, or None if nothing matches
        """
        needle = substring.lower()
        for prop in fields:
            if needle in prop.name.lower():
                return prop.value
        return None

    def find_canonical(
        self,
        fields: Sequence[LineItemProperty],
        canonical: str
    ) -> Optional[str]:
        """First hit across a canonical field's synonyms, in synonym order."""
        for substring in FIELD_SYNONYMS[canonical]:
            value = self.find_field(fields, substring)
            if value is not None:
                return value
        return None

    def is_ports_changed(self, fields: Sequence[LineItemProperty]) -> bool:
        """True if any ports-changed synonym field holds a truthy value."""
        for substring in FIELD_SYNONYMS["ports_changed"]:
            value = self.find_field(fields, substring)
            if value is not None and value.strip().lower() in TRUTHY_VALUES:
                return True
        return False

    def collect_override_ports(
        self,
        fields: Sequence[LineItemProperty]
    ) -> list[str]:
        """
        Customer-entered ports ("Actual Port 1", "Actual Port 2", ...).

        Ordered by the first number in each label; labels without a
        number sort last. Equal ordinals keep their original order.

        Args:
            fields: Extracted line item properties

        Returns:
            Trimmed port names in itinerary order
        """
        numbered = []
        for prop in fields:
            if OVERRIDE_PORT_LABEL not in prop.name.lower():
                continue

            value = prop.value.strip()
            if not value:
                continue

            digits = _DIGITS.search(prop.name)
            ordinal = int(digits.group()) if digits else UNNUMBERED_PORT_ORDINAL
            numbered.append((ordinal, value))

        # sorted() is stable
        numbered = sorted(numbered, key=lambda pair: pair[0])
        return [value for _, value in numbered]

    def resolve(self, fields: Sequence[LineItemProperty]) -> ResolvedFields:
        """
        Resolve all booking fields at once.

        Args:
            fields: Extracted line item properties

        Returns:
            ResolvedFields with the sail date normalized to ISO
        """
        raw_sail_date = self.find_canonical(fields, "sail_date")
        sail_date = to_iso_date(raw_sail_date) if raw_sail_date is not None else None

        resolved = ResolvedFields(
            cruise_line=self.find_canonical(fields, "cruise_line"),
            ship_name=self.find_canonical(fields, "ship_name"),
            sail_date=sail_date,
            raw_sail_date=raw_sail_date,
            ports_changed=self.is_ports_changed(fields),
            override_ports=tuple(self.collect_override_ports(fields)),
        )

        logger.debug(
            "fields_resolved",
            cruise_line=resolved.cruise_line,
            ship_name=resolved.ship_name,
            sail_date=resolved.sail_date,
            ports_changed=resolved.ports_changed,
            override_ports=len(resolved.override_ports)
        )

        return resolved

    def wants_override(self, resolved: ResolvedFields) -> bool:
        """Customer flagged changed ports and supplied enough of them."""
        return (
            resolved.ports_changed
            and len(resolved.override_ports) >= MIN_OVERRIDE_PORTS
        )


_field_resolver: Optional[FieldResolver] = None


def get_field_resolver() -> FieldResolver:
    """Get or create FieldResolver instance."""
    global _field_resolver
    if _field_resolver is None:
        _field_resolver = FieldResolver()
    return _field_resolver
