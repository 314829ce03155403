"""
Sailing service.

Picks the scraped sailing record for a ship and date, and turns its
numbered stop fields into an ordered port list.

A scraped record looks like:

    {
        "ship_name": "Wonder of the Seas",
        "cruise_date": "2025 Dec 06",
        "stop_1_text": "Departing from Miami, Florida",
        "stop_2_text": "Cozumel, Mexico",
        ...
    }
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence
import re
import structlog

from exceptions import NoSailingRecordsError, NoPortsExtractedError
from utils.date_utils import to_display_date

logger = structlog.get_logger(__name__)

STOP_KEY_PATTERN = re.compile(r"stop_([0-9]+)_text")
DEPARTING_PREFIX = re.compile(r"^departing from ", re.IGNORECASE)


@dataclass(frozen=True)
class SailingMatch:
    """Selected record and where it sits in the dataset."""
    record: dict[str, Any]
    index: int
    degraded: bool


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


class SailingService:
    """
    Sailing record matching and stop extraction.

    Stateless; one shared instance via get_sailing_service().
    """

    def match(
        self,
        records: Sequence[dict[str, Any]],
        ship_name: Optional[str],
        iso_sail_date: Optional[str]
    ) -> SailingMatch:
        """
        Find the record for a sailing.

        Ship names compare trimmed and case-insensitive; cruise dates
        compare exactly against the "YYYY Mon DD" form of the sail date.
        With no match the first record is used and the match is flagged
        degraded.

        Args:
            records: Scraped dataset items
            ship_name: Ship name from the order
            iso_sail_date: Sail date as YYYY-MM-DD

        Returns:
            SailingMatch

        Raises:
            NoSailingRecordsError: If records is empty
        """
        if not records:
            raise NoSailingRecordsError()

        target_ship = _text(ship_name).lower()
        target_date = to_display_date(iso_sail_date)

        for index, record in enumerate(records):
            if not isinstance(record, dict):
                continue
            if (
                _text(record.get("ship_name")).lower() == target_ship
                and _text(record.get("cruise_date")) == target_date
            ):
                logger.info(
                    "sailing_matched",
                    ship_name=ship_name,
                    cruise_date=target_date,
                    index=index
                )
                return SailingMatch(record=record, index=index, degraded=False)

        first = records[0] if isinstance(records[0], dict) else {}
        logger.warning(
            "sailing_match_degraded",
            ship_name=ship_name,
            cruise_date=target_date,
            fallback_ship=first.get("ship_name"),
            fallback_date=first.get("cruise_date"),
            records=len(records)
        )
        return SailingMatch(record=first, index=0, degraded=True)

    def extract_ports(self, record: dict[str, Any]) -> list[str]:
        """
        Ordered ports from a record's stop_<n>_text fields.

        Stops sort by n numerically (stop_10 after stop_9). Blank stops
        are dropped and a leading "Departing from " is removed.

        Args:
            record: Sailing record

        Returns:
            Port names in itinerary order

        Raises:
            NoPortsExtractedError: If no stop yields a port
        """
        stops = []
        for key in record:
            match = STOP_KEY_PATTERN.fullmatch(key)
            if match:
                stops.append((int(match.group(1)), key))

        ports = []
        for _, key in sorted(stops):
            text = _text(record[key])
            if not text:
                continue
            if DEPARTING_PREFIX.match(text):
                text = DEPARTING_PREFIX.sub("", text, count=1).strip()
            if text:
                ports.append(text)

        if not ports:
            raise NoPortsExtractedError(record_keys=list(record.keys()))

        return ports


_sailing_service: Optional[SailingService] = None


def get_sailing_service() -> SailingService:
    """Get or create SailingService instance."""
    global _sailing_service
    if _sailing_service is None:
        _sailing_service = SailingService()
    return _sailing_service
