"""
Date utilities for customer-entered sail dates.

Customers type sail dates either as ISO (2025-12-06) or US style
(12/6/2025). The scraper reports cruise dates as "2025 Dec 06".

Neither direction validates the calendar: "13/40/2025" becomes
"2025-13-40", and an out-of-range month displays as "Jan".
"""

import re
from typing import Optional

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
US_DATE_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

MONTH_ABBREVIATIONS = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def to_iso_date(value: Optional[str]) -> str:
    """
    Normalize a sail date to YYYY-MM-DD.

    - "2025-12-06" → "2025-12-06"
    - "12/6/2025" → "2025-12-06"
    - "next tuesday" → "next tuesday" (passed through, trimmed)

    Args:
        value: Date as entered by the customer

    Returns:
        ISO date string, or the trimmed input if the format is unknown
    """
    if value is None:
        return ""

    text = str(value).strip()

    if ISO_DATE_PATTERN.match(text):
        return text

    match = US_DATE_PATTERN.match(text)
    if match:
        month, day, year = match.groups()
        return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

    return text


def to_display_date(iso_date: Optional[str]) -> str:
    """
    Convert YYYY-MM-DD to the scraper's "YYYY Mon DD" format.

    Returns "" unless the input has exactly three dash-separated parts.
    """
    if not iso_date:
        return ""

    parts = str(iso_date).split("-")
    if len(parts) != 3:
        return ""

    year, month, day = parts
    try:
        month_index = int(month) - 1
    except ValueError:
        month_index = -1

    if 0 <= month_index < len(MONTH_ABBREVIATIONS):
        month_name = MONTH_ABBREVIATIONS[month_index]
    else:
        month_name = MONTH_ABBREVIATIONS[0]

    return f"{year} {month_name} {day.zfill(2)}"
