"""
Line item custom field parser.

Shopify delivers customer-entered fields (Uploadery / line item
properties) in one of two shapes, depending on the source:

    properties:        [{"name": "Sail Date", "value": "12/06/2025"}, ...]
    customAttributes:  [{"key": "Sail Date", "value": "12/06/2025"}, ...]

Either shape may use the other's name key. Both are flattened into a
single list of LineItemProperty, properties first.
"""

from dataclasses import dataclass
from typing import Any, Optional
import structlog

from models.line_item import LineItemProperty

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FieldShape:
    """One raw custom-field list on a line item and how to read its entries."""
    source: str
    name_keys: tuple[str, str]


PROPERTIES = FieldShape(source="properties", name_keys=("name", "key"))
CUSTOM_ATTRIBUTES = FieldShape(source="customAttributes", name_keys=("key", "name"))

FIELD_SHAPES = (PROPERTIES, CUSTOM_ATTRIBUTES)


def _entry_name(entry: dict, shape: FieldShape) -> Optional[str]:
    """First present name key, as a string."""
    for key in shape.name_keys:
        name = entry.get(key)
        if name is not None:
            return str(name) if name != "" else None
    return None


def _entry_value(entry: dict) -> Optional[str]:
    value = entry.get("value")
    if value is None:
        return None
    text = value if isinstance(value, str) else _stringify(value)
    return text if text.strip() else None


def _stringify(value: Any) -> str:
    # JSON-style text: true/false, and 1.0 -> "1"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _parse_shape(line_item: dict, shape: FieldShape) -> list[LineItemProperty]:
    raw_entries = line_item.get(shape.source)
    if not isinstance(raw_entries, list):
        return []

    props = []
    for entry in raw_entries:
        if not isinstance(entry, dict):
            continue

        name = _entry_name(entry, shape)
        value = _entry_value(entry)
        if not name or value is None:
            continue

        props.append(LineItemProperty(name=name, value=value))

    return props


def extract_line_item_properties(line_item: Any) -> list[LineItemProperty]:
    """
    Flatten a line item's custom fields.

    Entries without a name or with a blank value are skipped. Source
    order is preserved within each shape.

    Args:
        line_item: Raw line item dict from the order payload

    Returns:
        properties entries followed by customAttributes entries
    """
    if not isinstance(line_item, dict):
        return []

    props: list[LineItemProperty] = []
    for shape in FIELD_SHAPES:
        props.extend(_parse_shape(line_item, shape))

    logger.debug("line_item_properties_extracted", count=len(props))
    return props
