"""
Payload parsers module.
"""

from parsers.line_item_parser import (
    extract_line_item_properties,
    FieldShape,
    FIELD_SHAPES,
)

__all__ = [
    "extract_line_item_properties",
    "FieldShape",
    "FIELD_SHAPES",
]
