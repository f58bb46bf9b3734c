from .digits import PlaceValue, get_digit, set_digit
from .format import (
    deg_to_dms,
    deg_to_hms,
    format_duration,
    format_percent,
)

__all__ = [
    "PlaceValue",
    "get_digit",
    "set_digit",
    "deg_to_dms",
    "deg_to_hms",
    "format_duration",
    "format_percent",
]
