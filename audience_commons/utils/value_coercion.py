import math
import re
from decimal import Decimal
from typing import Any, Callable, Dict

from audience_commons.constants.app_constants import AppConstants
from audience_commons.constants.app_message import AppMessage
from audience_commons.utils.audience_errors import InvalidInputError
from audience_commons.utils.datetime_utils import parse_instant

# leading numeric part of a string, e.g. "10 visits" -> "10"
_INTEGER_PREFIX = re.compile(r'^\s*([+-]?\d+)')
_FLOAT_PREFIX = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')


def to_instant(field: str, value: Any):
    try:
        return parse_instant(value)
    except ValueError as e:
        raise InvalidInputError(AppMessage.INVALID_DATE.format(value=value, field=field)) from e


def to_int(field: str, value: Any) -> int:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        if not math.isfinite(value):
            raise InvalidInputError(AppMessage.INVALID_INTEGER.format(value=value, field=field))
        return int(value)
    if isinstance(value, str):
        match = _INTEGER_PREFIX.match(value)
        if match:
            return int(match.group(1), 10)
    raise InvalidInputError(AppMessage.INVALID_INTEGER.format(value=value, field=field))


def to_float(field: str, value: Any) -> float:
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        result = float(value)
    elif isinstance(value, str) and _FLOAT_PREFIX.match(value):
        result = float(_FLOAT_PREFIX.match(value).group(1))
    else:
        raise InvalidInputError(AppMessage.INVALID_FLOAT.format(value=value, field=field))

    if not math.isfinite(result):
        raise InvalidInputError(AppMessage.INVALID_FLOAT.format(value=value, field=field))
    return result


# field name -> coercion; any other field keeps the value as supplied
FIELD_COERCERS: Dict[str, Callable[[str, Any], Any]] = {
    AppConstants.LAST_VISIT: to_instant,
    AppConstants.VISITS: to_int,
    AppConstants.TOTAL_SPENDS: to_float,
}


def coerce(field: str, value: Any) -> Any:
    """
    Convert a raw rule value to the semantic type of its field.

        coerce("visits", "10")          -> 10
        coerce("total_spends", "19.99") -> 19.99
        coerce("last_visit", "2024-03-15") -> datetime(2024, 3, 15, tzinfo=UTC)
        coerce("city", "Chennai")       -> "Chennai"

    Raises:
        InvalidInputError: if the value cannot be read as the field's type.
    """
    coercer = FIELD_COERCERS.get(field)
    if coercer is None:
        return value
    return coercer(field, value)
