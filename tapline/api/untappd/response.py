"""Decoders for the nonstandard values found in Untappd APIv4 responses.

Each decoder is a pydantic validator attached to a wire-level type alias, so
that raw models declare e.g. ``created_at: ResponseTime`` and receive a
native ``datetime``. A None timestamp stays None. Decoding failures raise the dedicated errors from
``errors.py``; ``decode`` unwraps them from pydantic's ``ValidationError``.
"""

import re
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ValidationError, model_validator

from .errors import InvalidBooleanError, InvalidTimestampError, InvalidTimeUnitError, ScalarDecodeError

# RFC 1123 with numeric zone, e.g. "Sat, 13 Dec 2014 19:15:38 +0000"
TIME_FORMAT = "%a, %d %b %Y %H:%M:%S %z"
TIME_PATTERN = re.compile(
    r"(Mon|Tue|Wed|Thu|Fri|Sat|Sun), \d{2} (Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec) \d{4} "
    r"\d{2}:\d{2}:\d{2} [+-]\d{4}"
)

# Known measure strings mapped to timedelta keywords
TIME_UNITS = {
    "milliseconds": "milliseconds",
    "seconds": "seconds",
    "minutes": "minutes",
}

M = TypeVar("M", bound=BaseModel)


def parse_time(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not TIME_PATTERN.fullmatch(value):
        raise InvalidTimestampError(value)
    # Day and month names are always English, whatever the process locale
    try:
        parsed = parsedate_to_datetime(value)
    except ValueError as e:
        raise InvalidTimestampError(value) from e
    if parsed.tzinfo is None:
        # "-0000" means UTC with no known local offset
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if not isinstance(value, dict):
        raise ValueError(f"expected a time/measure object, got {value!r}")
    measure = value.get("measure")
    if measure not in TIME_UNITS:
        raise InvalidTimeUnitError(measure)
    amount = value.get("time", 0)
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise ValueError(f"expected a numeric time, got {amount!r}")
    return timedelta(**{TIME_UNITS[measure]: amount})


def parse_bool(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected a 0 or 1 integer, got {value!r}")
    if value == 0:
        return False
    if value == 1:
        return True
    raise InvalidBooleanError(value)


ResponseTime = Annotated[datetime | None, BeforeValidator(parse_time)]
ResponseDuration = Annotated[timedelta, BeforeValidator(parse_duration)]
ResponseBool = Annotated[bool, BeforeValidator(parse_bool)]


class RawModel(BaseModel):
    """Base of the wire-level models. JSON nulls fall back to field defaults."""

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class ResponseObject(RawModel):
    """Object which the API sends as an empty array when it has no content."""

    @model_validator(mode="before")
    @classmethod
    def empty_array_as_object(cls, data: Any) -> Any:
        # [] can't be validated as an object, so check for it first
        if isinstance(data, list) and not data:
            return {}
        return data


class ResponseList(ResponseObject):
    """Counted collection of ``items``, sent as ``[]`` when there are none.

    Subclasses declare the ``items`` field with their raw item type.
    """

    count: int = 0


def decode(model: type[M], data: Any) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        for error in e.errors():
            cause = error.get("ctx", {}).get("error")
            if isinstance(cause, ScalarDecodeError):
                raise cause from e
        raise
