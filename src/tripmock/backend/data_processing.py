import copy
import json
import logging
from collections.abc import Mapping
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from tripmock.backend.exceptions import MalformedFixtureError
from tripmock.backend.trip import Trip
from tripmock.utils.constants import (
    CURRENCY_SYMBOL,
    FARE_FIELDS,
    FIXTURE_PATH,
    MINOR_UNITS_PER_MAJOR,
    TRIP_COLUMNS,
    TRIP_KEY,
)

logger = logging.getLogger(__name__)


def load_fixture(path=FIXTURE_PATH) -> dict:
    """Reads the trip fixture from disk and returns it as a plain dict."""
    if isinstance(path, str):
        path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedFixtureError("document", f"Could not read fixture {path}: {e}") from e
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedFixtureError("document", f"Fixture {path} is not valid JSON: {e}") from e
    if not isinstance(document, dict):
        raise MalformedFixtureError("document", f"Fixture {path} must contain a JSON object")
    return document


RELATIVE_DATES = {"now", "today"}


def to_posix_ms(value: str) -> int:
    """
    Converts a date string to milliseconds since the epoch.

    The UI deals in POSIX time only, so strings without an offset are read
    as UTC and strings with one are converted to UTC. Relative dates like
    "now" are rejected since they would change on every request.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected a date string, got {type(value).__name__}")
    if value.strip().lower() in RELATIVE_DATES:
        raise ValueError(f"'{value}' is a relative date")
    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"'{value}' is not a date")
    if timestamp.tzinfo is None:
        timestamp = timestamp.tz_localize("UTC")
    else:
        timestamp = timestamp.tz_convert("UTC")
    # stay in milliseconds, nanoseconds overflow outside 1677-2262
    return timestamp.as_unit("ms").value


def format_fare(units: int, symbol: str = CURRENCY_SYMBOL) -> str:
    """
    Renders an amount in minor currency units as a fixed two decimal string,
    e.g. 6500 -> "$65.00". Money never crosses the wire as a JSON number.
    """
    # bool is an int subclass but never a fare
    if isinstance(units, bool) or not isinstance(units, int):
        raise TypeError(f"expected integer minor units, got {type(units).__name__}")
    major, minor = divmod(abs(units), MINOR_UNITS_PER_MAJOR)
    sign = "-" if units < 0 else ""
    return f"{symbol}{sign}{major}.{minor:02d}"


def get_updated_json(document: Mapping, fare_fields=FARE_FIELDS) -> dict:
    """
    Adds the POSIX arrival time and replaces the fares with currency strings.

    Returns a new document; the input is never modified and shares nothing
    mutable with the result. Only estimated_fare_min is required, the other
    fare fields are formatted when the fixture has them.
    """
    if not isinstance(document, Mapping):
        raise MalformedFixtureError("document", "Fixture must be a JSON object")
    raw_trip = document.get(TRIP_KEY)
    if not isinstance(raw_trip, Mapping):
        raise MalformedFixtureError(TRIP_KEY, f"Fixture has no '{TRIP_KEY}' object")
    try:
        trip = Trip.model_validate(dict(raw_trip))
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else TRIP_KEY
        raise MalformedFixtureError(field, f"Invalid {field}: {error['msg']}") from e

    arrival_field = TRIP_COLUMNS["ARRIVAL"]
    updated_trip = copy.deepcopy(dict(raw_trip))
    try:
        updated_trip[TRIP_COLUMNS["ARRIVAL_POSIX"]] = to_posix_ms(trip.estimated_arrival)
    except (ValueError, OverflowError) as e:
        raise MalformedFixtureError(arrival_field, f"Could not parse {arrival_field}: {e}") from e

    for fare_field in fare_fields:
        if fare_field not in raw_trip:
            continue
        try:
            updated_trip[fare_field] = format_fare(raw_trip[fare_field])
        except TypeError as e:
            raise MalformedFixtureError(fare_field, f"Could not format {fare_field}: {e}") from e

    updated = copy.deepcopy(dict(document))
    updated[TRIP_KEY] = updated_trip
    return updated


class TripData:
    def __init__(self, source=FIXTURE_PATH, fare_fields=FARE_FIELDS):
        if isinstance(source, Mapping):
            self._document = copy.deepcopy(dict(source))
        else:
            self._document = load_fixture(source)
        self.fare_fields = tuple(fare_fields)
        # fail at start-up rather than on the first request
        get_updated_json(self._document, self.fare_fields)
        logger.info(f"Loaded trip fixture with fare fields {', '.join(self.fare_fields)}")

    def to_json(self) -> dict:
        return copy.deepcopy(self._document)

    def get_updated_json(self) -> dict:
        return get_updated_json(self._document, self.fare_fields)

    @property
    def trip(self) -> Trip:
        return Trip.model_validate(self._document[TRIP_KEY])
