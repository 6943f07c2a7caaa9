"""Input validation for bodies and instants.

The cache itself trusts its inputs; these helpers are the boundary where
untrusted values (HTTP parameters, user-driven date jumps) are checked.
"""

import math
from datetime import datetime, timedelta, timezone

from ephemeris_cache.bodies import PLANET_ORDER, is_planet_name
from ephemeris_cache.errors import InvalidInputError

Instant = datetime | int | float

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

MIN_YEAR = datetime.min.year
MAX_YEAR = datetime.max.year


def validate_body(body: object) -> str:
    """Return the body unchanged if it names a planet.

    Raises:
        InvalidInputError: If the body is not one of PLANET_ORDER
    """
    if not is_planet_name(body):
        raise InvalidInputError(
            f"Invalid celestial body: {body}",
            field="body",
            value=body,
            context={"valid_bodies": list(PLANET_ORDER)},
        )
    return body  # type: ignore[return-value]


def to_datetime(instant: Instant) -> datetime:
    """Normalize an instant to an aware UTC datetime.

    Naive datetimes are taken as UTC. Numbers are milliseconds since the
    Unix epoch.

    Raises:
        InvalidInputError: If the instant is not a datetime or a finite number,
            or falls outside the representable year range
    """
    if isinstance(instant, datetime):
        if instant.tzinfo is None:
            return instant.replace(tzinfo=timezone.utc)
        try:
            return instant.astimezone(timezone.utc)
        except OverflowError as e:
            raise InvalidInputError(
                f"Instant {instant.isoformat()} is out of supported range in UTC "
                f"({MIN_YEAR} to {MAX_YEAR})",
                field="instant",
                value=instant,
                context={"min_year": MIN_YEAR, "max_year": MAX_YEAR},
            ) from e

    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise InvalidInputError(
            f"Instant must be a datetime or epoch milliseconds, got {type(instant).__name__}",
            field="instant",
            value=instant,
        )

    if not math.isfinite(instant):
        raise InvalidInputError("Instant must be finite", field="instant", value=instant)

    try:
        return UNIX_EPOCH + timedelta(milliseconds=instant)
    except OverflowError as e:
        raise InvalidInputError(
            f"Instant {instant} ms is out of supported range ({MIN_YEAR} to {MAX_YEAR})",
            field="instant",
            value=instant,
            context={"min_year": MIN_YEAR, "max_year": MAX_YEAR},
        ) from e


def to_epoch_ms(instant: datetime) -> float:
    """Milliseconds since the Unix epoch for an aware datetime."""
    return (instant - UNIX_EPOCH) / _ONE_MS


def validate_instant(instant: object) -> datetime:
    """Validate an instant and return it as an aware UTC datetime."""
    return to_datetime(instant)  # type: ignore[arg-type]
