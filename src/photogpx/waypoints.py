"""Turns extracted coordinates into the (real, offset) waypoint pairs written to GPX."""

from typing import Iterator, Optional, Sequence, Tuple

from .constants import LATITUDE_OFFSET, OFFSET_SUFFIX
from .exceptions import InvalidWaypointSequenceError
from .models import GPSCoordinates, GpsWaypoint


def derive_waypoints(coordinates: Optional[GPSCoordinates], name: str) -> Tuple[GpsWaypoint, ...]:
    """Return the photo's point followed by its offset companion.

    The companion sits ``LATITUDE_OFFSET`` degrees north with the same
    longitude. Returns an empty tuple when there are no coordinates.
    """
    if coordinates is None:
        return ()

    original = GpsWaypoint(coordinates.latitude, coordinates.longitude, name)
    offset = GpsWaypoint(
        latitude=coordinates.latitude + LATITUDE_OFFSET,
        longitude=coordinates.longitude,
        name=name + OFFSET_SUFFIX,
    )
    return original, offset


def track_name(waypoint: GpsWaypoint) -> str:
    return waypoint.name.replace(OFFSET_SUFFIX, "")


def iter_waypoint_pairs(waypoints: Sequence[GpsWaypoint]) -> Iterator[Tuple[GpsWaypoint, GpsWaypoint]]:
    if len(waypoints) % 2:
        raise InvalidWaypointSequenceError(len(waypoints))
    for i in range(0, len(waypoints), 2):
        yield waypoints[i], waypoints[i + 1]
