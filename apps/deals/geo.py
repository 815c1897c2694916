"""
Great-circle distance helpers.

``haversine_km`` is the only distance function in the project. Nearby deals,
nearby vendors and the distance shown on a single deal all go through it so
a deal is never listed as nearby with one formula and displayed with another.
"""

import math

EARTH_RADIUS_KM = 6371.0

LATITUDE_RANGE = (-90.0, 90.0)
LONGITUDE_RANGE = (-180.0, 180.0)


def haversine_km(lat1, lon1, lat2, lon2) -> float:
    """
    Distance in kilometres between two points given in degrees.

    Accepts anything ``float()`` understands (floats, Decimals from the
    database, numeric strings). NaN input yields NaN rather than an error.
    """
    lat1, lon1, lat2, lon2 = (float(v) for v in (lat1, lon1, lat2, lon2))

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    # Rounding can push a a hair above 1 for antipodal points
    a = min(a, 1.0)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def format_distance(km: float) -> str:
    """Render a distance for display: ``850m`` below one kilometre, else ``2.2km``."""
    if km < 1:
        return f"{round(km * 1000)}m"
    return f"{km:.1f}km"


def is_valid_coordinate(latitude, longitude) -> bool:
    try:
        lat, lon = float(latitude), float(longitude)
    except (TypeError, ValueError):
        return False
    return (
        LATITUDE_RANGE[0] <= lat <= LATITUDE_RANGE[1]
        and LONGITUDE_RANGE[0] <= lon <= LONGITUDE_RANGE[1]
    )
