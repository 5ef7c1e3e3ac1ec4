import math
import logging

import requests

import config
from app_utils.constants import NEIGHBORHOODS_BY_BOROUGH, NEIGHBORHOOD_COORDINATES

logger = logging.getLogger(__name__)


def calculate_distance(lat1, lon1, lat2, lon2):
    """
    Calculate the great circle distance between two points
    on the earth (specified in decimal degrees)
    Returns distance in meters.
    """
    if lat1 is None or lon1 is None or lat2 is None or lon2 is None:
        return float('inf')

    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(math.radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlon = lon2 - lon1
    dlat = lat2 - lat1
    a = math.sin(dlat/2)**2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon/2)**2
    c = 2 * math.asin(math.sqrt(a))
    r = 6371000 # Radius of earth in meters
    return c * r


def nearest_neighborhood(lat, lon, borough, max_distance=None):
    """
    Closest canonical neighborhood centroid within the borough.
    Returns None when nothing lies within max_distance meters.
    """
    if max_distance is None:
        max_distance = config.NEIGHBORHOOD_MATCH_RADIUS

    best_name = None
    best_distance = float('inf')
    for name in NEIGHBORHOODS_BY_BOROUGH.get(borough, []):
        n_lat, n_lon = NEIGHBORHOOD_COORDINATES[name]
        dist = calculate_distance(lat, lon, n_lat, n_lon)
        if dist < best_distance:
            best_name, best_distance = name, dist

    if best_distance <= max_distance:
        return best_name
    return None


def geocode_address(address, borough=None):
    """
    Forward geocode a street address using Nominatim search.
    Returns {"latitude", "longitude", "display_name"} or None.
    """
    if not address or not address.strip():
        return None

    parts = [address.strip()]
    if borough:
        parts.append(borough)
    parts.append("New York, NY")
    query = ", ".join(parts)

    try:
        response = requests.get(
            f"{config.NOMINATIM_URL}/search",
            params={"q": query, "format": "json", "limit": 1, "countrycodes": "us"},
            headers={"User-Agent": config.GEOCODER_USER_AGENT},
            timeout=config.GEOCODER_TIMEOUT,
        )
        if response.status_code != 200:
            logger.warning("Geocoding failed for %r: HTTP %s", query, response.status_code)
            return None

        results = response.json()
        if not results:
            logger.info("No geocoding match for %r", query)
            return None

        best = results[0]
        return {
            "latitude": float(best["lat"]),
            "longitude": float(best["lon"]),
            "display_name": best.get("display_name", ""),
        }
    except (requests.RequestException, ValueError, KeyError) as e:
        logger.warning("Geocoding error for %r: %s", query, e)

    return None
