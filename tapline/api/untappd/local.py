import requests

from ..utils import format_float
from .service import DEFAULT_LIMIT, MAX_ID, Service, id_range_query
from .structs import Distance, Page

DEFAULT_RADIUS = 25


class LocalService(Service):
    """API methods involving checkins in a localized area."""

    def checkins(self, latitude: float, longitude: float) -> tuple[Page, requests.Response]:
        """Query for the 25 most recent checkins within 25 miles of a location."""
        return self.checkins_min_max_id_limit_radius(
            latitude, longitude, 0, MAX_ID, DEFAULT_LIMIT, DEFAULT_RADIUS, Distance.MILES
        )

    def checkins_min_max_id_limit_radius(
        self,
        latitude: float,
        longitude: float,
        min_id: int,
        max_id: int,
        limit: int,
        radius: int,
        units: Distance | str,
    ) -> tuple[Page, requests.Response]:
        return self.get_checkins(
            "thepub/local",
            {
                "lat": format_float(latitude),
                "lng": format_float(longitude),
                **id_range_query(min_id, max_id, limit),
                "radius": radius,
                "dist_pref": units.value if isinstance(units, Distance) else units,
            },
        )
