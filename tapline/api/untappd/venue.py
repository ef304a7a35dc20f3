import requests
from pydantic import Field

from .raw import Envelope, RawVenue
from .response import RawModel
from .service import DEFAULT_LIMIT, MAX_ID, Service, compact_query, id_range_query
from .structs import Page, Venue


class VenueInfoResponse(RawModel):
    venue: RawVenue = Field(default_factory=RawVenue)


class VenueService(Service):
    def info(self, venue_id: int, compact: bool = False) -> tuple[Venue | None, requests.Response]:
        """Query for information about a venue, with its top beers and recent checkins."""
        envelope, res = self.api.request(
            "GET", f"venue/info/{venue_id}", query=compact_query(compact), model=Envelope[VenueInfoResponse]
        )
        return envelope.response.venue.export(), res

    def checkins(self, venue_id: int) -> tuple[Page, requests.Response]:
        return self.checkins_min_max_id_limit(venue_id, 0, MAX_ID, DEFAULT_LIMIT)

    def checkins_min_max_id_limit(
        self, venue_id: int, min_id: int, max_id: int, limit: int
    ) -> tuple[Page, requests.Response]:
        return self.get_checkins(f"venue/checkins/{venue_id}", id_range_query(min_id, max_id, limit))
