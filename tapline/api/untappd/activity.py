import requests

from ..utils import format_float
from .api import Params
from .raw import Envelope, RawCheckin
from .service import DEFAULT_LIMIT, MAX_ID, Service, id_range_query
from .structs import Checkin, CheckinRequest, Page


def checkin_body(req: CheckinRequest) -> Params:
    body: Params = {
        "bid": req.beer_id,
        "gmt_offset": format_float(req.gmt_offset),
        "timezone": req.timezone,
    }
    # Optional parameters are only sent when set
    if req.foursquare_id:
        body["foursquare_id"] = req.foursquare_id
    if req.latitude:
        body["geolat"] = format_float(req.latitude)
    if req.longitude:
        body["geolng"] = format_float(req.longitude)
    if req.comment:
        body["shout"] = req.comment
    if req.rating:
        body["rating"] = format_float(req.rating)
    for network in ("facebook", "twitter", "foursquare"):
        if getattr(req, network):
            body[network] = "on"
    return body


class AuthService(Service):
    """API methods which require a client created with an access token."""

    def checkins(self) -> tuple[Page, requests.Response]:
        """Query for the 25 most recent checkins from the authenticated user's friends.

        This is the "Recent Friend Activity" feed of the Untappd homepage.
        """
        return self.checkins_min_max_id_limit(0, MAX_ID, DEFAULT_LIMIT)

    def checkins_min_max_id_limit(self, min_id: int, max_id: int, limit: int) -> tuple[Page, requests.Response]:
        return self.get_checkins("checkin/recent", id_range_query(min_id, max_id, limit))

    def checkin(self, req: CheckinRequest) -> tuple[Checkin, requests.Response]:
        envelope, res = self.api.request("POST", "checkin/add", body=checkin_body(req), model=Envelope[RawCheckin])
        return envelope.response.export(), res

    def toast(self, checkin_id: int) -> requests.Response:
        """Toast a checkin, or remove the authenticated user's toast from it."""
        _, res = self.api.request("POST", f"checkin/toast/{checkin_id}")
        return res
