import requests
from pydantic import Field

from .api import Params, UntappdAPI
from .raw import Envelope, RawCheckins
from .response import RawModel
from .structs import Page, Sort

# Default max checkin ID; arbitrary, but provides plenty of headroom
MAX_ID = 2**31 - 1

DEFAULT_LIMIT = 25


class CheckinsResponse(RawModel):
    checkins: RawCheckins = Field(default_factory=RawCheckins)


class Service:
    """Group of API methods sharing one transport."""

    def __init__(self, api: UntappdAPI):
        self.api = api

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.api})"

    def get_checkins(self, endpoint: str, query: Params) -> tuple[Page, requests.Response]:
        """Backing method of every checkin feed, which all share the same shape."""
        envelope, res = self.api.request("GET", endpoint, query=query, model=Envelope[CheckinsResponse])
        return envelope.response.checkins.export(), res


def compact_query(compact: bool) -> Params:
    return {"compact": "true"} if compact else {}


def id_range_query(min_id: int, max_id: int, limit: int) -> Params:
    return {"min_id": min_id, "max_id": max_id, "limit": limit}


def offset_query(offset: int, limit: int, sort: Sort | str | None = None) -> Params:
    query: Params = {"offset": offset, "limit": limit}
    if sort is not None:
        # Unknown sorts are left for the API to reject
        query["sort"] = sort.value if isinstance(sort, Sort) else sort
    return query
