import requests
from pydantic import Field

from .raw import Envelope, RawBeer, RawBeerItems
from .response import RawModel
from .service import DEFAULT_LIMIT, MAX_ID, Service, compact_query, id_range_query, offset_query
from .structs import Beer, Page, Sort


class BeerInfoResponse(RawModel):
    beer: RawBeer = Field(default_factory=RawBeer)


class BeerSearchResponse(RawModel):
    beers: RawBeerItems = Field(default_factory=RawBeerItems)


class BeerService(Service):
    """API methods involving beers."""

    def info(self, beer_id: int, compact: bool = False) -> tuple[Beer, requests.Response]:
        """Query for information about a beer, including its brewery.

        With ``compact``, only basic beer information is populated.
        """
        envelope, res = self.api.request(
            "GET", f"beer/info/{beer_id}", query=compact_query(compact), model=Envelope[BeerInfoResponse]
        )
        return envelope.response.beer.export(), res

    def search(self, query: str) -> tuple[Page, requests.Response]:
        """Search for up to 25 beers by brewery and/or beer name."""
        return self.search_offset_limit_sort(query, 0, DEFAULT_LIMIT, Sort.DATE)

    def search_offset_limit_sort(
        self, query: str, offset: int, limit: int, sort: Sort | str
    ) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET",
            "search/beer",
            query={"q": query, **offset_query(offset, limit, sort)},
            model=Envelope[BeerSearchResponse],
        )
        return envelope.response.beers.export(), res

    def checkins(self, beer_id: int) -> tuple[Page, requests.Response]:
        """Query for the 25 most recent checkins of a beer."""
        return self.checkins_min_max_id_limit(beer_id, 0, MAX_ID, DEFAULT_LIMIT)

    def checkins_min_max_id_limit(
        self, beer_id: int, min_id: int, max_id: int, limit: int
    ) -> tuple[Page, requests.Response]:
        return self.get_checkins(f"beer/checkins/{beer_id}", id_range_query(min_id, max_id, limit))
