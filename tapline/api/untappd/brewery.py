import requests
from pydantic import Field

from .raw import Envelope, RawBrewery
from .response import RawModel, ResponseList
from .service import DEFAULT_LIMIT, MAX_ID, Service, compact_query, id_range_query, offset_query
from .structs import Brewery, Page


class BreweryInfoResponse(RawModel):
    brewery: RawBrewery = Field(default_factory=RawBrewery)


class BreweryItem(RawModel):
    brewery: RawBrewery = Field(default_factory=RawBrewery)


class BreweryItems(ResponseList):
    items: list[BreweryItem] = []


class BrewerySearchResponse(RawModel):
    brewery: BreweryItems = Field(default_factory=BreweryItems)


class BreweryService(Service):
    """API methods involving breweries."""

    def info(self, brewery_id: int, compact: bool = False) -> tuple[Brewery, requests.Response]:
        envelope, res = self.api.request(
            "GET", f"brewery/info/{brewery_id}", query=compact_query(compact), model=Envelope[BreweryInfoResponse]
        )
        return envelope.response.brewery.export(), res

    def search(self, query: str) -> tuple[Page, requests.Response]:
        """Search for up to 25 breweries by name.

        Search results don't include contact or type information.
        """
        return self.search_offset_limit(query, 0, DEFAULT_LIMIT)

    def search_offset_limit(self, query: str, offset: int, limit: int) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET",
            "search/brewery",
            query={"q": query, **offset_query(offset, limit)},
            model=Envelope[BrewerySearchResponse],
        )
        breweries = envelope.response.brewery
        return Page(breweries.count, (item.brewery.export() for item in breweries.items)), res

    def checkins(self, brewery_id: int) -> tuple[Page, requests.Response]:
        return self.checkins_min_max_id_limit(brewery_id, 0, MAX_ID, DEFAULT_LIMIT)

    def checkins_min_max_id_limit(
        self, brewery_id: int, min_id: int, max_id: int, limit: int
    ) -> tuple[Page, requests.Response]:
        return self.get_checkins(f"brewery/checkins/{brewery_id}", id_range_query(min_id, max_id, limit))
