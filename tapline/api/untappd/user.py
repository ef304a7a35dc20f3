import requests
from pydantic import Field

from .raw import Envelope, RawBadges, RawBeerItem, RawUser
from .response import RawModel, ResponseList, ResponseTime
from .service import DEFAULT_LIMIT, MAX_ID, Service, compact_query, id_range_query, offset_query
from .structs import Page, Sort, User


class UserInfoResponse(RawModel):
    user: RawUser = Field(default_factory=RawUser)


class FriendItem(RawModel):
    user: RawUser = Field(default_factory=RawUser)


class FriendsResponse(ResponseList):
    items: list[FriendItem] = []


class HadBeerItem(RawBeerItem):
    first_had: ResponseTime = None
    recent_created_at: ResponseTime = None
    rating_score: float = 0.0
    count: int = 0


class HadBeers(ResponseList):
    items: list[HadBeerItem] = []


class HadBeersResponse(RawModel):
    beers: HadBeers = Field(default_factory=HadBeers)


class WishListItem(RawBeerItem):
    created_at: ResponseTime = None


class WishList(ResponseList):
    items: list[WishListItem] = []


class WishListResponse(RawModel):
    beers: WishList = Field(default_factory=WishList)


class UserService(Service):
    """API methods involving users, by username.

    An empty username designates the authenticated user, when the client
    was created with an access token.
    """

    def info(self, username: str, compact: bool = False) -> tuple[User, requests.Response]:
        """Query for information about a user. With ``compact``, only basic information is populated."""
        envelope, res = self.api.request(
            "GET", f"user/info/{username}", query=compact_query(compact), model=Envelope[UserInfoResponse]
        )
        return envelope.response.user.export(), res

    def friends(self, username: str) -> tuple[Page, requests.Response]:
        """Query for up to 25 of a user's friends; see ``friends_offset_limit`` for paging."""
        return self.friends_offset_limit(username, 0, DEFAULT_LIMIT)

    def friends_offset_limit(self, username: str, offset: int, limit: int) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET", f"user/friends/{username}", query=offset_query(offset, limit), model=Envelope[FriendsResponse]
        )
        friends = envelope.response
        return Page(friends.count, (item.user.export() for item in friends.items)), res

    def badges(self, username: str) -> tuple[Page, requests.Response]:
        """Query for up to 50 of the badges a user has earned."""
        return self.badges_offset_limit(username, 0, 50)

    def badges_offset_limit(self, username: str, offset: int, limit: int) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET", f"user/badges/{username}", query=offset_query(offset, limit), model=Envelope[RawBadges]
        )
        badges = envelope.response
        return Page(badges.count, (badge.export() for badge in badges.items)), res

    def beers(self, username: str) -> tuple[Page, requests.Response]:
        """Query for the 25 beers a user has most recently checked in."""
        return self.beers_offset_limit_sort(username, 0, DEFAULT_LIMIT, Sort.DATE)

    def beers_offset_limit_sort(
        self, username: str, offset: int, limit: int, sort: Sort | str
    ) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET", f"user/beers/{username}", query=offset_query(offset, limit, sort), model=Envelope[HadBeersResponse]
        )
        beers = envelope.response.beers
        return (
            Page(
                beers.count,
                (
                    item.export(
                        first_had=item.first_had,
                        recent_had=item.recent_created_at,
                        user_rating=item.rating_score,
                        count=item.count,
                    )
                    for item in beers.items
                ),
            ),
            res,
        )

    def wish_list(self, username: str) -> tuple[Page, requests.Response]:
        """Query for the 25 beers most recently added to a user's wish list."""
        return self.wish_list_offset_limit_sort(username, 0, DEFAULT_LIMIT, Sort.DATE)

    def wish_list_offset_limit_sort(
        self, username: str, offset: int, limit: int, sort: Sort | str
    ) -> tuple[Page, requests.Response]:
        envelope, res = self.api.request(
            "GET",
            f"user/wishlist/{username}",
            query=offset_query(offset, limit, sort),
            model=Envelope[WishListResponse],
        )
        beers = envelope.response.beers
        return Page(beers.count, (item.export(wish_listed=item.created_at) for item in beers.items)), res

    def checkins(self, username: str) -> tuple[Page, requests.Response]:
        """Query for a user's 25 most recent checkins."""
        return self.checkins_min_max_id_limit(username, 0, MAX_ID, DEFAULT_LIMIT)

    def checkins_min_max_id_limit(
        self, username: str, min_id: int, max_id: int, limit: int
    ) -> tuple[Page, requests.Response]:
        return self.get_checkins(f"user/checkins/{username}", id_range_query(min_id, max_id, limit))
