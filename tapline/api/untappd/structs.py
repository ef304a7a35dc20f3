from collections.abc import Iterable
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, NamedTuple, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidatorFunctionWrapHandler, WrapValidator

T = TypeVar("T")


class AppCredentials(NamedTuple):
    client_id: str
    client_secret: str

    def params(self) -> dict[str, str]:
        return {"client_id": self.client_id, "client_secret": self.client_secret}


class TokenCredentials(NamedTuple):
    access_token: str

    def params(self) -> dict[str, str]:
        return {"access_token": self.access_token}


Credentials = AppCredentials | TokenCredentials


class Sort(str, Enum):
    """Sorting methods accepted by beer listings of the Untappd APIv4."""

    DATE = "date"  # most recent checkin
    CHECKIN = "checkin"  # most checkins
    HIGHEST_RATED = "highest_rated"
    LOWEST_RATED = "lowest_rated"
    USER_HIGHEST_RATED = "highest_rated_you"
    USER_LOWEST_RATED = "lowest_rated_you"
    HIGHEST_ABV = "highest_abv"
    LOWEST_ABV = "lowest_abv"


class Distance(str, Enum):
    MILES = "m"
    KILOMETERS = "km"


class Page(list):
    """Listing results, sized to the count reported by the server.

    Entries are filled by index from the returned items, so when the server
    sends fewer items than it claims, trailing entries are None.
    ``decoded`` holds the number of items actually received.
    """

    def __init__(self, count: int = 0, items: Iterable = ()):
        items = list(items)
        super().__init__([None] * max(count, len(items)))
        self[: len(items)] = items
        self.count = count
        self.decoded = len(items)

    def __repr__(self) -> str:
        return f"Page(count={self.count}, decoded={self.decoded}, {list.__repr__(self)})"


def keep_page(value: Any, handler: ValidatorFunctionWrapHandler) -> Page:
    if isinstance(value, Page):
        return value
    items = handler(value)
    return Page(len(items), items)


# List field of a frozen model that keeps the Page it was given
PageOf = Annotated[list[T], WrapValidator(keep_page)]


class Struct(BaseModel):
    model_config = ConfigDict(frozen=True)


class UserStats(Struct):
    total_badges: int = 0
    total_friends: int = 0
    total_checkins: int = 0
    total_beers: int = 0
    total_created_beers: int = 0
    total_followings: int = 0
    total_photos: int = 0


class User(Struct):
    uid: int = 0
    id: int = 0
    user_name: str = ""
    first_name: str = ""
    last_name: str = ""
    bio: str = ""
    location: str = ""
    avatar: str = ""
    cover_photo: str = ""
    url: str = ""
    untappd_url: str = ""
    supporter: bool = False
    stats: UserStats = Field(default_factory=UserStats)


class BreweryLocation(Struct):
    city: str = ""
    state: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


class BreweryContact(Struct):
    twitter: str = ""
    facebook: str = ""
    instagram: str = ""
    url: str = ""


class Brewery(Struct):
    id: int = 0
    name: str = ""
    slug: str = ""
    logo: str = ""
    country: str = ""
    active: bool = False
    location: BreweryLocation = Field(default_factory=BreweryLocation)
    contact: BreweryContact = Field(default_factory=BreweryContact)
    type: str = ""
    type_id: int = 0


class Beer(Struct):
    id: int = 0
    name: str = ""
    label: str = ""
    label_hd: str = ""
    abv: float = 0.0
    ibu: int = 0
    slug: str = ""
    style: str = ""
    description: str = ""
    created: datetime | None = None
    # Is this beer on the specified user's wish list?
    wish_list: bool = False
    overall_rating: float = 0.0

    # Only populated when the beer is listed in the context of a user
    user_rating: float = 0.0
    first_had: datetime | None = None
    recent_had: datetime | None = None
    wish_listed: datetime | None = None
    count: int = 0

    brewery: Brewery | None = None


class VenueLocation(Struct):
    address: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    latitude: float = 0.0
    longitude: float = 0.0


class Foursquare(Struct):
    id: str = ""
    url: str = ""


class VenueIcon(Struct):
    small: str = ""
    medium: str = ""
    large: str = ""


class BadgeMedia(Struct):
    small: str = ""
    medium: str = ""
    large: str = ""


class Badge(Struct):
    id: int = 0
    checkin_id: int = 0
    name: str = ""
    description: str = ""
    hint: str = ""
    active: bool = False
    media: BadgeMedia = Field(default_factory=BadgeMedia)
    # If applicable, time when the specified user earned this badge
    earned: datetime | None = None
    levels: PageOf[Optional["Badge"]] = Field(default_factory=Page)


class Toast(Struct):
    id: int = 0
    user_id: int = 0
    checkin_id: int = 0
    created: datetime | None = None
    user: User | None = None


class Comment(Struct):
    id: int = 0
    checkin_id: int = 0
    comment: str = ""
    created: datetime | None = None
    user: User | None = None


class Media(Struct):
    photo_id: int = 0
    small: str = ""
    medium: str = ""
    large: str = ""
    original: str = ""


class Checkin(Struct):
    id: int = 0
    created: datetime | None = None
    comment: str = ""
    user_rating: float = 0.0
    user: User | None = None
    beer: Beer | None = None
    brewery: Brewery | None = None
    # None when the checkin was not made at a venue
    venue: Optional["Venue"] = None
    badges: PageOf[Badge | None] = Field(default_factory=Page)
    toasts: PageOf[Toast | None] = Field(default_factory=Page)
    comments: PageOf[Comment | None] = Field(default_factory=Page)
    media: PageOf[Media | None] = Field(default_factory=Page)


class Venue(Struct):
    id: int = 0
    name: str = ""
    updated: datetime | None = None
    category: str = ""
    public: bool = False
    location: VenueLocation = Field(default_factory=VenueLocation)
    foursquare: Foursquare | None = None
    icon: VenueIcon | None = None
    top_beers: PageOf[Beer | None] = Field(default_factory=Page)
    checkins: PageOf[Checkin | None] = Field(default_factory=Page)


Badge.model_rebuild()
Checkin.model_rebuild()
Venue.model_rebuild()


class CheckinRequest(BaseModel):
    """Request to check in a beer.

    ``beer_id``, ``gmt_offset`` and ``timezone`` are mandatory; for the local
    system they can be obtained with::

        now = datetime.now().astimezone()
        gmt_offset = now.utcoffset().total_seconds() / 3600
        timezone = now.tzname()

    ``foursquare_id`` is required when ``foursquare`` is set.
    """

    beer_id: int
    gmt_offset: float
    timezone: str

    foursquare_id: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    comment: str = ""
    rating: float = 0.0

    facebook: bool = False
    twitter: bool = False
    foursquare: bool = False
