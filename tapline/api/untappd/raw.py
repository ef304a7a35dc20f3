"""Raw JSON representations of Untappd APIv4 objects.

Their data is validated directly from the JSON payloads and then exported to
the structs from ``structs.py``, which are more useful for client consumption.
"""

from datetime import timedelta
from typing import Generic, TypeVar

from pydantic import BaseModel, Field, model_validator

from .response import RawModel, ResponseBool, ResponseDuration, ResponseList, ResponseObject, ResponseTime
from .structs import (
    Badge,
    BadgeMedia,
    Beer,
    Brewery,
    BreweryContact,
    BreweryLocation,
    Checkin,
    Comment,
    Foursquare,
    Media,
    Page,
    Toast,
    User,
    UserStats,
    Venue,
    VenueIcon,
    VenueLocation,
)

ResponseT = TypeVar("ResponseT")


class Envelope(BaseModel, Generic[ResponseT]):
    """The ``{"meta": ..., "response": ...}`` wrapper of every API response."""

    response: ResponseT

    @model_validator(mode="before")
    @classmethod
    def default_response(cls, data):
        # A missing response decodes to an empty one, like any other missing object
        if isinstance(data, dict) and data.get("response") is None:
            return {**data, "response": {}}
        return data


class RawMeta(RawModel):
    code: int = 0
    error_detail: str = ""
    error_type: str = ""
    developer_friendly: str = ""
    response_time: ResponseDuration = Field(default_factory=timedelta)


class RawErrorEnvelope(RawModel):
    meta: RawMeta = Field(default_factory=RawMeta)


class RawUserStats(RawModel):
    total_badges: int = 0
    total_friends: int = 0
    total_checkins: int = 0
    total_beers: int = 0
    total_created_beers: int = 0
    total_followings: int = 0
    total_photos: int = 0


class RawUser(RawModel):
    uid: int = 0
    id: int = 0
    user_name: str = ""
    first_name: str = ""
    last_name: str = ""
    bio: str = ""
    location: str = ""
    user_avatar: str = ""
    user_avatar_hd: str = ""
    user_cover_photo: str = ""
    url: str = ""
    untappd_url: str = ""
    is_supporter: ResponseBool = False
    stats: RawUserStats = Field(default_factory=RawUserStats)

    def export(self) -> User:
        return User(
            uid=self.uid,
            id=self.id,
            user_name=self.user_name,
            first_name=self.first_name,
            last_name=self.last_name,
            bio=self.bio,
            location=self.location,
            avatar=self.user_avatar_hd or self.user_avatar,
            cover_photo=self.user_cover_photo,
            url=self.url,
            untappd_url=self.untappd_url,
            supporter=self.is_supporter,
            stats=UserStats(**self.stats.model_dump()),
        )


class RawBreweryLocation(RawModel):
    brewery_city: str = ""
    brewery_state: str = ""
    lat: float = 0.0
    lng: float = 0.0


class RawBreweryContact(RawModel):
    twitter: str = ""
    facebook: str = ""
    instagram: str = ""
    url: str = ""


class RawBrewery(RawModel):
    brewery_id: int = 0
    brewery_name: str = ""
    brewery_slug: str = ""
    brewery_label: str = ""
    country_name: str = ""
    brewery_active: ResponseBool = False
    location: RawBreweryLocation = Field(default_factory=RawBreweryLocation)
    # Absent from search results
    contact: RawBreweryContact = Field(default_factory=RawBreweryContact)
    brewery_type: str = ""
    brewery_type_id: int = 0

    def export(self) -> Brewery:
        return Brewery(
            id=self.brewery_id,
            name=self.brewery_name,
            slug=self.brewery_slug,
            logo=self.brewery_label,
            country=self.country_name,
            active=self.brewery_active,
            location=BreweryLocation(
                city=self.location.brewery_city,
                state=self.location.brewery_state,
                latitude=self.location.lat,
                longitude=self.location.lng,
            ),
            contact=BreweryContact(**self.contact.model_dump()),
            type=self.brewery_type,
            type_id=self.brewery_type_id,
        )


class RawBeer(RawModel):
    bid: int = 0
    beer_name: str = ""
    beer_label: str = ""
    beer_label_hd: str = ""
    beer_abv: float = 0.0
    beer_ibu: int = 0
    beer_slug: str = ""
    beer_style: str = ""
    beer_description: str = ""
    created_at: ResponseTime = None
    wish_list: bool = False
    rating_score: float = 0.0
    # Nested in beer/info responses only; listings send it next to the beer
    brewery: RawBrewery | None = None

    def export(self, **user_fields) -> Beer:
        return Beer(
            id=self.bid,
            name=self.beer_name,
            label=self.beer_label,
            label_hd=self.beer_label_hd,
            abv=self.beer_abv,
            ibu=self.beer_ibu,
            slug=self.beer_slug,
            style=self.beer_style,
            description=self.beer_description,
            created=self.created_at,
            wish_list=self.wish_list,
            overall_rating=self.rating_score,
            brewery=self.brewery.export() if self.brewery is not None else None,
            **user_fields,
        )


class RawBeerItem(RawModel):
    """A beer listed next to its brewery, as in searches and user listings."""

    beer: RawBeer = Field(default_factory=RawBeer)
    brewery: RawBrewery = Field(default_factory=RawBrewery)

    def export(self, **user_fields) -> Beer:
        beer = self.beer.model_copy(update={"brewery": self.brewery})
        return beer.export(**user_fields)


class RawBeerItems(ResponseList):
    items: list[RawBeerItem] = []

    def export(self) -> Page:
        return Page(self.count, (item.export() for item in self.items))


class RawBadgeMedia(RawModel):
    badge_image_sm: str = ""
    badge_image_md: str = ""
    badge_image_lg: str = ""


class RawBadgeImage(RawModel):
    sm: str = ""
    md: str = ""
    lg: str = ""


class RawBadge(RawModel):
    badge_id: int = 0
    checkin_id: int = 0
    badge_name: str = ""
    badge_description: str = ""
    badge_hint: str = ""
    badge_active_status: ResponseBool = False
    # User badge listings send "media", checkins send "badge_image"
    media: RawBadgeMedia | None = None
    badge_image: RawBadgeImage | None = None
    created_at: ResponseTime = None
    levels: "RawBadgeLevels" = Field(default_factory=lambda: RawBadgeLevels())

    def export(self, with_levels: bool = True, checkin_id: int = 0) -> Badge:
        if self.media is not None:
            media = BadgeMedia(
                small=self.media.badge_image_sm,
                medium=self.media.badge_image_md,
                large=self.media.badge_image_lg,
            )
        elif self.badge_image is not None:
            media = BadgeMedia(small=self.badge_image.sm, medium=self.badge_image.md, large=self.badge_image.lg)
        else:
            media = BadgeMedia()
        # Levels are badges themselves, but never have levels of their own
        levels = Page(self.levels.count, (level.export(with_levels=False) for level in self.levels.items))
        return Badge(
            id=self.badge_id,
            checkin_id=self.checkin_id or checkin_id,
            name=self.badge_name,
            description=self.badge_description,
            hint=self.badge_hint,
            active=self.badge_active_status,
            media=media,
            earned=self.created_at,
            levels=levels if with_levels else Page(),
        )


class RawBadgeLevels(ResponseList):
    items: list[RawBadge] = []


RawBadge.model_rebuild()


class RawToast(RawModel):
    like_id: int = 0
    uid: int = 0
    created_at: ResponseTime = None
    user: RawUser | None = None

    def export(self, checkin_id: int = 0) -> Toast:
        return Toast(
            id=self.like_id,
            user_id=self.uid,
            checkin_id=checkin_id,
            created=self.created_at,
            user=self.user.export() if self.user is not None else None,
        )


class RawComment(RawModel):
    comment_id: int = 0
    checkin_id: int = 0
    comment: str = ""
    created_at: ResponseTime = None
    user: RawUser | None = None

    def export(self, checkin_id: int = 0) -> Comment:
        return Comment(
            id=self.comment_id,
            checkin_id=self.checkin_id or checkin_id,
            comment=self.comment,
            created=self.created_at,
            user=self.user.export() if self.user is not None else None,
        )


class RawPhoto(RawModel):
    photo_img_sm: str = ""
    photo_img_md: str = ""
    photo_img_lg: str = ""
    photo_img_og: str = ""


class RawMedia(RawModel):
    photo_id: int = 0
    photo: RawPhoto = Field(default_factory=RawPhoto)

    def export(self) -> Media:
        return Media(
            photo_id=self.photo_id,
            small=self.photo.photo_img_sm,
            medium=self.photo.photo_img_md,
            large=self.photo.photo_img_lg,
            original=self.photo.photo_img_og,
        )


class RawBadges(ResponseList):
    items: list[RawBadge] = []


class RawToasts(ResponseList):
    items: list[RawToast] = []


class RawComments(ResponseList):
    items: list[RawComment] = []


class RawMediaItems(ResponseList):
    items: list[RawMedia] = []


class RawVenueLocation(RawModel):
    venue_address: str = ""
    venue_city: str = ""
    venue_state: str = ""
    venue_country: str = ""
    lat: float = 0.0
    lng: float = 0.0


class RawFoursquare(RawModel):
    foursquare_id: str = ""
    foursquare_url: str = ""


class RawVenueIcon(RawModel):
    sm: str = ""
    md: str = ""
    lg: str = ""


class RawVenue(ResponseObject):
    venue_id: int = 0
    venue_name: str = ""
    last_updated: ResponseTime = None
    primary_category: str = ""
    public_venue: bool = False
    location: RawVenueLocation = Field(default_factory=RawVenueLocation)
    foursquare: RawFoursquare | None = None
    venue_icon: RawVenueIcon | None = None
    top_beers: RawBeerItems = Field(default_factory=RawBeerItems)
    checkins: "RawCheckins" = Field(default_factory=lambda: RawCheckins())

    @property
    def empty(self) -> bool:
        # Checkins without a venue carry {} or [] here
        return self.venue_id == 0 and self.venue_name == ""

    def export(self) -> Venue | None:
        if self.empty:
            return None
        foursquare = self.foursquare
        icon = self.venue_icon
        return Venue(
            id=self.venue_id,
            name=self.venue_name,
            updated=self.last_updated,
            category=self.primary_category,
            public=self.public_venue,
            location=VenueLocation(
                address=self.location.venue_address,
                city=self.location.venue_city,
                state=self.location.venue_state,
                country=self.location.venue_country,
                latitude=self.location.lat,
                longitude=self.location.lng,
            ),
            foursquare=Foursquare(id=foursquare.foursquare_id, url=foursquare.foursquare_url) if foursquare else None,
            icon=VenueIcon(small=icon.sm, medium=icon.md, large=icon.lg) if icon else None,
            top_beers=self.top_beers.export(),
            checkins=self.checkins.export(),
        )


class RawCheckin(RawModel):
    checkin_id: int = 0
    created_at: ResponseTime = None
    checkin_comment: str = ""
    rating_score: float = 0.0
    user: RawUser = Field(default_factory=RawUser)
    beer: RawBeer = Field(default_factory=RawBeer)
    brewery: RawBrewery = Field(default_factory=RawBrewery)
    venue: RawVenue = Field(default_factory=RawVenue)
    badges: RawBadges = Field(default_factory=RawBadges)
    toasts: RawToasts = Field(default_factory=RawToasts)
    comments: RawComments = Field(default_factory=RawComments)
    media: RawMediaItems = Field(default_factory=RawMediaItems)

    def export(self) -> Checkin:
        checkin_id = self.checkin_id
        return Checkin(
            id=checkin_id,
            created=self.created_at,
            comment=self.checkin_comment,
            user_rating=self.rating_score,
            user=self.user.export(),
            beer=self.beer.export(),
            brewery=self.brewery.export(),
            venue=self.venue.export(),
            badges=Page(self.badges.count, (badge.export(checkin_id=checkin_id) for badge in self.badges.items)),
            toasts=Page(self.toasts.count, (toast.export(checkin_id) for toast in self.toasts.items)),
            comments=Page(self.comments.count, (comment.export(checkin_id) for comment in self.comments.items)),
            media=Page(self.media.count, (media.export() for media in self.media.items)),
        )


class RawCheckins(ResponseList):
    items: list[RawCheckin] = []

    def export(self) -> Page:
        return Page(self.count, (checkin.export() for checkin in self.items))


RawVenue.model_rebuild()
RawCheckin.model_rebuild()
RawCheckins.model_rebuild()
