"""Shared fixtures for Untappd client tests.

Requests never leave the process: the client is given a mock session whose
``request`` method returns canned ``requests.Response`` objects.
"""

import io
import json
from unittest.mock import Mock

import pytest
import requests

from tapline.api.untappd import UntappdClient

JSON = "application/json"


def make_response(body: bytes | str | dict = b"", status: int = 200, content_type: str = JSON, headers=None):
    """Build a real requests.Response, as returned by a session."""
    if isinstance(body, dict):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode()
    res = requests.Response()
    res.status_code = status
    res.headers["Content-Type"] = content_type
    res.headers.update(headers or {})
    res.raw = io.BytesIO(body)
    res.encoding = "utf-8"
    return res


def request_kwargs(session: Mock) -> dict:
    """Keyword arguments of the last session.request call, with method and URL."""
    args, kwargs = session.request.call_args
    return {"method": args[0], "url": args[1], **kwargs}


@pytest.fixture
def session():
    """Mock session answering every request with an empty JSON object."""
    mock = Mock(spec=requests.Session)
    mock.request.side_effect = lambda *args, **kwargs: make_response(b"{}")
    return mock


def respond(session: Mock, *args, **kwargs) -> None:
    """Make the session answer the next requests with the given response."""
    session.request.side_effect = lambda *_, **__: make_response(*args, **kwargs)


@pytest.fixture
def client(session):
    """Client authenticated with app credentials."""
    return UntappdClient("foo", "bar", session=session)


@pytest.fixture
def auth_client(session):
    """Client authenticated with a user access token."""
    return UntappdClient(access_token="baz", session=session)


# Taken from the APIv4 documentation: https://untappd.com/api/docs
API_ERROR = {
    "meta": {
        "code": 500,
        "error_detail": "The user has not authorized this application or the token is invalid.",
        "error_type": "invalid_auth",
        "developer_friendly": "The user has not authorized this application or the token is invalid.",
        "response_time": {"time": 0, "measure": "seconds"},
    }
}

INVALID_USER_ERROR = (
    '{"meta":{"code":404,"error_detail":"Invalid user.","error_type":"invalid_user",'
    '"response_time":{"time":0,"measure":"seconds"}}}'
)

USER = {
    "uid": 1,
    "id": 1,
    "user_name": "gregavola",
    "first_name": "Greg",
    "last_name": "Avola",
    "location": "New York, NY",
    "is_supporter": 1,
    "url": "http://gregavola.com",
    "bio": "Co-Founder and CTO of Untappd, Web Developer, Beer Drinker & Community Guy",
    "user_avatar": "https://gravatar.com/avatar/0c6922e238dae5cccce96a32889fc911?size=100",
    "user_avatar_hd": "https://gravatar.com/avatar/0c6922e238dae5cccce96a32889fc911?size=125",
    "user_cover_photo": "https://untappd.s3.amazonaws.com/cover/1.jpg",
    "is_private": 0,
    "contact": {"foursquare": 195741, "twitter": "gregavola", "facebook": 18603076},
    "stats": {
        "total_badges": 1146,
        "total_friends": 2513,
        "total_checkins": 6279,
        "total_beers": 5219,
        "total_created_beers": 85,
        "total_followings": 4,
        "total_photos": 1095,
    },
}

BREWERY = {
    "brewery_id": 1954,
    "brewery_name": "Kelso of Brooklyn",
    "brewery_slug": "kelso-of-brooklyn",
    "brewery_label": "https://untappd.akamaized.net/site/brewery_logos/brewery-KelsoofBrooklyn_1954.jpeg",
    "country_name": "United States",
    "contact": {"twitter": "KelsoBeer", "facebook": "", "instagram": "", "url": "http://www.kelsoofbrooklyn.com/"},
    "location": {"brewery_city": "Brooklyn", "brewery_state": "NY", "lat": 40.6823, "lng": -73.9656},
    "brewery_active": 1,
}

VENUE = {
    "venue_id": 2141,
    "venue_name": "Brooklyn Bowl",
    "primary_category": "Arts & Entertainment",
    "location": {
        "venue_address": "61 Wythe Ave",
        "venue_city": "Brooklyn",
        "venue_state": "NY",
        "venue_country": "United States",
        "lat": 40.7219,
        "lng": -73.9575,
    },
    "public_venue": True,
    "foursquare": {"foursquare_id": "4a1afeb7f964a520b77a1fe3", "foursquare_url": "http://4sq.com/3fjtlA"},
    "venue_icon": {
        "sm": "https://ss3.4sqi.net/img/categories_v2/arts_entertainment/bowling_bg_64.png",
        "md": "https://ss3.4sqi.net/img/categories_v2/arts_entertainment/bowling_bg_88.png",
        "lg": "https://ss3.4sqi.net/img/categories_v2/arts_entertainment/bowling_bg_88.png",
    },
}

CHECKIN = {
    "checkin_id": 137117722,
    "created_at": "Sat, 13 Dec 2014 19:15:38 +0000",
    "checkin_comment": "When in Rome..",
    "rating_score": 3,
    "user": USER,
    "beer": {
        "bid": 7481,
        "beer_name": "Brooklyn Bowl Pale Ale",
        "beer_label": "https://untappd.akamaized.net/site/assets/images/temp/badge-beer-default.png",
        "beer_style": "American Pale Ale",
        "beer_abv": 0,
        "auth_rating": 0,
        "wish_list": False,
        "beer_active": 1,
    },
    "brewery": BREWERY,
    "venue": VENUE,
    "comments": {
        "total_count": 0,
        "count": 1,
        "items": [{"comment_id": 1, "comment": "hello, world", "user": {"user_name": "gregavola"}}],
    },
    "toasts": {
        "total_count": 0,
        "count": 1,
        "auth_toast": False,
        "items": [{"like_id": 1, "uid": 1, "user": {"user_name": "gregavola"}}],
    },
    "media": {"count": 0, "items": []},
    "source": {"app_name": "Untappd for iPhone - (V2)", "app_website": "http://untpd.it/iphoneapp"},
    "badges": {
        "count": 1,
        "items": [
            {
                "badge_id": 189,
                "user_badge_id": 39410316,
                "badge_name": "Taste the Music",
                "badge_description": "Badge Description Here",
                "created_at": "Sat, 13 Dec 2014 19:15:41 +0000",
                "badge_image": {
                    "sm": "https://untappd.akamaized.net/badges/bdg_ConcertVenue_sm.jpg",
                    "md": "https://untappd.akamaized.net/badges/bdg_ConcertVenue_md.jpg",
                    "lg": "https://untappd.akamaized.net/badges/bdg_ConcertVenue_lg.jpg",
                },
            }
        ],
    },
}

# Checkin which wasn't made at a venue
CHECKIN_NO_VENUE = {
    **CHECKIN,
    "checkin_id": 137117721,
    "checkin_comment": "",
    "venue": [],
    "badges": [],
    "toasts": [],
    "comments": [],
    "media": [],
}


def checkins_response(*checkins: dict, count: int | None = None) -> dict:
    """Checkin feed in the format shared by every checkins endpoint."""
    return {
        "meta": {
            "code": 200,
            "response_time": {"time": 0.841, "measure": "seconds"},
            "init_time": {"time": 0.001, "measure": "seconds"},
        },
        "notifications": [],
        "response": {
            "pagination": {"max_id": 161830366},
            "checkins": {"count": len(checkins) if count is None else count, "items": list(checkins)},
        },
    }
