import logging

import requests

from .activity import AuthService
from .api import USER_AGENT, UntappdAPI
from .auth import authenticate_url, get_oauth_token, oauth_blueprint
from .beer import BeerService
from .brewery import BreweryService
from .errors import (
    BadGatewayError,
    InvalidBooleanError,
    InvalidTimestampError,
    InvalidTimeUnitError,
    MissingCredentialsError,
    NoClientIDError,
    NoClientSecretError,
    ScalarDecodeError,
    TaplineError,
    UnexpectedContentTypeError,
    UntappdError,
)
from .local import LocalService
from .structs import (
    AppCredentials,
    Badge,
    Beer,
    Brewery,
    Checkin,
    CheckinRequest,
    Comment,
    Credentials,
    Distance,
    Media,
    Page,
    Sort,
    Toast,
    TokenCredentials,
    User,
    Venue,
)
from .user import UserService
from .venue import VenueService

logger = logging.getLogger("untappd")


def get_credentials(client_id: str = "", client_secret: str = "", access_token: str = "") -> Credentials:
    """Select the credentials sent with every request: the access token if given, else the app ID and secret."""
    if access_token:
        return TokenCredentials(access_token)
    if not client_id:
        raise NoClientIDError()
    if not client_secret:
        raise NoClientSecretError()
    return AppCredentials(client_id, client_secret)


class UntappdClient:
    """Untappd APIv4 client.

    Register for an API key at https://untappd.com/api/register. Every method
    performs a single blocking request and returns its result along with the
    ``requests.Response``, e.g. to inspect the remaining rate limit.
    """

    def __init__(
        self,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        session: requests.Session | None = None,
        user_agent: str = USER_AGENT,
        timeout: float | None = None,
    ):
        credentials = get_credentials(client_id, client_secret, access_token)
        self.api = UntappdAPI(credentials, session=session, user_agent=user_agent, timeout=timeout)
        self.user = UserService(self.api)
        self.beer = BeerService(self.api)
        self.brewery = BreweryService(self.api)
        self.venue = VenueService(self.api)
        self.local = LocalService(self.api)
        self.auth = AuthService(self.api)
        logger.debug(f"Untappd client: {self.api}")

    def __repr__(self) -> str:
        return f"UntappdClient({self.api})"


__all__ = [
    "AppCredentials",
    "AuthService",
    "BadGatewayError",
    "Badge",
    "Beer",
    "BeerService",
    "Brewery",
    "BreweryService",
    "Checkin",
    "CheckinRequest",
    "Comment",
    "Credentials",
    "Distance",
    "InvalidBooleanError",
    "InvalidTimeUnitError",
    "InvalidTimestampError",
    "LocalService",
    "Media",
    "MissingCredentialsError",
    "NoClientIDError",
    "NoClientSecretError",
    "Page",
    "ScalarDecodeError",
    "Sort",
    "TaplineError",
    "Toast",
    "TokenCredentials",
    "UnexpectedContentTypeError",
    "UntappdAPI",
    "UntappdClient",
    "UntappdError",
    "User",
    "UserService",
    "Venue",
    "VenueService",
    "authenticate_url",
    "get_credentials",
    "get_oauth_token",
    "oauth_blueprint",
]
