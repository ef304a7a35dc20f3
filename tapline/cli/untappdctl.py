import logging
import sys
import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any, NoReturn

import click
import requests
from werkzeug.serving import make_server

from ..api.settings import UNTAPPD_ACCESS_TOKEN, UNTAPPD_CLIENT_ID, UNTAPPD_CLIENT_SECRET
from ..api.untappd import CheckinRequest, Distance, MissingCredentialsError, Sort, TaplineError, UntappdClient
from ..api.utils import RATE_LIMIT_HEADER, rate_limit_remaining
from ..web.app import create_app
from .printing import print_badges, print_beers, print_breweries, print_checkins, print_users, print_venues

logger = logging.getLogger("untappdctl")

LOGIN_PORT = 8338

offset_option = click.option("--offset", type=int, default=0, show_default=True, help="Starting offset of the results")
limit_option = click.option("--limit", type=int, default=25, show_default=True, help="Maximum number of results")
sort_option = click.option(
    "--sort",
    type=click.Choice([sort.value for sort in Sort]),
    default=Sort.DATE.value,
    show_default=True,
    help="Sort order of the results",
)
min_id_option = click.option("--min-id", type=int, default=0, show_default=True, help="Minimum checkin ID")
max_id_option = click.option("--max-id", type=int, default=2**31 - 1, show_default=True, help="Maximum checkin ID")
compact_option = click.option("--compact", is_flag=True, help="Only query for basic information")


def fail(e: Exception) -> NoReturn:
    logger.error(e)
    sys.exit(1)


def log_rate_limit(res: requests.Response | None) -> None:
    remaining = rate_limit_remaining(res)
    if remaining is not None:
        logger.info(f"{RATE_LIMIT_HEADER}: {remaining}")


def call(method: Callable[..., tuple[Any, requests.Response]], *args: Any) -> Any:
    """Run a client method, logging the rate limit and exiting on any error."""
    try:
        result, res = method(*args)
    except (TaplineError, ValueError, requests.RequestException) as e:
        log_rate_limit(getattr(e, "response", None))
        fail(e)
    log_rate_limit(res)
    return result


def get_client(ctx: click.Context) -> UntappdClient:
    try:
        return UntappdClient(**ctx.find_root().obj)
    except MissingCredentialsError as e:
        fail(e)


@click.group()
@click.option("--client-id", envvar="UNTAPPD_ID", default=UNTAPPD_CLIENT_ID, help="Untappd APIv4 client ID")
@click.option(
    "--client-secret", envvar="UNTAPPD_SECRET", default=UNTAPPD_CLIENT_SECRET, help="Untappd APIv4 client secret"
)
@click.option(
    "--access-token", envvar="UNTAPPD_TOKEN", default=UNTAPPD_ACCESS_TOKEN, help="OAuth access token of a user"
)
@click.option("-v", "--verbose", is_flag=True, help="Display debug info")
@click.pass_context
def cli(ctx: click.Context, client_id: str, client_secret: str, access_token: str, verbose: bool):
    """Query and display information from the Untappd APIv4."""
    # Logs go to stderr, so stdout only contains Untappd data
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="untappdctl> %(message)s")
    ctx.obj = {"client_id": client_id, "client_secret": client_secret, "access_token": access_token}


@cli.group()
def user():
    """Query for user information, by username."""


@user.command("info")
@click.argument("username")
@compact_option
@click.pass_context
def user_info(ctx: click.Context, username: str, compact: bool):
    print_users([call(get_client(ctx).user.info, username, compact)])


@user.command("friends")
@click.argument("username")
@offset_option
@limit_option
@click.pass_context
def user_friends(ctx: click.Context, username: str, offset: int, limit: int):
    print_users(call(get_client(ctx).user.friends_offset_limit, username, offset, limit))


@user.command("badges")
@click.argument("username")
@offset_option
@click.option("--limit", type=int, default=50, show_default=True, help="Maximum number of results")
@click.pass_context
def user_badges(ctx: click.Context, username: str, offset: int, limit: int):
    print_badges(call(get_client(ctx).user.badges_offset_limit, username, offset, limit))


@user.command("beers")
@click.argument("username")
@offset_option
@limit_option
@sort_option
@click.pass_context
def user_beers(ctx: click.Context, username: str, offset: int, limit: int, sort: str):
    print_beers(call(get_client(ctx).user.beers_offset_limit_sort, username, offset, limit, Sort(sort)))


@user.command("wishlist")
@click.argument("username")
@offset_option
@limit_option
@sort_option
@click.pass_context
def user_wish_list(ctx: click.Context, username: str, offset: int, limit: int, sort: str):
    print_beers(call(get_client(ctx).user.wish_list_offset_limit_sort, username, offset, limit, Sort(sort)))


@user.command("checkins")
@click.argument("username")
@min_id_option
@max_id_option
@limit_option
@click.pass_context
def user_checkins(ctx: click.Context, username: str, min_id: int, max_id: int, limit: int):
    print_checkins(call(get_client(ctx).user.checkins_min_max_id_limit, username, min_id, max_id, limit))


@cli.group()
def beer():
    """Query for beer information, by beer ID or name."""


@beer.command("info")
@click.argument("beer_id", type=int)
@compact_option
@click.pass_context
def beer_info(ctx: click.Context, beer_id: int, compact: bool):
    print_beers([call(get_client(ctx).beer.info, beer_id, compact)])


@beer.command("search")
@click.argument("query")
@offset_option
@limit_option
@sort_option
@click.pass_context
def beer_search(ctx: click.Context, query: str, offset: int, limit: int, sort: str):
    print_beers(call(get_client(ctx).beer.search_offset_limit_sort, query, offset, limit, Sort(sort)))


@beer.command("checkins")
@click.argument("beer_id", type=int)
@min_id_option
@max_id_option
@limit_option
@click.pass_context
def beer_checkins(ctx: click.Context, beer_id: int, min_id: int, max_id: int, limit: int):
    print_checkins(call(get_client(ctx).beer.checkins_min_max_id_limit, beer_id, min_id, max_id, limit))


@cli.group()
def brewery():
    """Query for brewery information, by brewery ID or name."""


@brewery.command("info")
@click.argument("brewery_id", type=int)
@compact_option
@click.pass_context
def brewery_info(ctx: click.Context, brewery_id: int, compact: bool):
    print_breweries([call(get_client(ctx).brewery.info, brewery_id, compact)])


@brewery.command("search")
@click.argument("query")
@offset_option
@limit_option
@click.pass_context
def brewery_search(ctx: click.Context, query: str, offset: int, limit: int):
    print_breweries(call(get_client(ctx).brewery.search_offset_limit, query, offset, limit))


@brewery.command("checkins")
@click.argument("brewery_id", type=int)
@min_id_option
@max_id_option
@limit_option
@click.pass_context
def brewery_checkins(ctx: click.Context, brewery_id: int, min_id: int, max_id: int, limit: int):
    print_checkins(call(get_client(ctx).brewery.checkins_min_max_id_limit, brewery_id, min_id, max_id, limit))


@cli.group()
def venue():
    """Query for venue information, by venue ID."""


@venue.command("info")
@click.argument("venue_id", type=int)
@compact_option
@click.pass_context
def venue_info(ctx: click.Context, venue_id: int, compact: bool):
    print_venues([call(get_client(ctx).venue.info, venue_id, compact)])


@venue.command("checkins")
@click.argument("venue_id", type=int)
@min_id_option
@max_id_option
@limit_option
@click.pass_context
def venue_checkins(ctx: click.Context, venue_id: int, min_id: int, max_id: int, limit: int):
    print_checkins(call(get_client(ctx).venue.checkins_min_max_id_limit, venue_id, min_id, max_id, limit))


@cli.group()
def local():
    """Query for local area checkins, by latitude and longitude."""


@local.command("checkins")
@click.option("--latitude", type=float, required=True)
@click.option("--longitude", type=float, required=True)
@min_id_option
@max_id_option
@limit_option
@click.option("--radius", type=int, default=25, show_default=True, help="Checkin radius around the location")
@click.option("--unit", type=click.Choice([d.value for d in Distance]), default=Distance.MILES.value, show_default=True)
@click.pass_context
def local_checkins(
    ctx: click.Context,
    latitude: float,
    longitude: float,
    min_id: int,
    max_id: int,
    limit: int,
    radius: int,
    unit: str,
):
    print_checkins(
        call(
            get_client(ctx).local.checkins_min_max_id_limit_radius,
            latitude,
            longitude,
            min_id,
            max_id,
            limit,
            radius,
            Distance(unit),
        )
    )


@cli.group()
def auth():
    """Access authenticated Untappd APIv4 methods."""


@auth.command("checkins")
@min_id_option
@max_id_option
@limit_option
@click.pass_context
def auth_checkins(ctx: click.Context, min_id: int, max_id: int, limit: int):
    """[auth] Query for recent checkins from friends."""
    print_checkins(call(get_client(ctx).auth.checkins_min_max_id_limit, min_id, max_id, limit))


@auth.command("checkin")
@click.argument("beer_id", type=int)
@click.option("--comment", default="", help="Checkin comment")
@click.option("--rating", type=float, default=0.0, help="Rating, from 0.25 to 5")
@click.option("--latitude", type=float, default=0.0)
@click.option("--longitude", type=float, default=0.0)
@click.option("--foursquare-id", default="", help="Foursquare venue ID")
@click.option("--facebook", is_flag=True, help="Share on Facebook")
@click.option("--twitter", is_flag=True, help="Share on Twitter")
@click.option("--foursquare", is_flag=True, help="Share on Foursquare, requires --foursquare-id")
@click.pass_context
def auth_checkin(ctx: click.Context, beer_id: int, **options: Any):
    """[auth] Check in a beer, by ID."""
    now = datetime.now().astimezone()
    offset = now.utcoffset()
    req = CheckinRequest(
        beer_id=beer_id,
        gmt_offset=offset.total_seconds() / 3600 if offset is not None else 0,
        timezone=now.tzname() or "UTC",
        **options,
    )
    print_checkins([call(get_client(ctx).auth.checkin, req)])


@auth.command("toast")
@click.argument("checkin_id", type=int)
@click.pass_context
def auth_toast(ctx: click.Context, checkin_id: int):
    """[auth] Toast a checkin, by ID."""
    client = get_client(ctx)
    try:
        res = client.auth.toast(checkin_id)
    except (TaplineError, ValueError, requests.RequestException) as e:
        log_rate_limit(getattr(e, "response", None))
        fail(e)
    log_rate_limit(res)
    click.echo(f"Toasted checkin {checkin_id}")


@auth.command("login")
@click.option("--port", type=int, default=LOGIN_PORT, show_default=True, help="Port of the local redirect server")
@click.pass_context
def auth_login(ctx: click.Context, port: int):
    """Authenticate using OAuth, and print the resulting access token."""
    creds = ctx.find_root().obj
    redirect_url = f"http://localhost:{port}/auth"

    def on_token(token: str) -> str:
        click.echo(token)
        # Stop serving once the response is sent
        threading.Thread(target=server.shutdown).start()
        return "Authenticated, the access token was printed by untappdctl. You can close this page."

    try:
        app = create_app(creds["client_id"], creds["client_secret"], redirect_url, on_token=on_token)
    except MissingCredentialsError as e:
        fail(e)
    server = make_server("localhost", port, app)
    logger.info(f"Open {app.config['UNTAPPD_LOGIN_URL']} to authenticate")
    server.serve_forever()
