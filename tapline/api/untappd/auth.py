"""Server side OAuth authentication with the Untappd APIv4.

See https://untappd.com/api/docs#authentication. A user is sent to the URL
from ``authenticate_url``; Untappd then redirects them to the redirect URL
with a ``code`` parameter, which is exchanged for an access token.
"""

import logging
from collections.abc import Callable
from urllib.parse import urlencode

import requests
from flask import Blueprint, request
from flask.typing import ResponseReturnValue

from ..utils import get_session
from .api import JSON_CONTENT_TYPE, USER_AGENT
from .errors import BadGatewayError, NoClientIDError, NoClientSecretError

logger = logging.getLogger("untappd.auth")

OAUTH_AUTHENTICATE_URL = "https://untappd.com/oauth/authenticate/"
OAUTH_AUTHORIZE_URL = "https://untappd.com/oauth/authorize/"
HEADERS = {"User-Agent": USER_AGENT}

TokenHandler = Callable[[str], ResponseReturnValue]


def authenticate_url(client_id: str, redirect_url: str) -> str:
    params = {"client_id": client_id, "response_type": "code", "redirect_url": redirect_url}
    return f"{OAUTH_AUTHENTICATE_URL}?{urlencode(params)}"


def get_oauth_token(
    auth_code: str,
    client_id: str,
    client_secret: str,
    redirect_url: str,
    session: requests.Session | None = None,
) -> str:
    """Exchange an authorization code for an access token.

    Raises BadGatewayError when the authorization server answers with an
    error status, non-JSON content or an unexpected payload. Transport errors
    propagate unchanged.
    """
    session = session if session is not None else get_session()
    with session.get(
        OAUTH_AUTHORIZE_URL,
        headers=HEADERS,
        params={
            "client_id": client_id,
            "client_secret": client_secret,
            "response_type": "code",
            "redirect_url": redirect_url,
            "code": auth_code,
        },
    ) as res:
        if not 200 <= res.status_code <= 299:
            raise BadGatewayError(f"authentication server error: HTTP {res.status_code:03d}")
        if res.headers.get("Content-Type", "") != JSON_CONTENT_TYPE:
            raise BadGatewayError("authentication server sent non-JSON content")
        try:
            data = res.json()
        except ValueError as e:
            raise BadGatewayError(f"invalid JSON from authentication server: {e}") from e

    # The Untappd API returns {"response": {"access_token": "..."}} on success
    if not isinstance(data, dict) or not isinstance(data.get("response"), dict):
        raise BadGatewayError(f"unexpected response format from authentication server: {data}")
    access_token = data["response"].get("access_token")
    if not isinstance(access_token, str):
        raise BadGatewayError(f"expected string access_token, got {type(access_token)}")
    return access_token


def write_token(token: str) -> ResponseReturnValue:
    return token


def oauth_blueprint(
    client_id: str,
    client_secret: str,
    redirect_url: str,
    on_token: TokenHandler | None = None,
    session: requests.Session | None = None,
    name: str = "untappd_oauth",
) -> Blueprint:
    """Create a Flask blueprint handling the OAuth redirect on ``/auth``.

    ``on_token`` is called with the access token once authentication succeeds
    and its return value is used as the HTTP response; by default the token
    itself is sent back. Upstream failures are answered with HTTP 502.
    """
    if not client_id:
        raise NoClientIDError()
    if not client_secret:
        raise NoClientSecretError()
    handler = on_token or write_token

    bp = Blueprint(name, __name__)

    @bp.route("/auth", methods=["GET"])
    def auth():
        code = request.args.get("code")
        if not code:
            return "no 'code' GET parameter", 400

        try:
            access_token = get_oauth_token(code, client_id, client_secret, redirect_url, session=session)
        except BadGatewayError as e:
            logger.warning(f"OAuth error: {e}")
            return str(e), 502
        except requests.RequestException as e:
            logger.error(f"OAuth request failed: {e}")
            return str(e), 500

        return handler(access_token)

    return bp
