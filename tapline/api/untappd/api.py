import logging
from typing import Any, TypeVar
from urllib.parse import urlencode

import requests
from pydantic import BaseModel

from ..utils import get_session
from .errors import UnexpectedContentTypeError, UntappdError
from .raw import RawErrorEnvelope
from .response import decode
from .structs import Credentials

logger = logging.getLogger("untappd.api")

API_URL = "https://api.untappd.com/v4"
JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
USER_AGENT = "tapline (+https://github.com/tapline/tapline)"

M = TypeVar("M", bound=BaseModel)

Params = dict[str, Any]


def check_response(res: requests.Response) -> None:
    """Raise the error described by an Untappd APIv4 response, if any.

    The content type must be exactly ``application/json`` and is checked
    before anything else, without reading the body. Error bodies that can't
    be decoded raise the decoding error as-is.
    """
    content_type = res.headers.get("Content-Type", "")
    if content_type != JSON_CONTENT_TYPE:
        raise UnexpectedContentTypeError(content_type, response=res)

    if 200 <= res.status_code <= 299:
        return

    meta = decode(RawErrorEnvelope, res.json()).meta
    raise UntappdError(
        code=meta.code,
        detail=meta.error_detail,
        type=meta.error_type,
        developer_friendly=meta.developer_friendly,
        duration=meta.response_time,
        response=res,
    )


class UntappdAPI:
    def __init__(
        self,
        credentials: Credentials,
        session: requests.Session | None = None,
        user_agent: str = USER_AGENT,
        timeout: float | None = None,
    ):
        self.credentials = credentials
        self.session = session if session is not None else get_session()
        self.user_agent = user_agent
        self.timeout = timeout

    def __str__(self) -> str:
        auth = f"{self.credentials.access_token[:5]}..." if hasattr(self.credentials, "access_token") else "APP"
        return f"UntappdAPI(auth={auth})"

    def __repr__(self) -> str:
        return str(self)

    def request(
        self,
        method: str,
        endpoint: str,
        body: Params | None = None,
        query: Params | None = None,
        model: type[M] | None = None,
    ) -> tuple[M | None, requests.Response]:
        """Perform a request against an API endpoint, e.g. ``"user/info/gregavola"``.

        Credentials are added to the query string. ``body`` is only sent, form
        encoded, with POST requests. The response is validated into ``model``
        when one is given; either way it's returned for header inspection.
        """
        url = f"{API_URL}/{endpoint.strip('/')}/"
        params = {**(query or {}), **self.credentials.params()}
        headers = {"Accept": JSON_CONTENT_TYPE, "User-Agent": self.user_agent}

        data = None
        if method.upper() == "POST" and body:
            data = urlencode(body, doseq=True)
            headers["Content-Type"] = FORM_CONTENT_TYPE
            headers["Content-Length"] = str(len(data.encode()))

        logger.debug(f"{method} {url}")
        with self.session.request(
            method, url, params=params, data=data, headers=headers, timeout=self.timeout
        ) as res:
            logger.debug(f"{method} {url} -> HTTP {res.status_code}")
            check_response(res)
            if model is None:
                return None, res
            return decode(model, res.json()), res
