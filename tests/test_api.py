"""Tests for the Untappd APIv4 transport: credentials, requests and error classification."""

import io
import json
from datetime import timedelta
from unittest.mock import Mock
from urllib.parse import parse_qs

import pytest
import requests

from tapline.api.untappd import (
    AppCredentials,
    MissingCredentialsError,
    NoClientIDError,
    NoClientSecretError,
    TokenCredentials,
    UnexpectedContentTypeError,
    UntappdClient,
    UntappdError,
    get_credentials,
)
from tapline.api.untappd.api import API_URL, FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, USER_AGENT, check_response
from tapline.api.utils import format_float, rate_limit_remaining

from .conftest import API_ERROR, INVALID_USER_ERROR, USER, make_response, request_kwargs, respond


class TrackedBody(io.BytesIO):
    """Response body remembering whether it was read and released."""

    was_read = False
    released = False

    def read(self, *args):
        self.was_read = True
        return super().read(*args)

    def release_conn(self):
        self.released = True


def tracked_response(session, body: bytes, **kwargs) -> TrackedBody:
    """Make the session answer with a response whose body is tracked."""
    res = make_response(**kwargs)
    res.raw = tracked = TrackedBody(body)
    session.request.side_effect = None
    session.request.return_value = res
    return tracked


class TestClientConstruction:
    @pytest.mark.parametrize(
        "client_id, client_secret, error",
        [
            ("", "", NoClientIDError),
            ("", "bar", NoClientIDError),
            ("foo", "", NoClientSecretError),
        ],
    )
    def test_missing_app_credentials(self, client_id, client_secret, error):
        with pytest.raises(error):
            UntappdClient(client_id, client_secret)

    def test_missing_credentials_are_value_errors(self):
        with pytest.raises(ValueError):
            UntappdClient()
        assert issubclass(NoClientIDError, MissingCredentialsError)
        assert str(NoClientIDError()) == "no client ID"
        assert str(NoClientSecretError()) == "no client secret"

    def test_app_credentials(self):
        assert get_credentials("foo", "bar") == AppCredentials("foo", "bar")

    def test_access_token_wins(self):
        """Test that an access token is used even when app credentials are given."""
        assert get_credentials("foo", "bar", "baz") == TokenCredentials("baz")
        assert get_credentials(access_token="baz") == TokenCredentials("baz")

    def test_services(self, client):
        for name in ("user", "beer", "brewery", "venue", "local", "auth"):
            assert getattr(client, name).api is client.api


class TestRequest:
    def test_app_credentials_in_query(self, client, session):
        client.api.request("GET", "foo")
        params = request_kwargs(session)["params"]
        assert params["client_id"] == "foo"
        assert params["client_secret"] == "bar"
        assert "access_token" not in params

    def test_access_token_in_query(self, auth_client, session):
        auth_client.api.request("GET", "foo")
        params = request_kwargs(session)["params"]
        assert params == {"access_token": "baz"}

    def test_query_parameters(self, client, session):
        client.api.request("GET", "foo", query={"foo": "bar", "baz": ["qux", "corge"]})
        params = request_kwargs(session)["params"]
        assert params["foo"] == "bar"
        assert params["baz"] == ["qux", "corge"]

    def test_url(self, client, session):
        client.api.request("GET", "/user/info/gregavola")
        kwargs = request_kwargs(session)
        assert kwargs["method"] == "GET"
        assert kwargs["url"] == f"{API_URL}/user/info/gregavola/"

    def test_headers(self, client, session):
        client.api.request("GET", "foo")
        headers = request_kwargs(session)["headers"]
        assert headers["Accept"] == JSON_CONTENT_TYPE
        assert headers["User-Agent"] == USER_AGENT
        assert "Content-Type" not in headers

    def test_custom_user_agent(self, session):
        client = UntappdClient("foo", "bar", session=session, user_agent="test/1.0")
        client.api.request("GET", "foo")
        assert request_kwargs(session)["headers"]["User-Agent"] == "test/1.0"

    def test_form_body(self, client, session):
        client.api.request("POST", "foo", body={"bid": 1, "shout": "cheers & thanks"})
        kwargs = request_kwargs(session)
        assert kwargs["headers"]["Content-Type"] == FORM_CONTENT_TYPE
        assert kwargs["headers"]["Content-Length"] == str(len(kwargs["data"]))
        assert parse_qs(kwargs["data"]) == {"bid": ["1"], "shout": ["cheers & thanks"]}

    def test_get_has_no_body(self, client, session):
        client.api.request("GET", "foo", body={"bid": 1})
        assert request_kwargs(session)["data"] is None

    def test_timeout(self, session):
        client = UntappdClient("foo", "bar", session=session, timeout=5)
        client.api.request("GET", "foo")
        assert request_kwargs(session)["timeout"] == 5

    def test_returns_response(self, client, session):
        respond(session, b"{}", headers={"X-Ratelimit-Remaining": "99"})
        result, res = client.api.request("GET", "foo")
        assert result is None
        assert res.status_code == 200
        assert rate_limit_remaining(res) == "99"

    def test_transport_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("connection refused")
        with pytest.raises(requests.ConnectionError):
            client.api.request("GET", "foo")


class TestResponseLifetime:
    """The response is closed and its connection released on every path."""

    def test_success(self, client, session):
        body = tracked_response(session, json.dumps({"response": {"user": USER}}).encode())
        client.user.info("gregavola")
        assert body.was_read
        assert body.released
        assert body.read() == b""

    def test_success_without_model(self, client, session):
        body = tracked_response(session, b"{}")
        client.api.request("GET", "foo")
        assert body.closed
        assert body.released

    def test_api_error(self, client, session):
        body = tracked_response(session, json.dumps(API_ERROR).encode(), status=500)
        with pytest.raises(UntappdError):
            client.api.request("GET", "foo")
        assert body.was_read
        assert body.released
        assert body.read() == b""

    def test_unexpected_content_type(self, client, session):
        body = tracked_response(session, b"<html>Bad Gateway</html>", status=502, content_type="text/html")
        with pytest.raises(UnexpectedContentTypeError):
            client.api.request("GET", "foo")
        assert not body.was_read
        assert body.closed
        assert body.released


class TestCheckResponse:
    def test_ok(self):
        check_response(make_response(b"{}"))

    def test_ok_without_body(self):
        check_response(make_response(b""))

    def test_wrong_content_type(self):
        res = make_response(content_type="foo/bar")
        with pytest.raises(UnexpectedContentTypeError) as excinfo:
            check_response(res)
        assert str(excinfo.value) == "expected application/json content type, but received 'foo/bar'"
        assert excinfo.value.response is res

    def test_wrong_content_type_body_not_read(self, client, session):
        """Test that the body of a non-JSON response is never read, even on HTTP errors."""
        body = tracked_response(session, b"<html>Bad Gateway</html>", status=502, content_type="text/html")
        with pytest.raises(UnexpectedContentTypeError):
            client.user.info("gregavola")
        assert not body.was_read

    @pytest.mark.parametrize(
        "content_type", ["application/json; charset=utf-8", "Application/JSON", "application/json ", ""]
    )
    def test_content_type_must_match_exactly(self, content_type):
        with pytest.raises(UnexpectedContentTypeError) as excinfo:
            check_response(make_response(b"{}", content_type=content_type))
        assert excinfo.value.content_type == content_type

    def test_api_error(self):
        with pytest.raises(UntappdError) as excinfo:
            check_response(make_response(API_ERROR, status=500))
        error = excinfo.value
        assert error.code == 500
        assert error.type == "invalid_auth"
        assert error.duration == timedelta(0)
        assert str(error) == (
            "500 [invalid_auth]: The user has not authorized this application or the token is invalid."
        )

    def test_error_code_from_body(self):
        """Test that the error code comes from the envelope, not the HTTP status."""
        with pytest.raises(UntappdError) as excinfo:
            check_response(make_response(INVALID_USER_ERROR, status=500))
        assert excinfo.value.code == 404
        assert excinfo.value.detail == "Invalid user."
        assert excinfo.value.type == "invalid_user"

    def test_error_without_body(self):
        with pytest.raises(ValueError):
            check_response(make_response(b"", status=500))

    def test_error_malformed_json(self):
        with pytest.raises(ValueError):
            check_response(make_response(b"{", status=500))


class TestUntappdError:
    @pytest.mark.parametrize(
        "code, detail, developer, expected",
        [
            (500, "authentication failed", "", "500 [auth_failed]: authentication failed"),
            (501, "", "server error", "501 [auth_failed]: server error"),
            (502, "authentication failed", "server error", "502 [auth_failed]: server error"),
        ],
    )
    def test_message(self, code, detail, developer, expected):
        error = UntappdError(code, detail=detail, type="auth_failed", developer_friendly=developer)
        assert str(error) == expected


class TestFormatFloat:
    @pytest.mark.parametrize(
        "value, expected",
        [(3.5, "3.5"), (1.0, "1"), (-5.0, "-5"), (0.00001, "0.00001"), (40.7219, "40.7219"), (0, "0")],
    )
    def test_shortest_form(self, value, expected):
        assert format_float(value) == expected


class TestDefaultSession:
    def test_session_created(self):
        client = UntappdClient("foo", "bar")
        assert isinstance(client.api.session, requests.Session)

    def test_rate_limit_missing(self):
        assert rate_limit_remaining(None) is None
        assert rate_limit_remaining(Mock(headers={})) is None
