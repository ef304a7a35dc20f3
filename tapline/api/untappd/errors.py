from datetime import timedelta

import requests


class TaplineError(Exception):
    pass


class MissingCredentialsError(TaplineError, ValueError):
    pass


class NoClientIDError(MissingCredentialsError):
    def __init__(self):
        super().__init__("no client ID")


class NoClientSecretError(MissingCredentialsError):
    def __init__(self):
        super().__init__("no client secret")


class ScalarDecodeError(TaplineError, ValueError):
    """Raised when a nonstandard Untappd wire value can't be decoded."""


class InvalidBooleanError(ScalarDecodeError):
    def __init__(self, value: object):
        super().__init__(f"invalid boolean value: {value!r}")
        self.value = value


class InvalidTimeUnitError(ScalarDecodeError):
    def __init__(self, measure: object):
        super().__init__(f"invalid time unit: {measure!r}")
        self.measure = measure


class InvalidTimestampError(ScalarDecodeError):
    def __init__(self, value: object):
        super().__init__(f"invalid timestamp: {value!r}")
        self.value = value


class UnexpectedContentTypeError(TaplineError):
    def __init__(self, content_type: str, response: requests.Response | None = None):
        super().__init__(f"expected application/json content type, but received {content_type!r}")
        self.content_type = content_type
        self.response = response


class UntappdError(TaplineError):
    """Error envelope returned by the Untappd APIv4.

    Per the APIv4 documentation, the "developer friendly" string replaces the
    regular detail string in the message whenever it is available.
    """

    def __init__(
        self,
        code: int,
        detail: str = "",
        type: str = "",
        developer_friendly: str = "",
        duration: timedelta = timedelta(0),
        response: requests.Response | None = None,
    ):
        self.code = code
        self.detail = detail
        self.type = type
        self.developer_friendly = developer_friendly
        self.duration = duration
        self.response = response
        super().__init__(str(self))

    def __str__(self) -> str:
        details = self.developer_friendly or self.detail
        return f"{self.code} [{self.type}]: {details}"


class BadGatewayError(TaplineError):
    """The upstream OAuth server answered with an error or non-JSON content."""
