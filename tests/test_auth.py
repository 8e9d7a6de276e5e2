"""Testing authorization header."""
from base64 import b64encode

from davmount.auth import authorization_header
from davmount.config import ConnectionSettings


def test_bearer():
    """Access token is sent as a bearer token."""
    settings = ConnectionSettings(uri="https://h", access_token="T")
    assert authorization_header(settings) == "Bearer T"


def test_bearer_takes_precedence():
    """Token is used even if username and password are set."""
    settings = ConnectionSettings(
        uri="https://h", username="u", password="p", access_token="T"
    )
    assert authorization_header(settings) == "Bearer T"


def test_basic():
    """Username and password are sent with basic auth."""
    settings = ConnectionSettings(uri="https://h", username="u", password="p")
    expected = "Basic " + b64encode(b"u:p").decode()
    assert authorization_header(settings) == expected
    assert expected == "Basic dTpw"


def test_missing_credentials_does_not_raise():
    """Malformed header, but it is not our job to complain about it."""
    settings = ConnectionSettings(uri="https://h")
    expected = "Basic " + b64encode(b"None:None").decode()
    assert authorization_header(settings) == expected
