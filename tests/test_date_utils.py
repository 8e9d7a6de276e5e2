"""Testing timestamp parsing of the properties."""

from datetime import datetime

import pytest
from dateutil.parser import ParserError
from dateutil.tz import tzutc

from davmount.date_utils import from_rfc1123, fromisoformat

EXPECTED = datetime(2021, 3, 4, 5, 6, 7, tzinfo=tzutc())


def test_rfc1123():
    """getlastmodified is sent in this format."""
    assert from_rfc1123("Thu, 04 Mar 2021 05:06:07 GMT") == EXPECTED


def test_iso8601():
    """creationdate is sent in this format."""
    assert fromisoformat("2021-3-04T05:06:07Z") == EXPECTED


@pytest.mark.parametrize(
    "datestring",
    [
        "Thu, 4 Mar 2021 05:06:07 GMT",
        "Thu, 04 Mar 2021 05:06:07 +0000",
        "Thu Mar 04 05:06:07 UTC 2021",
        "2021-03-04T05:06:07+0000",
    ],
)
def test_lenient_parsing(datestring: str):
    """Servers not following the format are still understood."""
    assert from_rfc1123(datestring) == EXPECTED
    assert fromisoformat(datestring) == EXPECTED


def test_invalid():
    """Garbage is not turned into a date."""
    with pytest.raises(ParserError):
        from_rfc1123("not a date")
