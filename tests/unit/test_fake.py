"""Unit tests for the FakeQueryImage stub."""

import pytest

from mirror_query.models.response import ResponseData
from mirror_query.query.base import QueryImage, StatusError, TransportError
from mirror_query.query.fake import FakeQueryImage, QueryCall


class TestFakeQueryImage:
    """Tests for FakeQueryImage."""

    def test_satisfies_protocol(self):
        """Test the stub implements the QueryImage capability."""
        assert isinstance(FakeQueryImage(), QueryImage)

    def test_returns_canned_response(self):
        """Test a known URL returns its response and records the call."""
        fake = FakeQueryImage({"http://r/v2/_catalog": ResponseData(data="{}", link="/next")})
        result = fake.get_details("http://r/v2/_catalog", "tok", False)

        assert result == ResponseData(data="{}", link="/next")
        assert fake.calls == [QueryCall("http://r/v2/_catalog", "tok", False)]

    def test_digest_mode_drops_link(self):
        """Test digest mode never reports a link."""
        fake = FakeQueryImage().add("http://r/m", ResponseData(data="sha256:abc", link="/next"))
        assert fake.get_details("http://r/m", "", True) == ResponseData(data="sha256:abc")

    def test_unknown_url(self):
        """Test unknown URLs raise a 404 StatusError."""
        with pytest.raises(StatusError) as exc_info:
            FakeQueryImage().get_details("http://r/missing", "", False)
        assert exc_info.value.status_code == 404

    def test_raises_configured_error(self):
        """Test an exception value is raised."""
        fake = FakeQueryImage().add("http://r/", TransportError("Connection refused"))
        with pytest.raises(TransportError, match="connection refused"):
            fake.get_details("http://r/", "", False)
