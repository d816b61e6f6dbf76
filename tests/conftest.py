import io
from unittest import mock

import pytest


class FakeResponse:
    """Stands in for a streamed requests.Response."""

    def __init__(self, status_code=200, body=b"{}", url="http://example.com/api", raw=True):
        self.status_code = status_code
        self.url = url
        self.raw = io.BytesIO(body) if raw else None
        self.closed = False

    def close(self):
        self.closed = True


@pytest.fixture
def fake_transport(monkeypatch):
    """Patch requests.request; set .return_value / .side_effect on the mock."""
    default = FakeResponse()

    def _fresh_default(*args, **kwargs):
        # like requests.request, hand out a new unread response on each call
        if transport.return_value is default:
            return FakeResponse()
        return mock.DEFAULT

    transport = mock.Mock(return_value=default, side_effect=_fresh_default)
    monkeypatch.setattr("request_sender.requests.request", transport)
    return transport
