import threading
from datetime import datetime, timezone
from typing import List, Optional
from urllib.parse import parse_qsl, urlsplit

import pytest

from stsquery.sts import Credential, HTTPResponse

FIXED_NOW = datetime(2013, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


class StubTransport:
    """Records every URL it is asked for and replies with a canned response."""

    def __init__(self, response: Optional[HTTPResponse] = None, responder=None) -> None:
        self.response = response
        self.responder = responder
        self.urls: List[str] = []
        self._lock = threading.Lock()

    @property
    def called(self) -> bool:
        return bool(self.urls)

    def get(self, url: str) -> HTTPResponse:
        with self._lock:
            self.urls.append(url)
        if self.responder is not None:
            return self.responder(url)
        assert self.response is not None
        return self.response

    def last_params(self):
        return dict(parse_qsl(urlsplit(self.urls[-1]).query, keep_blank_values=True))


@pytest.fixture
def credential() -> Credential:
    return Credential("AKIDEXAMPLE", "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")


@pytest.fixture
def clock():
    return lambda: FIXED_NOW
