import pytest
from botocore.exceptions import EndpointConnectionError

from stsquery.exceptions import TransportError
from stsquery.sts import HTTPResponse, Transport


class FakeRaw:
    def __init__(self, reason):
        self.reason = reason
        self.closed = False

    def close(self):
        self.closed = True


class FakeResponse:
    def __init__(self, status_code, reason, content):
        self.status_code = status_code
        self.content = content
        self.raw = FakeRaw(reason)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def send(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    def close(self):
        pass


def test_get_returns_response_and_closes_body():
    fake = FakeSession(FakeResponse(403, "Forbidden", b"<ErrorResponse/>"))
    transport = Transport()
    transport._session = fake

    response = transport.get("https://sts.amazonaws.com/?Action=GetCallerIdentity")

    assert response == HTTPResponse(403, "Forbidden", b"<ErrorResponse/>")
    assert response.status_line == "403 Forbidden"
    assert fake.requests[0].method == "GET"
    assert fake.requests[0].url == "https://sts.amazonaws.com/?Action=GetCallerIdentity"
    assert fake.response.raw.closed


def test_connection_failure_is_transport_error():
    error = EndpointConnectionError(endpoint_url="https://sts.invalid")
    transport = Transport(timeout=1)
    transport._session = FakeSession(error=error)

    with pytest.raises(TransportError) as exc:
        transport.get("https://sts.invalid/?Action=GetCallerIdentity")
    assert exc.value.__cause__ is error


def test_status_line_without_reason():
    assert HTTPResponse(500).status_line == "500"


def test_request_preparation_failure_is_transport_error(monkeypatch):
    from botocore.exceptions import HTTPClientError

    def broken_prepare(self):
        raise HTTPClientError(error="cannot prepare")

    monkeypatch.setattr("botocore.awsrequest.AWSRequest.prepare", broken_prepare)
    transport = Transport()
    transport._session = FakeSession(FakeResponse(200, "OK", b""))
    with pytest.raises(TransportError):
        transport.get("https://sts.amazonaws.com/?Action=GetCallerIdentity")
    assert transport._session.requests == []
