from __future__ import annotations

import logging
from contextlib import closing
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, Union

import botocore.exceptions
from botocore.awsrequest import AWSRequest
from botocore.httpsession import DEFAULT_TIMEOUT, URLLib3Session

from ..exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HTTPResponse:
    status_code: int
    reason: str = ""
    body: bytes = b""

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()


class HTTPTransport(Protocol):
    def get(self, url: str) -> HTTPResponse: ...


class Transport:
    """
    Issues GET requests through botocore's urllib3 session.

    ``timeout`` is forwarded to urllib3 (seconds, or a (connect, read) tuple);
    there is no retrying at this layer.
    """

    def __init__(
        self,
        timeout: Union[float, tuple] = DEFAULT_TIMEOUT,
        verify: Union[bool, str] = True,
        proxies: Optional[Dict[str, str]] = None,
    ) -> None:
        self._session = URLLib3Session(verify=verify, proxies=proxies, timeout=timeout)

    def get(self, url: str) -> HTTPResponse:
        try:
            request = AWSRequest(method="GET", url=url).prepare()
            response = self._session.send(request)
        except botocore.exceptions.BotoCoreError as e:
            raise TransportError(f"GET failed: {e}") from e

        with closing(response.raw):
            body = response.content
            reason = getattr(response.raw, "reason", None) or ""
            logger.debug("HTTP %s %s", response.status_code, reason)
            return HTTPResponse(
                status_code=response.status_code, reason=reason, body=body
            )

    def close(self) -> None:
        self._session.close()
