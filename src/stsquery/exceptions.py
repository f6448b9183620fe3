from typing import Optional


class StsQueryError(Exception):
    """Base exception for this library."""


class BuildError(StsQueryError):
    """Raised when a request URL cannot be built (e.g. malformed endpoint)."""


class TransportError(StsQueryError):
    """Raised when no HTTP response was received (DNS, connection, TLS)."""


class DecodeError(StsQueryError):
    """Raised when a successful response body does not match the expected schema."""


class CredentialsNotFound(StsQueryError):
    """Raised when AWS credentials or region are missing."""


class ServiceError(StsQueryError):
    """
    An error reported by STS itself.

    Only the first entry of the error envelope is kept. ``status_code`` always
    comes from the HTTP response.
    """

    def __init__(
        self,
        status_code: int,
        code: str = "",
        message: str = "",
        request_id: Optional[str] = None,
    ) -> None:
        super().__init__(status_code, code, message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.request_id = request_id

    def __str__(self) -> str:
        if self.code:
            prefix = f"{self.code}: "
        elif self.status_code > 0:
            prefix = f"{self.status_code}: "
        else:
            prefix = ""
        return prefix + self.message

    def __repr__(self) -> str:
        return (
            f"ServiceError(status_code={self.status_code!r}, code={self.code!r}, "
            f"message={self.message!r}, request_id={self.request_id!r})"
        )
