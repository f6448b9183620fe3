from .exceptions import (
    BuildError as BuildError,
    CredentialsNotFound as CredentialsNotFound,
    DecodeError as DecodeError,
    ServiceError as ServiceError,
    StsQueryError as StsQueryError,
    TransportError as TransportError,
)
from .sts import Credential as Credential, Region as Region, STSClient as STSClient

__all__ = [
    "BuildError",
    "Credential",
    "CredentialsNotFound",
    "DecodeError",
    "Region",
    "STSClient",
    "ServiceError",
    "StsQueryError",
    "TransportError",
]
