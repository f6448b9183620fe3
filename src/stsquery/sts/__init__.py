from .auth import (
    Credential as Credential,
    Region as Region,
    get_region as get_region,
)
from .request import build_url as build_url, sign as sign
from .response import (
    AssumedRoleUser as AssumedRoleUser,
    AssumeRoleResult as AssumeRoleResult,
    Credentials as Credentials,
    FederatedUser as FederatedUser,
    GetCallerIdentityResult as GetCallerIdentityResult,
    GetFederationTokenResult as GetFederationTokenResult,
    GetSessionTokenResult as GetSessionTokenResult,
    SimpleResult as SimpleResult,
    decode_response as decode_response,
)
from .sts import (
    STSClient as STSClient,
    get_caller_identity as get_caller_identity,
    sts as sts,
)
from .transport import HTTPResponse as HTTPResponse, Transport as Transport

__all__ = [
    "AssumedRoleUser",
    "AssumeRoleResult",
    "Credential",
    "Credentials",
    "FederatedUser",
    "GetCallerIdentityResult",
    "GetFederationTokenResult",
    "GetSessionTokenResult",
    "HTTPResponse",
    "Region",
    "STSClient",
    "SimpleResult",
    "Transport",
    "build_url",
    "decode_response",
    "get_caller_identity",
    "get_region",
    "sign",
    "sts",
]
