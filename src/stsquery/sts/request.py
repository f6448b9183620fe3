"""
Request building and AWS Signature Version 2 signing for the STS query API.

Everything here is a pure function of its arguments; the only implicit input
is the wall clock, used when ``build_url`` is not given ``now``.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import urlsplit

from botocore.auth import SigV2Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials as BotocoreCredentials
from botocore.utils import percent_encode

from ..exceptions import BuildError
from ..utils import format_rfc3339
from .auth import Credential

API_VERSION = "2011-06-15"
SIGNATURE_VERSION = "2"
SIGNATURE_METHOD = "HmacSHA256"

# RFC 3986 reg-name and IP-literal contents.
_REG_NAME = re.compile(r"^[A-Za-z0-9\-._~!$&'()*+,;=%]+$")
_IP_LITERAL = re.compile(r"^[0-9A-Fa-f:.]+$")


def canonical_query(params: Mapping[str, str]) -> str:
    """Percent-encode every pair and join them sorted by key, as SigV2Auth does."""
    return "&".join(
        f"{percent_encode(k)}={percent_encode(params[k])}" for k in sorted(params)
    )


def sign(
    credential: Credential,
    method: str,
    path: str,
    params: Mapping[str, str],
    host: str,
) -> Dict[str, str]:
    """
    Return a copy of ``params`` with the auth fields and ``Signature`` added.

    The HMAC covers the auth fields themselves, so ``Signature`` is the only
    key not included in the signed string.
    """
    signed = dict(params)
    signed["AWSAccessKeyId"] = credential.access_key_id
    signed["SignatureVersion"] = SIGNATURE_VERSION
    signed["SignatureMethod"] = SIGNATURE_METHOD
    if credential.session_token:
        signed["SecurityToken"] = credential.session_token

    signer = SigV2Auth(
        BotocoreCredentials(
            credential.access_key_id,
            credential.secret_access_key,
            credential.session_token,
        )
    )
    _, signature = signer.calc_signature(
        AWSRequest(method=method, url=f"https://{host}{path}"), signed
    )
    signed["Signature"] = signature
    return signed


def parse_endpoint(endpoint: str) -> Tuple[str, str]:
    """Split ``endpoint`` into (scheme, netloc) or raise BuildError."""
    if any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in endpoint):
        raise BuildError(f"invalid control character in endpoint {endpoint!r}")
    try:
        parts = urlsplit(endpoint)
        # Accessing .port validates it.
        parts.port
    except ValueError as e:
        raise BuildError(f"cannot parse endpoint {endpoint!r}: {e}") from e
    if parts.scheme not in ("http", "https"):
        raise BuildError(f"endpoint {endpoint!r} must use http or https")
    if not parts.hostname:
        raise BuildError(f"endpoint {endpoint!r} has no host")
    pattern = _IP_LITERAL if "[" in parts.netloc else _REG_NAME
    if not pattern.match(parts.hostname):
        raise BuildError(f"invalid host {parts.hostname!r} in endpoint {endpoint!r}")
    return parts.scheme, parts.netloc


def build_url(
    params: Mapping[str, str],
    credential: Credential,
    endpoint: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Build the fully signed GET URL for one STS action.

    Args:
        params:     Action parameters (``Action`` plus its arguments as strings).
        credential: Credential whose secret key signs the request.
        endpoint:   Service endpoint, e.g. ``https://sts.amazonaws.com``.
        now:        Timestamp to send; defaults to the current UTC time.

    Raises:
        BuildError: if ``endpoint`` cannot be parsed. No I/O happens.
    """
    scheme, host = parse_endpoint(endpoint)

    query: Dict[str, str] = dict(params)
    query["Version"] = API_VERSION
    query["Timestamp"] = format_rfc3339(now or datetime.now(timezone.utc))

    signed = sign(credential, "GET", "/", query, host)
    return f"{scheme}://{host}/?{canonical_query(signed)}"
