from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Optional, Type, TypeVar

from botocore.utils import parse_timestamp

from ..exceptions import DecodeError, ServiceError
from .auth import Credential
from .transport import HTTPResponse

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 200


def parse_xml(body: bytes) -> ET.Element:
    """Parse ``body`` and drop XML namespaces from every tag."""
    try:
        root = ET.fromstring(body)
    except (ET.ParseError, LookupError, ValueError) as e:
        raise DecodeError(f"malformed XML: {e}") from e
    for el in root.iter():
        if isinstance(el.tag, str) and "}" in el.tag:
            el.tag = el.tag.split("}", 1)[1]
    return root


def _text(el: Optional[ET.Element], path: str) -> str:
    if el is None:
        return ""
    return (el.findtext(path) or "").strip()


def _int(el: Optional[ET.Element], path: str) -> int:
    raw = _text(el, path)
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as e:
        raise DecodeError(f"{path}: expected an integer, got {raw!r}") from e


def _timestamp(el: Optional[ET.Element], path: str) -> Optional[datetime]:
    raw = _text(el, path)
    if not raw:
        return None
    try:
        return parse_timestamp(raw)
    except (ValueError, OverflowError, RuntimeError) as e:
        raise DecodeError(f"{path}: expected a timestamp, got {raw!r}") from e


@dataclass(frozen=True)
class Credentials:
    """Temporary credentials issued by STS."""

    access_key_id: str
    secret_access_key: str
    session_token: str
    expiration: Optional[datetime] = None

    @staticmethod
    def from_xml(el: Optional[ET.Element]) -> "Credentials":
        return Credentials(
            access_key_id=_text(el, "AccessKeyId"),
            secret_access_key=_text(el, "SecretAccessKey"),
            session_token=_text(el, "SessionToken"),
            expiration=_timestamp(el, "Expiration"),
        )

    def to_credential(self) -> Credential:
        """Credential for signing requests as the issued identity."""
        return Credential(
            access_key_id=self.access_key_id,
            secret_access_key=self.secret_access_key,
            session_token=self.session_token or None,
        )


@dataclass(frozen=True)
class FederatedUser:
    arn: str
    federated_user_id: str

    @staticmethod
    def from_xml(el: Optional[ET.Element]) -> "FederatedUser":
        return FederatedUser(
            arn=_text(el, "Arn"), federated_user_id=_text(el, "FederatedUserId")
        )


@dataclass(frozen=True)
class AssumedRoleUser:
    arn: str
    assumed_role_id: str

    @staticmethod
    def from_xml(el: Optional[ET.Element]) -> "AssumedRoleUser":
        return AssumedRoleUser(
            arn=_text(el, "Arn"), assumed_role_id=_text(el, "AssumedRoleId")
        )


@dataclass(frozen=True)
class SimpleResult:
    """Result of an action whose response carries only a request id."""

    ACTION: ClassVar[str] = ""

    request_id: str

    @classmethod
    def from_xml(cls, root: ET.Element) -> "SimpleResult":
        return cls(request_id=_text(root, "ResponseMetadata/RequestId"))


@dataclass(frozen=True)
class GetFederationTokenResult:
    ACTION: ClassVar[str] = "GetFederationToken"

    request_id: str
    credentials: Credentials
    federated_user: FederatedUser
    packed_policy_size: int = 0

    @staticmethod
    def from_xml(root: ET.Element) -> "GetFederationTokenResult":
        result = root.find("GetFederationTokenResult")
        return GetFederationTokenResult(
            request_id=_text(root, "ResponseMetadata/RequestId"),
            credentials=Credentials.from_xml(
                result.find("Credentials") if result is not None else None
            ),
            federated_user=FederatedUser.from_xml(
                result.find("FederatedUser") if result is not None else None
            ),
            packed_policy_size=_int(result, "PackedPolicySize"),
        )


@dataclass(frozen=True)
class GetSessionTokenResult:
    ACTION: ClassVar[str] = "GetSessionToken"

    request_id: str
    credentials: Credentials

    @staticmethod
    def from_xml(root: ET.Element) -> "GetSessionTokenResult":
        return GetSessionTokenResult(
            request_id=_text(root, "ResponseMetadata/RequestId"),
            credentials=Credentials.from_xml(
                root.find("GetSessionTokenResult/Credentials")
            ),
        )


@dataclass(frozen=True)
class AssumeRoleResult:
    ACTION: ClassVar[str] = "AssumeRole"

    request_id: str
    credentials: Credentials
    assumed_role_user: AssumedRoleUser
    packed_policy_size: int = 0

    @staticmethod
    def from_xml(root: ET.Element) -> "AssumeRoleResult":
        result = root.find("AssumeRoleResult")
        return AssumeRoleResult(
            request_id=_text(root, "ResponseMetadata/RequestId"),
            credentials=Credentials.from_xml(
                result.find("Credentials") if result is not None else None
            ),
            assumed_role_user=AssumedRoleUser.from_xml(
                result.find("AssumedRoleUser") if result is not None else None
            ),
            packed_policy_size=_int(result, "PackedPolicySize"),
        )


@dataclass(frozen=True)
class GetCallerIdentityResult:
    ACTION: ClassVar[str] = "GetCallerIdentity"

    request_id: str
    user_id: str
    account: str
    arn: str

    @staticmethod
    def from_xml(root: ET.Element) -> "GetCallerIdentityResult":
        result = root.find("GetCallerIdentityResult")
        return GetCallerIdentityResult(
            request_id=_text(root, "ResponseMetadata/RequestId"),
            user_id=_text(result, "UserId"),
            account=_text(result, "Account"),
            arn=_text(result, "Arn"),
        )


R = TypeVar("R")


def decode_error(response: HTTPResponse) -> ServiceError:
    """
    Map a failed response onto a single ServiceError.

    The first ``Error`` element in document order wins. The status code always
    comes from the HTTP response, and an empty message falls back to the
    status line. Bodies that are empty or not XML give an error with no code.
    """
    code = ""
    message = ""
    request_id: Optional[str] = None
    try:
        root: Optional[ET.Element] = parse_xml(response.body)
    except DecodeError:
        root = None

    if root is not None:
        first = next(root.iter("Error"), None)
        if first is not None:
            code = _text(first, "Code")
            message = _text(first, "Message")
        request_id = _text(root, ".//RequestId") or None

    return ServiceError(
        status_code=response.status_code,
        code=code,
        message=message or response.status_line,
        request_id=request_id,
    )


def decode_response(response: HTTPResponse, result_type: Type[R]) -> R:
    """
    Decode ``response`` into ``result_type`` or raise.

    Only status 200 counts as success; every other code, 2xx included, is
    decoded as an error envelope and raised as ServiceError.
    """
    if response.status_code != SUCCESS_STATUS:
        raise decode_error(response)

    root = parse_xml(response.body)
    action = getattr(result_type, "ACTION", "")
    if action and root.tag != f"{action}Response":
        raise DecodeError(f"expected <{action}Response>, got <{root.tag}>")
    result = result_type.from_xml(root)  # type: ignore[attr-defined]
    logger.debug("decoded %s", result_type.__name__)
    return result
