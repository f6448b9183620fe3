from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Type, TypeVar, Union

import boto3
import botocore.exceptions

from ..config import resolved_aws_settings
from ..exceptions import CredentialsNotFound
from .auth import Credential, Region, get_region
from .request import build_url
from .response import (
    AssumeRoleResult,
    GetCallerIdentityResult,
    GetFederationTokenResult,
    GetSessionTokenResult,
    decode_response,
)
from .transport import HTTPTransport, Transport

logger = logging.getLogger(__name__)

R = TypeVar("R")


class STSClient:
    """
    Client for the STS query API.

    Each action builds a fresh parameter set, signs it, issues one GET and
    decodes the reply. No state is shared between calls apart from the
    transport, so a single client may be used from several threads.
    """

    def __init__(
        self,
        credential: Credential,
        region: Union[Region, str],
        *,
        transport: Optional[HTTPTransport] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._credential = credential
        self._region = get_region(region) if isinstance(region, str) else region
        self._transport = transport if transport is not None else Transport()
        self._clock = clock

    @classmethod
    def from_environment(
        cls, region_name: Optional[str] = None, **kwargs: Any
    ) -> "STSClient":
        """
        Build a client from env/.env/config.toml, falling back to the
        boto3 credential chain (shared profile, instance role, ...).
        """
        cfg = resolved_aws_settings()
        region = region_name or cfg.get("AWS_DEFAULT_REGION")
        try:
            session = boto3.session.Session(
                aws_access_key_id=cfg.get("AWS_ACCESS_KEY_ID") or None,
                aws_secret_access_key=cfg.get("AWS_SECRET_ACCESS_KEY") or None,
                aws_session_token=cfg.get("AWS_SESSION_TOKEN") or None,
                region_name=region or None,
            )
            creds = session.get_credentials()
        except botocore.exceptions.BotoCoreError as e:
            raise CredentialsNotFound(str(e)) from e

        if creds is None:
            raise CredentialsNotFound(
                "AWS credentials not found. Set env vars, ~/.aws/credentials, or an IAM role."
            )
        if not session.region_name:
            raise CredentialsNotFound(
                "AWS region not resolved. Set AWS_DEFAULT_REGION or configure your AWS profile."
            )

        frozen = creds.get_frozen_credentials()
        credential = Credential(
            access_key_id=frozen.access_key,
            secret_access_key=frozen.secret_key,
            session_token=frozen.token or None,
        )
        endpoint = cfg.get("AWS_STS_ENDPOINT")
        target: Union[Region, str] = (
            Region(session.region_name, endpoint) if endpoint else session.region_name
        )
        return cls(credential, target, **kwargs)

    @property
    def region(self) -> Region:
        return self._region

    def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            close()

    def _query(self, params: Dict[str, str], result_type: Type[R]) -> R:
        now = self._clock() if self._clock is not None else None
        url = build_url(params, self._credential, self._region.sts_endpoint, now=now)
        logger.debug("STS %s -> %s", params.get("Action"), self._region.name)
        response = self._transport.get(url)
        return decode_response(response, result_type)

    def get_federation_token(
        self,
        name: str,
        duration: int = 43200,
        policy: Optional[str] = None,
    ) -> GetFederationTokenResult:
        """
        Issue temporary credentials for a federated user.

        Args:
            name:     Federated user name (2-32 chars).
            duration: Lifetime in seconds.
            policy:   Optional JSON session policy.
        """
        params = {
            "Action": "GetFederationToken",
            "DurationSeconds": str(duration),
            "Name": name,
        }
        if policy is not None:
            params["Policy"] = policy
        return self._query(params, GetFederationTokenResult)

    def get_session_token(
        self,
        duration: Optional[int] = None,
        serial_number: Optional[str] = None,
        token_code: Optional[str] = None,
    ) -> GetSessionTokenResult:
        """Issue temporary credentials for the calling IAM user, optionally MFA-backed."""
        params = {"Action": "GetSessionToken"}
        if duration is not None:
            params["DurationSeconds"] = str(duration)
        if serial_number is not None:
            params["SerialNumber"] = serial_number
        if token_code is not None:
            params["TokenCode"] = token_code
        return self._query(params, GetSessionTokenResult)

    def assume_role(
        self,
        role_arn: str,
        role_session_name: str,
        duration: Optional[int] = None,
        policy: Optional[str] = None,
        external_id: Optional[str] = None,
    ) -> AssumeRoleResult:
        params = {
            "Action": "AssumeRole",
            "RoleArn": role_arn,
            "RoleSessionName": role_session_name,
        }
        if duration is not None:
            params["DurationSeconds"] = str(duration)
        if policy is not None:
            params["Policy"] = policy
        if external_id is not None:
            params["ExternalId"] = external_id
        return self._query(params, AssumeRoleResult)

    def get_caller_identity(self) -> GetCallerIdentityResult:
        return self._query({"Action": "GetCallerIdentity"}, GetCallerIdentityResult)


class _STSFacade:
    """
    Convenience facade so callers can do:
        from stsquery.sts import sts
        sts.get_caller_identity()
        sts() -> STSClient  # built from the environment
    """

    def __call__(self, *args: Any, **kwargs: Any) -> STSClient:
        return STSClient.from_environment(*args, **kwargs)

    def get_caller_identity(self, region_name: Optional[str] = None) -> GetCallerIdentityResult:
        return STSClient.from_environment(region_name).get_caller_identity()


# Singleton-style convenience export
sts = _STSFacade()


def get_caller_identity(region_name: Optional[str] = None) -> GetCallerIdentityResult:
    """Functional alias: stsquery.sts.get_caller_identity(...)."""
    return STSClient.from_environment(region_name).get_caller_identity()
