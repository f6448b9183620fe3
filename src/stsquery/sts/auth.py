from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(frozen=True)
class Credential:
    """Caller credentials. Never persisted by this library."""

    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: Optional[str] = field(default=None, repr=False)


@dataclass(frozen=True)
class Region:
    name: str
    sts_endpoint: str


GLOBAL_ENDPOINT = "https://sts.amazonaws.com"

REGIONS: Dict[str, Region] = {
    "global": Region("global", GLOBAL_ENDPOINT),
    "us-east-1": Region("us-east-1", GLOBAL_ENDPOINT),
    "us-east-2": Region("us-east-2", "https://sts.us-east-2.amazonaws.com"),
    "us-west-1": Region("us-west-1", "https://sts.us-west-1.amazonaws.com"),
    "us-west-2": Region("us-west-2", "https://sts.us-west-2.amazonaws.com"),
    "eu-west-1": Region("eu-west-1", "https://sts.eu-west-1.amazonaws.com"),
    "eu-central-1": Region("eu-central-1", "https://sts.eu-central-1.amazonaws.com"),
    "ap-south-1": Region("ap-south-1", "https://sts.ap-south-1.amazonaws.com"),
    "ap-northeast-1": Region(
        "ap-northeast-1", "https://sts.ap-northeast-1.amazonaws.com"
    ),
    "ap-southeast-1": Region(
        "ap-southeast-1", "https://sts.ap-southeast-1.amazonaws.com"
    ),
    "ap-southeast-2": Region(
        "ap-southeast-2", "https://sts.ap-southeast-2.amazonaws.com"
    ),
    "sa-east-1": Region("sa-east-1", "https://sts.sa-east-1.amazonaws.com"),
    "us-gov-west-1": Region(
        "us-gov-west-1", "https://sts.us-gov-west-1.amazonaws.com"
    ),
    "cn-north-1": Region("cn-north-1", "https://sts.cn-north-1.amazonaws.com.cn"),
}


def get_region(name: str) -> Region:
    """
    Look up a known region, or derive the regional STS endpoint for an
    unlisted one (``.amazonaws.com.cn`` for ``cn-*`` partitions).
    """
    known = REGIONS.get(name)
    if known is not None:
        return known
    suffix = "amazonaws.com.cn" if name.startswith("cn-") else "amazonaws.com"
    return Region(name, f"https://sts.{name}.{suffix}")
