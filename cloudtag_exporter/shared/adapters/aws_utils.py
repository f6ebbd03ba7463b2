from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional

import aioboto3
import structlog
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from cloudtag_exporter.shared.core.config import get_settings
from cloudtag_exporter.shared.core.exceptions import ConfigurationError

logger = structlog.get_logger()

ROLE_SESSION_NAME = "cloudtag-exporter"

# Mapping CamelCase to snake_case for aioboto3/boto3 credentials
AWS_CREDENTIAL_MAPPING = {
    "AccessKeyId": "aws_access_key_id",
    "SecretAccessKey": "aws_secret_access_key",
    "SessionToken": "aws_session_token",
    "aws_access_key_id": "aws_access_key_id",
    "aws_secret_access_key": "aws_secret_access_key",
    "aws_session_token": "aws_session_token",
}


@dataclass(frozen=True)
class DiscoveryClients:
    """Open async clients for the four endpoints discovery reads from."""

    tagging: Any
    autoscaling: Any
    apigateway: Any
    ec2: Any


def build_boto_config(max_retries: int) -> BotoConfig:
    """Timeouts plus a per-API retry budget; retries live in the transport, not the core."""
    settings = get_settings()
    return BotoConfig(
        connect_timeout=settings.AWS_CONNECT_TIMEOUT,
        read_timeout=settings.AWS_READ_TIMEOUT,
        retries={"max_attempts": max_retries, "mode": "standard"},
    )


def map_aws_credentials(credentials: Optional[Dict[str, Any]]) -> Dict[str, str]:
    """
    Maps credentials dictionary to valid boto3/aioboto3 kwargs.
    Handles both CamelCase (STS response) and snake_case (boto3) keys.
    """
    mapped: Dict[str, str] = {}
    if not credentials:
        return mapped

    for src, dst in AWS_CREDENTIAL_MAPPING.items():
        if src in credentials:
            mapped[dst] = credentials[src]

    return mapped


def get_boto_session() -> aioboto3.Session:
    """Returns a fresh aioboto3 session."""
    return aioboto3.Session()


def _client_kwargs(
    service_name: str,
    region: str,
    max_retries: int,
    credentials: Optional[Dict[str, Any]],
) -> Dict[str, Any]:
    settings = get_settings()
    kwargs: Dict[str, Any] = {
        "service_name": service_name,
        "region_name": region,
        "config": build_boto_config(max_retries),
    }
    if settings.AWS_ENDPOINT_URL:
        kwargs["endpoint_url"] = settings.AWS_ENDPOINT_URL
    kwargs.update(map_aws_credentials(credentials))
    return kwargs


async def assume_role_credentials(
    session: aioboto3.Session, role_arn: str, region: str
) -> Dict[str, Any]:
    """
    Exchange the ambient identity for temporary credentials of `role_arn`.

    A failure here is a deployment defect, not a transient condition, so it is
    raised as ConfigurationError.
    """
    settings = get_settings()
    try:
        async with session.client(
            **_client_kwargs("sts", region, settings.TAGGING_API_MAX_RETRIES, None)
        ) as sts:
            response = await sts.assume_role(
                RoleArn=role_arn, RoleSessionName=ROLE_SESSION_NAME
            )
    except (ClientError, BotoCoreError) as exc:
        logger.error("aws_assume_role_failed", role_arn=role_arn, error=str(exc))
        raise ConfigurationError(
            f"Failed to assume role {role_arn}",
            details={"role_arn": role_arn, "region": region},
        ) from exc

    logger.info("aws_assume_role_succeeded", role_arn=role_arn, region=region)
    return dict(response["Credentials"])


@asynccontextmanager
async def open_discovery_clients(
    region: str,
    session: Optional[aioboto3.Session] = None,
    credentials: Optional[Dict[str, Any]] = None,
) -> AsyncIterator[DiscoveryClients]:
    """
    Open the tagging, autoscaling, apigateway and ec2 clients for one region.

    When no explicit credentials are passed and AWS_ROLE_ARN is configured, the
    role is assumed first and every client uses the temporary credentials.
    """
    settings = get_settings()
    session = session or get_boto_session()
    if credentials is None and settings.AWS_ROLE_ARN:
        credentials = await assume_role_credentials(session, settings.AWS_ROLE_ARN, region)

    async with AsyncExitStack() as stack:

        async def _open(service_name: str, max_retries: int) -> Any:
            return await stack.enter_async_context(
                session.client(**_client_kwargs(service_name, region, max_retries, credentials))
            )

        yield DiscoveryClients(
            tagging=await _open("resourcegroupstaggingapi", settings.TAGGING_API_MAX_RETRIES),
            autoscaling=await _open("autoscaling", settings.AUTOSCALING_API_MAX_RETRIES),
            apigateway=await _open("apigateway", settings.APIGATEWAY_API_MAX_RETRIES),
            ec2=await _open("ec2", settings.EC2_API_MAX_RETRIES),
        )
