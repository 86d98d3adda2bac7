"""boto3 DynamoDB resource construction."""

import boto3
from botocore.config import Config

from portal.config import Settings

_RETRY_CONFIG = Config(retries={"max_attempts": 3, "mode": "standard"})


def create_dynamodb_resource(settings: Settings):
    """Build a DynamoDB service resource from settings.

    Explicit keys are passed only when configured, so the default boto3
    credential chain (profiles, instance roles) still applies otherwise.
    """
    kwargs = {"region_name": settings.aws_region, "config": _RETRY_CONFIG}
    if settings.dynamodb_endpoint_url:
        kwargs["endpoint_url"] = settings.dynamodb_endpoint_url
    if settings.has_aws_credentials:
        kwargs["aws_access_key_id"] = settings.aws_access_key_id
        kwargs["aws_secret_access_key"] = settings.aws_secret_access_key
    return boto3.resource("dynamodb", **kwargs)
