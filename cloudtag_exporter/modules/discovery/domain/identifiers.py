"""
Identifier normalization for resources the tagging API does not describe.

These helpers are the only place that knows the field layout of provider
identifiers; a provider format change is a fix here and nowhere else.
"""

from typing import Optional

ASG_ARN_MIN_FIELDS = 8


def reconstruct_asg_identifier(native_arn: str) -> str:
    """
    Rewrite a native Auto Scaling group ARN into the tagging-API ARN shape.

    Field contract, 0-indexed after splitting on ":":
        arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroup:<uuid>:autoScalingGroupName/my-asg
         0   1   2           3         4            5                6      7
    becomes ``arn:<1>:autoscaling:<3>:<4>:<7>``, i.e.
    ``arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroupName/my-asg``.

    Raises ValueError when the ARN has fewer than eight fields.
    """
    parts = native_arn.split(":")
    if len(parts) < ASG_ARN_MIN_FIELDS:
        raise ValueError(f"Unexpected Auto Scaling group ARN format: {native_arn!r}")
    return f"arn:{parts[1]}:autoscaling:{parts[3]}:{parts[4]}:{parts[7]}"


def transit_gateway_attachment_id(transit_gateway_id: str, attachment_id: str) -> str:
    """Attachments have no ARN of their own; join them to their gateway instead."""
    return f"{transit_gateway_id}/{attachment_id}"


def rest_api_id_from_identifier(identifier: str) -> Optional[str]:
    """
    REST API id embedded in an API Gateway identifier (third "/"-delimited segment).

    ``arn:aws:apigateway:us-east-1::/restapis/abc123/stages/prod`` -> ``abc123``.
    Returns None for identifiers outside ``/restapis`` or without that segment.
    """
    if "/restapis" not in identifier:
        return None
    segments = identifier.split("/")
    if len(segments) < 3 or not segments[2]:
        return None
    return segments[2]
