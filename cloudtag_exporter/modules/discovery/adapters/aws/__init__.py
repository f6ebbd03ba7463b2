from cloudtag_exporter.modules.discovery.adapters.aws.apigateway import APIGatewayStrategy
from cloudtag_exporter.modules.discovery.adapters.aws.autoscaling import AutoScalingGroupStrategy
from cloudtag_exporter.modules.discovery.adapters.aws.tagging import TaggingAPIStrategy
from cloudtag_exporter.modules.discovery.adapters.aws.transit_gateway import (
    TransitGatewayAttachmentStrategy,
)

__all__ = [
    "APIGatewayStrategy",
    "AutoScalingGroupStrategy",
    "TaggingAPIStrategy",
    "TransitGatewayAttachmentStrategy",
]
