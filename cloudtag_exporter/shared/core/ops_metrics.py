"""
Call-volume metrics for the exporter's own AWS traffic.

Discovery strategies never touch these counters directly; they receive a
`CallCounter` sink and report one increment per page (or per bulk listing).
"""

from typing import Dict, Protocol

from prometheus_client import Counter

# API keys reported by discovery strategies
TAGGING_API = "tagging"
AUTOSCALING_API = "autoscaling"
APIGATEWAY_API = "apigateway"
EC2_API = "ec2"

RESOURCE_GROUPS_TAGGING_API_REQUESTS = Counter(
    "cloudtag_resourcegroupstaggingapi_requests_total",
    "Number of pages requested from the Resource Groups Tagging API",
)

AUTOSCALING_API_REQUESTS = Counter(
    "cloudtag_autoscalingapi_requests_total",
    "Number of pages requested from the Auto Scaling API",
)

APIGATEWAY_API_REQUESTS = Counter(
    "cloudtag_apigatewayapi_requests_total",
    "Number of REST API listings requested from the API Gateway API",
)

EC2_API_REQUESTS = Counter(
    "cloudtag_ec2api_requests_total",
    "Number of pages requested from the EC2 API",
)


class CallCounter(Protocol):
    def inc(self, api: str) -> None: ...


class PrometheusCallCounter:
    """Routes call-volume increments to the module-level Prometheus counters."""

    def __init__(self) -> None:
        self._counters: Dict[str, Counter] = {
            TAGGING_API: RESOURCE_GROUPS_TAGGING_API_REQUESTS,
            AUTOSCALING_API: AUTOSCALING_API_REQUESTS,
            APIGATEWAY_API: APIGATEWAY_API_REQUESTS,
            EC2_API: EC2_API_REQUESTS,
        }

    def inc(self, api: str) -> None:
        counter = self._counters.get(api)
        if counter is None:
            raise ValueError(f"Unknown API for call counter: {api}")
        counter.inc()


class NullCallCounter:
    def inc(self, api: str) -> None:
        return None
