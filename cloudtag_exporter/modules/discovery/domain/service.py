"""
Tag Discovery Service

Entry point for one discovery job: resolves the strategy registered for the
job's resource type and runs it against one region's clients.
"""

from typing import List, Optional

import structlog

# Importing the adapters registers every strategy with the registry.
import cloudtag_exporter.modules.discovery.adapters.aws  # noqa: F401
from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord
from cloudtag_exporter.modules.discovery.domain.resource_types import DiscoveryStrategyRegistry
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.ops_metrics import CallCounter, PrometheusCallCounter

logger = structlog.get_logger()


class TagDiscoveryService:
    """
    Discovers tagged resources for one region.

    Jobs share no state, so callers may run several `discover` calls
    concurrently against the same service instance.
    """

    def __init__(self, clients: DiscoveryClients, counter: Optional[CallCounter] = None):
        self.clients = clients
        self.counter: CallCounter = counter or PrometheusCallCounter()

    async def discover(self, job: Job, region: str) -> List[TagRecord]:
        """
        Return the tagged resources of `job.resource_type` in `region` that carry
        every tag of `job.search_tags`.

        Raises ConfigurationError for an unsupported resource type and
        DiscoveryError (with the partial `resources`) when a provider call fails.
        """
        strategy_cls = DiscoveryStrategyRegistry.get_strategy_class(job.resource_type)
        strategy = strategy_cls(self.counter)

        with structlog.contextvars.bound_contextvars(
            resource_type=job.resource_type, region=region
        ):
            resources = await strategy.discover(self.clients, job, region)
            logger.debug(
                "tag_discovery_complete",
                strategy=strategy_cls.__name__,
                count=len(resources),
            )
        return resources
