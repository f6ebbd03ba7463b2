from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from cloudtag_exporter.modules.discovery.domain.filters import filter_through_tags
from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord
from cloudtag_exporter.shared.adapters.aws_pagination import iter_capped_pages
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.constants import MAX_DISCOVERY_PAGES
from cloudtag_exporter.shared.core.exceptions import DiscoveryError
from cloudtag_exporter.shared.core.ops_metrics import CallCounter

logger = structlog.get_logger()


class DiscoveryStrategy(ABC):
    """
    Abstract base class for one way of discovering tagged resources.

    Subclasses name the paginated operation and the response key holding the
    items, and turn one raw item into a TagRecord. The base class drives the
    capped pagination, the call counter, the tag filter and error propagation.
    """

    api: str
    operation: str
    items_key: str

    def __init__(self, counter: CallCounter):
        self.counter = counter

    @abstractmethod
    def client_for(self, clients: DiscoveryClients) -> Any:
        """The open client this strategy paginates."""
        raise NotImplementedError

    @abstractmethod
    def build_record(
        self, item: Dict[str, Any], job: Job, region: str
    ) -> Optional[TagRecord]:
        """
        Normalize one raw provider item, or return None to skip an item that has
        no usable identifier.
        """
        raise NotImplementedError

    def paginate_kwargs(self, job: Job) -> Dict[str, Any]:
        return {}

    async def discover(
        self, clients: DiscoveryClients, job: Job, region: str
    ) -> List[TagRecord]:
        resources: List[TagRecord] = []
        paginator = self.client_for(clients).get_paginator(self.operation)

        try:
            async for page in iter_capped_pages(
                paginator,
                operation_name=f"{self.api}.{self.operation}",
                paginate_kwargs=self.paginate_kwargs(job),
                max_pages=MAX_DISCOVERY_PAGES,
                on_page=lambda: self.counter.inc(self.api),
            ):
                for item in page.get(self.items_key) or []:
                    record = self.build_record(item, job, region)
                    if record is None:
                        continue
                    if filter_through_tags(record.tags, job.search_tags):
                        resources.append(record)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "tag_discovery_call_failed",
                resource_type=job.resource_type,
                region=region,
                operation=self.operation,
                partial_count=len(resources),
                error=str(exc),
            )
            raise DiscoveryError(
                f"{self.operation} failed for {job.resource_type} in {region}: {exc}",
                resource_type=job.resource_type,
                region=region,
                resources=resources,
            ) from exc

        return resources
