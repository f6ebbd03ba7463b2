from typing import Any, Dict, Optional

import structlog

from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord, tags_from_aws
from cloudtag_exporter.modules.discovery.domain.resource_types import (
    DiscoveryStrategyRegistry,
    get_resource_type_filters,
)
from cloudtag_exporter.modules.discovery.domain.strategy import DiscoveryStrategy
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.ops_metrics import TAGGING_API

logger = structlog.get_logger()


@DiscoveryStrategyRegistry.register_generic
class TaggingAPIStrategy(DiscoveryStrategy):
    """Resource Groups Tagging API search scoped by the type's ResourceTypeFilters."""

    api = TAGGING_API
    operation = "get_resources"
    items_key = "ResourceTagMappingList"

    def client_for(self, clients: DiscoveryClients) -> Any:
        return clients.tagging

    def paginate_kwargs(self, job: Job) -> Dict[str, Any]:
        return {"ResourceTypeFilters": get_resource_type_filters(job.resource_type)}

    def build_record(
        self, item: Dict[str, Any], job: Job, region: str
    ) -> Optional[TagRecord]:
        arn = item.get("ResourceARN")
        if not arn:
            logger.warning(
                "tagging_api_item_without_arn",
                resource_type=job.resource_type,
                region=region,
            )
            return None
        return TagRecord(
            id=arn,
            tags=tags_from_aws(item.get("Tags")),
            service=job.resource_type,
            region=region,
        )
