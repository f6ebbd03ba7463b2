from typing import Any, Dict, Optional

import structlog

from cloudtag_exporter.modules.discovery.domain.identifiers import reconstruct_asg_identifier
from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord, tags_from_aws
from cloudtag_exporter.modules.discovery.domain.resource_types import DiscoveryStrategyRegistry
from cloudtag_exporter.modules.discovery.domain.strategy import DiscoveryStrategy
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.constants import AUTOSCALING_GROUP_TYPE
from cloudtag_exporter.shared.core.ops_metrics import AUTOSCALING_API

logger = structlog.get_logger()


# The tagging API does not index Auto Scaling groups, so groups are listed
# directly and the tag search is done in-process.
@DiscoveryStrategyRegistry.register(AUTOSCALING_GROUP_TYPE)
class AutoScalingGroupStrategy(DiscoveryStrategy):
    api = AUTOSCALING_API
    operation = "describe_auto_scaling_groups"
    items_key = "AutoScalingGroups"

    def client_for(self, clients: DiscoveryClients) -> Any:
        return clients.autoscaling

    def build_record(
        self, item: Dict[str, Any], job: Job, region: str
    ) -> Optional[TagRecord]:
        native_arn = item.get("AutoScalingGroupARN") or ""
        try:
            resource_id = reconstruct_asg_identifier(native_arn)
        except ValueError as exc:
            logger.warning(
                "asg_arn_unparseable",
                group=item.get("AutoScalingGroupName"),
                region=region,
                error=str(exc),
            )
            return None

        return TagRecord(
            id=resource_id,
            tags=tags_from_aws(item.get("Tags")),
            service=job.resource_type,
            region=region,
        )
