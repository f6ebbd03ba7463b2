from typing import Any, Dict, Optional

import structlog

from cloudtag_exporter.modules.discovery.domain.identifiers import transit_gateway_attachment_id
from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord, tags_from_aws
from cloudtag_exporter.modules.discovery.domain.resource_types import DiscoveryStrategyRegistry
from cloudtag_exporter.modules.discovery.domain.strategy import DiscoveryStrategy
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.constants import TRANSIT_GATEWAY_ATTACHMENT_TYPE
from cloudtag_exporter.shared.core.ops_metrics import EC2_API

logger = structlog.get_logger()


@DiscoveryStrategyRegistry.register(TRANSIT_GATEWAY_ATTACHMENT_TYPE)
class TransitGatewayAttachmentStrategy(DiscoveryStrategy):
    """Attachments are identified as `<transit gateway id>/<attachment id>`."""

    api = EC2_API
    operation = "describe_transit_gateway_attachments"
    items_key = "TransitGatewayAttachments"

    def client_for(self, clients: DiscoveryClients) -> Any:
        return clients.ec2

    def build_record(
        self, item: Dict[str, Any], job: Job, region: str
    ) -> Optional[TagRecord]:
        gateway_id = item.get("TransitGatewayId")
        attachment_id = item.get("TransitGatewayAttachmentId")
        if not gateway_id or not attachment_id:
            logger.warning(
                "tgw_attachment_missing_identifier",
                transit_gateway_id=gateway_id,
                attachment_id=attachment_id,
                region=region,
            )
            return None

        return TagRecord(
            id=transit_gateway_attachment_id(gateway_id, attachment_id),
            tags=tags_from_aws(item.get("Tags")),
            service=job.resource_type,
            region=region,
        )
