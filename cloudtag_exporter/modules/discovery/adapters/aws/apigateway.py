"""
API Gateway discovery.

The tagging API reports REST APIs by an identifier embedding the internal REST
API id (``.../restapis/<id>/...``). After the generic tagging pass, all REST APIs
are listed once and each record gets the API's configured name as its matcher.
"""

from typing import Any, Dict, List, Sequence

import structlog
from botocore.exceptions import BotoCoreError, ClientError

from cloudtag_exporter.modules.discovery.adapters.aws.tagging import TaggingAPIStrategy
from cloudtag_exporter.modules.discovery.domain.identifiers import rest_api_id_from_identifier
from cloudtag_exporter.modules.discovery.domain.models import Job, TagRecord
from cloudtag_exporter.modules.discovery.domain.resource_types import DiscoveryStrategyRegistry
from cloudtag_exporter.shared.adapters.aws_pagination import iter_capped_pages
from cloudtag_exporter.shared.adapters.aws_utils import DiscoveryClients
from cloudtag_exporter.shared.core.constants import (
    API_GATEWAY_TYPE,
    MAX_REST_API_PAGES,
    REST_API_PAGE_SIZE,
)
from cloudtag_exporter.shared.core.exceptions import DiscoveryError
from cloudtag_exporter.shared.core.ops_metrics import APIGATEWAY_API

logger = structlog.get_logger()


def enrich_rest_api_records(
    records: Sequence[TagRecord], rest_apis: Sequence[Dict[str, Any]]
) -> List[TagRecord]:
    """
    Set `matcher` to the REST API name for every `/restapis` record.

    Records outside `/restapis`, and records whose REST API is not in the
    listing, are dropped; the misses are logged.
    """
    names_by_id: Dict[str, str] = {}
    for rest_api in rest_apis:
        api_id = rest_api.get("id")
        if api_id and api_id not in names_by_id and rest_api.get("name") is not None:
            names_by_id[api_id] = rest_api["name"]

    enriched: List[TagRecord] = []
    for record in records:
        if "/restapis" not in record.id:
            continue
        rest_api_id = rest_api_id_from_identifier(record.id)
        name = names_by_id.get(rest_api_id) if rest_api_id else None
        if name is None:
            logger.error(
                "apigateway_rest_api_not_found",
                resource=record.id,
                rest_api_id=rest_api_id,
            )
            continue
        record.matcher = name
        enriched.append(record)
    return enriched


@DiscoveryStrategyRegistry.register(API_GATEWAY_TYPE)
class APIGatewayStrategy(TaggingAPIStrategy):
    async def list_rest_apis(self, clients: DiscoveryClients) -> List[Dict[str, Any]]:
        """All REST APIs of the region, at most MAX_REST_API_PAGES pages of the maximum size."""
        # One increment per listing, not per page.
        self.counter.inc(APIGATEWAY_API)
        items: List[Dict[str, Any]] = []
        async for page in iter_capped_pages(
            clients.apigateway.get_paginator("get_rest_apis"),
            operation_name=f"{APIGATEWAY_API}.get_rest_apis",
            paginate_kwargs={"PaginationConfig": {"PageSize": REST_API_PAGE_SIZE}},
            max_pages=MAX_REST_API_PAGES,
        ):
            items.extend(page.get("items") or [])
        return items

    async def discover(
        self, clients: DiscoveryClients, job: Job, region: str
    ) -> List[TagRecord]:
        resources = await super().discover(clients, job, region)

        try:
            rest_apis = await self.list_rest_apis(clients)
        except (ClientError, BotoCoreError) as exc:
            logger.error(
                "apigateway_rest_api_listing_failed",
                region=region,
                partial_count=len(resources),
                error=str(exc),
            )
            raise DiscoveryError(
                f"get_rest_apis failed for {job.resource_type} in {region}: {exc}",
                resource_type=job.resource_type,
                region=region,
                resources=resources,
            ) from exc

        return enrich_rest_api_records(resources, rest_apis)
