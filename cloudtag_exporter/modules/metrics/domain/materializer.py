"""
Tag Record -> Metric Record materialization.

Every record of a service gets the same label keys: `name` plus one `tag_<key>`
label per distinct tag key seen on any record of that service in the batch.
The union is only known once the whole batch has been read, so this is a
two-pass batch algorithm rather than a streaming one.
"""

from typing import Dict, List, Optional, Sequence

from cloudtag_exporter.modules.discovery.domain.models import TagRecord
from cloudtag_exporter.modules.metrics.domain.models import MetricRecord
from cloudtag_exporter.modules.metrics.domain.naming import prom_string, prom_string_tag
from cloudtag_exporter.shared.core.config import get_settings


def metric_name_for_service(service: str) -> str:
    return f"aws_{prom_string(service)}_info"


def service_tag_keys(records: Sequence[TagRecord]) -> Dict[str, List[str]]:
    """Per service, the distinct tag keys in first-seen order."""
    # dict keys give an ordered set with membership by value
    seen: Dict[str, Dict[str, None]] = {}
    for record in records:
        keys = seen.setdefault(record.service, {})
        for tag in record.tags:
            keys.setdefault(tag.key, None)
    return {service: list(keys) for service, keys in seen.items()}


def materialize(
    records: Sequence[TagRecord], labels_snake_case: Optional[bool] = None
) -> List[MetricRecord]:
    """One MetricRecord per TagRecord, in input order."""
    if labels_snake_case is None:
        labels_snake_case = get_settings().LABELS_SNAKE_CASE

    tag_keys = service_tag_keys(records)

    output: List[MetricRecord] = []
    for record in records:
        values = {tag.key: tag.value for tag in record.tags}
        labels: Dict[str, str] = {"name": record.effective_id}

        for key in tag_keys[record.service]:
            label = "tag_" + prom_string_tag(key, snake_case=labels_snake_case)
            # Distinct keys may normalize to one label; keep the first value present.
            if labels.get(label):
                continue
            labels[label] = values.get(key, "")

        output.append(
            MetricRecord(
                name=metric_name_for_service(record.service),
                labels=labels,
                value=0.0,
            )
        )

    return output
